from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, TextIO

from pydantic import ValidationError

from bqcheck.config.settings import Settings, load_settings
from bqcheck.models.form import FormInput
from bqcheck.models.types import Gender, ScreenState
from bqcheck.render.screens import FACES, render
from bqcheck.service.qualify import make_qualifier
from bqcheck.state.machine import ScreenFlowController

INTERACTIVE_HELP = (
    "commands: +<field> / -<field> (age gender hours minutes seconds), "
    "set <field> <value>, submit, poll, wait, reset, quit"
)


def _settings(args: argparse.Namespace) -> Settings:
    return load_settings(args.config, endpoint_url=args.endpoint, face=args.face)


def _form_from_args(args: argparse.Namespace) -> FormInput:
    return FormInput(
        age=args.age,
        gender=args.gender,
        hours=args.hours,
        minutes=args.minutes,
        seconds=args.seconds,
    )


def _cmd_show_request(args: argparse.Namespace) -> int:
    print(_form_from_args(args).to_request().to_json())
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    form = _form_from_args(args)
    settings = _settings(args)

    with ScreenFlowController(make_qualifier(settings), form=form) as flow:
        flow.submit()
        print(render(flow.view(), settings.face))
        result = flow.wait_for_result()
        print(render(flow.view(), settings.face))

    if result is None or result.is_error:
        return 1
    return 0


def _interactive_step(flow: ScreenFlowController, line: str) -> bool:
    """Apply one command line. Returns False when the session should end."""
    parts = line.split()
    if not parts:
        return True
    cmd = parts[0].lower()

    if cmd in ("quit", "exit", "q"):
        return False
    if cmd[0] in "+-" and len(cmd) > 1:
        if not flow.step_field(cmd[1:], 1 if cmd[0] == "+" else -1):
            print(f"ignored: {line.strip()}")
    elif cmd == "set" and len(parts) == 3:
        value = parts[2].upper() if parts[1] == "gender" else _int_or_none(parts[2])
        if value is None or not flow.update_field(parts[1], value):
            print(f"ignored: {line.strip()}")
    elif cmd == "submit":
        if flow.submit():
            print(f"request {flow.current_ticket} sent")
    elif cmd == "poll":
        flow.process_completions()
    elif cmd == "wait":
        flow.wait_for_result()
    elif cmd == "reset":
        flow.reset()
    else:
        print(INTERACTIVE_HELP)
    return True


def _int_or_none(s: str) -> Optional[int]:
    try:
        return int(s)
    except ValueError:
        return None


def _cmd_interactive(args: argparse.Namespace, stdin: Optional[TextIO] = None) -> int:
    settings = _settings(args)
    stdin = stdin or sys.stdin

    with ScreenFlowController(make_qualifier(settings)) as flow:
        print(INTERACTIVE_HELP)
        print(render(flow.view(), settings.face))
        for line in stdin:
            if not _interactive_step(flow, line):
                break
            flow.process_completions()
            print(render(flow.view(), settings.face))
        last_state = flow.state

    return 0 if last_state != ScreenState.LOADING else 1


def _add_form_args(p: argparse.ArgumentParser) -> None:
    defaults = FormInput()
    p.add_argument("--age", type=int, default=defaults.age)
    p.add_argument("--gender", choices=[g.value for g in Gender], default=defaults.gender.value)
    p.add_argument("--hours", type=int, default=defaults.hours)
    p.add_argument("--minutes", type=int, default=defaults.minutes)
    p.add_argument("--seconds", type=int, default=defaults.seconds)


def _add_service_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", default=None, help="YAML settings file (defaults to the bundled one)")
    p.add_argument("--endpoint", default=None, help="Qualification service URL")
    p.add_argument("--face", choices=sorted(FACES), default=None)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="bqcheck")
    p.add_argument("-v", "--verbose", action="store_true")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_show = sub.add_parser("show-request", help="Print the JSON body that would be sent")
    _add_form_args(p_show)
    p_show.set_defaults(func=_cmd_show_request)

    p_check = sub.add_parser("check", help="Submit once and print the result screen")
    _add_form_args(p_check)
    _add_service_args(p_check)
    p_check.set_defaults(func=_cmd_check)

    p_int = sub.add_parser("interactive", help="Edit the form and submit from the terminal")
    _add_service_args(p_int)
    p_int.set_defaults(func=_cmd_interactive)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except (RuntimeError, ValidationError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
