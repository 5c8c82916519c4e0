from __future__ import annotations
import textwrap
from typing import Callable, Dict, List

from bqcheck.models.types import ScreenState
from bqcheck.state.machine import ScreenView

ROUND_WIDTH = 24
RECT_WIDTH = 30

SUBMIT_LABEL = "[Check Qualification]"
RESET_LABEL = "[reset]"

def _form_lines(view: ScreenView) -> List[str]:
    f = view.form
    return [
        f"Age: {f.age}",
        f"Gender: {f.gender.value}",
        f"Time: {f.hours}:{f.minutes:02d}:{f.seconds:02d}",
    ]

def _body(view: ScreenView) -> List[str]:
    if view.state == ScreenState.INPUT:
        return _form_lines(view) + ["", SUBMIT_LABEL]
    if view.state == ScreenState.LOADING:
        return ["( ... )", view.text]
    return view.text.splitlines() + ["", RESET_LABEL]

def render_round(view: ScreenView) -> List[str]:
    # round face: everything centred, blank rim top and bottom
    lines = [""] + _body(view) + [""]
    return [line.center(ROUND_WIDTH).rstrip() for line in lines]

def render_rect(view: ScreenView) -> List[str]:
    inner = RECT_WIDTH - 4
    border = "+" + "-" * (RECT_WIDTH - 2) + "+"
    out = [border]
    for line in _body(view):
        for chunk in textwrap.wrap(line, inner) or [""]:
            out.append(f"| {chunk.ljust(inner)} |")
    out.append(border)
    return out

FACES: Dict[str, Callable[[ScreenView], List[str]]] = {
    "round": render_round,
    "rect": render_rect,
}

def render(view: ScreenView, face: str = "round") -> str:
    try:
        renderer = FACES[face]
    except KeyError:
        raise ValueError(f"Unknown face {face!r}; expected one of {sorted(FACES)}")
    return "\n".join(renderer(view))
