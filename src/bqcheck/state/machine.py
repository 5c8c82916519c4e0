from __future__ import annotations
import logging
import queue
import threading
import time
from concurrent.futures import Executor, Future
from typing import Any, Callable, Optional, Tuple

from pydantic import BaseModel

from bqcheck.models.form import FormInput
from bqcheck.models.result import QualificationResult
from bqcheck.models.types import ErrorKind, FlowEvent, ScreenState

LOADING_TEXT = "Calculating..."

log = logging.getLogger(__name__)

def next_state(state: ScreenState, event: FlowEvent) -> ScreenState:
    state = ScreenState(state)
    event = FlowEvent(event)

    if state == ScreenState.INPUT:
        if event == FlowEvent.SUBMIT:
            return ScreenState.LOADING
        return ScreenState.INPUT

    if state == ScreenState.LOADING:
        if event == FlowEvent.COMPLETE:
            return ScreenState.RESULT
        # user gave up waiting
        if event == FlowEvent.RESET:
            return ScreenState.INPUT
        return ScreenState.LOADING

    if state == ScreenState.RESULT:
        if event == FlowEvent.RESET:
            return ScreenState.INPUT
        return ScreenState.RESULT

    return state


class DaemonThreadExecutor(Executor):
    """Runs each call on its own daemon thread.

    A request with no timeout may hang; daemon threads let the process exit
    anyway instead of being joined at interpreter shutdown.
    """

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        future: Future = Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(fn(*args, **kwargs))
            except BaseException as e:
                future.set_exception(e)

        threading.Thread(target=run, name="bqcheck-request", daemon=True).start()
        return future


class ScreenView(BaseModel):
    state: ScreenState
    form: FormInput
    result: Optional[QualificationResult] = None
    text: str = ""


class ScreenFlowController:
    """Owns the session: current screen, the form being edited, the last result.

    The qualification call runs on a background executor. Its outcome is posted
    to a queue and only applied by ``process_completions`` / ``wait_for_result``
    on the caller's thread, so every state change happens on one thread. Each
    submission gets a ticket; a completion whose ticket is no longer current
    (the user reset in the meantime) is dropped.
    """

    def __init__(
        self,
        qualify: Callable[[FormInput], QualificationResult],
        form: Optional[FormInput] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self._qualify = qualify
        self._owns_executor = executor is None
        self._executor = executor or DaemonThreadExecutor()
        self._completions: "queue.Queue[Tuple[int, QualificationResult]]" = queue.Queue()
        self._ticket = 0

        self.state = ScreenState.INPUT
        self.form = form if form is not None else FormInput()
        self.result: Optional[QualificationResult] = None

    @property
    def current_ticket(self) -> int:
        return self._ticket

    def _advance(self, event: FlowEvent) -> bool:
        new = next_state(self.state, event)
        if new == self.state:
            return False
        log.debug("%s --%s--> %s", self.state.value, event.value, new.value)
        self.state = new
        return True

    # --- input screen ---

    def update_field(self, field: str, value: Any) -> bool:
        if self.state != ScreenState.INPUT:
            return False
        return self.form.update_field(field, value)

    def step_field(self, field: str, delta: int = 1) -> bool:
        if self.state != ScreenState.INPUT:
            return False
        return self.form.step_field(field, delta)

    # --- transitions ---

    def submit(self) -> bool:
        if not self._advance(FlowEvent.SUBMIT):
            return False
        self._ticket += 1
        ticket = self._ticket
        snapshot = self.form.snapshot()
        log.info("submitting request %d: %s", ticket, snapshot.to_request().to_json())
        self._executor.submit(self._run, ticket, snapshot)
        return True

    def _run(self, ticket: int, form: FormInput) -> None:
        try:
            result = self._qualify(form)
        except Exception as e:
            # anything the client did not already turn into a result
            log.exception("qualification call %d raised", ticket)
            result = QualificationResult.failure(ErrorKind.TRANSPORT, f"{type(e).__name__}: {e}")
        self._completions.put((ticket, result))

    def on_request_complete(self, ticket: int, result: QualificationResult) -> bool:
        if self.state != ScreenState.LOADING or ticket != self._ticket:
            log.info("discarding stale result for request %d", ticket)
            return False
        self._advance(FlowEvent.COMPLETE)
        self.result = result
        return True

    def reset(self) -> bool:
        if not self._advance(FlowEvent.RESET):
            return False
        self.result = None
        # invalidate whatever is still in flight
        self._ticket += 1
        return True

    # --- completion channel ---

    def process_completions(self) -> int:
        applied = 0
        while True:
            try:
                ticket, result = self._completions.get_nowait()
            except queue.Empty:
                return applied
            if self.on_request_complete(ticket, result):
                applied += 1

    def wait_for_result(self, timeout: Optional[float] = None) -> Optional[QualificationResult]:
        """Block until the pending request lands (or ``timeout`` runs out). Stays in LOADING on timeout."""
        deadline = None if timeout is None else time.monotonic() + timeout
        while self.state == ScreenState.LOADING:
            remaining = None
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
            try:
                ticket, result = self._completions.get(timeout=remaining)
            except queue.Empty:
                break
            self.on_request_complete(ticket, result)
        return self.result

    # --- rendering / lifecycle ---

    def view(self) -> ScreenView:
        text = ""
        if self.state == ScreenState.LOADING:
            text = LOADING_TEXT
        elif self.state == ScreenState.RESULT and self.result is not None:
            text = self.result.display_text()
        return ScreenView(state=self.state, form=self.form.snapshot(), result=self.result, text=text)

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    def __enter__(self) -> "ScreenFlowController":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
