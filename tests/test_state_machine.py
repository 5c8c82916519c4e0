from bqcheck.state.machine import next_state
from bqcheck.models.types import FlowEvent, ScreenState

I, L, R = ScreenState.INPUT, ScreenState.LOADING, ScreenState.RESULT

def test_submit_moves_input_to_loading():
    assert next_state(I, FlowEvent.SUBMIT) == L

def test_completion_moves_loading_to_result():
    assert next_state(L, FlowEvent.COMPLETE) == R

def test_reset_returns_to_input():
    assert next_state(R, FlowEvent.RESET) == I
    assert next_state(L, FlowEvent.RESET) == I

def test_reset_in_input_is_noop():
    assert next_state(I, FlowEvent.RESET) == I

def test_invalid_transitions_leave_state_unchanged():
    assert next_state(I, FlowEvent.COMPLETE) == I
    assert next_state(L, FlowEvent.SUBMIT) == L
    assert next_state(R, FlowEvent.SUBMIT) == R
    assert next_state(R, FlowEvent.COMPLETE) == R

def test_accepts_raw_string_values():
    assert next_state("INPUT", "SUBMIT") == L
