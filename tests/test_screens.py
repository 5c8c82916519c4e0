import pytest

from bqcheck.models.form import FormInput
from bqcheck.models.result import QualificationResult, classify
from bqcheck.models.types import ErrorKind, ScreenState
from bqcheck.render.screens import RESET_LABEL, SUBMIT_LABEL, render, render_rect, render_round
from bqcheck.state.machine import LOADING_TEXT, ScreenView

def view(state, result=None, text=""):
    return ScreenView(state=state, form=FormInput(hours=3, minutes=5, seconds=9), result=result, text=text)

@pytest.mark.parametrize("face", ["round", "rect"])
def test_input_screen_shows_form(face):
    out = render(view(ScreenState.INPUT), face)
    assert "Age: 36" in out
    assert "Gender: F" in out
    assert "Time: 3:05:09" in out
    assert SUBMIT_LABEL in out

@pytest.mark.parametrize("face", ["round", "rect"])
def test_loading_screen(face):
    out = render(view(ScreenState.LOADING, text=LOADING_TEXT), face)
    assert LOADING_TEXT in out
    assert "Age:" not in out

def test_result_screen_splits_display_lines():
    res = classify("QUALIFIED")
    lines = render_round(view(ScreenState.RESULT, res, res.display_text()))
    stripped = [l.strip() for l in lines]
    assert "You Are Qualified for Boston 2026 Marathon" in stripped
    assert RESET_LABEL in stripped

def test_error_result_renders_with_reset_hint():
    res = QualificationResult.failure(ErrorKind.HTTP_STATUS, "Bad Gateway", status_code=502)
    out = render(view(ScreenState.RESULT, res, res.display_text()), "rect")
    assert "Error 502: Bad Gateway" in out
    assert RESET_LABEL in out

def test_rect_lines_have_equal_width():
    lines = render_rect(view(ScreenState.INPUT))
    assert lines[0] == lines[-1]
    assert len({len(l) for l in lines}) == 1

def test_unknown_face():
    with pytest.raises(ValueError):
        render(view(ScreenState.INPUT), "hex")

def test_rect_wraps_long_lines():
    res = QualificationResult.failure(ErrorKind.TRANSPORT, "Failed to establish a new connection")
    lines = render_rect(view(ScreenState.RESULT, res, res.display_text()))
    assert len(lines) > 5
    assert "connection" in "\n".join(lines)
