import json

import pytest

from bqcheck.models.form import FormInput
from bqcheck.models.types import Gender

def test_request_body_matches_wire_contract():
    form = FormInput(age=36, gender="F", hours=2, minutes=50, seconds=0)
    assert form.to_request().to_json() == (
        '{"AGE_IN":36,"GENDER_IN":"F","HOURS_IN":2,"MINUTES_IN":50,"SECONDS_IN":0}'
    )

def test_request_body_uses_nb_gender_code():
    body = json.loads(FormInput(gender=Gender.NB).to_request().to_json())
    assert body["GENDER_IN"] == "NB"

@pytest.mark.parametrize("field", ["minutes", "seconds"])
def test_clock_fields_wrap(field):
    form = FormInput(**{field: 59})
    assert form.step_field(field, 1)
    assert getattr(form, field) == 0
    assert form.step_field(field, -1)
    assert getattr(form, field) == 59

def test_age_stops_at_bounds():
    form = FormInput(age=80)
    assert not form.step_field("age", 1)
    assert form.age == 80
    form = FormInput(age=18)
    assert not form.step_field("age", -1)
    assert form.age == 18

def test_hours_range_is_zero_to_ten():
    form = FormInput(hours=10)
    assert not form.step_field("hours", 1)
    assert form.update_field("hours", 0)
    assert not form.step_field("hours", -1)
    assert form.hours == 0

def test_gender_cycles():
    form = FormInput(gender="M")
    seen = []
    for _ in range(3):
        form.step_field("gender", 1)
        seen.append(form.gender)
    assert seen == [Gender.F, Gender.NB, Gender.M]
    form.step_field("gender", -1)
    assert form.gender == Gender.NB

@pytest.mark.parametrize(
    "field,value",
    [("age", 17), ("age", 81), ("hours", 11), ("minutes", 60), ("seconds", -1), ("gender", "X")],
)
def test_out_of_range_update_is_rejected_without_change(field, value):
    form = FormInput()
    before = form.model_dump()
    assert not form.update_field(field, value)
    assert form.model_dump() == before

def test_unknown_field_is_noop():
    form = FormInput()
    assert not form.update_field("weight", 70)
    assert not form.step_field("weight", 1)

def test_snapshot_is_independent():
    form = FormInput(age=40)
    snap = form.snapshot()
    form.update_field("age", 41)
    assert snap.age == 40
