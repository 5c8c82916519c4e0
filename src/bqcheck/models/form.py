from __future__ import annotations
from typing import Any, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bqcheck.models.types import Gender

AGE_RANGE: Tuple[int, int] = (18, 80)
HOURS_RANGE: Tuple[int, int] = (0, 10)
CLOCK_RANGE: Tuple[int, int] = (0, 59)

# minutes/seconds roll over like a clock; age/hours stop at their bounds
WRAPPING_FIELDS = ("minutes", "seconds")
BOUNDED_FIELDS = ("age", "hours")
GENDER_ORDER: List[Gender] = [Gender.M, Gender.F, Gender.NB]


class QualificationRequest(BaseModel):
    """Wire body sent to the qualification service. Field names are fixed by the service."""

    model_config = ConfigDict(frozen=True)

    AGE_IN: int
    GENDER_IN: str
    HOURS_IN: int
    MINUTES_IN: int
    SECONDS_IN: int

    def to_json(self) -> str:
        return self.model_dump_json()


class FormInput(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    age: int = Field(default=36, ge=AGE_RANGE[0], le=AGE_RANGE[1])
    gender: Gender = Gender.F
    hours: int = Field(default=2, ge=HOURS_RANGE[0], le=HOURS_RANGE[1])
    minutes: int = Field(default=50, ge=CLOCK_RANGE[0], le=CLOCK_RANGE[1])
    seconds: int = Field(default=0, ge=CLOCK_RANGE[0], le=CLOCK_RANGE[1])

    def update_field(self, field: str, value: Any) -> bool:
        """Set ``field`` to ``value`` if it is in range. Returns False (and changes nothing) otherwise."""
        if field not in type(self).model_fields:
            return False
        try:
            setattr(self, field, value)
        except ValidationError:
            return False
        return True

    def step_field(self, field: str, delta: int = 1) -> bool:
        if field == "gender":
            i = GENDER_ORDER.index(self.gender)
            return self.update_field("gender", GENDER_ORDER[(i + delta) % len(GENDER_ORDER)])
        if field in WRAPPING_FIELDS:
            return self.update_field(field, (getattr(self, field) + delta) % 60)
        if field in BOUNDED_FIELDS:
            return self.update_field(field, getattr(self, field) + delta)
        return False

    def snapshot(self) -> "FormInput":
        return self.model_copy()

    def to_request(self) -> QualificationRequest:
        return QualificationRequest(
            AGE_IN=self.age,
            GENDER_IN=self.gender.value,
            HOURS_IN=self.hours,
            MINUTES_IN=self.minutes,
            SECONDS_IN=self.seconds,
        )
