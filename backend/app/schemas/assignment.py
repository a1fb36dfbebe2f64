from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.models.timetable import Weekday

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class Assignment(BaseModel):
    """One scheduled teaching session inside a weekly timetable.

    Records are frozen: the conflict engine reads them but never mutates them.
    """

    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    timetable_id: str = Field(min_length=1, max_length=36)
    school_id: str = Field(min_length=1, max_length=64)
    teacher_id: str = Field(min_length=1, max_length=64)
    teacher_name: str = Field(min_length=1, max_length=200)
    class_id: str = Field(min_length=1, max_length=64)
    class_name: str = Field(min_length=1, max_length=200)
    subject_id: str | None = Field(default=None, max_length=64)
    subject_name: str = Field(min_length=1, max_length=200)
    day: Weekday
    start_time: str
    end_time: str

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value

    @model_validator(mode="after")
    def validate_time_range(self) -> "Assignment":
        # Zero-padded HH:MM strings order the same way as their minute offsets.
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be earlier than end_time")
        return self
