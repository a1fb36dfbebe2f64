from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.timetable import Weekday


class ConflictType(str, Enum):
    teacher_double_booking = "teacher_double_booking"
    teacher_consecutive = "teacher_consecutive"
    teacher_overload = "teacher_overload"
    subject_clustering = "subject_clustering"


class Severity(str, Enum):
    error = "error"
    warning = "warning"
    info = "info"


SEVERITY_RANK = {Severity.error: 0, Severity.warning: 1, Severity.info: 2}


class _CamelModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class ConflictDetails(_CamelModel):
    teacher_id: Optional[str] = None
    teacher_name: Optional[str] = None
    day: Optional[Weekday] = None
    periods: List[str] = []
    class_names: Optional[List[str]] = None
    subject_name: Optional[str] = None


class Conflict(_CamelModel):
    type: ConflictType
    severity: Severity
    message: str
    details: ConflictDetails

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ConflictSummary(_CamelModel):
    total: int = 0
    errors: int = 0
    warnings: int = 0
    infos: int = 0
    highest_severity: Optional[Severity] = None
    preview: List[str] = []


class ConflictReport(_CamelModel):
    timetable_id: str
    school_id: str
    conflicts: List[Conflict]
    summary: ConflictSummary
