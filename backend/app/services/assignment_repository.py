from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.timetable import Timetable, TimetableAssignment
from app.schemas.assignment import Assignment


class AssignmentRepository(Protocol):
    def get_assignments_by_timetable(self, timetable_id: str) -> list[Assignment]: ...

    def get_assignments_by_school(self, school_id: str) -> list[Assignment]: ...


class SqlAssignmentRepository:
    """Read-only access to stored timetable assignments.

    Rows come back in insertion order so that detectors which rely on a
    stable sort produce the same output on every call.
    """

    def __init__(self, db: Session):
        self.db = db

    def _fetch(self, *criteria) -> list[Assignment]:
        stmt = (
            select(TimetableAssignment)
            .where(*criteria)
            .order_by(TimetableAssignment.id)
        )
        return [Assignment.model_validate(row) for row in self.db.execute(stmt).scalars()]

    def get_timetable(self, timetable_id: str) -> Timetable | None:
        return self.db.get(Timetable, timetable_id)

    def get_assignments_by_timetable(self, timetable_id: str) -> list[Assignment]:
        return self._fetch(TimetableAssignment.timetable_id == timetable_id)

    def get_assignments_by_school(self, school_id: str) -> list[Assignment]:
        return self._fetch(TimetableAssignment.school_id == school_id)


class InMemoryAssignmentRepository:
    def __init__(self, assignments: Iterable[Assignment] = ()):
        self.assignments: list[Assignment] = list(assignments)

    def get_assignments_by_timetable(self, timetable_id: str) -> list[Assignment]:
        return [item for item in self.assignments if item.timetable_id == timetable_id]

    def get_assignments_by_school(self, school_id: str) -> list[Assignment]:
        return [item for item in self.assignments if item.school_id == school_id]
