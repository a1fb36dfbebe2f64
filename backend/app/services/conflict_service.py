from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from app.core.config import Settings
from app.core.exceptions import InvalidTimeError
from app.models.timetable import Weekday
from app.schemas.assignment import TIME_PATTERN, Assignment
from app.schemas.conflict import (
    SEVERITY_RANK,
    Conflict,
    ConflictDetails,
    ConflictSummary,
    ConflictType,
    Severity,
)
from app.services.assignment_repository import AssignmentRepository

logger = logging.getLogger(__name__)

TeacherDayGroups = Dict[str, Dict[Weekday, List[Assignment]]]
DaySubjectGroups = Dict[Weekday, Dict[str, List[Assignment]]]

SUMMARY_PREVIEW_SIZE = 3


@dataclass(frozen=True)
class ConflictThresholds:
    consecutive: int = 3
    overload: int = 6
    clustering: int = 2

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConflictThresholds":
        return cls(
            consecutive=settings.conflict_consecutive_threshold,
            overload=settings.conflict_overload_threshold,
            clustering=settings.conflict_clustering_threshold,
        )


def time_to_minutes(value: str) -> int:
    """Convert 'HH:MM' to minutes since midnight; raises InvalidTimeError otherwise."""
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise InvalidTimeError(value)
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def intervals_overlap(start1: int, end1: int, start2: int, end2: int) -> bool:
    # Half-open intervals: touching endpoints do not overlap.
    return start1 < end2 and start2 < end1


def _minutes_range(assignment: Assignment) -> tuple[int, int]:
    return time_to_minutes(assignment.start_time), time_to_minutes(assignment.end_time)


@dataclass(frozen=True)
class AssignmentGroups:
    by_teacher_then_day: TeacherDayGroups = field(default_factory=dict)
    by_day_then_subject: DaySubjectGroups = field(default_factory=dict)


def group_assignments(
    timetable_assignments: Iterable[Assignment],
    school_assignments: Iterable[Assignment],
) -> AssignmentGroups:
    """
    Build both groupings once per analysis.

    Teacher/day lists span the whole school and are sorted by start time
    (stable, so equal starts keep their input order). Day/subject lists only
    hold the reviewed timetable and keep input order.
    """
    teacher_days: Dict[str, Dict[Weekday, List[Assignment]]] = defaultdict(lambda: defaultdict(list))
    for assignment in school_assignments:
        _minutes_range(assignment)  # fail fast on malformed times
        teacher_days[assignment.teacher_id][assignment.day].append(assignment)

    by_teacher_then_day: TeacherDayGroups = {
        teacher_id: {
            day: sorted(items, key=lambda item: time_to_minutes(item.start_time))
            for day, items in days.items()
        }
        for teacher_id, days in teacher_days.items()
    }

    day_subjects: Dict[Weekday, Dict[str, List[Assignment]]] = defaultdict(lambda: defaultdict(list))
    for assignment in timetable_assignments:
        _minutes_range(assignment)
        day_subjects[assignment.day][assignment.subject_name].append(assignment)

    by_day_then_subject: DaySubjectGroups = {day: dict(subjects) for day, subjects in day_subjects.items()}
    return AssignmentGroups(by_teacher_then_day=by_teacher_then_day, by_day_then_subject=by_day_then_subject)


def _touches_timetable(assignments: Iterable[Assignment], timetable_id: str) -> bool:
    return any(item.timetable_id == timetable_id for item in assignments)


def detect_double_bookings(groups: TeacherDayGroups, timetable_id: str) -> List[Conflict]:
    conflicts: List[Conflict] = []
    # O(n^2) per teacher-day; n stays small (a school day has few periods).
    for teacher_id, days in groups.items():
        for day, day_assignments in days.items():
            n = len(day_assignments)
            for i in range(n):
                first = day_assignments[i]
                start1, end1 = _minutes_range(first)
                for j in range(i + 1, n):
                    second = day_assignments[j]
                    start2, end2 = _minutes_range(second)
                    if not intervals_overlap(start1, end1, start2, end2):
                        continue
                    if not _touches_timetable((first, second), timetable_id):
                        continue
                    conflicts.append(
                        Conflict(
                            type=ConflictType.teacher_double_booking,
                            severity=Severity.error,
                            message=(
                                f"{first.teacher_name} is double-booked on {day.value} "
                                f"({first.start_time}-{first.end_time})"
                            ),
                            details=ConflictDetails(
                                teacher_id=teacher_id,
                                teacher_name=first.teacher_name,
                                day=day,
                                periods=[first.start_time, second.start_time],
                                class_names=[first.class_name, second.class_name],
                            ),
                        )
                    )
    return conflicts


def detect_consecutive_runs(
    groups: TeacherDayGroups, timetable_id: str, threshold: int = 3
) -> List[Conflict]:
    """
    Warn about back-to-back teaching: a session starting exactly when the
    previous one ends extends the run. A warning is emitted every time the
    run length reaches the threshold or grows past it, so a run of five
    with threshold three yields three warnings.
    """
    conflicts: List[Conflict] = []
    for teacher_id, days in groups.items():
        for day, day_assignments in days.items():
            run_length = 1
            for i in range(1, len(day_assignments)):
                previous = day_assignments[i - 1]
                current = day_assignments[i]
                if current.start_time != previous.end_time:
                    run_length = 1
                    continue
                run_length += 1
                if run_length < threshold:
                    continue
                run = day_assignments[i - run_length + 1 : i + 1]
                if not _touches_timetable(run, timetable_id):
                    continue
                conflicts.append(
                    Conflict(
                        type=ConflictType.teacher_consecutive,
                        severity=Severity.warning,
                        message=f"{current.teacher_name} has {run_length} consecutive periods on {day.value}",
                        details=ConflictDetails(
                            teacher_id=teacher_id,
                            teacher_name=current.teacher_name,
                            day=day,
                            periods=[item.start_time for item in run],
                        ),
                    )
                )
    return conflicts


def detect_overloads(groups: TeacherDayGroups, timetable_id: str, threshold: int = 6) -> List[Conflict]:
    conflicts: List[Conflict] = []
    for teacher_id, days in groups.items():
        for day, day_assignments in days.items():
            if len(day_assignments) < threshold:
                continue
            if not _touches_timetable(day_assignments, timetable_id):
                continue
            teacher_name = day_assignments[0].teacher_name
            conflicts.append(
                Conflict(
                    type=ConflictType.teacher_overload,
                    severity=Severity.warning,
                    message=f"{teacher_name} has {len(day_assignments)} periods on {day.value}",
                    details=ConflictDetails(
                        teacher_id=teacher_id,
                        teacher_name=teacher_name,
                        day=day,
                        periods=[item.start_time for item in day_assignments],
                    ),
                )
            )
    return conflicts


def detect_subject_clustering(groups: DaySubjectGroups, threshold: int = 2) -> List[Conflict]:
    conflicts: List[Conflict] = []
    for day, subjects in groups.items():
        for subject_name, subject_assignments in subjects.items():
            if len(subject_assignments) < threshold:
                continue
            conflicts.append(
                Conflict(
                    type=ConflictType.subject_clustering,
                    severity=Severity.info,
                    message=f"{subject_name} appears {len(subject_assignments)} times on {day.value}",
                    details=ConflictDetails(
                        day=day,
                        subject_name=subject_name,
                        periods=[item.start_time for item in subject_assignments],
                    ),
                )
            )
    return conflicts


def find_conflicts(
    timetable_id: str,
    timetable_assignments: Sequence[Assignment],
    school_assignments: Sequence[Assignment],
    thresholds: Optional[ConflictThresholds] = None,
) -> List[Conflict]:
    """
    Run every detector over one snapshot and concatenate their results.

    Output order: double-bookings, consecutive runs, overloads (each walking
    teachers then days in first-seen order), then subject clustering (days
    then subjects, reviewed timetable only).
    """
    if not timetable_assignments:
        return []
    thresholds = thresholds or ConflictThresholds()

    groups = group_assignments(timetable_assignments, school_assignments)
    return [
        *detect_double_bookings(groups.by_teacher_then_day, timetable_id),
        *detect_consecutive_runs(groups.by_teacher_then_day, timetable_id, thresholds.consecutive),
        *detect_overloads(groups.by_teacher_then_day, timetable_id, thresholds.overload),
        *detect_subject_clustering(groups.by_day_then_subject, thresholds.clustering),
    ]


def summarize_conflicts(conflicts: Sequence[Conflict]) -> ConflictSummary:
    counts = {severity: 0 for severity in Severity}
    for conflict in conflicts:
        counts[conflict.severity] += 1

    present = [severity for severity in Severity if counts[severity]]
    highest = min(present, key=SEVERITY_RANK.__getitem__) if present else None
    return ConflictSummary(
        total=len(conflicts),
        errors=counts[Severity.error],
        warnings=counts[Severity.warning],
        infos=counts[Severity.info],
        highest_severity=highest,
        preview=[conflict.message for conflict in conflicts[:SUMMARY_PREVIEW_SIZE]],
    )


class ConflictService:
    def __init__(self, repository: AssignmentRepository, thresholds: Optional[ConflictThresholds] = None):
        self.repository = repository
        self.thresholds = thresholds or ConflictThresholds()

    def check_conflicts(self, timetable_id: str, school_id: str) -> List[Conflict]:
        timetable_assignments = self.repository.get_assignments_by_timetable(timetable_id)
        if not timetable_assignments:
            logger.debug("Timetable %s has no assignments; skipping conflict checks", timetable_id)
            return []

        school_assignments = self.repository.get_assignments_by_school(school_id)
        logger.debug(
            "Checking timetable %s: %d assignments in scope, %d school-wide",
            timetable_id,
            len(timetable_assignments),
            len(school_assignments),
        )
        conflicts = find_conflicts(timetable_id, timetable_assignments, school_assignments, self.thresholds)
        logger.info("Timetable %s: %d conflict(s) detected", timetable_id, len(conflicts))
        return conflicts
