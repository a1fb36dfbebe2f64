"""Seed a small demo school whose timetables trigger every conflict rule.

Run:
  PYTHONPATH=backend python scripts/seed_demo_school.py
"""

from __future__ import annotations

import json
import os

from sqlalchemy import delete

from app.db.bootstrap import ensure_schema
from app.db.session import SessionLocal
from app.models.timetable import Timetable, TimetableAssignment, Weekday
from app.services.assignment_repository import SqlAssignmentRepository
from app.services.conflict_service import ConflictService, summarize_conflicts

SCHOOL_ID = os.getenv("SEED_SCHOOL_ID", "demo-school").strip() or "demo-school"

TIMETABLES = {
    "demo-5a": ("grade-5a", "Grade 5A"),
    "demo-6b": ("grade-6b", "Grade 6B"),
}

# (timetable, teacher id, teacher name, subject, day, start, end)
SESSIONS = [
    ("demo-5a", "t-rivera", "Ms Rivera", "Mathematics", Weekday.monday, "08:00", "09:00"),
    ("demo-6b", "t-rivera", "Ms Rivera", "Mathematics", Weekday.monday, "08:30", "09:30"),
    ("demo-5a", "t-okafor", "Mr Okafor", "Science", Weekday.monday, "09:00", "10:00"),
    ("demo-5a", "t-okafor", "Mr Okafor", "History", Weekday.monday, "10:00", "11:00"),
    ("demo-5a", "t-okafor", "Mr Okafor", "Geography", Weekday.monday, "11:00", "12:00"),
    ("demo-5a", "t-rivera", "Ms Rivera", "Mathematics", Weekday.monday, "13:00", "14:00"),
    ("demo-5a", "t-lindqvist", "Mx Lindqvist", "Art", Weekday.tuesday, "08:00", "08:45"),
    ("demo-6b", "t-lindqvist", "Mx Lindqvist", "Art", Weekday.tuesday, "09:00", "09:45"),
    ("demo-6b", "t-lindqvist", "Mx Lindqvist", "Music", Weekday.tuesday, "10:00", "10:45"),
    ("demo-6b", "t-lindqvist", "Mx Lindqvist", "Music", Weekday.tuesday, "11:00", "11:45"),
    ("demo-5a", "t-lindqvist", "Mx Lindqvist", "Music", Weekday.tuesday, "12:00", "12:45"),
    ("demo-6b", "t-lindqvist", "Mx Lindqvist", "Drama", Weekday.tuesday, "13:00", "13:45"),
]


def seed() -> None:
    ensure_schema()
    db = SessionLocal()
    try:
        db.execute(delete(TimetableAssignment).where(TimetableAssignment.school_id == SCHOOL_ID))
        db.execute(delete(Timetable).where(Timetable.school_id == SCHOOL_ID))
        for timetable_id, (class_id, class_name) in TIMETABLES.items():
            db.add(Timetable(id=timetable_id, school_id=SCHOOL_ID, class_id=class_id, name=f"{class_name} weekly"))
        db.flush()

        for timetable_id, teacher_id, teacher_name, subject, day, start, end in SESSIONS:
            class_id, class_name = TIMETABLES[timetable_id]
            db.add(
                TimetableAssignment(
                    timetable_id=timetable_id,
                    school_id=SCHOOL_ID,
                    teacher_id=teacher_id,
                    teacher_name=teacher_name,
                    class_id=class_id,
                    class_name=class_name,
                    subject_id=subject.lower(),
                    subject_name=subject,
                    day=day,
                    start_time=start,
                    end_time=end,
                )
            )
        db.commit()

        service = ConflictService(SqlAssignmentRepository(db))
        for timetable_id in TIMETABLES:
            conflicts = service.check_conflicts(timetable_id, SCHOOL_ID)
            summary = summarize_conflicts(conflicts)
            highest = summary.highest_severity.value if summary.highest_severity else "none"
            print(f"{timetable_id}: {summary.total} conflict(s), highest={highest}")
            for conflict in conflicts:
                print("  " + json.dumps(conflict.to_dict(), ensure_ascii=False))
    finally:
        db.close()


if __name__ == "__main__":
    seed()
