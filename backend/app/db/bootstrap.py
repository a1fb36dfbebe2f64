from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

import app.models  # noqa: F401
from app.db.base import Base
from app.db.session import engine as default_engine

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "timetables": {"id", "school_id", "class_id", "name"},
    "timetable_assignments": {
        "id",
        "timetable_id",
        "school_id",
        "teacher_id",
        "teacher_name",
        "class_id",
        "class_name",
        "subject_name",
        "day",
        "start_time",
        "end_time",
    },
}


def find_schema_gaps(bind: Engine) -> tuple[list[str], dict[str, list[str]]]:
    missing_tables: list[str] = []
    missing_columns: dict[str, list[str]] = {}
    with bind.connect() as connection:
        inspector = inspect(connection)
        table_names = set(inspector.get_table_names())
        for table_name, columns in REQUIRED_COLUMNS.items():
            if table_name not in table_names:
                missing_tables.append(table_name)
                continue
            existing = {item["name"] for item in inspector.get_columns(table_name)}
            missing = sorted(columns - existing)
            if missing:
                missing_columns[table_name] = missing
    return missing_tables, missing_columns


def ensure_schema(bind: Engine | None = None) -> None:
    bind = bind or default_engine
    Base.metadata.create_all(bind=bind)
    missing_tables, missing_columns = find_schema_gaps(bind)
    if missing_tables or missing_columns:
        logger.warning(
            "Database schema is incomplete: missing tables=%s, missing columns=%s",
            missing_tables,
            missing_columns,
        )
