"""create timetables and assignments

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


weekday = sa.Enum("monday", "tuesday", "wednesday", "thursday", "friday", name="weekday")


def upgrade() -> None:
    op.create_table(
        "timetables",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("school_id", sa.String(length=64), nullable=False),
        sa.Column("class_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_timetables_school_id", "timetables", ["school_id"], unique=False)

    op.create_table(
        "timetable_assignments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column(
            "timetable_id",
            sa.String(length=36),
            sa.ForeignKey("timetables.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("school_id", sa.String(length=64), nullable=False),
        sa.Column("teacher_id", sa.String(length=64), nullable=False),
        sa.Column("teacher_name", sa.String(length=200), nullable=False),
        sa.Column("class_id", sa.String(length=64), nullable=False),
        sa.Column("class_name", sa.String(length=200), nullable=False),
        sa.Column("subject_id", sa.String(length=64), nullable=True),
        sa.Column("subject_name", sa.String(length=200), nullable=False),
        sa.Column("day", weekday, nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_timetable_assignments_timetable_id", "timetable_assignments", ["timetable_id"], unique=False)
    op.create_index("ix_timetable_assignments_school_id", "timetable_assignments", ["school_id"], unique=False)
    op.create_index(
        "ix_timetable_assignments_school_teacher", "timetable_assignments", ["school_id", "teacher_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_timetable_assignments_school_teacher", table_name="timetable_assignments")
    op.drop_index("ix_timetable_assignments_school_id", table_name="timetable_assignments")
    op.drop_index("ix_timetable_assignments_timetable_id", table_name="timetable_assignments")
    op.drop_table("timetable_assignments")
    op.drop_index("ix_timetables_school_id", table_name="timetables")
    op.drop_table("timetables")
    weekday.drop(op.get_bind(), checkfirst=True)
