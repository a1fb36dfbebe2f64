from app.models.timetable import Timetable, TimetableAssignment, Weekday  # noqa: F401
