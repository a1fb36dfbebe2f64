import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient #fake http client that calls the FastAPI routes without running a real server.
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.db.base import Base
from app.main import app
from app.schemas.assignment import Assignment


@pytest.fixture()
def session_factory():
    engine = create_engine( #isolated in-memory DB shared by every connection
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def make_assignment():
    def factory(
        start: str,
        end: str,
        *,
        day: str = "monday",
        teacher: str = "t1",
        teacher_name: str = "Ms Rivera",
        timetable: str = "tt-a",
        school: str = "school-1",
        class_name: str = "Grade 5A",
        subject: str = "Mathematics",
    ) -> Assignment:
        return Assignment(
            timetable_id=timetable,
            school_id=school,
            teacher_id=teacher,
            teacher_name=teacher_name,
            class_id=class_name.lower().replace(" ", "-"),
            class_name=class_name,
            subject_name=subject,
            day=day,
            start_time=start,
            end_time=end,
        )

    return factory
