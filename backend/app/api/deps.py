from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db.session import SessionLocal
from app.services.assignment_repository import SqlAssignmentRepository
from app.services.conflict_service import ConflictService, ConflictThresholds


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_assignment_repository(db: Session = Depends(get_db)) -> SqlAssignmentRepository:
    return SqlAssignmentRepository(db)


def get_conflict_service(
    repository: SqlAssignmentRepository = Depends(get_assignment_repository),
) -> ConflictService:
    return ConflictService(repository, ConflictThresholds.from_settings(get_settings()))
