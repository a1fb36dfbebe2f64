from fastapi import APIRouter, Depends, Query

from app.api.deps import get_assignment_repository, get_conflict_service
from app.core.exceptions import ResourceNotFoundError
from app.schemas.conflict import ConflictReport
from app.services.assignment_repository import SqlAssignmentRepository
from app.services.conflict_service import ConflictService, summarize_conflicts

router = APIRouter()


@router.get(
    "/timetables/{timetable_id}",
    response_model=ConflictReport,
    response_model_exclude_none=True,
)
def check_timetable_conflicts(
    timetable_id: str,
    school_id: str = Query(alias="schoolId", min_length=1),
    repository: SqlAssignmentRepository = Depends(get_assignment_repository),
    service: ConflictService = Depends(get_conflict_service),
):
    timetable = repository.get_timetable(timetable_id)
    if timetable is None or timetable.school_id != school_id:
        raise ResourceNotFoundError("Timetable", timetable_id)

    conflicts = service.check_conflicts(timetable_id, school_id)
    return ConflictReport(
        timetable_id=timetable_id,
        school_id=school_id,
        conflicts=conflicts,
        summary=summarize_conflicts(conflicts),
    )
