import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from skillhub.core.exceptions import InvalidInputError
from skillhub.core.schemas import Page
from skillhub.database import get_db
from skillhub.schemas.employee import (
    EmployeeCreate,
    EmployeeEvaluation,
    EmployeeResponse,
    EmployeeSummary,
    RecentAssessment,
    SkillScorePoint,
)
from skillhub.services import employees as employee_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/employees",
    tags=["employees"]
)

ALL_YEARS = "all"


def _parse_year(year: Optional[str]) -> Optional[int]:
    if year is None or year.strip().lower() in ("", ALL_YEARS):
        return None
    try:
        return int(year)
    except ValueError:
        raise InvalidInputError("year must be an integer or 'all'")


@router.get("/all", response_model=List[EmployeeResponse])
def get_all_employees(db: Session = Depends(get_db)):
    return employee_service.list_employees(db)

@router.get("/main", response_model=List[EmployeeSummary])
def get_employee_summaries(db: Session = Depends(get_db)):
    return employee_service.employee_summaries(db)

@router.get("/search", response_model=Page[EmployeeEvaluation])
def search_employees(
    emp_name: str = Query("", alias="empName"),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    rows, total = employee_service.search_employee_evaluations(db, emp_name, limit, offset)
    return {"result": rows, "total": total}

@router.get("/recent", response_model=List[RecentAssessment])
def get_recent_assessments(db: Session = Depends(get_db)):
    return employee_service.recent_assessments(db)

@router.get("/by-skill", response_model=List[SkillScorePoint])
def get_scores_by_skill(
    skill_id: int = Query(..., alias="skillId"),
    year: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """Quarterly scores on one skill. `year` accepts an integer or `all`."""
    return employee_service.scores_by_skill(db, skill_id, _parse_year(year))

@router.post("/add", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
def add_employee(data: EmployeeCreate, db: Session = Depends(get_db)):
    return employee_service.add_employee(db, data)
