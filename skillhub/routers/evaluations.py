import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from skillhub.core.schemas import MessageResponse, Page
from skillhub.database import get_db
from skillhub.schemas.evaluation import EvaluationResponse, EvaluationRow, EvaluationWrite, UpdateResult
from skillhub.services import evaluations as evaluation_service
from skillhub.services.query_filters import EvaluationFilter

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/evaluations",
    tags=["evaluations"]
)

@router.get("/details", response_model=Page[EvaluationRow])
def get_evaluations(
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    order: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """Paginated evaluations. Unknown sort values fall back to year ascending."""
    rows, total = evaluation_service.list_evaluations(db, limit, offset, sort_by, order)
    return {"result": rows, "total": total}

@router.get("/search", response_model=List[EvaluationRow])
def search_evaluations(
    emp_id: Optional[int] = Query(None, alias="empId"),
    department: Optional[str] = Query(None),
    skill: Optional[str] = Query(None),
    year_from: Optional[int] = Query(None, alias="yearFrom"),
    year_to: Optional[int] = Query(None, alias="yearTo"),
    db: Session = Depends(get_db),
):
    filters = {
        EvaluationFilter.EMPLOYEE_ID: emp_id,
        EvaluationFilter.DEPARTMENT: department,
        EvaluationFilter.SKILL: skill,
        EvaluationFilter.YEAR: (year_from, year_to),
    }
    return evaluation_service.search_evaluations(db, filters)

@router.get("/years", response_model=List[int])
def get_years(db: Session = Depends(get_db)):
    return evaluation_service.list_years(db)

@router.post("/add", response_model=EvaluationResponse, status_code=status.HTTP_201_CREATED)
def add_evaluation(
    data: EvaluationWrite,
    emp_id: int = Query(..., alias="empId"),
    skill_id: int = Query(..., alias="skillId"),
    db: Session = Depends(get_db),
):
    evaluation = evaluation_service.add_evaluation(db, emp_id, skill_id, data)
    return {
        "message": "Successfully inserted the data",
        "eval_id": evaluation.id,
        "skill_level": evaluation.skill_level,
    }

@router.put("/update/{eval_id}", response_model=EvaluationResponse)
def update_evaluation(eval_id: int, data: EvaluationWrite, db: Session = Depends(get_db)):
    evaluation = evaluation_service.update_evaluation(db, eval_id, data)
    return {
        "message": "Evaluation updated successfully",
        "eval_id": evaluation.id,
        "skill_level": evaluation.skill_level,
    }

@router.put("/update", response_model=UpdateResult, deprecated=True)
def update_evaluation_by_key(
    data: EvaluationWrite,
    emp_id: int = Query(..., alias="empId"),
    skill_id: int = Query(..., alias="skillId"),
    db: Session = Depends(get_db),
):
    """Deprecated: use PUT /evaluations/update/{eval_id}."""
    updated = evaluation_service.update_evaluations_by_key(db, emp_id, skill_id, data)
    return {"message": "Evaluation updated successfully", "updated": updated}

@router.delete("/remove/{eval_id}", response_model=MessageResponse)
def remove_evaluation(eval_id: int, db: Session = Depends(get_db)):
    evaluation_service.delete_evaluation(db, eval_id)
    return {"message": "Evaluation deleted successfully"}
