"""
Dashboard chart endpoints.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from skillhub.database import get_db
from skillhub.schemas.analytics import (
    DepartmentAverage,
    GrowthPoint,
    QuarterAverage,
    SkillLevelBucket,
    TopPerformer,
)
from skillhub.services import analytics as analytics_service

router = APIRouter(
    prefix="/analytics",
    tags=["analytics"]
)

@router.get("/quarter-wise", response_model=List[QuarterAverage])
def get_quarter_wise(year: int = Query(...), db: Session = Depends(get_db)):
    return analytics_service.quarter_wise_average(db, year)

@router.get("/department-wise", response_model=List[DepartmentAverage])
def get_department_wise(db: Session = Depends(get_db)):
    return analytics_service.department_wise_average(db)

@router.get("/skilllevel-wise", response_model=List[SkillLevelBucket])
def get_skill_level_distribution(db: Session = Depends(get_db)):
    return analytics_service.skill_level_distribution(db)

@router.get("/top-performers", response_model=List[TopPerformer])
def get_top_performers(db: Session = Depends(get_db)):
    return analytics_service.top_performers(db)

@router.get("/employee-growth/{emp_id}", response_model=List[GrowthPoint])
def get_employee_growth(
    emp_id: int,
    year: Optional[int] = Query(None),
    skill_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    """Quarter-by-quarter scores of one employee on one skill."""
    return analytics_service.employee_growth(db, emp_id, year=year, skill_id=skill_id)
