import logging
from typing import List
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from skillhub.core.schemas import MessageResponse
from skillhub.database import get_db
from skillhub.schemas.skill import (
    EmployeeSkill,
    MaxScoreUpdate,
    RescaleResult,
    SkillAverage,
    SkillCategoryResponse,
    SkillCreate,
    SkillSummary,
)
from skillhub.services import skills as skills_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/skills",
    tags=["skills"]
)

@router.get(
    "/all",
    response_model=List[SkillSummary],
    responses={status.HTTP_204_NO_CONTENT: {"description": "No skills defined"}},
)
def get_all_skills(db: Session = Depends(get_db)):
    skills = skills_service.list_skills(db)
    if not skills:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return skills

@router.get("/average", response_model=SkillAverage)
def get_average_score(db: Session = Depends(get_db)):
    return skills_service.average_skill_score(db)

@router.get("/employee-skills", response_model=List[EmployeeSkill])
def get_employee_skills(emp_id: int = Query(..., alias="empId"), db: Session = Depends(get_db)):
    return skills_service.employee_skills(db, emp_id)

@router.get("/categories", response_model=List[SkillCategoryResponse])
def get_categories(db: Session = Depends(get_db)):
    return skills_service.list_categories(db)

@router.post("/add", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def add_skill(data: SkillCreate, db: Session = Depends(get_db)):
    # Existing names are ignored, the response is the same either way
    skills_service.add_skill(db, data.skill_name, data.skill_category)
    return {"message": "Skill added successfully"}

@router.put("/edit/{skill_id}", response_model=RescaleResult)
def edit_max_score(skill_id: int, data: MaxScoreUpdate, db: Session = Depends(get_db)):
    """Change a skill's max score and rescale all of its evaluations."""
    return skills_service.rescale_skill_max_score(db, skill_id, data.max_score)

@router.delete("/remove/{skill_id}", response_model=MessageResponse)
def remove_skill(skill_id: int, db: Session = Depends(get_db)):
    skills_service.remove_skill(db, skill_id)
    return {"message": "Skill deleted successfully"}
