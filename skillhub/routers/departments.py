from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from skillhub.core.schemas import MessageResponse
from skillhub.database import get_db
from skillhub.schemas.department import DepartmentCreate, DepartmentDetail, DepartmentName
from skillhub.services import departments as department_service

router = APIRouter(
    prefix="/departments",
    tags=["departments"]
)

@router.get("/all", response_model=List[DepartmentName])
def get_departments(db: Session = Depends(get_db)):
    return department_service.list_departments(db)

@router.get("/details", response_model=List[DepartmentDetail])
def get_department_details(db: Session = Depends(get_db)):
    """Departments with headcount and average normalized score."""
    return department_service.department_details(db)

@router.post("/add", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def add_department(data: DepartmentCreate, db: Session = Depends(get_db)):
    department_service.add_department(db, data.dept_name, data.dept_description)
    return {"message": "Successfully inserted the data"}
