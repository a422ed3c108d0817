from pydantic import BaseModel, Field
from typing import Optional


class DepartmentCreate(BaseModel):
    """Schema for creating a new department."""
    dept_name: str = Field(..., min_length=1, max_length=100)
    dept_description: Optional[str] = None


class DepartmentName(BaseModel):
    dept_id: int
    dept_name: str


class DepartmentDetail(BaseModel):
    """Department with headcount and average normalized score (0-10)."""
    dept_id: int
    dept_name: str
    dept_description: Optional[str] = None
    emp_count: int
    average_score: Optional[float] = None
