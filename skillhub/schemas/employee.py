from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date
from skillhub.models.skill_evaluation import Quarter, SkillLevel


class EmployeeCreate(BaseModel):
    emp_name: str = Field(..., min_length=1, max_length=150)
    dept_id: int
    date_joined: Optional[date] = None


class EmployeeResponse(BaseModel):
    emp_id: int
    emp_name: str
    dept_id: int
    dept_name: str
    date_joined: Optional[date] = None


class EmployeeSummary(BaseModel):
    """Per-employee overview used by the employees page."""
    emp_id: int
    emp_name: str
    dept_name: str
    skills: List[str]
    average_score: Optional[float] = None
    high_score: Optional[float] = None


class EmployeeEvaluation(BaseModel):
    emp_id: int
    emp_name: str
    dept_name: str
    skill_name: str
    score: float
    max_score: float
    year: int
    quarter: Quarter
    skill_level: Optional[SkillLevel] = None


class RecentAssessment(BaseModel):
    emp_id: int
    emp_name: str
    skill_name: str
    score: float


class SkillScorePoint(BaseModel):
    emp_id: int
    emp_name: str
    year: int
    quarter: Quarter
    score: float
    normalized_score: Optional[float] = None
