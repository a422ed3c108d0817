from pydantic import BaseModel
from typing import Optional
from skillhub.models.skill_evaluation import Quarter, SkillLevel


class QuarterAverage(BaseModel):
    quarter: Quarter
    year: int
    average_score: Optional[float] = None


class DepartmentAverage(BaseModel):
    dept_name: str
    average_score: Optional[float] = None


class SkillLevelBucket(BaseModel):
    name: SkillLevel
    value: int


class TopPerformer(BaseModel):
    emp_name: str
    dept_name: str
    skill_name: str
    score: float
    max_score: float


class GrowthPoint(BaseModel):
    year: int
    quarter: Quarter
    score: float
    max_score: float
    normalized_score: Optional[float] = None
    skill_id: int
    skill_name: str
