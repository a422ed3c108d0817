from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class SkillCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    skill_name: str = Field(..., min_length=1, max_length=100, alias="skillName")
    skill_category: Optional[str] = Field(None, max_length=100, alias="skillCategory")


class MaxScoreUpdate(BaseModel):
    max_score: float = Field(..., gt=0, allow_inf_nan=False)


class SkillSummary(BaseModel):
    skill_id: int
    skill_name: str
    skill_category: str
    max_score: float
    employee_count: int


class SkillAverage(BaseModel):
    average_score: Optional[float] = None
    high_score: Optional[float] = None


class EmployeeSkill(BaseModel):
    skill_id: int
    skill_name: str


class SkillCategoryResponse(BaseModel):
    category_id: int
    category_name: str
    skill_count: int


class RescaleResult(BaseModel):
    message: str
    skill_id: int
    old_max_score: float
    max_score: float
    evaluations_updated: int
