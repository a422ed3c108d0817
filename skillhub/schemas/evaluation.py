from pydantic import BaseModel, Field
from typing import Optional
from skillhub.models.skill_evaluation import Quarter, SkillLevel


class EvaluationWrite(BaseModel):
    """Body for both creating and updating an evaluation."""
    score: float = Field(..., ge=0, allow_inf_nan=False)
    quarter: Quarter
    year: int = Field(..., ge=1900, le=2100)
    comment: Optional[str] = None


class EvaluationRow(BaseModel):
    eval_id: int
    emp_id: int
    emp_name: str
    dept_name: str
    skill_id: int
    skill_name: str
    skill_level: Optional[SkillLevel] = None
    score: float
    max_score: float
    quarter: Quarter
    year: int
    comment: Optional[str] = None


class EvaluationResponse(BaseModel):
    message: str
    eval_id: int
    skill_level: Optional[SkillLevel] = None


class UpdateResult(BaseModel):
    message: str
    updated: int
