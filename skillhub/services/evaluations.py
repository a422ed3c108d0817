"""
Evaluation Service Layer

Reads and writes SkillEvaluation records. Listing, searching and the derived
skill level all live here; routers only translate HTTP to these calls.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from skillhub.core.exceptions import InvalidInputError, NotFoundError
from skillhub.models.department import Department
from skillhub.models.employee import Employee
from skillhub.models.skill import Skill
from skillhub.models.skill_evaluation import SkillEvaluation
from skillhub.schemas.evaluation import EvaluationWrite
from skillhub.services.query_filters import (
    DEFAULT_SORT,
    EvaluationFilter,
    build_predicates,
    order_by_clauses,
    resolve_sort,
)
from skillhub.services.scoring import classify_score

logger = logging.getLogger(__name__)


def evaluation_rows_query(db: Session):
    """Evaluations joined with employee, department and skill, projected as flat rows."""
    return (
        db.query(
            SkillEvaluation.id.label("eval_id"),
            Employee.id.label("emp_id"),
            Employee.name.label("emp_name"),
            Department.name.label("dept_name"),
            Skill.id.label("skill_id"),
            Skill.name.label("skill_name"),
            SkillEvaluation.skill_level,
            SkillEvaluation.score,
            SkillEvaluation.max_score,
            SkillEvaluation.quarter,
            SkillEvaluation.year,
            SkillEvaluation.comment,
        )
        .select_from(SkillEvaluation)
        .join(Employee, SkillEvaluation.employee_id == Employee.id)
        .join(Department, Employee.department_id == Department.id)
        .join(Skill, SkillEvaluation.skill_id == Skill.id)
    )


def list_evaluations(
    db: Session,
    limit: int,
    offset: int,
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
) -> Tuple[List[Dict[str, Any]], int]:
    """
    Paginated listing. Returns the window and the total number of evaluations.
    Raises NotFoundError when the window is empty.
    """
    field, direction = resolve_sort(sort_by, order)
    base = evaluation_rows_query(db)
    total = base.count()
    rows = base.order_by(*order_by_clauses(field, direction)).offset(offset).limit(limit).all()
    if not rows:
        raise NotFoundError("No results available")
    return [row._asdict() for row in rows], total


def search_evaluations(db: Session, filters: Dict[EvaluationFilter, Any]) -> List[Dict[str, Any]]:
    """Unpaginated search; every supplied filter must match."""
    query = evaluation_rows_query(db)
    predicates = build_predicates(filters)
    if predicates:
        query = query.filter(*predicates)
    rows = query.order_by(*order_by_clauses(*DEFAULT_SORT)).all()
    if not rows:
        raise NotFoundError("No results found")
    return [row._asdict() for row in rows]


def _validate_score(score: float, max_score: float):
    if score < 0 or score > max_score:
        raise InvalidInputError(f"score must be between 0 and {max_score:g}")


def add_evaluation(db: Session, employee_id: int, skill_id: int, data: EvaluationWrite) -> SkillEvaluation:
    employee = db.get(Employee, employee_id)
    if not employee:
        raise NotFoundError("Employee not found")
    skill = db.get(Skill, skill_id)
    if not skill:
        raise NotFoundError("Skill not found")
    _validate_score(data.score, skill.max_score)

    evaluation = SkillEvaluation(
        employee_id=employee.id,
        skill_id=skill.id,
        score=data.score,
        max_score=skill.max_score,
        quarter=data.quarter,
        year=data.year,
        comment=data.comment,
        skill_level=classify_score(data.score, skill.max_score),
    )
    db.add(evaluation)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(evaluation)
    logger.info(f"Evaluation {evaluation.id} recorded for employee {employee.id} on skill {skill.id}")
    return evaluation


def _apply_update(evaluation: SkillEvaluation, data: EvaluationWrite):
    _validate_score(data.score, evaluation.max_score)
    evaluation.score = data.score
    evaluation.quarter = data.quarter
    evaluation.year = data.year
    evaluation.comment = data.comment
    evaluation.skill_level = classify_score(data.score, evaluation.max_score)


def update_evaluation(db: Session, eval_id: int, data: EvaluationWrite) -> SkillEvaluation:
    evaluation = db.get(SkillEvaluation, eval_id)
    if not evaluation:
        raise NotFoundError("No matching evaluation found")
    _apply_update(evaluation, data)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(evaluation)
    return evaluation


def update_evaluations_by_key(db: Session, employee_id: int, skill_id: int, data: EvaluationWrite) -> int:
    """
    Deprecated composite-key update: rewrites every evaluation of the employee
    on the skill for the quarter/year given in the body.
    """
    logger.warning(
        "Composite-key evaluation update used; prefer update by evaluation id",
        extra={"employee_id": employee_id, "skill_id": skill_id},
    )
    evaluations = db.query(SkillEvaluation).filter(
        SkillEvaluation.employee_id == employee_id,
        SkillEvaluation.skill_id == skill_id,
        SkillEvaluation.quarter == data.quarter,
        SkillEvaluation.year == data.year,
    ).all()
    if not evaluations:
        raise NotFoundError("No matching evaluation found")
    try:
        for evaluation in evaluations:
            _apply_update(evaluation, data)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return len(evaluations)


def delete_evaluation(db: Session, eval_id: int):
    evaluation = db.get(SkillEvaluation, eval_id)
    if not evaluation:
        raise NotFoundError("Evaluation not found")
    db.delete(evaluation)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Evaluation {eval_id} deleted")


def list_years(db: Session) -> List[int]:
    rows = db.query(SkillEvaluation.year).distinct().order_by(SkillEvaluation.year.asc()).all()
    return [row.year for row in rows]
