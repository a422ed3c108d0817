"""
Skill Service Layer

Skill catalog operations and the max-score rescale. Changing a skill's
max_score rewrites every historical evaluation of that skill in one
transaction, so normalized scores never mix scales.
"""
import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import distinct, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from skillhub.core.exceptions import InvalidInputError, NotFoundError
from skillhub.models.skill import DEFAULT_MAX_SCORE, Skill, SkillCategory, UNCATEGORIZED
from skillhub.models.skill_evaluation import SkillEvaluation
from skillhub.services.scoring import NORMALIZED_SCALE, rescale_score, round_or_none

logger = logging.getLogger(__name__)


def normalized_score_expr():
    """SQL expression for score on the 0-10 scale."""
    return SkillEvaluation.score * NORMALIZED_SCALE / func.nullif(SkillEvaluation.max_score, 0)


def list_skills(db: Session) -> List[Dict[str, Any]]:
    category_label = func.coalesce(SkillCategory.name, UNCATEGORIZED).label("skill_category")
    rows = (
        db.query(
            Skill.id.label("skill_id"),
            Skill.name.label("skill_name"),
            category_label,
            Skill.max_score,
            func.count(distinct(SkillEvaluation.employee_id)).label("employee_count"),
        )
        .outerjoin(SkillCategory, Skill.category_id == SkillCategory.id)
        .outerjoin(SkillEvaluation, SkillEvaluation.skill_id == Skill.id)
        .group_by(Skill.id, Skill.name, SkillCategory.name, Skill.max_score)
        .order_by(category_label, Skill.name)
        .all()
    )
    return [row._asdict() for row in rows]


def get_or_create_category(db: Session, name: str) -> SkillCategory:
    category = db.query(SkillCategory).filter(func.lower(SkillCategory.name) == name.lower()).first()
    if category:
        return category
    category = SkillCategory(name=name)
    db.add(category)
    db.flush()
    return category


def add_skill(db: Session, name: str, category_name: Optional[str] = None) -> Tuple[Optional[Skill], bool]:
    """
    Insert a skill unless one with the same name exists (do nothing on conflict).
    Returns (skill, created).
    """
    name = name.strip()
    existing = db.query(Skill).filter(Skill.name == name).first()
    if existing:
        logger.info(f"Skill '{name}' already exists; insert ignored")
        return existing, False

    try:
        category = get_or_create_category(db, category_name.strip()) if category_name and category_name.strip() else None
        skill = Skill(name=name, category=category, max_score=DEFAULT_MAX_SCORE)
        db.add(skill)
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent insert of the same name
        db.rollback()
        return db.query(Skill).filter(Skill.name == name).first(), False
    except Exception:
        db.rollback()
        raise
    db.refresh(skill)
    logger.info(f"Skill {skill.id} '{name}' created")
    return skill, True


def remove_skill(db: Session, skill_id: int):
    skill = db.get(Skill, skill_id)
    if not skill:
        raise NotFoundError("Skill not found")
    db.delete(skill)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Skill {skill_id} deleted with its evaluations")


def rescale_skill_max_score(db: Session, skill_id: int, new_max_score: float) -> Dict[str, Any]:
    """
    Set a new max_score on a skill and proportionally rescale every evaluation of it.

    All rows are updated in a single transaction: on any failure the session is
    rolled back and nothing is persisted. A skill without evaluations is reported
    as not found and left untouched.
    """
    if new_max_score is None or not math.isfinite(new_max_score) or new_max_score <= 0:
        raise InvalidInputError("max_score must be a positive number.")

    skill = db.get(Skill, skill_id)
    if not skill:
        raise NotFoundError("Skill not found")

    old_max_score = skill.max_score
    try:
        evaluations = (
            db.query(SkillEvaluation)
            .filter(SkillEvaluation.skill_id == skill_id)
            .order_by(SkillEvaluation.id)
            .with_for_update()
            .all()
        )
        if not evaluations:
            raise NotFoundError("No evaluations found for the specified skill.")

        for evaluation in evaluations:
            evaluation.score = rescale_score(evaluation.score, evaluation.max_score, new_max_score)
            evaluation.max_score = new_max_score
            db.flush()

        skill.max_score = new_max_score
        db.commit()
    except NotFoundError:
        db.rollback()
        raise
    except Exception:
        db.rollback()
        logger.error(f"Rescale of skill {skill_id} failed; rolled back", exc_info=True)
        raise

    logger.info(
        f"Skill {skill_id} max_score {old_max_score:g} -> {new_max_score:g}",
        extra={"evaluations_updated": len(evaluations)},
    )
    return {
        "message": "Skill max score updated successfully",
        "skill_id": skill_id,
        "old_max_score": old_max_score,
        "max_score": new_max_score,
        "evaluations_updated": len(evaluations),
    }


def average_skill_score(db: Session) -> Dict[str, Optional[float]]:
    normalized = normalized_score_expr()
    row = db.query(
        func.avg(normalized).label("average_score"),
        func.max(normalized).label("high_score"),
    ).one()
    return {
        "average_score": round_or_none(row.average_score, 1),
        "high_score": round_or_none(row.high_score, 0),
    }


def employee_skills(db: Session, employee_id: int) -> List[Dict[str, Any]]:
    rows = (
        db.query(Skill.id.label("skill_id"), Skill.name.label("skill_name"))
        .join(SkillEvaluation, SkillEvaluation.skill_id == Skill.id)
        .filter(SkillEvaluation.employee_id == employee_id)
        .group_by(Skill.id, Skill.name)
        .order_by(Skill.name)
        .all()
    )
    if not rows:
        raise NotFoundError("No results available")
    return [row._asdict() for row in rows]


def list_categories(db: Session) -> List[Dict[str, Any]]:
    rows = (
        db.query(
            SkillCategory.id.label("category_id"),
            SkillCategory.name.label("category_name"),
            func.count(Skill.id).label("skill_count"),
        )
        .outerjoin(Skill, Skill.category_id == SkillCategory.id)
        .group_by(SkillCategory.id, SkillCategory.name)
        .order_by(SkillCategory.name)
        .all()
    )
    return [row._asdict() for row in rows]
