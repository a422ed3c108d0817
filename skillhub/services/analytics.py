"""
Reporting queries behind the dashboard charts.

All averages are computed on the normalized 0-10 score so that skills with
different max_scores can be compared. Chart averages are rounded to one
decimal; growth-series points keep two.
"""
import logging
from collections import OrderedDict
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from skillhub.core.exceptions import NotFoundError
from skillhub.models.department import Department
from skillhub.models.employee import Employee
from skillhub.models.skill import Skill
from skillhub.models.skill_evaluation import Quarter, SkillEvaluation, SkillLevel
from skillhub.services.scoring import normalize, round_or_none
from skillhub.services.skills import normalized_score_expr

logger = logging.getLogger(__name__)

TOP_PERFORMER_COUNT = 5
QUARTER_ORDER = [Quarter.Q1, Quarter.Q2, Quarter.Q3, Quarter.Q4]


def quarter_of(day: date) -> Quarter:
    return QUARTER_ORDER[(day.month - 1) // 3]


def quarters_from(start: Quarter) -> List[Quarter]:
    """Quarters of a year from `start` (inclusive) to Q4."""
    return QUARTER_ORDER[QUARTER_ORDER.index(start):]


def quarter_wise_average(db: Session, year: int) -> List[Dict[str, Any]]:
    rows = (
        db.query(
            SkillEvaluation.quarter,
            SkillEvaluation.year,
            func.avg(normalized_score_expr()).label("average_score"),
        )
        .filter(SkillEvaluation.year == year)
        .group_by(SkillEvaluation.quarter, SkillEvaluation.year)
        .all()
    )
    rows = sorted(rows, key=lambda r: QUARTER_ORDER.index(r.quarter))
    return [
        {"quarter": r.quarter, "year": r.year, "average_score": round_or_none(r.average_score, 1)}
        for r in rows
    ]


def department_wise_average(db: Session) -> List[Dict[str, Any]]:
    rows = (
        db.query(
            Department.name.label("dept_name"),
            func.avg(normalized_score_expr()).label("average_score"),
        )
        .join(Employee, Employee.department_id == Department.id)
        .join(SkillEvaluation, SkillEvaluation.employee_id == Employee.id)
        .group_by(Department.name)
        .order_by(Department.name)
        .all()
    )
    return [{"dept_name": r.dept_name, "average_score": round_or_none(r.average_score, 1)} for r in rows]


def skill_level_distribution(db: Session) -> List[Dict[str, Any]]:
    """Evaluation count per skill level. Every level is reported, including empty ones."""
    counts = dict(
        db.query(SkillEvaluation.skill_level, func.count(SkillEvaluation.id))
        .filter(SkillEvaluation.skill_level.isnot(None))
        .group_by(SkillEvaluation.skill_level)
        .all()
    )
    return [{"name": level, "value": int(counts.get(level, 0))} for level in SkillLevel]


def top_performers(db: Session, count: int = TOP_PERFORMER_COUNT) -> List[Dict[str, Any]]:
    """
    Highest raw scores, one row per distinct (employee, department, skill, score, max_score).
    Ranks evaluation events, so an employee can appear more than once.
    """
    rows = (
        db.query(
            Employee.name.label("emp_name"),
            Department.name.label("dept_name"),
            Skill.name.label("skill_name"),
            SkillEvaluation.score,
            SkillEvaluation.max_score,
        )
        .select_from(SkillEvaluation)
        .join(Employee, SkillEvaluation.employee_id == Employee.id)
        .join(Department, Employee.department_id == Department.id)
        .join(Skill, SkillEvaluation.skill_id == Skill.id)
        .distinct()
        .order_by(SkillEvaluation.score.desc(), Employee.name, Skill.name)
        .limit(count)
        .all()
    )
    if not rows:
        raise NotFoundError("No results found")
    return [row._asdict() for row in rows]


def growth_window(employee: Employee, year: Optional[int] = None):
    """
    Time predicate of a growth series: the given year, otherwise everything
    from the quarter the employee joined. None when nothing restricts it.
    """
    if year is not None:
        return SkillEvaluation.year == year
    if employee.date_joined is None:
        return None
    start_year = employee.date_joined.year
    start_quarter = quarter_of(employee.date_joined)
    return or_(
        SkillEvaluation.year > start_year,
        and_(
            SkillEvaluation.year == start_year,
            SkillEvaluation.quarter.in_(quarters_from(start_quarter)),
        ),
    )


def default_growth_skill(db: Session, employee_id: int, window=None) -> Optional[int]:
    """Lowest skill id the employee has been evaluated on within the window."""
    query = db.query(func.min(SkillEvaluation.skill_id)).filter(SkillEvaluation.employee_id == employee_id)
    if window is not None:
        query = query.filter(window)
    return query.scalar()


def employee_growth(
    db: Session,
    employee_id: int,
    year: Optional[int] = None,
    skill_id: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Chronological (year, quarter) series of one employee's scores on one skill.

    Without a year, the series starts at the quarter the employee joined.
    Several evaluations in the same quarter are averaged into one point.
    """
    employee = db.get(Employee, employee_id)
    if not employee:
        raise NotFoundError("Employee not found")

    window = growth_window(employee, year)
    if skill_id is None:
        skill_id = default_growth_skill(db, employee_id, window)
        if skill_id is None:
            raise NotFoundError("No evaluations found for this employee")

    query = (
        db.query(
            SkillEvaluation.year,
            SkillEvaluation.quarter,
            SkillEvaluation.score,
            SkillEvaluation.max_score,
            Skill.id.label("skill_id"),
            Skill.name.label("skill_name"),
        )
        .join(Skill, SkillEvaluation.skill_id == Skill.id)
        .filter(
            SkillEvaluation.employee_id == employee_id,
            SkillEvaluation.skill_id == skill_id,
        )
    )
    if window is not None:
        query = query.filter(window)

    rows = query.order_by(SkillEvaluation.year, SkillEvaluation.id).all()
    if not rows:
        raise NotFoundError("No evaluations found for this employee")

    buckets = OrderedDict()
    for row in sorted(rows, key=lambda r: (r.year, QUARTER_ORDER.index(r.quarter))):
        buckets.setdefault((row.year, row.quarter), []).append(row)

    points = []
    for (bucket_year, bucket_quarter), bucket in buckets.items():
        score = sum(r.score for r in bucket) / len(bucket)
        max_score = bucket[-1].max_score
        points.append({
            "year": bucket_year,
            "quarter": bucket_quarter,
            "score": round(score, 2),
            "max_score": max_score,
            "normalized_score": normalize(score, max_score, 2),
            "skill_id": bucket[-1].skill_id,
            "skill_name": bucket[-1].skill_name,
        })
    return points
