"""
Employee Service Layer

Directory queries over employees and their evaluations.
"""
import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from skillhub.core.exceptions import NotFoundError
from skillhub.models.department import Department
from skillhub.models.employee import Employee
from skillhub.models.skill import Skill
from skillhub.models.skill_evaluation import SkillEvaluation
from skillhub.schemas.employee import EmployeeCreate
from skillhub.services.scoring import normalize, round_or_none
from skillhub.services.skills import normalized_score_expr

logger = logging.getLogger(__name__)

RECENT_ASSESSMENT_COUNT = 4


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _employee_dict(employee: Employee) -> Dict[str, Any]:
    return {
        "emp_id": employee.id,
        "emp_name": employee.name,
        "dept_id": employee.department_id,
        "dept_name": employee.department.name,
        "date_joined": employee.date_joined,
    }


def list_employees(db: Session) -> List[Dict[str, Any]]:
    employees = db.query(Employee).join(Department).order_by(Employee.id).all()
    return [_employee_dict(e) for e in employees]


def add_employee(db: Session, data: EmployeeCreate) -> Dict[str, Any]:
    department = db.get(Department, data.dept_id)
    if not department:
        raise NotFoundError("Department not found")

    employee = Employee(name=data.emp_name.strip(), department=department, date_joined=data.date_joined)
    db.add(employee)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(employee)
    logger.info(f"Employee {employee.id} created in department {department.id}")
    return _employee_dict(employee)


def employee_summaries(db: Session) -> List[Dict[str, Any]]:
    """Evaluated employees with their skills and average/high normalized scores (2 decimals)."""
    normalized = normalized_score_expr()
    rows = (
        db.query(
            Employee.id.label("emp_id"),
            Employee.name.label("emp_name"),
            Department.name.label("dept_name"),
            func.avg(normalized).label("average_score"),
            func.max(normalized).label("high_score"),
        )
        .join(Department, Employee.department_id == Department.id)
        .join(SkillEvaluation, SkillEvaluation.employee_id == Employee.id)
        .group_by(Employee.id, Employee.name, Department.name)
        .order_by(Employee.name, Employee.id)
        .all()
    )
    if not rows:
        raise NotFoundError("No results found")

    skills_by_employee = defaultdict(list)
    skill_rows = (
        db.query(SkillEvaluation.employee_id, Skill.name)
        .join(Skill, SkillEvaluation.skill_id == Skill.id)
        .distinct()
        .order_by(SkillEvaluation.employee_id, Skill.name)
        .all()
    )
    for employee_id, skill_name in skill_rows:
        skills_by_employee[employee_id].append(skill_name)

    return [
        {
            "emp_id": row.emp_id,
            "emp_name": row.emp_name,
            "dept_name": row.dept_name,
            "skills": skills_by_employee[row.emp_id],
            "average_score": round_or_none(row.average_score, 2),
            "high_score": round_or_none(row.high_score, 2),
        }
        for row in rows
    ]


def search_employee_evaluations(
    db: Session, emp_name: str, limit: int, offset: int
) -> Tuple[List[Dict[str, Any]], int]:
    query = (
        db.query(
            Employee.id.label("emp_id"),
            Employee.name.label("emp_name"),
            Department.name.label("dept_name"),
            Skill.name.label("skill_name"),
            SkillEvaluation.score,
            SkillEvaluation.max_score,
            SkillEvaluation.year,
            SkillEvaluation.quarter,
            SkillEvaluation.skill_level,
        )
        .select_from(Employee)
        .join(Department, Employee.department_id == Department.id)
        .join(SkillEvaluation, SkillEvaluation.employee_id == Employee.id)
        .join(Skill, SkillEvaluation.skill_id == Skill.id)
        .filter(Employee.name.ilike(f"%{_escape_like(emp_name or '')}%", escape="\\"))
    )
    total = query.count()
    rows = query.order_by(Skill.name, SkillEvaluation.id).offset(offset).limit(limit).all()
    return [row._asdict() for row in rows], total


def recent_assessments(db: Session, count: int = RECENT_ASSESSMENT_COUNT) -> List[Dict[str, Any]]:
    """Latest evaluation of each of the most recently evaluated employees, newest first."""
    latest = (
        db.query(func.max(SkillEvaluation.id))
        .group_by(SkillEvaluation.employee_id)
        .order_by(func.max(SkillEvaluation.id).desc())
        .limit(count)
        .all()
    )
    latest_ids = [row[0] for row in latest]
    if not latest_ids:
        return []
    rows = (
        db.query(
            Employee.id.label("emp_id"),
            Employee.name.label("emp_name"),
            Skill.name.label("skill_name"),
            SkillEvaluation.score,
        )
        .select_from(SkillEvaluation)
        .join(Employee, SkillEvaluation.employee_id == Employee.id)
        .join(Skill, SkillEvaluation.skill_id == Skill.id)
        .filter(SkillEvaluation.id.in_(latest_ids))
        .order_by(SkillEvaluation.id.desc())
        .all()
    )
    return [row._asdict() for row in rows]


def scores_by_skill(db: Session, skill_id: int, year: Optional[int] = None) -> List[Dict[str, Any]]:
    """Quarterly scores of every employee evaluated on one skill, optionally limited to a year."""
    if not db.get(Skill, skill_id):
        raise NotFoundError("Skill not found")

    query = (
        db.query(
            Employee.id.label("emp_id"),
            Employee.name.label("emp_name"),
            SkillEvaluation.year,
            SkillEvaluation.quarter,
            SkillEvaluation.score,
            SkillEvaluation.max_score,
        )
        .join(SkillEvaluation, SkillEvaluation.employee_id == Employee.id)
        .filter(SkillEvaluation.skill_id == skill_id)
    )
    if year is not None:
        query = query.filter(SkillEvaluation.year == year)
    rows = query.order_by(Employee.name, SkillEvaluation.year, SkillEvaluation.quarter, SkillEvaluation.id).all()
    return [
        {
            "emp_id": row.emp_id,
            "emp_name": row.emp_name,
            "year": row.year,
            "quarter": row.quarter,
            "score": row.score,
            "normalized_score": normalize(row.score, row.max_score, 2),
        }
        for row in rows
    ]
