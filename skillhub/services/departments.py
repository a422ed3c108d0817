import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import distinct, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from skillhub.core.exceptions import ConflictError, NotFoundError
from skillhub.models.department import Department
from skillhub.models.employee import Employee
from skillhub.models.skill_evaluation import SkillEvaluation
from skillhub.services.scoring import round_or_none
from skillhub.services.skills import normalized_score_expr

logger = logging.getLogger(__name__)


def list_departments(db: Session) -> List[Dict[str, Any]]:
    rows = db.query(Department.id.label("dept_id"), Department.name.label("dept_name")).order_by(Department.name).all()
    return [row._asdict() for row in rows]


def department_details(db: Session) -> List[Dict[str, Any]]:
    """Every department with its headcount and average normalized score (None when unevaluated)."""
    rows = (
        db.query(
            Department.id,
            Department.name,
            Department.description,
            func.count(distinct(Employee.id)).label("emp_count"),
            func.avg(normalized_score_expr()).label("average_score"),
        )
        .outerjoin(Employee, Employee.department_id == Department.id)
        .outerjoin(SkillEvaluation, SkillEvaluation.employee_id == Employee.id)
        .group_by(Department.id, Department.name, Department.description)
        .order_by(Department.id)
        .all()
    )
    if not rows:
        raise NotFoundError("No result found")
    return [
        {
            "dept_id": row.id,
            "dept_name": row.name,
            "dept_description": row.description,
            "emp_count": row.emp_count,
            "average_score": round_or_none(row.average_score, 1),
        }
        for row in rows
    ]


def add_department(db: Session, name: str, description: Optional[str] = None) -> Department:
    name = name.strip()
    if db.query(Department).filter(func.lower(Department.name) == name.lower()).first():
        raise ConflictError("Department already exists")

    department = Department(name=name, description=description)
    db.add(department)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Department already exists")
    except Exception:
        db.rollback()
        raise
    db.refresh(department)
    logger.info(f"Department {department.id} '{name}' created")
    return department
