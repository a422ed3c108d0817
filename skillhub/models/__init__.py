# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import user, department, employee, skill, skill_evaluation

# Explicit class exports for cleaner imports
from .user import User, UserRole
from .department import Department
from .employee import Employee
from .skill import Skill, SkillCategory
from .skill_evaluation import SkillEvaluation, SkillLevel, Quarter

__all__ = [
    "User",
    "UserRole",
    "Department",
    "Employee",
    "Skill",
    "SkillCategory",
    "SkillEvaluation",
    "SkillLevel",
    "Quarter",
]
