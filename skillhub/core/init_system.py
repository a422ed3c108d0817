import logging
from datetime import date
from sqlalchemy.orm import Session

from skillhub.core.config import settings
from skillhub.models.department import Department
from skillhub.models.employee import Employee
from skillhub.models.skill import DEFAULT_MAX_SCORE, Skill, SkillCategory
from skillhub.models.skill_evaluation import Quarter, SkillEvaluation
from skillhub.models.user import User, UserRole
from skillhub.services import auth as auth_service
from skillhub.services.scoring import classify_score

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ["Technical", "Soft Skills", "Leadership"]


def init_system_data(db: Session):
    """
    Idempotent startup bootstrap:
    - default skill categories when none exist
    - the bootstrap admin account when BOOTSTRAP_ADMIN_USERNAME/PASSWORD are set
    """
    try:
        if db.query(SkillCategory).count() == 0:
            logger.info("Seeding default skill categories...")
            for name in DEFAULT_CATEGORIES:
                db.add(SkillCategory(name=name))

        username = settings.bootstrap_admin_username
        password = settings.bootstrap_admin_password
        if username and password:
            if not db.query(User).filter(User.username == username).first():
                db.add(User(
                    username=username,
                    email=f"{username}@localhost",
                    hashed_password=auth_service.get_password_hash(password),
                    role=UserRole.ADMIN,
                ))
                logger.info(f"✓ Bootstrap admin '{username}' created")

        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"System initialization failed: {e}", exc_info=True)
        raise


# (department, employee, joined, [(skill, category, [(year, quarter, score), ...]), ...])
DEMO_DATA = [
    ("Engineering", "Asha Verma", date(2023, 1, 9), [
        ("Python", "Technical", [(2023, Quarter.Q1, 5), (2023, Quarter.Q3, 7), (2024, Quarter.Q1, 8)]),
        ("Communication", "Soft Skills", [(2023, Quarter.Q2, 6), (2024, Quarter.Q1, 7)]),
    ]),
    ("Engineering", "Daniel Okafor", date(2022, 7, 4), [
        ("Python", "Technical", [(2023, Quarter.Q1, 9), (2024, Quarter.Q1, 10)]),
        ("SQL", "Technical", [(2023, Quarter.Q4, 4)]),
    ]),
    ("Sales", "Maria Lopez", date(2023, 4, 17), [
        ("Communication", "Soft Skills", [(2023, Quarter.Q2, 8), (2023, Quarter.Q4, 9)]),
        ("Negotiation", "Soft Skills", [(2024, Quarter.Q1, 3)]),
    ]),
    ("People", "Kenji Sato", date(2021, 11, 1), [
        ("Team Leadership", "Leadership", [(2023, Quarter.Q3, 7), (2024, Quarter.Q2, 8)]),
    ]),
]


def seed_demo_data(db: Session) -> int:
    """
    Load a small demo organisation. Existing departments, skills and employees
    with the same names are reused. Returns the number of evaluations created.
    """
    created = 0
    try:
        for dept_name, emp_name, joined, skills in DEMO_DATA:
            department = db.query(Department).filter(Department.name == dept_name).first()
            if not department:
                department = Department(name=dept_name, description=f"{dept_name} department")
                db.add(department)
                db.flush()

            employee = db.query(Employee).filter(Employee.name == emp_name).first()
            if not employee:
                employee = Employee(name=emp_name, department=department, date_joined=joined)
                db.add(employee)
                db.flush()

            for skill_name, category_name, evaluations in skills:
                category = db.query(SkillCategory).filter(SkillCategory.name == category_name).first()
                if not category:
                    category = SkillCategory(name=category_name)
                    db.add(category)
                    db.flush()
                skill = db.query(Skill).filter(Skill.name == skill_name).first()
                if not skill:
                    skill = Skill(name=skill_name, category=category, max_score=DEFAULT_MAX_SCORE)
                    db.add(skill)
                    db.flush()

                for year, quarter, score in evaluations:
                    db.add(SkillEvaluation(
                        employee_id=employee.id,
                        skill_id=skill.id,
                        score=score,
                        max_score=skill.max_score,
                        quarter=quarter,
                        year=year,
                        skill_level=classify_score(score, skill.max_score),
                    ))
                    created += 1
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Demo data loaded ({created} evaluations)")
    return created
