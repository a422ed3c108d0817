from sqlalchemy import Column, Integer, Float, Text, Enum, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from skillhub.database import Base


class Quarter(str, enum.Enum):
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"


class SkillLevel(str, enum.Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class SkillEvaluation(Base):
    __tablename__ = "skill_evaluations"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, index=True)

    score = Column(Float, nullable=False)
    # Copy of Skill.max_score at the time the score was recorded (or last rescaled)
    max_score = Column(Float, nullable=False)

    quarter = Column(Enum(Quarter, name="quarter"), nullable=False)
    year = Column(Integer, nullable=False, index=True)
    comment = Column(Text, nullable=True)
    skill_level = Column(
        Enum(SkillLevel, name="skill_level", values_callable=lambda e: [m.value for m in e]),
        nullable=True,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee", back_populates="evaluations")
    skill = relationship("Skill", back_populates="evaluations")

    def __repr__(self):
        return f"<SkillEvaluation {self.id}: emp={self.employee_id} skill={self.skill_id} {self.year}{self.quarter.value}>"
