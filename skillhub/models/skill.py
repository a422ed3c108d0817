from sqlalchemy import Column, Integer, String, Float, ForeignKey
from sqlalchemy.orm import relationship
from skillhub.database import Base

DEFAULT_MAX_SCORE = 10.0
UNCATEGORIZED = "Uncategorized"


class SkillCategory(Base):
    __tablename__ = "skill_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)

    skills = relationship("Skill", back_populates="category")


class Skill(Base):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("skill_categories.id"), nullable=True)
    # Changed only through the rescale operation, which keeps evaluations in sync
    max_score = Column(Float, nullable=False, default=DEFAULT_MAX_SCORE)

    category = relationship("SkillCategory", back_populates="skills")
    evaluations = relationship("SkillEvaluation", back_populates="skill", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Skill {self.id}: {self.name} (max {self.max_score})>"
