"""
Skill catalogue and employee skill level models
"""
import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hr_console.database import Base


class SkillLevel(str, enum.Enum):
    """Proficiency levels of the skill matrix"""
    L1 = "L1"  # basic, works under continuous supervision
    L2 = "L2"  # independent once instructed, no feedback
    L3 = "L3"  # independent, suggests improvements
    L4 = "L4"  # expert, can train others
    NA = "NA"  # not applicable to the role


SKILL_LEVELS = [level.value for level in SkillLevel]


class Skill(Base):
    """Department-scoped skill"""
    __tablename__ = "skills"
    __table_args__ = (UniqueConstraint("department_id", "name", name="uq_skills_department_name"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    department_id = Column(
        Integer, ForeignKey("departments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    department = relationship("Department", back_populates="skills")
    employee_levels = relationship(
        "EmployeeSkill", back_populates="skill", cascade="all, delete-orphan", passive_deletes=True
    )


class EmployeeSkill(Base):
    """Level held by one employee for one skill"""
    __tablename__ = "employee_skills"
    __table_args__ = (UniqueConstraint("employee_id", "skill_id", name="uq_employee_skills_pair"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    employee_id = Column(
        Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_level = Column(String(2), nullable=False, default=SkillLevel.NA.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    employee = relationship("Employee", back_populates="skill_levels")
    skill = relationship("Skill", back_populates="employee_levels")
