"""
Department model
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hr_console.database import Base


class Department(Base):
    """Department model"""
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    employee_count = Column(Integer, nullable=False, default=0)  # denormalized, kept by the counter procedures
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    employees = relationship(
        "Employee", back_populates="department", cascade="all, delete-orphan", passive_deletes=True
    )
    skills = relationship(
        "Skill", back_populates="department", cascade="all, delete-orphan", passive_deletes=True,
        order_by="Skill.display_order"
    )
    training_plans = relationship(
        "TrainingPlan", back_populates="department", cascade="all, delete-orphan", passive_deletes=True
    )
