"""
Employee model
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hr_console.database import Base


class Employee(Base):
    """Employee model"""
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False, index=True)
    employee_code = Column(String(50), unique=True, nullable=False, index=True)
    position = Column(String(100), nullable=False, default="")
    department_id = Column(
        Integer, ForeignKey("departments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    department = relationship("Department", back_populates="employees")
    skill_levels = relationship(
        "EmployeeSkill", back_populates="employee", cascade="all, delete-orphan", passive_deletes=True
    )
