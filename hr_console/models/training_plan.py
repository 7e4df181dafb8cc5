"""
Annual training plan model
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hr_console.database import Base


class TrainingPlan(Base):
    """Training topic planned for a department across calendar months"""
    __tablename__ = "training_plans"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    department_id = Column(
        Integer, ForeignKey("departments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    training_topic = Column(String(200), nullable=False)
    planned_months = Column(JSON, nullable=False, default=list)  # ["Apr-25", "Oct-25"]
    actual_months = Column(JSON, nullable=False, default=list)  # subset of planned_months
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    department = relationship("Department", back_populates="training_plans")
