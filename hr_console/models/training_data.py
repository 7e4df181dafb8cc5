"""
Monthly training counters model
"""
from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from hr_console.database import Base


class TrainingData(Base):
    """Planned / done / pending training counts for one month"""
    __tablename__ = "training_data"
    __table_args__ = (UniqueConstraint("month", "year", name="uq_training_data_month_year"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    month = Column(String(3), nullable=False)  # "Jan" ... "Dec"
    month_index = Column(Integer, nullable=False, index=True)  # 1 ... 12, used for ordering
    year = Column(Integer, nullable=False, index=True)
    planned = Column(Integer, nullable=False, default=0)
    done = Column(Integer, nullable=False, default=0)
    pending = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
