"""
Training session models
"""
import enum
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hr_console.database import Base


class TrainingType(str, enum.Enum):
    """Kinds of scheduled sessions"""
    TEAM_TRAINING = "Team Training"
    ONE_ON_ONE = "One-on-One"
    ALL_HANDS = "All Hands"
    INTERVIEW = "Interview"
    TRAINING = "Training"


TRAINING_TYPES = [t.value for t in TrainingType]


class Training(Base):
    """Scheduled training session"""
    __tablename__ = "trainings"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, default="")
    training_date = Column(Date, nullable=False, index=True)
    training_time = Column(String(5), nullable=False)  # HH:MM
    duration = Column(Integer, nullable=False, default=60)  # minutes
    location = Column(String(200), default="")
    organizer = Column(String(100), default="")
    training_type = Column(String(20), nullable=False, default=TrainingType.TEAM_TRAINING.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    participants = relationship(
        "TrainingParticipant", back_populates="training", cascade="all, delete-orphan",
        passive_deletes=True, order_by="TrainingParticipant.id"
    )


class TrainingParticipant(Base):
    """Participant of a training, identified by name"""
    __tablename__ = "training_participants"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    training_id = Column(
        Integer, ForeignKey("trainings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    participant_name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    training = relationship("Training", back_populates="participants")
