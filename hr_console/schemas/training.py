"""
Training, training plan and training data schemas
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date, datetime
from hr_console.models.training import TrainingType


class TrainingBase(BaseModel):
    """Base training schema"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    training_date: date
    training_time: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    duration: int = Field(default=60, gt=0)
    location: str = ""
    organizer: str = ""
    training_type: TrainingType = TrainingType.TEAM_TRAINING


class TrainingCreate(TrainingBase):
    """Schema for scheduling a training with its participants"""
    participants: List[str] = []

    @field_validator("participants")
    @classmethod
    def strip_participants(cls, value: List[str]) -> List[str]:
        return [name.strip() for name in value if name and name.strip()]


class TrainingResponse(TrainingBase):
    """Schema for training response"""
    id: int
    participants: List[str] = []
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True

    @field_validator("participants", mode="before")
    @classmethod
    def participant_names(cls, value):
        return [getattr(p, "participant_name", p) for p in value or []]


class TrainingPlanCreate(BaseModel):
    """Schema for creating training plan"""
    department_id: int
    training_topic: str = Field(..., min_length=1, max_length=200)
    planned_months: List[str] = []
    actual_months: List[str] = []


class TrainingPlanUpdate(BaseModel):
    """Schema for updating training plan"""
    department_id: Optional[int] = None
    training_topic: Optional[str] = Field(None, min_length=1, max_length=200)
    planned_months: Optional[List[str]] = None
    actual_months: Optional[List[str]] = None


class MonthToggle(BaseModel):
    """Schema for toggling one grid cell"""
    month: str
    kind: str = Field(..., pattern="^(planned|actual)$")


class TrainingPlanResponse(BaseModel):
    """Schema for training plan response"""
    id: int
    department_id: int
    training_topic: str
    planned_months: List[str]
    actual_months: List[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    department_name: Optional[str] = None

    class Config:
        from_attributes = True


class TrainingCounts(BaseModel):
    """Partial counters for one month"""
    planned: Optional[int] = Field(None, ge=0)
    done: Optional[int] = Field(None, ge=0)
    pending: Optional[int] = Field(None, ge=0)


class TrainingMonth(BaseModel):
    """Counters for one month of the chart"""
    month: str
    planned: int = Field(default=0, ge=0)
    done: int = Field(default=0, ge=0)
    pending: int = Field(default=0, ge=0)


class TrainingDataResponse(TrainingMonth):
    """Schema for training data response"""
    id: int
    year: int
    month_index: int
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
