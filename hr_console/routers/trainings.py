"""
Trainings router
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from hr_console.database import get_db
from hr_console.schemas.training import TrainingCreate, TrainingResponse
from hr_console.services.auth import AuthUser
from hr_console.services.session import SessionContext, get_current_user, get_session_context
from hr_console.services.trainings import training_service

router = APIRouter(prefix="/trainings", tags=["Trainings"])


@router.get("", response_model=List[TrainingResponse])
async def list_trainings(
    training_date: Optional[date] = None,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List trainings, most recent first, or the trainings of one day
    """
    if training_date:
        trainings = training_service.get_for_date(db, training_date)
    else:
        trainings = training_service.get_all(db)
    return [TrainingResponse.model_validate(t) for t in trainings]


@router.post("", response_model=TrainingResponse, status_code=status.HTTP_201_CREATED)
async def create_training(
    training_data: TrainingCreate,
    current_user: AuthUser = Depends(get_current_user),
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db)
):
    """
    Schedule a training together with its participants

    The organizer defaults to the signed-in user's name.
    """
    fields = training_data.model_dump(exclude={"participants"})
    fields["training_type"] = training_data.training_type.value
    if not fields.get("organizer"):
        fields["organizer"] = context.username
    training = training_service.create(db, fields, training_data.participants)
    return TrainingResponse.model_validate(training)


@router.get("/{training_id}/participants", response_model=List[str])
async def list_participants(
    training_id: int,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Participant names of a training
    """
    training_service.get(db, training_id)
    return training_service.get_participants(db, training_id)
