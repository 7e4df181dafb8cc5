"""
Training data router
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hr_console.database import get_db
from hr_console.schemas.training import TrainingCounts, TrainingMonth, TrainingDataResponse
from hr_console.services.auth import AuthUser
from hr_console.services.session import get_current_user
from hr_console.services.training_data import training_data_service

router = APIRouter(prefix="/training-data", tags=["Training Data"])


@router.get("/{year}", response_model=List[TrainingDataResponse])
async def get_training_data(
    year: int,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Monthly counters of a year in calendar order
    """
    rows = training_data_service.get_by_year(db, year)
    return [TrainingDataResponse.model_validate(row) for row in rows]


@router.put("/{year}", response_model=List[TrainingDataResponse])
async def replace_training_data(
    year: int,
    months: List[TrainingMonth],
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Save the chart editor: upsert every given month of the year
    """
    rows = training_data_service.update_year(db, year, [m.model_dump() for m in months])
    return [TrainingDataResponse.model_validate(row) for row in rows]


@router.put("/{year}/{month}", response_model=TrainingDataResponse)
async def update_training_month(
    year: int,
    month: str,
    counts: TrainingCounts,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Upsert the counters of one month
    """
    row = training_data_service.update_month(db, month, year, counts.model_dump(exclude_none=True))
    return TrainingDataResponse.model_validate(row)
