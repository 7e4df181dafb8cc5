"""
Training plans router
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from hr_console.database import get_db
from hr_console.models.training_plan import TrainingPlan
from hr_console.schemas.training import (
    MonthToggle, TrainingPlanCreate, TrainingPlanUpdate, TrainingPlanResponse
)
from hr_console.services.auth import AuthUser
from hr_console.services.session import get_current_user
from hr_console.services.training_plans import training_plan_service

router = APIRouter(prefix="/training-plans", tags=["Training Plans"])


def _to_response(plan: TrainingPlan) -> TrainingPlanResponse:
    plan_data = TrainingPlanResponse.model_validate(plan)
    if plan.department:
        plan_data.department_name = plan.department.name
    return plan_data


@router.get("", response_model=List[TrainingPlanResponse])
async def list_training_plans(
    department_id: Optional[int] = None,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List training plans, optionally for one department
    """
    return [_to_response(plan) for plan in training_plan_service.get_all(db, department_id)]


@router.post("", response_model=TrainingPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_training_plan(
    plan_data: TrainingPlanCreate,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create training plan

    Every actual month must also be planned.
    """
    plan = training_plan_service.create(db, plan_data.model_dump())
    return _to_response(plan)


@router.put("/{plan_id}", response_model=TrainingPlanResponse)
async def update_training_plan(
    plan_id: int,
    plan_data: TrainingPlanUpdate,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update training plan
    """
    plan = training_plan_service.update(db, plan_id, plan_data.model_dump(exclude_unset=True, exclude_none=True))
    return _to_response(plan)


@router.post("/{plan_id}/toggle", response_model=TrainingPlanResponse)
async def toggle_training_plan_month(
    plan_id: int,
    toggle: MonthToggle,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Toggle one planned or actual month of a plan
    """
    plan = training_plan_service.toggle_month(db, plan_id, toggle.month, toggle.kind)
    return _to_response(plan)
