"""
Statistics router
"""
from datetime import date
from typing import Dict, Any, List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hr_console.database import get_db
from hr_console.services.auth import AuthUser
from hr_console.services.session import get_current_user
from hr_console.services.statistics import statistics_service

router = APIRouter(prefix="/statistics", tags=["Statistics"])


@router.get("/summary", response_model=Dict[str, Any])
async def get_summary_statistics(
    today: Optional[date] = None,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get the dashboard stat cards and this week's trainings
    """
    today = today or date.today()
    summary = statistics_service.get_summary(db, today)
    summary["weekly_trainings"] = statistics_service.get_weekly_trainings(db, today)
    return summary


@router.get("/departments", response_model=List[Dict[str, Any]])
async def get_department_statistics(
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get statistics by department

    Each entry holds the stored employee count next to the number of
    employee rows.
    """
    return statistics_service.get_department_overview(db)
