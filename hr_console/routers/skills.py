"""
Skills router
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from hr_console.database import get_db
from hr_console.services.auth import AuthUser
from hr_console.services.session import get_current_user
from hr_console.services.skills import skill_service

router = APIRouter(prefix="/skills", tags=["Skills"])


@router.delete("/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_skill(
    skill_id: int,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Remove a skill from its department catalogue with every level recorded for it
    """
    skill_service.delete(db, skill_id)
