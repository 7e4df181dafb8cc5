"""
Skill and skill matrix schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime
from hr_console.models.skill import SkillLevel


class SkillCreate(BaseModel):
    """Schema for adding a skill to a department catalogue"""
    name: str = Field(..., min_length=1, max_length=200)
    display_order: Optional[int] = Field(None, ge=0)


class SkillResponse(BaseModel):
    """Schema for skill response"""
    id: int
    name: str
    department_id: int
    display_order: int
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class EmployeeSkillsUpdate(BaseModel):
    """Complete skill set of one employee; omitted skills are removed"""
    skills: Dict[str, SkillLevel]


class SkillMatrixRow(BaseModel):
    """One employee row of the skill matrix"""
    employee_id: int
    name: str
    employee_code: str
    position: str
    levels: Dict[str, SkillLevel]
    summary: str


class SkillMatrixResponse(BaseModel):
    """Skill matrix of a department after filtering"""
    department_id: int
    department_name: str
    skills: List[str]
    rows: List[SkillMatrixRow]
    active_filters: int
