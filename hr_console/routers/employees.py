"""
Employees router
"""
from typing import Dict
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from hr_console.database import get_db
from hr_console.schemas.department import EmployeeCreate, EmployeeUpdate, EmployeeResponse
from hr_console.schemas.skill import EmployeeSkillsUpdate
from hr_console.services.auth import AuthUser
from hr_console.services.employees import employee_service
from hr_console.services.session import get_current_user
from hr_console.services.skills import skill_service

router = APIRouter(prefix="/employees", tags=["Employees"])


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    employee_data: EmployeeCreate,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create employee and increment the department's employee count
    """
    employee = employee_service.create(db, employee_data.model_dump())
    return EmployeeResponse.model_validate(employee)


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: int,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get employee by ID
    """
    return EmployeeResponse.model_validate(employee_service.get(db, employee_id))


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    employee_data: EmployeeUpdate,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update employee
    """
    update_data = employee_data.model_dump(exclude_unset=True)
    employee = employee_service.update(db, employee_id, update_data)
    return EmployeeResponse.model_validate(employee)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: int,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete employee and decrement the department's employee count
    """
    employee_service.delete(db, employee_id)


@router.get("/{employee_id}/skills", response_model=Dict[str, str])
async def get_employee_skills(
    employee_id: int,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Recorded skill levels of an employee, keyed by skill name
    """
    employee_service.get(db, employee_id)
    return skill_service.get_employee_skills(db, employee_id)


@router.put("/{employee_id}/skills", response_model=Dict[str, str])
async def replace_employee_skills(
    employee_id: int,
    skills_data: EmployeeSkillsUpdate,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Replace the complete skill set of an employee

    Skills missing from the body are removed; names outside the employee's
    department catalogue are ignored.
    """
    skill_service.update_employee_skills(db, employee_id, skills_data.skills)
    return skill_service.get_employee_skills(db, employee_id)
