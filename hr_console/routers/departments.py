"""
Departments management router
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from hr_console.database import get_db
from hr_console.models.skill import SkillLevel
from hr_console.schemas.department import (
    DepartmentCreate, DepartmentUpdate, DepartmentResponse, EmployeeResponse
)
from hr_console.schemas.skill import SkillCreate, SkillResponse, SkillMatrixResponse, SkillMatrixRow
from hr_console.services.auth import AuthUser
from hr_console.services.departments import department_service
from hr_console.services.employees import employee_service
from hr_console.services.session import get_current_user
from hr_console.services.skill_matrix import SkillMatrixFilter, apply_filters, build_matrix
from hr_console.services.skills import skill_service

router = APIRouter(prefix="/departments", tags=["Departments"])


@router.get("", response_model=List[DepartmentResponse])
async def list_departments(
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List all departments
    """
    departments = department_service.get_all(db)
    return [DepartmentResponse.model_validate(dept) for dept in departments]


@router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: int,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get department by ID
    """
    return DepartmentResponse.model_validate(department_service.get(db, department_id))


@router.post("", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
async def create_department(
    dept_data: DepartmentCreate,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create new department with an employee count of zero
    """
    new_dept = department_service.create(db, dept_data.name)
    return DepartmentResponse.model_validate(new_dept)


@router.put("/{department_id}", response_model=DepartmentResponse)
async def update_department(
    department_id: int,
    dept_data: DepartmentUpdate,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update department
    """
    update_data = dept_data.model_dump(exclude_unset=True)
    dept = department_service.update(db, department_id, update_data)
    return DepartmentResponse.model_validate(dept)


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_department(
    department_id: int,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete department with its employees, skills and training plans
    """
    department_service.delete(db, department_id)


@router.get("/{department_id}/employees", response_model=List[EmployeeResponse])
async def list_department_employees(
    department_id: int,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List employees of a department, ordered by name
    """
    employees = employee_service.get_by_department(db, department_id)
    return [EmployeeResponse.model_validate(emp) for emp in employees]


@router.get("/{department_id}/skills", response_model=List[SkillResponse])
async def list_department_skills(
    department_id: int,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Skill catalogue of a department
    """
    skills = skill_service.get_by_department(db, department_id)
    return [SkillResponse.model_validate(skill) for skill in skills]


@router.post("/{department_id}/skills", response_model=SkillResponse, status_code=status.HTTP_201_CREATED)
async def create_department_skill(
    department_id: int,
    skill_data: SkillCreate,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Add a skill to the catalogue of a department
    """
    department_service.get(db, department_id)
    skill = skill_service.create(db, department_id, skill_data.name, skill_data.display_order)
    return SkillResponse.model_validate(skill)


@router.get("/{department_id}/skill-matrix", response_model=SkillMatrixResponse)
async def get_skill_matrix(
    department_id: int,
    employee_name: str = "",
    employee_code: str = "",
    skill: Optional[List[str]] = Query(None),
    level: Optional[List[SkillLevel]] = Query(None),
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Skill matrix of a department

    Query parameters filter the rows (name, code, any of the given levels)
    and the columns (the given skills).
    """
    filters = SkillMatrixFilter(
        employee_name=employee_name,
        employee_code=employee_code,
        skill_activities=skill or [],
        skill_levels=level or [],
    )
    matrix = apply_filters(build_matrix(db, department_id), filters)
    return SkillMatrixResponse(
        department_id=matrix.department_id,
        department_name=matrix.department_name,
        skills=matrix.skills,
        rows=[
            SkillMatrixRow(
                employee_id=row.employee_id,
                name=row.name,
                employee_code=row.employee_code,
                position=row.position,
                levels=row.levels,
                summary=row.summary,
            )
            for row in matrix.rows
        ],
        active_filters=filters.active_count,
    )
