"""
Department and employee schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class DepartmentBase(BaseModel):
    """Base department schema"""
    name: str = Field(..., max_length=100)


class DepartmentCreate(DepartmentBase):
    """Schema for creating department"""
    pass


class DepartmentUpdate(BaseModel):
    """Schema for updating department"""
    name: Optional[str] = Field(None, max_length=100)
    employee_count: Optional[int] = Field(None, ge=0)


class DepartmentResponse(DepartmentBase):
    """Schema for department response"""
    id: int
    employee_count: int
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class EmployeeBase(BaseModel):
    """Base employee schema"""
    name: str = Field(..., min_length=1, max_length=100)
    employee_code: str = Field(..., min_length=1, max_length=50)
    position: str = Field(..., min_length=1, max_length=100)


class EmployeeCreate(EmployeeBase):
    """Schema for creating employee"""
    department_id: int


class EmployeeUpdate(BaseModel):
    """Schema for updating employee"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    employee_code: Optional[str] = Field(None, min_length=1, max_length=50)
    position: Optional[str] = Field(None, min_length=1, max_length=100)
    department_id: Optional[int] = None


class EmployeeResponse(EmployeeBase):
    """Schema for employee response"""
    id: int
    department_id: int
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    # Relationships
    department: Optional[DepartmentResponse] = None

    class Config:
        from_attributes = True
