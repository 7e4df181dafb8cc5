"""
Pydantic schemas
"""
from hr_console.schemas.user import (
    Credentials, PasswordResetRequest, PasswordResetConfirm,
    UserResponse, Token, TokenData
)
from hr_console.schemas.department import (
    DepartmentBase, DepartmentCreate, DepartmentUpdate, DepartmentResponse,
    EmployeeBase, EmployeeCreate, EmployeeUpdate, EmployeeResponse
)
from hr_console.schemas.skill import (
    SkillCreate, SkillResponse, EmployeeSkillsUpdate, SkillMatrixRow, SkillMatrixResponse
)
from hr_console.schemas.training import (
    TrainingBase, TrainingCreate, TrainingResponse,
    TrainingPlanCreate, TrainingPlanUpdate, MonthToggle, TrainingPlanResponse,
    TrainingCounts, TrainingMonth, TrainingDataResponse
)

__all__ = [
    # Auth
    "Credentials", "PasswordResetRequest", "PasswordResetConfirm",
    "UserResponse", "Token", "TokenData",
    # Department / Employee
    "DepartmentBase", "DepartmentCreate", "DepartmentUpdate", "DepartmentResponse",
    "EmployeeBase", "EmployeeCreate", "EmployeeUpdate", "EmployeeResponse",
    # Skill
    "SkillCreate", "SkillResponse", "EmployeeSkillsUpdate", "SkillMatrixRow", "SkillMatrixResponse",
    # Training
    "TrainingBase", "TrainingCreate", "TrainingResponse",
    "TrainingPlanCreate", "TrainingPlanUpdate", "MonthToggle", "TrainingPlanResponse",
    "TrainingCounts", "TrainingMonth", "TrainingDataResponse",
]
