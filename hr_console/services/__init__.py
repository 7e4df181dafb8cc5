"""
Service layer
"""
from hr_console.services.errors import (
    StoreError, RecordNotFoundError, DuplicateEmployeeCodeError,
    MonthNotPlannedError, InvalidValueError
)
from hr_console.services.auth import (
    AuthClient, AuthError, AuthEvent, AuthResult, AuthSession,
    verify_password, get_password_hash, create_access_token, decode_token
)
from hr_console.services.session import SessionContext, get_session_context, get_current_user
from hr_console.services.departments import department_service
from hr_console.services.employees import employee_service
from hr_console.services.skills import skill_service
from hr_console.services.trainings import training_service
from hr_console.services.training_plans import training_plan_service
from hr_console.services.training_data import training_data_service
from hr_console.services.statistics import statistics_service

__all__ = [
    # Errors
    "StoreError", "RecordNotFoundError", "DuplicateEmployeeCodeError",
    "MonthNotPlannedError", "InvalidValueError",
    # Auth
    "AuthClient", "AuthError", "AuthEvent", "AuthResult", "AuthSession",
    "verify_password", "get_password_hash", "create_access_token", "decode_token",
    "SessionContext", "get_session_context", "get_current_user",
    # Services
    "department_service",
    "employee_service",
    "skill_service",
    "training_service",
    "training_plan_service",
    "training_data_service",
    "statistics_service",
]
