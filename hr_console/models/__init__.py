"""
Database models
"""
from hr_console.models.user import User
from hr_console.models.department import Department
from hr_console.models.employee import Employee
from hr_console.models.skill import Skill, EmployeeSkill, SkillLevel, SKILL_LEVELS
from hr_console.models.training import Training, TrainingParticipant, TrainingType, TRAINING_TYPES
from hr_console.models.training_plan import TrainingPlan
from hr_console.models.training_data import TrainingData

__all__ = [
    "User",
    "Department",
    "Employee",
    "Skill",
    "EmployeeSkill",
    "SkillLevel",
    "SKILL_LEVELS",
    "Training",
    "TrainingParticipant",
    "TrainingType",
    "TRAINING_TYPES",
    "TrainingPlan",
    "TrainingData",
]
