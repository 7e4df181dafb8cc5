"""
Skill Matrix Service

Builds the per-department matrix of employees against the department's skill
catalogue and applies the screen's filters in memory.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Mapping
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from hr_console.models.department import Department
from hr_console.models.employee import Employee
from hr_console.models.skill import Skill, EmployeeSkill, SkillLevel, SKILL_LEVELS
from hr_console.services.departments import department_service
from hr_console.services.errors import fail

SKILL_LEVEL_DEFINITIONS = [
    {
        "level": "L1",
        "title": "Level 1",
        "description": "Have basic or partial knowledge/skills and can work only under continuously supervision/instruction.",
        "squares": 1,
    },
    {
        "level": "L2",
        "title": "Level 2",
        "description": "Have significant knowledge/skills and can work independently once given instructions but can't give any feedback or suggestion.",
        "squares": 2,
    },
    {
        "level": "L3",
        "title": "Level 3",
        "description": "Have ample amount of knowledge/skills and can work independently at level where he can brainstorm to give feedback/suggestions.",
        "squares": 3,
    },
    {
        "level": "L4",
        "title": "Level 4",
        "description": "Have prominent knowledge/skills and work smoothly as well as have ability to train others on the same.",
        "squares": 4,
    },
]

LEVEL_SQUARES = {"L1": 1, "L2": 2, "L3": 3, "L4": 4, "NA": 0}


class SkillMatrixFilter(BaseModel):
    """Filter panel criteria, each applied independently"""
    employee_name: str = ""
    employee_code: str = ""
    skill_activities: List[str] = []
    skill_levels: List[SkillLevel] = []

    @property
    def active_count(self) -> int:
        return (
            len(self.skill_activities)
            + len(self.skill_levels)
            + (1 if self.employee_name else 0)
            + (1 if self.employee_code else 0)
        )

    @property
    def is_active(self) -> bool:
        return self.active_count > 0


@dataclass
class MatrixRow:
    employee_id: int
    name: str
    employee_code: str
    position: str
    levels: Dict[str, str]

    @property
    def summary(self) -> str:
        return format_skill_summary(self.levels)


@dataclass
class SkillMatrix:
    department_id: int
    department_name: str
    skills: List[str]
    rows: List[MatrixRow] = field(default_factory=list)


def build_matrix(db: Session, department_id: int) -> SkillMatrix:
    """
    Load the matrix of a department

    Every configured skill appears in every row; skills without a recorded
    level show as NA.

    Args:
        db: Database session
        department_id: Department ID

    Returns:
        SkillMatrix with one row per employee, ordered by name
    """
    dept: Department = department_service.get(db, department_id)
    try:
        skills = [
            name for (name,) in db.query(Skill.name)
            .filter(Skill.department_id == department_id)
            .order_by(Skill.display_order, Skill.name)
            .all()
        ]
        employees = (
            db.query(Employee)
            .filter(Employee.department_id == department_id)
            .order_by(Employee.name)
            .all()
        )
        recorded = (
            db.query(EmployeeSkill.employee_id, Skill.name, EmployeeSkill.skill_level)
            .join(Skill, EmployeeSkill.skill_id == Skill.id)
            .join(Employee, EmployeeSkill.employee_id == Employee.id)
            .filter(Employee.department_id == department_id)
            .all()
        )
    except SQLAlchemyError as e:
        raise fail(db, e, f"loading skill matrix of department {department_id}") from e

    by_employee: Dict[int, Dict[str, str]] = {}
    for employee_id, skill_name, level in recorded:
        by_employee.setdefault(employee_id, {})[skill_name] = level

    rows = []
    for emp in employees:
        known = by_employee.get(emp.id, {})
        rows.append(MatrixRow(
            employee_id=emp.id,
            name=emp.name,
            employee_code=emp.employee_code,
            position=emp.position,
            levels={skill: known.get(skill, SkillLevel.NA.value) for skill in skills},
        ))
    return SkillMatrix(department_id=dept.id, department_name=dept.name, skills=skills, rows=rows)


def apply_filters(matrix: SkillMatrix, filters: SkillMatrixFilter) -> SkillMatrix:
    """
    Filter rows and columns in memory

    Rows: name substring (case-insensitive), then code substring, then rows
    holding any of the selected levels. Columns: the selected skills, or all.
    """
    rows = matrix.rows
    if filters.employee_name:
        needle = filters.employee_name.lower()
        rows = [row for row in rows if needle in row.name.lower()]
    if filters.employee_code:
        rows = [row for row in rows if filters.employee_code in row.employee_code]
    if filters.skill_levels:
        wanted = {level.value for level in filters.skill_levels}
        rows = [row for row in rows if wanted.intersection(row.levels.values())]

    skills = matrix.skills
    if filters.skill_activities:
        skills = [skill for skill in matrix.skills if skill in filters.skill_activities]

    return SkillMatrix(
        department_id=matrix.department_id,
        department_name=matrix.department_name,
        skills=skills,
        rows=[
            MatrixRow(
                employee_id=row.employee_id,
                name=row.name,
                employee_code=row.employee_code,
                position=row.position,
                levels={skill: row.levels[skill] for skill in skills},
            )
            for row in rows
        ],
    )


def skill_level_counts(levels: Mapping[str, str]) -> Dict[str, int]:
    """Count L1-L4 levels; NA is not counted"""
    counts = {"L1": 0, "L2": 0, "L3": 0, "L4": 0}
    for level in levels.values():
        if level in counts:
            counts[level] += 1
    return counts


def format_skill_summary(levels: Mapping[str, str]) -> str:
    """e.g. "L1 = 1, L3 = 2 out of 3 skills" """
    counts = skill_level_counts(levels)
    total = sum(1 for level in levels.values() if level != SkillLevel.NA.value)
    parts = [f"{level} = {count}" for level, count in counts.items() if count > 0]
    return f"{', '.join(parts)} out of {total} skills".strip()


def parse_matrix_form(form_items, skills: List[str]) -> Dict[int, Dict[str, str]]:
    """
    Collect levels posted by the edit-mode matrix

    Fields are named ``level-<employee_id>-<skill index>``.
    """
    result: Dict[int, Dict[str, str]] = {}
    for key, value in form_items:
        if not key.startswith("level-") or value not in SKILL_LEVELS:
            continue
        try:
            _, employee_id, skill_index = key.split("-", 2)
            employee_id = int(employee_id)
            skill = skills[int(skill_index)]
        except (ValueError, IndexError):
            continue
        result.setdefault(employee_id, {})[skill] = value
    return result
