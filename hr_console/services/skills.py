"""
Skill Service
"""
import logging
from typing import Dict, List, Mapping, Optional
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from hr_console.models.skill import Skill, EmployeeSkill, SkillLevel
from hr_console.services.employees import employee_service
from hr_console.services.errors import InvalidValueError, RecordNotFoundError, fail

logger = logging.getLogger(__name__)


def normalize_level(level) -> str:
    """Validate a level against L1-L4/NA and return its string value"""
    try:
        return SkillLevel(getattr(level, "value", level)).value
    except ValueError:
        raise InvalidValueError(
            f"Invalid skill level: {level}",
            hint="Use one of L1, L2, L3, L4, NA",
        ) from None


class SkillService:
    """Skill catalogue and employee skill level data access"""

    def get_by_department(self, db: Session, department_id: int) -> List[Skill]:
        """Department catalogue in display order"""
        try:
            return (
                db.query(Skill)
                .filter(Skill.department_id == department_id)
                .order_by(Skill.display_order, Skill.name)
                .all()
            )
        except SQLAlchemyError as e:
            raise fail(db, e, f"fetching skills of department {department_id}") from e

    def create(
        self, db: Session, department_id: int, name: str, display_order: Optional[int] = None
    ) -> Skill:
        """Add a skill to a department catalogue, appended at the end by default"""
        try:
            if display_order is None:
                last = (
                    db.query(func.max(Skill.display_order))
                    .filter(Skill.department_id == department_id)
                    .scalar()
                )
                display_order = 0 if last is None else last + 1
            skill = Skill(department_id=department_id, name=name, display_order=display_order)
            db.add(skill)
            db.commit()
            db.refresh(skill)
        except SQLAlchemyError as e:
            raise fail(db, e, f"creating skill {name!r}") from e
        logger.info(f"Skill created: {skill.id} {skill.name} (department {department_id})")
        return skill

    def delete(self, db: Session, skill_id: int) -> None:
        """Remove a skill and every level recorded for it"""
        skill = db.query(Skill).filter(Skill.id == skill_id).first()
        if not skill:
            raise RecordNotFoundError("Skill not found", details=f"id={skill_id}")
        try:
            db.delete(skill)
            db.commit()
        except SQLAlchemyError as e:
            raise fail(db, e, f"deleting skill {skill_id}") from e
        logger.info(f"Skill deleted: {skill_id}")

    def get_employee_skills(self, db: Session, employee_id: int) -> Dict[str, str]:
        """
        Get the levels of one employee

        Returns:
            Mapping of skill name to level; empty when nothing is recorded
        """
        try:
            rows = (
                db.query(Skill.name, EmployeeSkill.skill_level)
                .join(EmployeeSkill, EmployeeSkill.skill_id == Skill.id)
                .filter(EmployeeSkill.employee_id == employee_id)
                .all()
            )
        except SQLAlchemyError as e:
            raise fail(db, e, f"fetching skills of employee {employee_id}") from e
        return {name: level for name, level in rows}

    def update_employee_skills(self, db: Session, employee_id: int, skills: Mapping[str, str]) -> None:
        """
        Replace the complete skill set of an employee

        Every existing level of the employee is deleted, then one level is
        inserted per given name that resolves to a skill of the employee's
        department. Names that do not resolve are dropped.

        Args:
            db: Database session
            employee_id: Employee ID
            skills: Mapping of skill name to level
        """
        levels = {name: normalize_level(level) for name, level in skills.items()}
        employee = employee_service.get(db, employee_id)

        try:
            db.query(EmployeeSkill).filter(EmployeeSkill.employee_id == employee_id).delete(
                synchronize_session="fetch"
            )

            resolved = []
            if levels:
                resolved = (
                    db.query(Skill.id, Skill.name)
                    .filter(Skill.department_id == employee.department_id, Skill.name.in_(list(levels)))
                    .all()
                )
            dropped = set(levels) - {name for _, name in resolved}
            if dropped:
                logger.debug(f"Skipping unknown skills for employee {employee_id}: {sorted(dropped)}")

            db.add_all([
                EmployeeSkill(employee_id=employee_id, skill_id=skill_id, skill_level=levels[name])
                for skill_id, name in resolved
            ])
            db.commit()
        except SQLAlchemyError as e:
            raise fail(db, e, f"updating skills of employee {employee_id}") from e
        logger.info(f"Skills replaced for employee {employee_id}: {len(resolved)} levels")


# Singleton instance
skill_service = SkillService()
