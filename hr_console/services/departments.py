"""
Department Service
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from hr_console.models.department import Department
from hr_console.services.errors import RecordNotFoundError, fail

logger = logging.getLogger(__name__)


class DepartmentService:
    """Department data access"""

    def get_all(self, db: Session) -> List[Department]:
        """All departments ordered by name"""
        logger.debug("Fetching all departments")
        try:
            departments = db.query(Department).order_by(Department.name).all()
        except SQLAlchemyError as e:
            raise fail(db, e, "fetching departments") from e
        logger.info(f"Retrieved {len(departments)} departments")
        return departments

    def get(self, db: Session, department_id: int) -> Department:
        """
        Get department by ID

        Raises:
            RecordNotFoundError: If no department has this ID
        """
        try:
            dept = db.query(Department).filter(Department.id == department_id).first()
        except SQLAlchemyError as e:
            raise fail(db, e, f"fetching department {department_id}") from e
        if not dept:
            raise RecordNotFoundError("Department not found", details=f"id={department_id}")
        return dept

    def create(self, db: Session, name: str) -> Department:
        """
        Create a department with an employee count of zero

        The store's constraints are the only guard on the name.
        """
        logger.debug(f"Creating department: {name}")
        dept = Department(name=name, employee_count=0)
        try:
            db.add(dept)
            db.commit()
            db.refresh(dept)
        except SQLAlchemyError as e:
            raise fail(db, e, "creating department") from e
        logger.info(f"Department created: {dept.id} {dept.name}")
        return dept

    def update(self, db: Session, department_id: int, updates: Dict[str, Any]) -> Department:
        """Apply partial fields and stamp updated_at"""
        logger.debug(f"Updating department {department_id}: {updates}")
        dept = self.get(db, department_id)
        try:
            for field, value in updates.items():
                setattr(dept, field, value)
            dept.updated_at = datetime.now(timezone.utc)
            db.commit()
            db.refresh(dept)
        except SQLAlchemyError as e:
            raise fail(db, e, f"updating department {department_id}") from e
        logger.info(f"Department updated: {dept.id}")
        return dept

    def delete(self, db: Session, department_id: int) -> None:
        """Delete a department together with its employees, skills and plans"""
        logger.debug(f"Deleting department {department_id}")
        dept = self.get(db, department_id)
        try:
            db.delete(dept)
            db.commit()
        except SQLAlchemyError as e:
            raise fail(db, e, f"deleting department {department_id}") from e
        logger.info(f"Department deleted: {department_id}")


# Singleton instance
department_service = DepartmentService()
