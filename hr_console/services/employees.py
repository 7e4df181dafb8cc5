"""
Employee Service
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
from hr_console.models.department import Department
from hr_console.models.employee import Employee
from hr_console.services.counters import (
    adjust_department_count, increment_department_count, decrement_department_count
)
from hr_console.services.errors import DuplicateEmployeeCodeError, RecordNotFoundError, fail

logger = logging.getLogger(__name__)


class EmployeeService:
    """Employee data access, keeping the department counters in step"""

    def get_by_department(self, db: Session, department_id: int) -> List[Employee]:
        """Employees of a department joined with the department, ordered by name"""
        logger.debug(f"Fetching employees for department {department_id}")
        try:
            employees = (
                db.query(Employee)
                .options(joinedload(Employee.department))
                .filter(Employee.department_id == department_id)
                .order_by(Employee.name)
                .all()
            )
        except SQLAlchemyError as e:
            raise fail(db, e, f"fetching employees of department {department_id}") from e
        logger.info(f"Retrieved {len(employees)} employees for department {department_id}")
        return employees

    def get(self, db: Session, employee_id: int) -> Employee:
        """
        Get employee by ID

        Raises:
            RecordNotFoundError: If no employee has this ID
        """
        try:
            employee = db.query(Employee).filter(Employee.id == employee_id).first()
        except SQLAlchemyError as e:
            raise fail(db, e, f"fetching employee {employee_id}") from e
        if not employee:
            raise RecordNotFoundError("Employee not found", details=f"id={employee_id}")
        return employee

    def create(self, db: Session, fields: Dict[str, Any]) -> Employee:
        """
        Create an employee and increment the department counter

        Args:
            db: Database session
            fields: name, employee_code, position, department_id

        Returns:
            Created employee

        Raises:
            DuplicateEmployeeCodeError: If the employee code is taken
            RecordNotFoundError: If the department does not exist
        """
        logger.debug(f"Creating employee: {fields}")
        self._check_department(db, fields["department_id"])
        self._check_code_available(db, fields["employee_code"])

        employee = Employee(**fields)
        try:
            db.add(employee)
            db.flush()
            adjust_department_count(db, increment_department_count, employee.department_id)
            db.commit()
            db.refresh(employee)
        except SQLAlchemyError as e:
            raise fail(db, e, "creating employee") from e
        logger.info(f"Employee created: {employee.id} ({employee.employee_code})")
        return employee

    def update(self, db: Session, employee_id: int, updates: Dict[str, Any]) -> Employee:
        """
        Apply partial fields to an employee

        Moving the employee to another department adjusts both counters.
        """
        logger.debug(f"Updating employee {employee_id}: {updates}")
        employee = self.get(db, employee_id)
        new_code = updates.get("employee_code")
        if new_code and new_code != employee.employee_code:
            self._check_code_available(db, new_code)

        old_department_id = employee.department_id
        new_department_id = updates.get("department_id") or old_department_id
        if new_department_id != old_department_id:
            self._check_department(db, new_department_id)

        try:
            for field, value in updates.items():
                setattr(employee, field, value)
            employee.updated_at = datetime.now(timezone.utc)
            db.flush()
            if new_department_id != old_department_id:
                adjust_department_count(db, decrement_department_count, old_department_id)
                adjust_department_count(db, increment_department_count, new_department_id)
            db.commit()
            db.refresh(employee)
        except SQLAlchemyError as e:
            raise fail(db, e, f"updating employee {employee_id}") from e
        logger.info(f"Employee updated: {employee.id}")
        return employee

    def delete(self, db: Session, employee_id: int) -> None:
        """Delete an employee and decrement the department counter"""
        logger.debug(f"Deleting employee {employee_id}")
        employee = self.get(db, employee_id)
        department_id: Optional[int] = employee.department_id
        try:
            db.delete(employee)
            db.flush()
            if department_id is not None:
                adjust_department_count(db, decrement_department_count, department_id)
            else:
                logger.warning(f"Employee {employee_id} has no department, skipping count update")
            db.commit()
        except SQLAlchemyError as e:
            raise fail(db, e, f"deleting employee {employee_id}") from e
        logger.info(f"Employee deleted: {employee_id}")

    def _check_department(self, db: Session, department_id: int) -> None:
        if not db.query(Department.id).filter(Department.id == department_id).first():
            raise RecordNotFoundError("Department not found", details=f"id={department_id}")

    def _check_code_available(self, db: Session, employee_code: str) -> None:
        if db.query(Employee.id).filter(Employee.employee_code == employee_code).first():
            raise DuplicateEmployeeCodeError(
                "Employee code already exists",
                details=f"employee_code={employee_code}",
                hint="Employee codes must be unique across all departments",
            )


# Singleton instance
employee_service = EmployeeService()
