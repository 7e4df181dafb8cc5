"""
Department employee counter procedures

The counters are denormalized. They are adjusted by side calls that run after
an employee write; a failed adjustment is logged and discarded, so the stored
count can drift from the number of employee rows.
"""
import logging
from typing import Callable
from sqlalchemy import case, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from hr_console.models.department import Department

logger = logging.getLogger(__name__)


def increment_department_count(db: Session, department_id: int) -> None:
    """employee_count += 1"""
    db.execute(
        update(Department)
        .where(Department.id == department_id)
        .values(employee_count=Department.employee_count + 1)
        .execution_options(synchronize_session="fetch")
    )


def decrement_department_count(db: Session, department_id: int) -> None:
    """employee_count -= 1, never below zero"""
    db.execute(
        update(Department)
        .where(Department.id == department_id)
        .values(
            employee_count=case(
                (Department.employee_count > 0, Department.employee_count - 1),
                else_=0,
            )
        )
        .execution_options(synchronize_session="fetch")
    )


def adjust_department_count(
    db: Session,
    procedure: Callable[[Session, int], None],
    department_id: int,
) -> bool:
    """
    Run a counter procedure as a best-effort side call

    The procedure runs inside a SAVEPOINT so that its failure leaves the
    surrounding employee write intact.

    Args:
        db: Database session with the pending employee write
        procedure: increment_department_count or decrement_department_count
        department_id: Department whose counter is adjusted

    Returns:
        True if the counter was adjusted
    """
    name = getattr(procedure, "__name__", "counter procedure")
    logger.debug(f"Calling {name} with department_id={department_id}")
    savepoint = db.begin_nested()
    try:
        procedure(db, department_id)
        savepoint.commit()
    except SQLAlchemyError as e:
        savepoint.rollback()
        logger.warning(f"{name} failed for department {department_id}, count not updated: {e}")
        return False
    logger.debug(f"{name} succeeded for department {department_id}")
    return True
