"""
Errors raised by the data-access layer
"""
import logging
from typing import Any, Dict, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Failure reported by the data store, passed to callers unchanged"""

    default_code: Optional[str] = None

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        hint: Optional[str] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        self.hint = hint
        self.code = code or self.default_code

    @classmethod
    def from_exception(cls, exc: SQLAlchemyError) -> "StoreError":
        """Wrap a SQLAlchemy error, keeping the driver message and code"""
        orig = getattr(exc, "orig", None)
        code = getattr(orig, "pgcode", None) or getattr(exc, "code", None)
        details = str(orig) if orig is not None else None
        return cls(message=exc.__class__.__name__, details=details, code=code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "details": self.details,
            "hint": self.hint,
            "code": self.code,
        }


class RecordNotFoundError(StoreError):
    default_code = "not_found"


class DuplicateEmployeeCodeError(StoreError):
    default_code = "duplicate_employee_code"


class MonthNotPlannedError(StoreError):
    default_code = "month_not_planned"


class InvalidValueError(StoreError):
    default_code = "invalid_value"


def fail(db: Session, exc: Exception, action: str) -> StoreError:
    """
    Roll back, log and convert an exception for re-raising

    Args:
        db: Database session
        exc: Exception raised by the store
        action: Description of the attempted operation for logging

    Returns:
        StoreError to raise
    """
    db.rollback()
    error = exc if isinstance(exc, StoreError) else StoreError.from_exception(exc)
    logger.error(f"Error {action}: {error.message}")
    logger.error(f"Error details: {error.to_dict()}")
    return error
