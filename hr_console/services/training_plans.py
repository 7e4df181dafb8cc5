"""
Training Plan Service
"""
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
from hr_console.models.department import Department
from hr_console.models.training_plan import TrainingPlan
from hr_console.services.errors import InvalidValueError, MonthNotPlannedError, RecordNotFoundError, fail

logger = logging.getLogger(__name__)

MONTH_ABBREVIATIONS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
MONTH_LABEL = re.compile(r"^(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)-(\d{2})$")
FISCAL_YEAR_START_MONTH = 4


def month_sort_key(label: str):
    """Calendar position of a "Mon-YY" label"""
    match = MONTH_LABEL.match(label)
    if not match:
        raise InvalidValueError(f"Invalid month label: {label}", hint='Use the "Mon-YY" form, e.g. "Apr-25"')
    return int(match.group(2)), MONTH_ABBREVIATIONS.index(match.group(1))


def sort_months(labels: Iterable[str]) -> List[str]:
    """De-duplicate and sort month labels in calendar order"""
    return sorted(set(labels), key=month_sort_key)


def fiscal_year_months(start_year: int) -> List[str]:
    """
    Columns of the plan grid: April of start_year to March of the next year

    >>> fiscal_year_months(2025)[:2], fiscal_year_months(2025)[-1]
    (['Apr-25', 'May-25'], 'Mar-26')
    """
    labels = []
    for offset in range(12):
        month = (FISCAL_YEAR_START_MONTH - 1 + offset) % 12
        year = start_year + (FISCAL_YEAR_START_MONTH - 1 + offset) // 12
        labels.append(f"{MONTH_ABBREVIATIONS[month]}-{year % 100:02d}")
    return labels


def current_fiscal_year(today) -> int:
    """Start year of the fiscal year containing today"""
    return today.year if today.month >= FISCAL_YEAR_START_MONTH else today.year - 1


def check_actual_within_planned(planned: List[str], actual: List[str]) -> None:
    unplanned = [month for month in actual if month not in planned]
    if unplanned:
        raise MonthNotPlannedError(
            "Cannot mark as actual - training not planned for this month",
            details=f"unplanned={unplanned}",
            hint="Add the month to the planned months first",
        )


class TrainingPlanService:
    """Training plan data access"""

    def get_all(self, db: Session, department_id: Optional[int] = None) -> List[TrainingPlan]:
        """Plans joined with their department, in creation order"""
        try:
            query = db.query(TrainingPlan).options(joinedload(TrainingPlan.department))
            if department_id:
                query = query.filter(TrainingPlan.department_id == department_id)
            return query.order_by(TrainingPlan.created_at, TrainingPlan.id).all()
        except SQLAlchemyError as e:
            raise fail(db, e, "fetching training plans") from e

    def get(self, db: Session, plan_id: int) -> TrainingPlan:
        plan = db.query(TrainingPlan).filter(TrainingPlan.id == plan_id).first()
        if not plan:
            raise RecordNotFoundError("Training plan not found", details=f"id={plan_id}")
        return plan

    def create(self, db: Session, plan: Dict[str, Any]) -> TrainingPlan:
        """
        Create a training plan

        Raises:
            MonthNotPlannedError: If an actual month is not planned
            RecordNotFoundError: If the department does not exist
        """
        planned = sort_months(plan.get("planned_months") or [])
        actual = sort_months(plan.get("actual_months") or [])
        check_actual_within_planned(planned, actual)
        if not db.query(Department.id).filter(Department.id == plan["department_id"]).first():
            raise RecordNotFoundError("Department not found", details=f"id={plan['department_id']}")

        new_plan = TrainingPlan(
            department_id=plan["department_id"],
            training_topic=plan["training_topic"],
            planned_months=planned,
            actual_months=actual,
        )
        try:
            db.add(new_plan)
            db.commit()
            db.refresh(new_plan)
        except SQLAlchemyError as e:
            raise fail(db, e, "creating training plan") from e
        logger.info(f"Training plan created: {new_plan.id} {new_plan.training_topic}")
        return new_plan

    def update(self, db: Session, plan_id: int, updates: Dict[str, Any]) -> TrainingPlan:
        """
        Apply partial fields to a plan

        A month dropped from the planned months is dropped from the actual
        months as well.

        Raises:
            MonthNotPlannedError: If an explicitly given actual month is not planned
        """
        updates = {field: value for field, value in updates.items() if value is not None}
        plan = self.get(db, plan_id)
        planned = sort_months(updates["planned_months"]) if "planned_months" in updates else list(plan.planned_months)
        if "actual_months" in updates:
            actual = sort_months(updates["actual_months"])
            check_actual_within_planned(planned, actual)
        else:
            actual = [month for month in plan.actual_months if month in planned]

        try:
            for field, value in updates.items():
                if field not in ("planned_months", "actual_months"):
                    setattr(plan, field, value)
            plan.planned_months = planned
            plan.actual_months = actual
            plan.updated_at = datetime.now(timezone.utc)
            db.commit()
            db.refresh(plan)
        except SQLAlchemyError as e:
            raise fail(db, e, f"updating training plan {plan_id}") from e
        logger.info(f"Training plan updated: {plan.id}")
        return plan

    def toggle_month(self, db: Session, plan_id: int, month: str, kind: str) -> TrainingPlan:
        """
        Toggle one cell of the plan grid

        Args:
            db: Database session
            plan_id: Plan ID
            month: "Mon-YY" label
            kind: "planned" or "actual"

        Raises:
            MonthNotPlannedError: If an unplanned month is marked actual
        """
        month_sort_key(month)
        plan = self.get(db, plan_id)
        planned = list(plan.planned_months)
        actual = list(plan.actual_months)

        if kind == "planned":
            planned = [m for m in planned if m != month] if month in planned else planned + [month]
            return self.update(db, plan_id, {"planned_months": planned})
        if kind == "actual":
            actual = [m for m in actual if m != month] if month in actual else actual + [month]
            return self.update(db, plan_id, {"actual_months": actual})
        raise InvalidValueError(f"Invalid month kind: {kind}", hint="Use planned or actual")


# Singleton instance
training_plan_service = TrainingPlanService()
