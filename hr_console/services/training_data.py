"""
Training Data Service
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from hr_console.models.training_data import TrainingData
from hr_console.services.errors import InvalidValueError, fail

logger = logging.getLogger(__name__)

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
COUNTER_FIELDS = ("planned", "done", "pending")


def month_index(month: str) -> int:
    """1-based calendar position of a month, given as "Jan" or "January" in any case"""
    label = (month or "").strip().lower()
    for index, name in enumerate(MONTH_NAMES, start=1):
        if label in (name.lower(), name[:3].lower()):
            return index
    raise InvalidValueError(f"Invalid month: {month}", hint="Use Jan, Feb, ... Dec")


class TrainingDataService:
    """Monthly training counter data access"""

    def get_by_year(self, db: Session, year: int) -> List[TrainingData]:
        """Rows of a year in calendar order"""
        try:
            return (
                db.query(TrainingData)
                .filter(TrainingData.year == year)
                .order_by(TrainingData.month_index)
                .all()
            )
        except SQLAlchemyError as e:
            raise fail(db, e, f"fetching training data for {year}") from e

    def update_month(self, db: Session, month: str, year: int, updates: Mapping[str, Any]) -> TrainingData:
        """
        Upsert the counters of one month

        There is exactly one row per (month, year); repeating the call with
        the same values leaves the table unchanged.

        Args:
            db: Database session
            month: Three-letter month label
            year: Calendar year
            updates: Any of planned, done, pending. Missing fields keep their value.

        Returns:
            The stored row
        """
        index = month_index(month)
        label = MONTH_LABELS[index - 1]
        values = {key: value for key, value in updates.items() if key in COUNTER_FIELDS and value is not None}
        for key, value in values.items():
            if int(value) < 0:
                raise InvalidValueError(f"{key} must not be negative", details=f"{label}-{year}: {value}")

        try:
            row = self._upsert(db, label, index, year, values)
            db.commit()
            db.refresh(row)
        except SQLAlchemyError as e:
            raise fail(db, e, f"updating training data {label}-{year}") from e
        logger.info(f"Training data updated: {label}-{year} {values}")
        return row

    def update_year(self, db: Session, year: int, rows: Iterable[Mapping[str, Any]]) -> List[TrainingData]:
        """Upsert several months of a year in one transaction"""
        prepared = []
        for item in rows:
            index = month_index(item["month"])
            values = {key: int(item.get(key) or 0) for key in COUNTER_FIELDS}
            if any(value < 0 for value in values.values()):
                raise InvalidValueError("Counts must not be negative", details=f"{item['month']}-{year}")
            prepared.append((MONTH_LABELS[index - 1], index, values))

        try:
            for label, index, values in prepared:
                self._upsert(db, label, index, year, values)
            db.commit()
        except SQLAlchemyError as e:
            raise fail(db, e, f"updating training data for {year}") from e
        logger.info(f"Training data updated for {year}: {len(prepared)} months")
        return self.get_by_year(db, year)

    def chart_series(self, db: Session, year: int) -> List[Dict[str, Any]]:
        """Twelve calendar months for the chart, zero where nothing is stored"""
        stored = {row.month_index: row for row in self.get_by_year(db, year)}
        series = []
        for index, label in enumerate(MONTH_LABELS, start=1):
            row = stored.get(index)
            series.append({
                "month": label,
                "planned": row.planned if row else 0,
                "done": row.done if row else 0,
                "pending": row.pending if row else 0,
            })
        return series

    def _upsert(self, db: Session, label: str, index: int, year: int, values: Dict[str, int]) -> TrainingData:
        row = (
            db.query(TrainingData)
            .filter(TrainingData.month == label, TrainingData.year == year)
            .first()
        )
        if row is None:
            row = TrainingData(month=label, month_index=index, year=year, planned=0, done=0, pending=0)
            db.add(row)
        else:
            row.updated_at = datetime.now(timezone.utc)
        for key, value in values.items():
            setattr(row, key, int(value))
        db.flush()
        return row


# Singleton instance
training_data_service = TrainingDataService()
