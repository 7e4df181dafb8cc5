"""
Training Service
"""
import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Sequence
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from hr_console.models.training import Training, TrainingParticipant
from hr_console.services.errors import RecordNotFoundError, fail

logger = logging.getLogger(__name__)

TYPE_BADGES = {
    "Team Training": "badge-blue",
    "One-on-One": "badge-green",
    "All Hands": "badge-purple",
    "Interview": "badge-orange",
    "Training": "badge-yellow",
}


def parse_participants(text: str) -> List[str]:
    """Split comma-separated names, dropping blanks"""
    return [name.strip() for name in (text or "").split(",") if name.strip()]


def format_time_range(start: str, duration: int) -> str:
    """
    Format a session as a 12-hour range

    Args:
        start: Start time "HH:MM"
        duration: Length in minutes

    Returns:
        e.g. "09:00 AM - 09:30 AM"
    """
    begin = datetime.strptime(start, "%H:%M")
    end = begin + timedelta(minutes=duration)
    return f"{begin.strftime('%I:%M %p')} - {end.strftime('%I:%M %p')}"


class TrainingService:
    """Training session data access"""

    def _query(self, db: Session):
        return db.query(Training).options(selectinload(Training.participants))

    def get_all(self, db: Session) -> List[Training]:
        """All trainings, most recent date first"""
        try:
            return (
                self._query(db)
                .order_by(Training.training_date.desc(), Training.training_time.desc())
                .all()
            )
        except SQLAlchemyError as e:
            raise fail(db, e, "fetching trainings") from e

    def get(self, db: Session, training_id: int) -> Training:
        training = self._query(db).filter(Training.id == training_id).first()
        if not training:
            raise RecordNotFoundError("Training not found", details=f"id={training_id}")
        return training

    def get_for_date(self, db: Session, day: date) -> List[Training]:
        """Trainings held on one day, by start time"""
        try:
            return (
                self._query(db)
                .filter(Training.training_date == day)
                .order_by(Training.training_time)
                .all()
            )
        except SQLAlchemyError as e:
            raise fail(db, e, f"fetching trainings for {day}") from e

    def get_between(self, db: Session, start: date, end: date) -> List[Training]:
        """Trainings from start to end inclusive, in chronological order"""
        try:
            return (
                self._query(db)
                .filter(Training.training_date >= start, Training.training_date <= end)
                .order_by(Training.training_date, Training.training_time)
                .all()
            )
        except SQLAlchemyError as e:
            raise fail(db, e, f"fetching trainings between {start} and {end}") from e

    def get_upcoming(self, db: Session, today: date, limit: int = 5) -> List[Training]:
        """Next trainings from today on"""
        try:
            return (
                self._query(db)
                .filter(Training.training_date >= today)
                .order_by(Training.training_date, Training.training_time)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise fail(db, e, "fetching upcoming trainings") from e

    def create(self, db: Session, training: Dict[str, Any], participants: Sequence[str]) -> Training:
        """
        Schedule a training with its participants

        The training row and the participant rows are written in one
        transaction.

        Args:
            db: Database session
            training: Training fields
            participants: Participant names

        Returns:
            Created training
        """
        logger.debug(f"Creating training {training.get('title')!r} with {len(participants)} participants")
        new_training = Training(**training)
        try:
            db.add(new_training)
            db.flush()
            if participants:
                db.add_all([
                    TrainingParticipant(training_id=new_training.id, participant_name=name)
                    for name in participants
                ])
            db.commit()
        except SQLAlchemyError as e:
            raise fail(db, e, "creating training") from e
        logger.info(f"Training created: {new_training.id} {new_training.title}")
        return self.get(db, new_training.id)

    def get_participants(self, db: Session, training_id: int) -> List[str]:
        """Names of the participants of a training"""
        try:
            rows = (
                db.query(TrainingParticipant.participant_name)
                .filter(TrainingParticipant.training_id == training_id)
                .order_by(TrainingParticipant.id)
                .all()
            )
        except SQLAlchemyError as e:
            raise fail(db, e, f"fetching participants of training {training_id}") from e
        return [name for (name,) in rows]


# Singleton instance
training_service = TrainingService()
