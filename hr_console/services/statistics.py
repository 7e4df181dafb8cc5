"""
Statistics Service
"""
from datetime import date, timedelta
from typing import Dict, Any, List
from sqlalchemy import func
from sqlalchemy.orm import Session
from hr_console.models.department import Department
from hr_console.models.employee import Employee
from hr_console.models.skill import Skill
from hr_console.models.training import Training
from hr_console.services.trainings import format_time_range, training_service


class StatisticsService:
    """Dashboard statistics calculation service"""

    def get_summary(self, db: Session, today: date) -> Dict[str, Any]:
        """
        Get the stat cards of the dashboard overview

        Args:
            db: Database session
            today: Reference day

        Returns:
            Dictionary with summary statistics
        """
        total_employees = db.query(func.coalesce(func.sum(Department.employee_count), 0)).scalar()
        department_count = db.query(func.count(Department.id)).scalar()
        trainings_today = db.query(func.count(Training.id)).filter(Training.training_date == today).scalar()

        month_start = today.replace(day=1)
        next_month = (month_start + timedelta(days=32)).replace(day=1)
        trainings_this_month = db.query(func.count(Training.id)).filter(
            Training.training_date >= month_start,
            Training.training_date < next_month,
        ).scalar()

        return {
            "total_employees": int(total_employees or 0),
            "department_count": department_count,
            "trainings_today": trainings_today,
            "trainings_this_month": trainings_this_month,
        }

    def get_weekly_trainings(self, db: Session, today: date) -> List[Dict[str, Any]]:
        """
        Get trainings of the current Monday to Sunday week

        Returns:
            List of trainings with participant counts
        """
        week_start = today - timedelta(days=today.weekday())
        week_end = week_start + timedelta(days=6)

        result = []
        for training in training_service.get_between(db, week_start, week_end):
            result.append({
                "id": training.id,
                "title": training.title,
                "training_type": training.training_type,
                "training_date": training.training_date,
                "time_range": format_time_range(training.training_time, training.duration),
                "location": training.location,
                "participant_count": len(training.participants),
            })
        return result

    def get_department_overview(self, db: Session) -> List[Dict[str, Any]]:
        """
        Get statistics by department

        The stored counter is reported next to the actual number of
        employee rows, so a drifted counter is visible.

        Returns:
            List of department statistics
        """
        employee_rows = (
            db.query(Employee.department_id, func.count(Employee.id))
            .group_by(Employee.department_id)
            .all()
        )
        skill_rows = (
            db.query(Skill.department_id, func.count(Skill.id))
            .group_by(Skill.department_id)
            .all()
        )
        actual_counts = dict(employee_rows)
        skill_counts = dict(skill_rows)

        result = []
        for dept in db.query(Department).order_by(Department.name).all():
            actual = actual_counts.get(dept.id, 0)
            result.append({
                "department_id": dept.id,
                "department_name": dept.name,
                "employee_count": dept.employee_count,
                "actual_employees": actual,
                "skill_count": skill_counts.get(dept.id, 0),
                "counter_drift": dept.employee_count - actual,
            })
        return result


# Singleton instance
statistics_service = StatisticsService()
