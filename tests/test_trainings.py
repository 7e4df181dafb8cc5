"""
Training scheduling tests
"""
from datetime import date

import pytest

from hr_console.models import Training, TrainingParticipant
from hr_console.services.errors import StoreError
from hr_console.services.trainings import format_time_range, parse_participants, training_service


def training_fields(**overrides):
    fields = {
        "title": "Safety Induction",
        "description": "Shop floor safety",
        "training_date": date(2025, 6, 10),
        "training_time": "09:00",
        "duration": 30,
        "location": "Hall B",
        "organizer": "hr",
        "training_type": "Team Training",
    }
    fields.update(overrides)
    return fields


def test_format_time_range():
    assert format_time_range("09:00", 30) == "09:00 AM - 09:30 AM"
    assert format_time_range("11:45", 90) == "11:45 AM - 01:15 PM"


def test_parse_participants_drops_blanks():
    assert parse_participants(" Ravi, ,Priya ,") == ["Ravi", "Priya"]
    assert parse_participants("") == []


def test_create_stores_participants_in_order(db):
    training = training_service.create(db, training_fields(), ["Ravi", "Priya", "Arjun"])

    assert training_service.get_participants(db, training.id) == ["Ravi", "Priya", "Arjun"]
    assert [p.participant_name for p in training.participants] == ["Ravi", "Priya", "Arjun"]


def test_create_without_participants(db):
    training = training_service.create(db, training_fields(), [])

    assert training.participants == []


def test_failed_participant_insert_leaves_no_training(db):
    with pytest.raises(StoreError):
        training_service.create(db, training_fields(), ["Ravi", None])

    assert db.query(Training).count() == 0
    assert db.query(TrainingParticipant).count() == 0


def test_get_all_orders_most_recent_first(db):
    training_service.create(db, training_fields(title="Old", training_date=date(2025, 5, 1)), [])
    training_service.create(db, training_fields(title="Morning", training_time="08:00"), [])
    training_service.create(db, training_fields(title="Noon", training_time="12:00"), [])

    assert [t.title for t in training_service.get_all(db)] == ["Noon", "Morning", "Old"]


def test_get_for_date_and_upcoming(db):
    training_service.create(db, training_fields(title="Past", training_date=date(2025, 6, 1)), [])
    training_service.create(db, training_fields(title="Later", training_time="15:00"), [])
    training_service.create(db, training_fields(title="Earlier", training_time="08:30"), [])

    day = training_service.get_for_date(db, date(2025, 6, 10))
    assert [t.title for t in day] == ["Earlier", "Later"]

    upcoming = training_service.get_upcoming(db, date(2025, 6, 5), limit=1)
    assert [t.title for t in upcoming] == ["Earlier"]


def test_api_defaults_organizer_to_username(auth_client):
    res = auth_client.post("/api/trainings", json={
        "title": "5S Workshop",
        "training_date": "2025-07-01",
        "training_time": "10:00",
        "duration": 45,
        "training_type": "All Hands",
        "participants": ["Ravi", " ", "Priya"],
    })

    assert res.status_code == 201
    body = res.json()
    assert body["organizer"] == "jane.doe"
    assert body["participants"] == ["Ravi", "Priya"]

    res = auth_client.get(f"/api/trainings/{body['id']}/participants")
    assert res.json() == ["Ravi", "Priya"]


def test_api_rejects_bad_time(auth_client):
    res = auth_client.post("/api/trainings", json={
        "title": "5S Workshop", "training_date": "2025-07-01", "training_time": "25:00",
    })

    assert res.status_code == 422


def test_api_filters_by_date(auth_client, db):
    training_service.create(db, training_fields(), [])
    training_service.create(db, training_fields(training_date=date(2025, 6, 11)), [])

    res = auth_client.get("/api/trainings", params={"training_date": "2025-06-11"})

    assert [t["training_date"] for t in res.json()] == ["2025-06-11"]
