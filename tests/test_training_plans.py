"""
Training plan tests
"""
from datetime import date

import pytest

from hr_console.services.errors import InvalidValueError, MonthNotPlannedError, RecordNotFoundError
from hr_console.services.training_plans import (
    current_fiscal_year, fiscal_year_months, sort_months, training_plan_service
)


@pytest.fixture
def plan(db, department):
    return training_plan_service.create(db, {
        "department_id": department.id,
        "training_topic": "Fire Safety",
        "planned_months": ["May-25", "Apr-25"],
        "actual_months": ["Apr-25"],
    })


def test_fiscal_year_runs_april_to_march():
    months = fiscal_year_months(2025)

    assert len(months) == 12
    assert months[0] == "Apr-25"
    assert months[8] == "Dec-25"
    assert months[9] == "Jan-26"
    assert months[-1] == "Mar-26"


def test_current_fiscal_year():
    assert current_fiscal_year(date(2025, 4, 1)) == 2025
    assert current_fiscal_year(date(2026, 3, 31)) == 2025


def test_sort_months_dedupes_in_calendar_order():
    assert sort_months(["Jan-26", "Apr-25", "Dec-25", "Apr-25"]) == ["Apr-25", "Dec-25", "Jan-26"]


def test_sort_months_rejects_bad_labels():
    with pytest.raises(InvalidValueError):
        sort_months(["April-25"])


def test_create_sorts_months(plan):
    assert plan.planned_months == ["Apr-25", "May-25"]
    assert plan.actual_months == ["Apr-25"]


def test_create_rejects_unplanned_actual(db, department):
    with pytest.raises(MonthNotPlannedError) as exc:
        training_plan_service.create(db, {
            "department_id": department.id,
            "training_topic": "First Aid",
            "planned_months": ["Apr-25"],
            "actual_months": ["Jun-25"],
        })

    assert exc.value.message == "Cannot mark as actual - training not planned for this month"


def test_create_requires_department(db):
    with pytest.raises(RecordNotFoundError):
        training_plan_service.create(db, {"department_id": 999, "training_topic": "First Aid"})


def test_update_rejects_unplanned_actual(db, plan):
    with pytest.raises(MonthNotPlannedError):
        training_plan_service.update(db, plan.id, {"actual_months": ["Jul-25"]})


def test_removing_a_planned_month_drops_its_actual(db, plan):
    updated = training_plan_service.update(db, plan.id, {"planned_months": ["May-25"]})

    assert updated.planned_months == ["May-25"]
    assert updated.actual_months == []


def test_toggle_planned_adds_and_removes(db, plan):
    plan = training_plan_service.toggle_month(db, plan.id, "Jun-25", "planned")
    assert plan.planned_months == ["Apr-25", "May-25", "Jun-25"]

    plan = training_plan_service.toggle_month(db, plan.id, "Apr-25", "planned")
    assert plan.planned_months == ["May-25", "Jun-25"]
    assert plan.actual_months == []


def test_toggle_actual_requires_planned(db, plan):
    plan = training_plan_service.toggle_month(db, plan.id, "May-25", "actual")
    assert plan.actual_months == ["Apr-25", "May-25"]

    with pytest.raises(MonthNotPlannedError):
        training_plan_service.toggle_month(db, plan.id, "Sep-25", "actual")
    assert training_plan_service.get(db, plan.id).actual_months == ["Apr-25", "May-25"]


def test_toggle_rejects_unknown_kind(db, plan):
    with pytest.raises(InvalidValueError):
        training_plan_service.toggle_month(db, plan.id, "May-25", "done")


def test_get_all_filters_by_department(db, department, plan):
    from hr_console.services.departments import department_service

    other = department_service.create(db, "Maintenance")
    training_plan_service.create(db, {"department_id": other.id, "training_topic": "Lockout"})

    assert [p.training_topic for p in training_plan_service.get_all(db)] == ["Fire Safety", "Lockout"]
    assert [p.training_topic for p in training_plan_service.get_all(db, other.id)] == ["Lockout"]


def test_api_toggle_refusal(auth_client, plan):
    res = auth_client.post(f"/api/training-plans/{plan.id}/toggle", json={"month": "Oct-25", "kind": "actual"})

    assert res.status_code == 400
    body = res.json()
    assert body["code"] == "month_not_planned"
    assert body["message"] == "Cannot mark as actual - training not planned for this month"


def test_api_list_includes_department_name(auth_client, plan):
    res = auth_client.get("/api/training-plans")

    assert res.status_code == 200
    assert res.json()[0]["department_name"] == "Assembly"


def test_update_ignores_null_month_lists(db, plan):
    updated = training_plan_service.update(db, plan.id, {"planned_months": None, "actual_months": None})

    assert updated.planned_months == ["Apr-25", "May-25"]
    assert updated.actual_months == ["Apr-25"]


def test_api_update_with_null_months(auth_client, plan):
    res = auth_client.put(f"/api/training-plans/{plan.id}", json={"planned_months": None, "training_topic": "Fire Drill"})

    assert res.status_code == 200
    assert res.json()["planned_months"] == ["Apr-25", "May-25"]
    assert res.json()["training_topic"] == "Fire Drill"
