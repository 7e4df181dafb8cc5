"""
Server-rendered screen tests
"""
from hr_console.models import Training, TrainingData
from hr_console.services.skills import skill_service
from hr_console.services.training_plans import training_plan_service

HTML = {"accept": "text/html"}


def test_home_renders_for_visitors(client):
    res = client.get("/")

    assert res.status_code == 200
    assert "Enter Dashboard" in res.text


def test_home_redirects_signed_in_users(auth_client):
    res = auth_client.get("/", follow_redirects=False)

    assert res.status_code == 303
    assert res.headers["location"] == "/dashboard"


def test_enter_goes_to_sign_in(client):
    res = client.post("/enter", follow_redirects=False)

    assert res.headers["location"] == "/auth"


def test_dashboard_requires_sign_in(client):
    res = client.get("/dashboard", follow_redirects=False)

    assert res.status_code == 303
    assert res.headers["location"] == "/auth"


def test_protected_page_redirects_browsers(client):
    res = client.get("/departments", headers=HTML, follow_redirects=False)

    assert res.status_code == 302
    assert res.headers["location"] == "/auth"


def test_sign_up_and_sign_in_forms(client):
    res = client.post("/auth/sign-up", data={
        "email": "new.user@example.com", "password": "secret123", "confirm_password": "secret123",
    })
    assert "Account created successfully" in res.text

    res = client.post(
        "/auth/sign-in",
        data={"email": "new.user@example.com", "password": "secret123"},
        follow_redirects=False,
    )
    assert res.status_code == 303
    assert res.headers["location"] == "/dashboard"
    assert "access_token" in res.cookies

    res = client.get("/dashboard")
    assert "HR Dashboard" in res.text


def test_sign_up_form_password_mismatch(client):
    res = client.post("/auth/sign-up", data={
        "email": "new.user@example.com", "password": "secret123", "confirm_password": "secret124",
    })

    assert "Passwords do not match" in res.text


def test_sign_in_form_error(client):
    res = client.post("/auth/sign-in", data={"email": "nobody@example.com", "password": "secret123"})

    assert res.status_code == 200
    assert "Invalid login credentials" in res.text


def test_logout_returns_home(auth_client):
    res = auth_client.post("/logout", follow_redirects=False)

    assert res.headers["location"] == "/"
    assert auth_client.get("/dashboard", follow_redirects=False).headers["location"] == "/auth"


def test_dashboard_tabs_render(auth_client, department, employee):
    for tab in ("overview", "departments", "trainings"):
        res = auth_client.get("/dashboard", params={"tab": tab})
        assert res.status_code == 200

    assert auth_client.get("/dashboard", params={"edit": "true"}).status_code == 200


def test_chart_editor_saves_counts(auth_client, db):
    res = auth_client.post(
        "/dashboard/training-data",
        data={"year": "2025", "planned-Jan": "3", "done-Jan": "1", "pending-Jan": "2"},
        follow_redirects=False,
    )

    assert res.status_code == 303
    jan = db.query(TrainingData).filter(TrainingData.year == 2025, TrainingData.month == "Jan").one()
    assert (jan.planned, jan.done, jan.pending) == (3, 1, 2)
    assert db.query(TrainingData).filter(TrainingData.year == 2025).count() == 12


def test_department_forms(auth_client):
    res = auth_client.post("/departments", data={"name": "Grinding"})
    assert "Department Grinding created" in res.text

    res = auth_client.post("/departments", data={"name": "Grinding"})
    assert res.status_code == 200
    assert "Department Management" in res.text


def test_duplicate_employee_code_shows_notice(auth_client, department, employee):
    res = auth_client.post(
        f"/departments/{department.id}/employees",
        data={"name": "Other", "employee_code": "EMP001", "position": "Operator"},
        follow_redirects=False,
    )

    assert res.status_code == 303
    assert "Employee+code+already+exists" in res.headers["location"]


def test_department_detail_renders(auth_client, db, department, employee):
    skill_service.create(db, department.id, "Visual Inspection")

    assert "Ravi Kumar" in auth_client.get(f"/departments/{department.id}").text
    res = auth_client.get(f"/departments/{department.id}", params={
        "tab": "skill-matrix", "mode": "edit", "filters": "open", "skill": "Visual Inspection", "level": "NA",
    })
    assert res.status_code == 200
    assert "Visual Inspection" in res.text


def test_skill_matrix_form_saves_levels(auth_client, db, department, employee):
    skill_service.create(db, department.id, "Visual Inspection")
    skill_service.create(db, department.id, "Dial Reading")

    res = auth_client.post(
        f"/departments/{department.id}/skill-matrix",
        data={f"level-{employee.id}-0": "L3", f"level-{employee.id}-1": "NA"},
        follow_redirects=False,
    )

    assert res.status_code == 303
    assert skill_service.get_employee_skills(db, employee.id) == {"Visual Inspection": "L3", "Dial Reading": "NA"}


def test_training_form_uses_username_as_organizer(auth_client, db):
    res = auth_client.post("/trainings", data={
        "title": "Kaizen Basics",
        "training_type": "Training",
        "training_date": "2025-08-04",
        "training_time": "14:00",
        "duration": "60",
        "participants": "Ravi, Priya",
    })

    assert res.status_code == 200
    training = db.query(Training).one()
    assert training.organizer == "jane.doe"
    assert [p.participant_name for p in training.participants] == ["Ravi", "Priya"]


def test_training_form_requires_title(auth_client, db):
    res = auth_client.post("/trainings", data={"training_date": "2025-08-04", "training_time": "14:00"})

    assert "Title, date and time are required" in res.text
    assert db.query(Training).count() == 0


def test_plan_toggle_refusal_is_shown(auth_client, db, department):
    plan = training_plan_service.create(db, {
        "department_id": department.id, "training_topic": "Fire Safety", "planned_months": ["Apr-25"],
    })

    res = auth_client.post(
        f"/trainings/plans/{plan.id}/toggle",
        data={"month": "May-25", "kind": "actual", "fiscal_year": "2025"},
    )

    assert "Cannot mark as actual - training not planned for this month" in res.text
    assert training_plan_service.get(db, plan.id).actual_months == []


def test_plan_form_and_grid(auth_client, db, department):
    res = auth_client.post("/trainings/plans", data={
        "department_id": str(department.id),
        "training_topic": "Lockout Tagout",
        "planned_months": ["Jun-25", "Apr-25"],
    })

    assert res.status_code == 200
    assert "Lockout Tagout" in res.text
    assert training_plan_service.get_all(db)[0].planned_months == ["Apr-25", "Jun-25"]


class LoadingContext:
    loading = True
    is_signed_in = False
    user = None
    username = "User"


def test_loading_session_shows_only_the_loading_screen(client):
    from hr_console.main import app
    from hr_console.services.session import get_session_context

    app.dependency_overrides[get_session_context] = lambda: LoadingContext()

    for path in ("/", "/auth", "/dashboard"):
        res = client.get(path, follow_redirects=False)
        assert res.status_code == 200
        assert "Loading..." in res.text


def test_sign_up_form_overlong_password(client):
    password = "x" * 80
    res = client.post("/auth/sign-up", data={
        "email": "long@example.com", "password": password, "confirm_password": password,
    })

    assert res.status_code == 200
    assert "Password should be at most 72 bytes" in res.text


def test_chart_editor_rejects_non_numeric_year(auth_client, db):
    res = auth_client.post(
        "/dashboard/training-data", data={"year": "abc", "planned-Jan": "3"}, follow_redirects=False,
    )

    assert res.status_code == 303
    assert "edit=1" in res.headers["location"]
    assert db.query(TrainingData).count() == 0
