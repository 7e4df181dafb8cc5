"""
Web pages router

Screens render from the store on every request. Form posts redirect back to
their screen (POST-redirect-GET); a failed action is logged and reported
through the ``notice`` query parameter.
"""
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlencode
from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from sqlalchemy.orm import Session
from hr_console.config import settings
from hr_console.database import get_db
from hr_console.models.skill import SKILL_LEVELS, SkillLevel
from hr_console.models.training import TRAINING_TYPES
from hr_console.routers.auth import reset_redirect_target
from hr_console.schemas.training import TrainingCreate
from hr_console.services import navigation
from hr_console.services.auth import AuthUser
from hr_console.services.departments import department_service
from hr_console.services.employees import employee_service
from hr_console.services.errors import StoreError
from hr_console.services.navigation import Screen
from hr_console.services.session import (
    SessionContext, get_current_user, get_session_context, set_session_cookie
)
from hr_console.services.skill_matrix import (
    LEVEL_SQUARES, SKILL_LEVEL_DEFINITIONS, SkillMatrixFilter, apply_filters, build_matrix,
    parse_matrix_form
)
from hr_console.services.skills import skill_service
from hr_console.services.statistics import statistics_service
from hr_console.services.training_data import MONTH_LABELS, training_data_service
from hr_console.services.training_plans import (
    current_fiscal_year, fiscal_year_months, training_plan_service
)
from hr_console.services.trainings import (
    TYPE_BADGES, format_time_range, parse_participants, training_service
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Web Pages"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
templates.env.globals.update(
    app_name=settings.app_name,
    format_time_range=format_time_range,
    type_badges=TYPE_BADGES,
    level_squares=LEVEL_SQUARES,
)


def redirect_to(url: str, notice: Optional[str] = None, **params) -> RedirectResponse:
    """303 redirect back to a screen, carrying an optional banner"""
    query = {key: value for key, value in params.items() if value not in (None, "")}
    if notice:
        query["notice"] = notice
    if query:
        url = f"{url}?{urlencode(query, doseq=True)}"
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def report(exc: StoreError, action: str) -> str:
    logger.error(f"Error {action}: {exc.message} ({exc.details})")
    return exc.message


def go_to(request: Request, screen: Screen):
    """Redirect to a top-level screen; the loading screen is rendered in place"""
    if screen == Screen.LOADING:
        return templates.TemplateResponse(request, "loading.html", {"context": None})
    return redirect_to(navigation.SCREEN_PATHS[screen])


# Top-level screens
@router.get("/", response_class=HTMLResponse)
async def home_page(
    request: Request,
    context: SessionContext = Depends(get_session_context)
):
    """Landing page"""
    screen = navigation.resolve_screen(Screen.HOME, context)
    if screen != Screen.HOME:
        return go_to(request, screen)
    return templates.TemplateResponse(request, "home.html", {"context": context})


@router.post("/enter")
async def enter_dashboard(
    request: Request,
    context: SessionContext = Depends(get_session_context)
):
    """Home page call to action"""
    return go_to(request, navigation.resolve_screen(navigation.enter_dashboard(Screen.HOME), context))


@router.get("/auth", response_class=HTMLResponse)
async def auth_page(
    request: Request,
    tab: str = "signin",
    notice: Optional[str] = None,
    context: SessionContext = Depends(get_session_context)
):
    """Sign in, register and password reset tabs"""
    screen = navigation.resolve_screen(Screen.AUTH, context)
    if screen != Screen.AUTH:
        return go_to(request, screen)
    return render_auth(request, tab=tab, success=notice)


def render_auth(
    request: Request,
    tab: str = "signin",
    error: Optional[str] = None,
    success: Optional[str] = None,
    email: str = "",
    status_code: int = 200,
):
    if tab not in ("signin", "signup", "reset"):
        tab = "signin"
    return templates.TemplateResponse(
        request,
        "auth.html",
        {
            "tab": tab,
            "error": error,
            "success": success,
            "email": email,
            "min_password_length": settings.min_password_length,
        },
        status_code=status_code,
    )


@router.post("/auth/sign-in")
async def sign_in_form(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    context: SessionContext = Depends(get_session_context)
):
    """Sign in from the auth screen"""
    result = context.sign_in(email, password)
    if result.error:
        return render_auth(request, tab="signin", error=result.error.message, email=email)
    response = redirect_to(navigation.SCREEN_PATHS[navigation.auth_success(Screen.AUTH)])
    set_session_cookie(response, result.session)
    return response


@router.post("/auth/sign-up")
async def sign_up_form(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    confirm_password: str = Form(...),
    context: SessionContext = Depends(get_session_context)
):
    """Register from the auth screen"""
    if password != confirm_password:
        return render_auth(request, tab="signup", error="Passwords do not match", email=email)
    result = context.sign_up(email, password)
    if result.error:
        return render_auth(request, tab="signup", error=result.error.message, email=email)
    return render_auth(
        request, tab="signin", email=email,
        success="Account created successfully! You can now sign in.",
    )


@router.post("/auth/forgot")
async def reset_password_form(
    request: Request,
    email: str = Form(...),
    context: SessionContext = Depends(get_session_context)
):
    """Request a recovery email from the auth screen"""
    result = context.reset_password(email, reset_redirect_target(request))
    if result.error:
        return render_auth(request, tab="reset", error=result.error.message, email=email)
    return render_auth(request, tab="reset", success="Password reset email sent! Check your inbox.")


@router.get("/auth/reset-password", response_class=HTMLResponse)
async def new_password_page(request: Request, token: str = ""):
    """Target of the recovery link"""
    return templates.TemplateResponse(
        request, "reset_password.html",
        {"token": token, "error": None, "min_password_length": settings.min_password_length},
    )


@router.post("/auth/new-password")
async def new_password_form(
    request: Request,
    token: str = Form(...),
    password: str = Form(...),
    confirm_password: str = Form(...),
    context: SessionContext = Depends(get_session_context)
):
    """Set the new password and sign in"""
    error = None
    if password != confirm_password:
        error = "Passwords do not match"
    else:
        result = context.client.update_password(token, password)
        if result.ok:
            response = redirect_to("/dashboard")
            set_session_cookie(response, result.session)
            return response
        error = result.error.message
    return templates.TemplateResponse(
        request, "reset_password.html",
        {"token": token, "error": error, "min_password_length": settings.min_password_length},
    )


@router.post("/logout")
async def logout_form(context: SessionContext = Depends(get_session_context)):
    """Sign out and return to the landing page"""
    context.sign_out()
    response = redirect_to(navigation.SCREEN_PATHS[navigation.logout(Screen.DASHBOARD)])
    response.delete_cookie(key="access_token")
    return response


# Dashboard
@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    tab: Optional[str] = None,
    edit: bool = False,
    notice: Optional[str] = None,
    context: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db)
):
    """Dashboard with overview, departments and trainings tabs"""
    screen = navigation.resolve_screen(Screen.DASHBOARD, context)
    if screen != Screen.DASHBOARD:
        return go_to(request, screen)

    today = date.today()
    year = settings.training_year or today.year
    series = training_data_service.chart_series(db, year)
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "context": context,
            "tab": navigation.dashboard_tab(tab),
            "notice": notice,
            "today": today,
            "summary": statistics_service.get_summary(db, today),
            "weekly_trainings": statistics_service.get_weekly_trainings(db, today),
            "departments": statistics_service.get_department_overview(db),
            "upcoming": training_service.get_upcoming(db, today),
            "year": year,
            "series": series,
            "chart_max": max([1] + [max(m["planned"], m["done"], m["pending"]) for m in series]),
            "editing": edit,
        },
    )


@router.post("/dashboard/training-data")
async def save_training_chart(
    request: Request,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Save the chart editor"""
    form = await request.form()
    rows = []
    try:
        year = int(form.get("year") or settings.training_year or date.today().year)
        for month in MONTH_LABELS:
            rows.append({
                "month": month,
                "planned": int(form.get(f"planned-{month}") or 0),
                "done": int(form.get(f"done-{month}") or 0),
                "pending": int(form.get(f"pending-{month}") or 0),
            })
    except ValueError:
        return redirect_to("/dashboard", notice="Year and counts must be whole numbers", edit=1)
    try:
        training_data_service.update_year(db, year, rows)
    except StoreError as e:
        return redirect_to("/dashboard", notice=report(e, "saving training data"), edit=1)
    return redirect_to("/dashboard", notice="Training data saved")


# Department management
@router.get("/departments", response_class=HTMLResponse)
async def departments_page(
    request: Request,
    dialog: Optional[str] = None,
    edit_id: Optional[int] = None,
    notice: Optional[str] = None,
    context: SessionContext = Depends(get_session_context),
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Department list screen"""
    departments = department_service.get_all(db)
    editing = next((d for d in departments if d.id == edit_id), None)
    return templates.TemplateResponse(
        request,
        "departments/list.html",
        {
            "context": context,
            "departments": departments,
            "dialog": dialog,
            "editing": editing,
            "notice": notice,
        },
    )


@router.post("/departments")
async def create_department_form(
    name: str = Form(...),
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    name = name.strip()
    if not name:
        return redirect_to("/departments", notice="Department name is required", dialog="add-department")
    try:
        department_service.create(db, name)
    except StoreError as e:
        return redirect_to("/departments", notice=report(e, "creating department"))
    return redirect_to("/departments", notice=f"Department {name} created")


@router.post("/departments/{department_id}/edit")
async def rename_department_form(
    department_id: int,
    name: str = Form(...),
    next_url: str = Form("/departments"),
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if not next_url.startswith("/departments"):
        next_url = "/departments"
    name = name.strip()
    if not name:
        return redirect_to(next_url, notice="Department name is required")
    try:
        department_service.update(db, department_id, {"name": name})
    except StoreError as e:
        return redirect_to(next_url, notice=report(e, "renaming department"))
    return redirect_to(next_url, notice="Department updated")


@router.post("/departments/{department_id}/delete")
async def delete_department_form(
    department_id: int,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        department_service.delete(db, department_id)
    except StoreError as e:
        return redirect_to("/departments", notice=report(e, "deleting department"))
    return redirect_to("/departments", notice="Department deleted")


@router.get("/departments/{department_id}", response_class=HTMLResponse)
async def department_detail_page(
    request: Request,
    department_id: int,
    tab: str = "employees",
    dialog: Optional[str] = None,
    employee_id: Optional[int] = None,
    mode: str = "view",
    filters: Optional[str] = None,
    name: str = "",
    code: str = "",
    skill: List[str] = Query([]),
    level: List[str] = Query([]),
    notice: Optional[str] = None,
    context: SessionContext = Depends(get_session_context),
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Department detail screen with the employee list and the skill matrix"""
    try:
        department = department_service.get(db, department_id)
    except StoreError as e:
        return redirect_to("/departments", notice=report(e, f"opening department {department_id}"))

    matrix = build_matrix(db, department_id)
    matrix_filter = SkillMatrixFilter(
        employee_name=name,
        employee_code=code,
        skill_activities=[s for s in skill if s in matrix.skills],
        skill_levels=[SkillLevel(lv) for lv in level if lv in SKILL_LEVELS],
    )
    editing_employee = None
    if employee_id is not None:
        editing_employee = next((row for row in matrix.rows if row.employee_id == employee_id), None)

    return templates.TemplateResponse(
        request,
        "departments/detail.html",
        {
            "context": context,
            "department": department,
            "tab": "skill-matrix" if tab == "skill-matrix" else "employees",
            "dialog": dialog,
            "editing_employee": editing_employee,
            "employees": matrix.rows,
            "catalogue": skill_service.get_by_department(db, department_id),
            "matrix": apply_filters(matrix, matrix_filter),
            "all_skills": matrix.skills,
            "full_levels": {row.employee_id: row.levels for row in matrix.rows},
            "matrix_filter": matrix_filter,
            "mode": "edit" if mode == "edit" else "view",
            "show_filters": filters == "open",
            "skill_levels": SKILL_LEVELS,
            "level_definitions": SKILL_LEVEL_DEFINITIONS,
            "notice": notice,
        },
    )


@router.post("/departments/{department_id}/employees")
async def add_employee_form(
    department_id: int,
    name: str = Form(...),
    employee_code: str = Form(...),
    position: str = Form(...),
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    url = f"/departments/{department_id}"
    fields = {
        "name": name.strip(),
        "employee_code": employee_code.strip(),
        "position": position.strip(),
        "department_id": department_id,
    }
    if not all(fields.values()):
        return redirect_to(url, notice="Name, employee code and position are required", dialog="add-employee")
    try:
        employee_service.create(db, fields)
    except StoreError as e:
        return redirect_to(url, notice=report(e, "adding employee"))
    return redirect_to(url, notice=f"Employee {fields['name']} added")


@router.post("/departments/{department_id}/employees/{employee_id}/edit")
async def edit_employee_form(
    department_id: int,
    employee_id: int,
    name: str = Form(...),
    employee_code: str = Form(...),
    position: str = Form(...),
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    url = f"/departments/{department_id}"
    updates = {"name": name.strip(), "employee_code": employee_code.strip(), "position": position.strip()}
    if not all(updates.values()):
        return redirect_to(url, notice="Name, employee code and position are required")
    try:
        employee_service.update(db, employee_id, updates)
    except StoreError as e:
        return redirect_to(url, notice=report(e, f"updating employee {employee_id}"))
    return redirect_to(url, notice="Employee updated")


@router.post("/departments/{department_id}/employees/{employee_id}/delete")
async def delete_employee_form(
    department_id: int,
    employee_id: int,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    url = f"/departments/{department_id}"
    try:
        employee_service.delete(db, employee_id)
    except StoreError as e:
        return redirect_to(url, notice=report(e, f"deleting employee {employee_id}"))
    return redirect_to(url, notice="Employee deleted")


@router.post("/departments/{department_id}/skills")
async def add_skill_form(
    department_id: int,
    name: str = Form(...),
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    url = f"/departments/{department_id}"
    if not name.strip():
        return redirect_to(url, notice="Skill name is required", dialog="add-skill")
    try:
        skill_service.create(db, department_id, name.strip())
    except StoreError as e:
        return redirect_to(url, notice=report(e, "adding skill"), dialog="add-skill")
    return redirect_to(url, notice="Skill added", dialog="add-skill")


@router.post("/departments/{department_id}/skills/{skill_id}/delete")
async def delete_skill_form(
    department_id: int,
    skill_id: int,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    url = f"/departments/{department_id}"
    try:
        skill_service.delete(db, skill_id)
    except StoreError as e:
        return redirect_to(url, notice=report(e, "removing skill"), dialog="add-skill")
    return redirect_to(url, notice="Skill removed", dialog="add-skill")


@router.post("/departments/{department_id}/skill-matrix")
async def save_skill_matrix(
    request: Request,
    department_id: int,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Save the edit-mode matrix, replacing the levels of every posted employee"""
    url = f"/departments/{department_id}"
    form = await request.form()
    matrix = build_matrix(db, department_id)
    posted = parse_matrix_form(form.multi_items(), matrix.skills)
    known_ids = {row.employee_id for row in matrix.rows}
    try:
        for employee_id, levels in posted.items():
            if employee_id in known_ids:
                skill_service.update_employee_skills(db, employee_id, levels)
    except StoreError as e:
        return redirect_to(url, notice=report(e, "saving skill matrix"), tab="skill-matrix", mode="edit")
    return redirect_to(url, notice="Skill matrix saved", tab="skill-matrix")


# Training management
@router.get("/trainings", response_class=HTMLResponse)
async def trainings_page(
    request: Request,
    tab: str = "trainings",
    training_date: Optional[date] = Query(None, alias="date"),
    department_id: Optional[int] = None,
    fiscal_year: Optional[int] = None,
    dialog: Optional[str] = None,
    notice: Optional[str] = None,
    context: SessionContext = Depends(get_session_context),
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Training schedule and training plan grid"""
    today = date.today()
    selected = training_date or today
    start_year = fiscal_year or current_fiscal_year(today)
    return templates.TemplateResponse(
        request,
        "trainings.html",
        {
            "context": context,
            "tab": "plan" if tab == "plan" else "trainings",
            "selected_date": selected,
            "today": today,
            "day_trainings": training_service.get_for_date(db, selected),
            "upcoming": training_service.get_upcoming(db, today),
            "trainings": training_service.get_all(db),
            "training_types": TRAINING_TYPES,
            "departments": department_service.get_all(db),
            "plans": training_plan_service.get_all(db, department_id),
            "department_id": department_id,
            "fiscal_year": start_year,
            "months": fiscal_year_months(start_year),
            "dialog": dialog,
            "notice": notice,
        },
    )


@router.post("/trainings")
async def schedule_training_form(
    title: str = Form(""),
    training_type: str = Form(TRAINING_TYPES[0]),
    training_date: str = Form(""),
    training_time: str = Form(""),
    duration: str = Form("60"),
    location: str = Form(""),
    participants: str = Form(""),
    description: str = Form(""),
    context: SessionContext = Depends(get_session_context),
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Schedule a training from the form"""
    if not title.strip() or not training_date or not training_time:
        return redirect_to("/trainings", notice="Title, date and time are required", dialog="schedule")
    try:
        data = TrainingCreate(
            title=title.strip(),
            training_type=training_type,
            training_date=training_date,
            training_time=training_time,
            duration=int(duration or 60),
            location=location,
            description=description,
            organizer=context.username,
            participants=parse_participants(participants),
        )
    except (ValidationError, ValueError) as e:
        logger.error(f"Invalid training form: {e}")
        return redirect_to("/trainings", notice="Please check the training details", dialog="schedule")

    fields = data.model_dump(exclude={"participants"})
    fields["training_type"] = data.training_type.value
    try:
        training_service.create(db, fields, data.participants)
    except StoreError as e:
        return redirect_to("/trainings", notice=report(e, "scheduling training"))
    return redirect_to("/trainings", notice="Training scheduled", date=data.training_date.isoformat())


@router.post("/trainings/plans")
async def add_plan_form(
    request: Request,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a plan with its planned months"""
    form = await request.form()
    topic = (form.get("training_topic") or "").strip()
    department_id = form.get("department_id")
    if not topic or not department_id:
        return redirect_to("/trainings", notice="Department and training topic are required", tab="plan", dialog="add-plan")
    try:
        training_plan_service.create(db, {
            "department_id": int(department_id),
            "training_topic": topic,
            "planned_months": form.getlist("planned_months"),
            "actual_months": [],
        })
    except ValueError:
        return redirect_to("/trainings", notice="Select a department", tab="plan", dialog="add-plan")
    except StoreError as e:
        return redirect_to("/trainings", notice=report(e, "adding training plan"), tab="plan")
    return redirect_to("/trainings", notice="Training plan added", tab="plan")


@router.post("/trainings/plans/{plan_id}/toggle")
async def toggle_plan_month_form(
    plan_id: int,
    month: str = Form(...),
    kind: str = Form(...),
    department_id: Optional[str] = Form(None),
    fiscal_year: Optional[str] = Form(None),
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Toggle one cell of the plan grid"""
    back = {"tab": "plan", "department_id": department_id, "fiscal_year": fiscal_year}
    try:
        training_plan_service.toggle_month(db, plan_id, month, kind)
    except StoreError as e:
        return redirect_to("/trainings", notice=report(e, f"toggling {kind} {month}"), **back)
    return redirect_to("/trainings", **back)
