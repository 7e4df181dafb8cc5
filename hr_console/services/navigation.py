"""
Top-level screen state
"""
import enum
from typing import Optional


class Screen(str, enum.Enum):
    HOME = "home"
    AUTH = "auth"
    DASHBOARD = "dashboard"
    LOADING = "loading"


SCREEN_PATHS = {
    Screen.HOME: "/",
    Screen.AUTH: "/auth",
    Screen.DASHBOARD: "/dashboard",
}

DASHBOARD_TABS = ("overview", "departments", "trainings")


def enter_dashboard(current: Screen) -> Screen:
    """Home page call to action"""
    return Screen.AUTH if current == Screen.HOME else current


def auth_success(current: Screen) -> Screen:
    return Screen.DASHBOARD if current == Screen.AUTH else current


def logout(current: Screen) -> Screen:
    return Screen.HOME if current == Screen.DASHBOARD else current


def resolve_screen(requested: Screen, context) -> Screen:
    """
    Screen to show for a request, once the session is known

    While the session is loading nothing else is shown. A signed-in user
    always lands on the dashboard; a signed-out request for the dashboard
    goes to the sign-in screen.
    """
    if context.loading:
        return Screen.LOADING
    if context.is_signed_in:
        return Screen.DASHBOARD
    if requested == Screen.DASHBOARD:
        return Screen.AUTH
    return requested


def dashboard_tab(tab: Optional[str]) -> str:
    return tab if tab in DASHBOARD_TABS else DASHBOARD_TABS[0]
