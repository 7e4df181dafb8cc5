"""
Per-request session context
"""
import logging
from typing import Optional
from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from hr_console.config import settings
from hr_console.database import get_db
from hr_console.services.auth import AuthClient, AuthEvent, AuthResult, AuthSession, AuthUser

logger = logging.getLogger(__name__)

# OAuth2 scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


class SessionContext:
    """
    Current user and session of one request

    The context listens to its client and takes user and session from every
    auth event. Its sign-in and sign-out methods only call the client.
    """

    def __init__(self, client: AuthClient):
        self.client = client
        self.user: Optional[AuthUser] = None
        self.session: Optional[AuthSession] = None
        self.loading = True
        self._subscription = client.subscribe(self._on_auth_change)

    def _on_auth_change(self, event: AuthEvent, session: Optional[AuthSession]) -> None:
        if event == AuthEvent.PASSWORD_RECOVERY:
            return
        self.session = session
        self.user = session.user if session else None

    def initialize(self, access_token: Optional[str]) -> AuthResult:
        """Load whatever session the caller holds and finish loading"""
        result = self.client.get_session(access_token)
        if result.session and not (self.session and self.session.user.id == result.session.user.id):
            self.session = result.session
            self.user = result.session.user
        self.loading = False
        return result

    @property
    def is_signed_in(self) -> bool:
        return self.user is not None

    @property
    def username(self) -> str:
        """Email address up to the "@", or "User" when signed out"""
        if self.user and self.user.email:
            return self.user.email.split("@")[0]
        return "User"

    def sign_up(self, email: str, password: str) -> AuthResult:
        return self.client.sign_up(email, password)

    def sign_in(self, email: str, password: str) -> AuthResult:
        return self.client.sign_in_with_password(email, password)

    def sign_out(self) -> AuthResult:
        return self.client.sign_out(self.session)

    def reset_password(self, email: str, redirect_to: str) -> AuthResult:
        return self.client.reset_password_for_email(email, redirect_to)

    def close(self) -> None:
        self._subscription.unsubscribe()


def set_session_cookie(response: Response, session: AuthSession) -> None:
    response.set_cookie(
        key="access_token",
        value=session.access_token,
        httponly=True,
        max_age=settings.access_token_expire_minutes * 60,
        samesite="lax"
    )


def get_session_context(
    request: Request,
    response: Response,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
):
    """
    Build the session context of the request

    The token is read from the Authorization header first, then from the
    access_token cookie. A refreshed cookie session is written back.
    """
    cookie_token = request.cookies.get("access_token")
    context = SessionContext(AuthClient(db))
    context.initialize(token or cookie_token)
    if not token and context.session and context.session.access_token != cookie_token:
        set_session_cookie(response, context.session)
    try:
        yield context
    finally:
        context.close()


def get_current_user(context: SessionContext = Depends(get_session_context)) -> AuthUser:
    """
    Get current authenticated user

    Raises:
        HTTPException: If no one is signed in
    """
    if not context.is_signed_in:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return context.user
