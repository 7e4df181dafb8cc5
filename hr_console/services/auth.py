"""
Authentication service

The backend's email/password authentication surface. Calls never raise to
the caller; every operation returns an AuthResult carrying either an error
or a session, and listeners subscribed to the client are notified of every
change of the signed-in state.
"""
import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional
import bcrypt
from jose import JWTError, jwt
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from hr_console.config import settings
from hr_console.models.user import User
from hr_console.schemas.user import TokenData
from hr_console.services.mailer import send_password_reset_email

logger = logging.getLogger(__name__)


class AuthEvent(str, enum.Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"
    USER_UPDATED = "USER_UPDATED"


class AuthError(Exception):
    """Failure reported by the authentication backend"""

    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.message = message
        self.status = status


@dataclass
class AuthUser:
    id: int
    email: str


@dataclass
class AuthSession:
    access_token: str
    expires_at: datetime
    user: AuthUser


@dataclass
class AuthResult:
    error: Optional[AuthError] = None
    session: Optional[AuthSession] = None

    @property
    def ok(self) -> bool:
        return self.error is None


AuthListener = Callable[[AuthEvent, Optional[AuthSession]], None]


BCRYPT_MAX_BYTES = 72
PASSWORD_TOO_LONG = f"Password should be at most {BCRYPT_MAX_BYTES} bytes"


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > BCRYPT_MAX_BYTES


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password; bcrypt never matches input beyond its 72-byte limit"""
    if password_too_long(plain_password):
        return False
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    """Hash password"""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def _require_key() -> str:
    if not settings.secret_key:
        raise AuthError("Authentication backend is not configured", status=503)
    return settings.secret_key


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT token

    Args:
        data: Data to encode in token
        expires_delta: Token expiration time

    Returns:
        JWT token string
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, _require_key(), algorithm=settings.algorithm)


def decode_token(token: str) -> TokenData:
    """
    Decode JWT token

    Raises:
        AuthError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(token, _require_key(), algorithms=[settings.algorithm])
    except JWTError:
        raise AuthError("Invalid or expired session", status=401) from None
    email = payload.get("sub")
    if email is None:
        raise AuthError("Invalid or expired session", status=401)
    return TokenData(email=email, user_id=payload.get("uid"), purpose=payload.get("purpose", "access"))


def token_expiry(token: str) -> datetime:
    claims = jwt.get_unverified_claims(token)
    return datetime.fromtimestamp(claims["exp"], tz=timezone.utc)


class Subscription:
    """Handle returned by AuthClient.subscribe"""

    def __init__(self, listeners: List[AuthListener], callback: AuthListener):
        self._listeners = listeners
        self._callback = callback

    def unsubscribe(self) -> None:
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


class AuthClient:
    """Email/password authentication against the users table"""

    def __init__(self, db: Session):
        self.db = db
        self._listeners: List[AuthListener] = []

    def subscribe(self, callback: AuthListener) -> Subscription:
        """Register a listener for auth state changes"""
        self._listeners.append(callback)
        return Subscription(self._listeners, callback)

    def _emit(self, event: AuthEvent, session: Optional[AuthSession]) -> None:
        logger.debug(f"Auth event: {event.value}")
        for callback in list(self._listeners):
            callback(event, session)

    def _new_session(self, user: User) -> AuthSession:
        token = create_access_token(data={"sub": user.email, "uid": user.id})
        return AuthSession(
            access_token=token,
            expires_at=token_expiry(token),
            user=AuthUser(id=user.id, email=user.email),
        )

    def _find_user(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def get_session(self, access_token: Optional[str]) -> AuthResult:
        """
        Validate the session held by the caller

        A session within the refresh window of its expiry is replaced by a
        fresh one and TOKEN_REFRESHED is emitted.

        Args:
            access_token: Token from the cookie or Authorization header

        Returns:
            AuthResult with the session, or without one when signed out
        """
        if not access_token:
            return AuthResult()
        try:
            token_data = decode_token(access_token)
            if token_data.purpose != "access":
                raise AuthError("Invalid or expired session", status=401)
            user = self._find_user(token_data.email)
            if user is None or not user.is_active:
                raise AuthError("User not found", status=401)
            session = AuthSession(
                access_token=access_token,
                expires_at=token_expiry(access_token),
                user=AuthUser(id=user.id, email=user.email),
            )
        except AuthError as e:
            logger.debug(f"Session rejected: {e.message}")
            return AuthResult(error=e)
        refresh_at = datetime.now(timezone.utc) + timedelta(minutes=settings.refresh_window_minutes)
        if session.expires_at <= refresh_at:
            return self.refresh_session(session)
        return AuthResult(session=session)

    def refresh_session(self, session: AuthSession) -> AuthResult:
        """Replace a valid session with one of full lifetime"""
        user = self._find_user(session.user.email)
        if user is None or not user.is_active:
            return AuthResult(error=AuthError("User not found", status=401))
        try:
            refreshed = self._new_session(user)
        except AuthError as e:
            return AuthResult(error=e)
        self._emit(AuthEvent.TOKEN_REFRESHED, refreshed)
        return AuthResult(session=refreshed)

    def sign_up(self, email: str, password: str) -> AuthResult:
        """Register an account; the caller signs in afterwards"""
        email = email.strip().lower()
        if len(password) < settings.min_password_length:
            return AuthResult(error=AuthError(
                f"Password should be at least {settings.min_password_length} characters"
            ))
        if password_too_long(password):
            return AuthResult(error=AuthError(PASSWORD_TOO_LONG))
        try:
            _require_key()
            if self._find_user(email):
                raise AuthError("User already registered")
            self.db.add(User(email=email, password_hash=get_password_hash(password), is_active=True))
            self.db.commit()
        except AuthError as e:
            return AuthResult(error=e)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error signing up {email}: {e}")
            return AuthResult(error=AuthError("Unable to create account", status=500))
        logger.info(f"User registered: {email}")
        return AuthResult()

    def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        """Check the credentials and open a session"""
        try:
            _require_key()
            user = self._find_user(email)
            if not user or not verify_password(password, user.password_hash):
                raise AuthError("Invalid login credentials")
            if not user.is_active:
                raise AuthError("User is disabled", status=403)
            user.last_sign_in_at = datetime.now(timezone.utc)
            self.db.commit()
            session = self._new_session(user)
        except AuthError as e:
            logger.info(f"Sign in failed for {email}: {e.message}")
            return AuthResult(error=e)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error signing in {email}: {e}")
            return AuthResult(error=AuthError("Unable to sign in", status=500))
        logger.info(f"User signed in: {user.email}")
        self._emit(AuthEvent.SIGNED_IN, session)
        return AuthResult(session=session)

    def sign_out(self, session: Optional[AuthSession] = None) -> AuthResult:
        """End the session; tokens are stateless so this only notifies listeners"""
        if session:
            logger.info(f"User signed out: {session.user.email}")
        self._emit(AuthEvent.SIGNED_OUT, None)
        return AuthResult()

    def reset_password_for_email(self, email: str, redirect_to: str) -> AuthResult:
        """
        Mail a recovery link

        Unknown addresses succeed without sending anything.

        Args:
            email: Account email
            redirect_to: Page the link points to; the token is appended as a query parameter
        """
        try:
            _require_key()
            user = self._find_user(email)
            if user is None:
                logger.info(f"Password reset requested for unknown email {email}")
                return AuthResult()
            token = create_access_token(
                data={"sub": user.email, "uid": user.id, "purpose": "recovery"},
                expires_delta=timedelta(minutes=settings.password_reset_expire_minutes),
            )
        except AuthError as e:
            return AuthResult(error=e)
        separator = "&" if "?" in redirect_to else "?"
        if not send_password_reset_email(user.email, f"{redirect_to}{separator}token={token}"):
            return AuthResult(error=AuthError("Unable to send recovery email", status=502))
        return AuthResult()

    def update_password(self, recovery_token: str, new_password: str) -> AuthResult:
        """Set a new password from a recovery link and open a session"""
        if len(new_password) < settings.min_password_length:
            return AuthResult(error=AuthError(
                f"Password should be at least {settings.min_password_length} characters"
            ))
        if password_too_long(new_password):
            return AuthResult(error=AuthError(PASSWORD_TOO_LONG))
        try:
            token_data = decode_token(recovery_token)
            if token_data.purpose != "recovery":
                raise AuthError("Invalid or expired recovery link", status=401)
            user = self._find_user(token_data.email)
            if user is None:
                raise AuthError("User not found", status=404)
            self._emit(AuthEvent.PASSWORD_RECOVERY, None)
            user.password_hash = get_password_hash(new_password)
            self.db.commit()
            session = self._new_session(user)
        except AuthError as e:
            return AuthResult(error=e)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error updating password: {e}")
            return AuthResult(error=AuthError("Unable to update password", status=500))
        logger.info(f"Password updated: {user.email}")
        self._emit(AuthEvent.USER_UPDATED, session)
        return AuthResult(session=session)
