"""
Authentication router
"""
from fastapi import APIRouter, Depends, HTTPException, status, Request, Response
from sqlalchemy.orm import Session
from hr_console.database import get_db
from hr_console.models.user import User
from hr_console.schemas.user import (
    Credentials, PasswordResetRequest, PasswordResetConfirm, Token, UserResponse
)
from hr_console.services.auth import AuthClient, AuthResult, AuthUser
from hr_console.services.session import (
    SessionContext, get_current_user, get_session_context, set_session_cookie
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def reset_redirect_target(request: Request) -> str:
    """Recovery links point back at this deployment's reset page"""
    return f"{str(request.base_url).rstrip('/')}/auth/reset-password"


def _raise_for(result: AuthResult) -> None:
    if result.error:
        raise HTTPException(status_code=result.error.status, detail=result.error.message)


def _token(response: Response, result: AuthResult) -> Token:
    set_session_cookie(response, result.session)
    return Token(access_token=result.session.access_token, expires_at=result.session.expires_at)


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    credentials: Credentials,
    db: Session = Depends(get_db)
):
    """
    Register an account with email and password
    """
    _raise_for(AuthClient(db).sign_up(credentials.email, credentials.password))
    return {"message": "Account created successfully"}


@router.post("/login", response_model=Token)
async def login(
    credentials: Credentials,
    response: Response,
    context: SessionContext = Depends(get_session_context)
):
    """
    Login endpoint

    Returns JWT access token and sets it in cookie
    """
    result = context.sign_in(credentials.email, credentials.password)
    if result.error:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.error.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _token(response, result)


@router.post("/logout")
async def logout(
    response: Response,
    context: SessionContext = Depends(get_session_context)
):
    """
    Logout endpoint - clears cookie
    """
    context.sign_out()
    response.delete_cookie(key="access_token")
    return {"message": "Logged out successfully"}


@router.post("/refresh", response_model=Token)
async def refresh(
    response: Response,
    current_user: AuthUser = Depends(get_current_user),
    context: SessionContext = Depends(get_session_context)
):
    """
    Exchange the current session for a fresh one
    """
    result = context.client.refresh_session(context.session)
    _raise_for(result)
    return _token(response, result)


@router.post("/reset-password")
async def request_password_reset(
    reset_data: PasswordResetRequest,
    request: Request,
    context: SessionContext = Depends(get_session_context)
):
    """
    Send a password recovery email

    The answer is the same whether or not the address is registered.
    """
    _raise_for(context.reset_password(reset_data.email, reset_redirect_target(request)))
    return {"message": "Password reset email sent"}


@router.post("/reset-password/confirm", response_model=Token)
async def confirm_password_reset(
    reset_data: PasswordResetConfirm,
    response: Response,
    context: SessionContext = Depends(get_session_context)
):
    """
    Set a new password from a recovery token and sign in
    """
    result = context.client.update_password(reset_data.token, reset_data.new_password)
    _raise_for(result)
    return _token(response, result)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get current user information
    """
    user = db.query(User).filter(User.id == current_user.id).first()
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.model_validate(user)
