"""
Authentication schemas
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class Credentials(BaseModel):
    """Schema for sign up and sign in"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class PasswordResetRequest(BaseModel):
    """Schema for requesting a recovery email"""
    email: EmailStr


class PasswordResetConfirm(BaseModel):
    """Schema for setting a new password from a recovery link"""
    token: str
    new_password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Schema for user response"""
    id: int
    email: str
    is_active: bool
    created_at: Optional[datetime]
    last_sign_in_at: Optional[datetime]

    class Config:
        from_attributes = True


class Token(BaseModel):
    """Schema for token response"""
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime


class TokenData(BaseModel):
    """Schema for token data"""
    email: Optional[str] = None
    user_id: Optional[int] = None
    purpose: str = "access"
