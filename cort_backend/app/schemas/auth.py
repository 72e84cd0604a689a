"""
Authentication Pydantic schemas.

Defines request and response schemas for authentication endpoints and the
request-scoped AuthenticatedUser context.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Any, Dict, Optional
from cort_backend.app.models.enums import UserRole, UserStatus


class UserSignup(BaseModel):
    """
    Schema for user signup.
    
    Used by POST /auth/signup. Role and status are never client-supplied:
    new users are always ACTIVE EMPLOYEEs.
    """
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    full_name: str = Field(..., min_length=1, max_length=255, description="Full name")
    phone: Optional[str] = Field(default=None, max_length=32, description="Phone number (unique)")

    @field_validator("phone")
    @classmethod
    def blank_phone_to_none(cls, value):
        # Blank means no phone
        if value is None or not value.strip():
            return None
        return value.strip()


class UserLogin(BaseModel):
    """Schema for user login (POST /auth/login)."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="Password")


class UserProfile(BaseModel):
    """User profile as returned by signup, login and GET /auth/profile."""
    id: str
    email: str
    phone: Optional[str] = None
    full_name: str
    role: UserRole
    company_id: Optional[int] = None
    account_status: Optional[UserStatus] = None


class AuthResult(BaseModel):
    """Signup/login payload: the profile plus the provider session."""
    user: UserProfile
    session: Optional[Dict[str, Any]] = None


class AuthenticatedUser(BaseModel):
    """
    Request-scoped caller context.
    
    Built by the authentication gate from the verified subject id and the
    local directory record on every request; never cached.
    """
    id: str
    email: str
    phone: Optional[str] = None
    full_name: str
    role: UserRole
    company_id: Optional[int] = None
    account_status: Optional[UserStatus] = None

    model_config = {"frozen": True}
