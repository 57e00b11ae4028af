"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# Loose shape check only; deliverability is not verified.
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    """New local account."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN, description="Email")
    password: str = Field(..., min_length=6, max_length=128, description="Password")


class LoginRequest(BaseModel):
    """Credentials for email/password login."""

    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN, description="Email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class GoogleLoginRequest(BaseModel):
    """Google identity claims, already verified by the caller."""

    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    name: str = Field(..., min_length=1, max_length=255, description="Google display name")
    googleId: str = Field(..., min_length=1, max_length=255, description="Google account id")
    picture: str | None = Field(default=None, max_length=2048, description="Avatar URL")


class PublicUser(BaseModel):
    """Public-safe view of an account (never includes the password hash)."""

    id: int
    username: str
    email: str


class OAuthUser(BaseModel):
    """User view returned by Google login."""

    id: int
    name: str
    email: str
    picture: str | None = None


class RegisterResponse(BaseModel):
    success: bool = True
    user: PublicUser


class LoginResponse(BaseModel):
    """Successful login: bearer token plus the public user view."""

    success: bool = True
    token: str = Field(..., description="JWT; send as 'Authorization: Bearer <token>'")
    user: PublicUser


class GoogleLoginResponse(BaseModel):
    success: bool = True
    token: str
    user: OAuthUser


class UserProfile(BaseModel):
    """Full account record for GET /auth/user, minus the password hash."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    username: str
    email: str
    role: str
    avatar: str | None = None
    googleId: str | None = Field(default=None, validation_alias="google_id")
    isGoogleUser: bool = Field(default=False, validation_alias="is_google_user")
    createdAt: datetime | None = Field(default=None, validation_alias="created_at")


class CurrentUser(BaseModel):
    """Authenticated identity decoded from a verified token."""

    id: int
    name: str | None = None
    email: str | None = None
    avatar: str | None = None
    role: str = "user"
