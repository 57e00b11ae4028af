"""Pydantic request/response schemas."""

from inkpost.schemas.auth import (
    CurrentUser,
    GoogleLoginRequest,
    GoogleLoginResponse,
    LoginRequest,
    LoginResponse,
    PublicUser,
    RegisterRequest,
    RegisterResponse,
    UserProfile,
)
from inkpost.schemas.blog import (
    CommentCreateRequest,
    MessageResponse,
    PostCreateRequest,
    PostOut,
)
from inkpost.schemas.health import HealthResponse

__all__ = [
    "CommentCreateRequest",
    "CurrentUser",
    "GoogleLoginRequest",
    "GoogleLoginResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PostCreateRequest",
    "PostOut",
    "PublicUser",
    "RegisterRequest",
    "RegisterResponse",
    "UserProfile",
]
