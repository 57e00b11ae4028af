"""Account endpoints and auth dependencies (get_token_service, get_current_user)."""

import logging
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inkpost.core.config import get_settings
from inkpost.core.database import get_db
from inkpost.core.security import TokenError, TokenService
from inkpost.schemas.auth import (
    CurrentUser,
    GoogleLoginRequest,
    GoogleLoginResponse,
    LoginRequest,
    LoginResponse,
    OAuthUser,
    PublicUser,
    RegisterRequest,
    RegisterResponse,
    UserProfile,
)
from inkpost.services import accounts

logger = logging.getLogger(__name__)
router = APIRouter()

# Raw header so both "Bearer <token>" and a bare token are accepted.
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)
BEARER_PREFIX = "Bearer "

NO_TOKEN_MESSAGE = "No token, authorization denied"
INVALID_TOKEN_MESSAGE = "Token is not valid"


def get_token_service() -> TokenService:
    """Dependency: token service keyed by the configured JWT secret."""
    return TokenService.from_settings(get_settings())


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    request: Request,
    authorization: Annotated[str | None, Depends(authorization_header)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """
    Dependency: require a valid token in the Authorization header.
    Raises 401 if missing or invalid; otherwise attaches the identity to request.state.user.
    """
    if not authorization:
        raise _unauthorized(NO_TOKEN_MESSAGE)
    token = (
        authorization[len(BEARER_PREFIX):]
        if authorization.startswith(BEARER_PREFIX)
        else authorization
    )
    try:
        claims = tokens.verify(token)
    except TokenError as e:
        raise _unauthorized(INVALID_TOKEN_MESSAGE) from e
    try:
        user_id = int(claims["sub"])
    except (KeyError, TypeError, ValueError):
        raise _unauthorized(INVALID_TOKEN_MESSAGE)

    current_user = CurrentUser(
        id=user_id,
        name=claims.get("name"),
        email=claims.get("email"),
        avatar=claims.get("avatar"),
        role=claims.get("role") or "user",
    )
    request.state.user = current_user
    return current_user


@router.post("/register", response_model=RegisterResponse)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> RegisterResponse:
    """Create a local account. Returns the public user view; sign in with /login for a token."""
    try:
        user = accounts.register(db, body.username, body.email, body.password)
    except accounts.ConflictError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except SQLAlchemyError as e:
        logger.exception("Error in register: %s", type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error during registration",
        ) from e
    return RegisterResponse(
        user=PublicUser(id=user.id, username=user.username, email=user.email)
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT and the public user view.
    Include the token in the Authorization header as: Bearer <token>
    """
    ttl = timedelta(minutes=get_settings().JWT_EXPIRE_MINUTES)
    try:
        user, token = accounts.login(db, tokens, body.email, body.password, ttl)
    except accounts.InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except SQLAlchemyError as e:
        logger.exception("Error in login: %s", type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error during login",
        ) from e
    return LoginResponse(
        token=token,
        user=PublicUser(id=user.id, username=user.username, email=user.email),
    )


@router.get("/user", response_model=UserProfile)
def get_user(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserProfile:
    """Return the signed-in user's account (without the password hash)."""
    try:
        user = accounts.get_user(db, current_user.id)
    except accounts.UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except SQLAlchemyError as e:
        logger.exception("Error fetching user %s", current_user.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error fetching user data",
        ) from e
    return UserProfile.model_validate(user)


@router.post("/google-login", response_model=GoogleLoginResponse)
def google_login(
    body: GoogleLoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> GoogleLoginResponse:
    """
    Sign in with a Google identity the client has already verified.
    Creates the account on first use; always returns a token valid for 24 hours.
    """
    try:
        user, token = accounts.oauth_login(
            db,
            tokens,
            google_id=body.googleId,
            email=body.email,
            name=body.name,
            picture=body.picture,
        )
    except accounts.ConflictError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except SQLAlchemyError as e:
        logger.exception("Error in Google login: %s", type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error",
        ) from e
    return GoogleLoginResponse(
        token=token,
        user=OAuthUser(id=user.id, name=user.username, email=user.email, picture=user.avatar),
    )
