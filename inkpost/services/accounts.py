"""Account flow: registration, email/password login, Google login and profile lookup."""

import logging
from datetime import timedelta
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkpost.core.security import TokenService, hash_password, verify_password
from inkpost.models import User

logger = logging.getLogger(__name__)

# Google-issued sessions always last one day.
OAUTH_TOKEN_TTL = timedelta(hours=24)

CONFLICT_MESSAGE = "User already exists with this email or username"
# Shared by every login failure so callers cannot tell which check failed.
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class AccountError(Exception):
    """Base class for account flow failures that map to a client error."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConflictError(AccountError):
    """An account with the same email or username already exists."""

    def __init__(self, message: str = CONFLICT_MESSAGE) -> None:
        super().__init__(message)


class InvalidCredentialsError(AccountError):
    """Login failed (unknown email or wrong password; deliberately not distinguished)."""

    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS_MESSAGE)


class UserNotFoundError(AccountError):
    """The authenticated user id no longer resolves to an account."""

    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message)


# Compared against when there is no stored hash (unknown email or Google-only
# account) so every failed login pays for exactly one bcrypt check.
_DUMMY_HASH = hash_password("inkpost-timing-equalizer")


def identity_claims(user: User) -> dict[str, Any]:
    """Claims embedded in every identity token issued for user."""
    return {
        "sub": str(user.id),
        "name": user.username,
        "email": user.email,
        "avatar": user.avatar,
        "role": user.role,
    }


def _commit_new_account(db: Session, user: User) -> None:
    """Persist user; a unique-constraint race at commit becomes ConflictError."""
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Account creation lost a uniqueness race: %s", type(e).__name__)
        raise ConflictError() from e
    db.refresh(user)


def register(db: Session, username: str, email: str, password: str) -> User:
    """
    Create a local account with a bcrypt-hashed password.

    Raises ConflictError if the email or the username is already taken
    (one combined lookup). No token is issued here.
    """
    existing = (
        db.query(User)
        .filter(or_(User.email == email, User.username == username))
        .first()
    )
    if existing is not None:
        raise ConflictError()

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        role="user",
        is_google_user=False,
    )
    _commit_new_account(db, user)
    logger.info("Registered user", extra={"user_id": user.id})
    return user


def login(
    db: Session,
    tokens: TokenService,
    email: str,
    password: str,
    ttl: timedelta,
) -> tuple[User, str]:
    """
    Authenticate by email and password; return the user and a fresh token.

    Raises InvalidCredentialsError for an unknown email, an account without a
    local password, or a wrong password alike.
    """
    user = db.query(User).filter(User.email == email).first()
    stored_hash = user.password_hash if user is not None else None
    matched = verify_password(password, stored_hash or _DUMMY_HASH)
    if user is None or not stored_hash or not matched:
        raise InvalidCredentialsError()

    token = tokens.issue(identity_claims(user), ttl)
    logger.info("User logged in", extra={"user_id": user.id})
    return user, token


def oauth_login(
    db: Session,
    tokens: TokenService,
    google_id: str,
    email: str,
    name: str,
    picture: str | None = None,
) -> tuple[User, str]:
    """
    Find or create the account for a verified Google identity and issue a 24h token.

    Existing accounts get the Google id attached if missing and the avatar
    refreshed when a different picture is supplied.
    """
    user = db.query(User).filter(User.email == email).first()

    if user is None:
        user = User(
            username=name,
            email=email,
            google_id=google_id,
            is_google_user=True,
            avatar=picture,
            role="user",
        )
        _commit_new_account(db, user)
        logger.info("Created account from Google login", extra={"user_id": user.id})
    else:
        changed = linked = False
        if not user.google_id:
            user.google_id = google_id
            user.is_google_user = True
            changed = linked = True
        if picture and user.avatar != picture:
            user.avatar = picture
            changed = True
        if changed:
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise ConflictError("Google account is already linked to another user") from e
            db.refresh(user)
            if linked:
                logger.info("Linked Google id to account", extra={"user_id": user.id})

    token = tokens.issue(identity_claims(user), OAUTH_TOKEN_TTL)
    return user, token


def get_user(db: Session, user_id: int) -> User:
    """Return the account for user_id. Raises UserNotFoundError if it no longer exists."""
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise UserNotFoundError()
    return user
