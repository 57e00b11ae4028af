"""Password hashing and JWT issuance/verification for authentication."""

from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from inkpost.core.config import Settings

# Bcrypt cost (rounds); fixed so every stored hash has the same work factor.
BCRYPT_ROUNDS = 10

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

# Registered claims added at issuance and stripped again by verify().
_TIME_CLAIMS = ("iat", "exp")


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str | None) -> bool:
    """Verify a plain password against a stored hash. Accounts without a hash never match."""
    if not hashed:
        return False
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenError(Exception):
    """Raised when a token cannot be accepted."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class InvalidSignatureError(TokenError):
    """Token signature does not match the configured secret."""


class TokenExpiredError(TokenError):
    """Token is past its embedded expiry."""


class MalformedTokenError(TokenError):
    """Token cannot be decoded or lacks required claims."""


class TokenService:
    """
    Issue and verify signed, time-limited identity tokens.

    The secret is passed in explicitly so each instance (and each test) can
    use its own key; nothing here reads process-wide state.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must be non-empty")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock or (lambda: datetime.now(UTC))

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )

    def issue(self, claims: Mapping[str, Any], ttl: timedelta) -> str:
        """Sign claims with iat=now and exp=now+ttl."""
        now = self._clock()
        payload: dict[str, Any] = dict(claims)
        payload["iat"] = now
        payload["exp"] = now + ttl
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """
        Return the claims the token was issued with.
        Raises InvalidSignatureError, TokenExpiredError or MalformedTokenError.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired", e) from e
        except jwt.InvalidSignatureError as e:
            raise InvalidSignatureError("Token signature is invalid", e) from e
        except jwt.PyJWTError as e:
            raise MalformedTokenError("Token is malformed", e) from e
        return {k: v for k, v in payload.items() if k not in _TIME_CLAIMS}
