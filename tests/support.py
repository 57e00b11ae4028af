"""Shared helpers for tests: isolated SQLite databases and an app client with overrides."""

from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from inkpost.core.database import make_engine
from inkpost.core.security import TokenService
from inkpost.models import Base, User
from inkpost.services.accounts import identity_claims


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with all tables; one shared connection for every session."""
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_client(session_factory: sessionmaker, tokens: TokenService) -> TestClient:
    """TestClient whose get_db and get_token_service use the given database and secret."""
    from inkpost.api.v1.auth import get_token_service
    from inkpost.core.database import get_db
    from inkpost.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: tokens
    return TestClient(app)


def clear_overrides() -> None:
    from inkpost.main import app

    app.dependency_overrides.clear()


def add_user(
    db: Session,
    username: str,
    email: str | None = None,
    role: str = "user",
) -> User:
    """Insert a user directly (no password) and return it."""
    user = User(
        username=username,
        email=email or f"{username}@example.com",
        role=role,
        is_google_user=False,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_header(tokens: TokenService, user: User, bearer: bool = True) -> dict[str, str]:
    token = tokens.issue(identity_claims(user), timedelta(hours=1))
    return {"Authorization": f"Bearer {token}" if bearer else token}
