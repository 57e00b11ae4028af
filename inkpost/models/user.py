"""ORM model for application users (credentials, Google identity and role)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from inkpost.models.base import Base


class User(Base):
    """
    User account for local or Google sign-in and role-based access control.

    password_hash is NULL for accounts created through Google login.
    role: 'admin' or 'user'
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=True)
    role = Column(String(32), nullable=False, default="user")
    google_id = Column(String(255), nullable=True, unique=True)
    is_google_user = Column(Boolean, nullable=False, default=False)
    avatar = Column(String(2048), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
