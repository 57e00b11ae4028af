"""SQLAlchemy declarative Base shared by users, posts, comments and likes."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""
