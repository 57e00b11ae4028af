"""Alembic environment for the users/blog schema; URL and metadata come from inkpost."""

from logging.config import fileConfig

from alembic import context
from sqlalchemy.pool import NullPool

from inkpost.core.config import settings
from inkpost.core.database import make_engine

# Registers users, blog_posts, comments and post_likes on Base.metadata.
from inkpost.models import Base

config = context.config
# fileConfig raises KeyError when alembic.ini has no logging sections.
if config.config_file_name is not None:
    try:
        fileConfig(config.config_file_name)
    except KeyError:
        pass


def _configure(**kwargs) -> None:
    context.configure(target_metadata=Base.metadata, **kwargs)
    with context.begin_transaction():
        context.run_migrations()


def run_offline() -> None:
    """Emit SQL for settings.DATABASE_URL without connecting."""
    _configure(
        url=settings.DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )


def run_online() -> None:
    """Apply migrations over a single unpooled connection."""
    with make_engine(settings.DATABASE_URL, poolclass=NullPool).connect() as connection:
        # SQLite cannot ALTER most constraints in place.
        _configure(
            connection=connection,
            render_as_batch=connection.dialect.name == "sqlite",
        )


if context.is_offline_mode():
    run_offline()
else:
    run_online()
