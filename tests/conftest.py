"""Test environment: in-memory SQLite and a throwaway JWT secret, set before inkpost is imported."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("APP_ENV", "dev")
