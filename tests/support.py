"""Helpers for building isolated apps backed by in-memory SQLite."""

from fastapi import FastAPI

from catalog.core.config import Settings
from catalog.main import create_app
from catalog.models import Base
from catalog.models.user import User
from catalog.services.credentials import create_user

TEST_SECRET = "test-secret-key-for-the-catalog-suite-0123456789"


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "JWT_SECRET": TEST_SECRET,
        "DATABASE_URL": "sqlite://",
        "BCRYPT_ROUNDS": 4,
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_app(settings: Settings | None = None) -> FastAPI:
    """A fresh app with its own empty in-memory database."""
    app = create_app(settings or make_settings())
    Base.metadata.create_all(app.state.engine)
    return app


def add_user(
    app: FastAPI,
    email: str = "admin@x.com",
    password: str = "adminpass",
    role: str = "admin",
    name: str = "Admin",
) -> tuple[User, str]:
    """Insert a user straight into the store; returns (user, token)."""
    db = app.state.session_factory()
    try:
        user = create_user(db, app.state.password_hasher, name, email, password, role=role)
    finally:
        db.close()
    return user, app.state.token_service.issue(user.id, user.role)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
