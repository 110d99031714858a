"""Dependencies that hand out the process-wide objects built in create_app."""

from fastapi import Request

from catalog.core.config import Settings
from catalog.core.security import PasswordHasher, TokenService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service
