"""Pydantic request/response schemas."""

from catalog.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    RoleUpdateRequest,
    UserRoleResponse,
    UsersListResponse,
    VerifyResponse,
)
from catalog.schemas.books import (
    BookCreateRequest,
    BookMutationResponse,
    BookOut,
    BookUpdateRequest,
)
from catalog.schemas.common import MessageResponse
from catalog.schemas.health import HealthResponse

__all__ = [
    "AuthResponse",
    "BookCreateRequest",
    "BookMutationResponse",
    "BookOut",
    "BookUpdateRequest",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "RoleUpdateRequest",
    "UserRoleResponse",
    "UsersListResponse",
    "VerifyResponse",
]
