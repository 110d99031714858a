"""Registration, login and the auth gates (get_current_user, require_admin).

The gates form an ordered pipeline of FastAPI dependencies: require_admin
depends on get_current_user, so it can never run without an authenticated
identity. Each gate either returns the enriched identity or raises, which
short-circuits the request before the handler runs.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from catalog.api.deps import get_password_hasher, get_token_service
from catalog.core.database import get_db
from catalog.core.errors import Forbidden, MissingToken, UserNotFound
from catalog.core.security import PasswordHasher, TokenService
from catalog.models.user import ROLE_ADMIN
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
from catalog.services import credentials

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    bearer: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """Dependency: require a valid Bearer JWT whose subject still exists. Raises 401 otherwise."""
    if bearer is None:
        raise MissingToken()
    claims = tokens.verify(bearer.credentials)
    user = credentials.get_user_by_id(db, claims["sub"])
    if user is None:
        raise UserNotFound()
    current = CurrentUser.model_validate(user)
    request.state.user = current
    return current


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != ROLE_ADMIN:
        logger.info("Admin check failed: user_id=%s role=%s", current_user.id, current_user.role)
        raise Forbidden()
    return current_user


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """
    Create a plain user account and return a token for it.
    A role in the body is ignored; admins are appointed via PATCH /users/{id}/role.
    """
    user = credentials.register_user(
        db,
        hasher,
        name=body.name,
        email=body.email,
        password=body.password,
        requested_role=body.role,
    )
    return AuthResponse(
        message="User registered successfully",
        token=tokens.issue(user.id, user.role),
        user=CurrentUser.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Unknown email and wrong password produce the same 401.
    """
    user = credentials.authenticate_user(db, hasher, body.email, body.password)
    return AuthResponse(
        message="Login successful",
        token=tokens.issue(user.id, user.role),
        user=CurrentUser.model_validate(user),
    )


@router.get("/verify", response_model=VerifyResponse)
def verify(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> VerifyResponse:
    """Return the identity behind the bearer token."""
    return VerifyResponse(user=current_user)


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users (admin only)."""
    return UsersListResponse(
        users=[CurrentUser.model_validate(u) for u in credentials.list_users(db)]
    )


@router.patch("/users/{user_id}/role", response_model=UserRoleResponse)
def update_user_role(
    user_id: str,
    body: RoleUpdateRequest,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserRoleResponse:
    """Grant or revoke the admin role (admin only)."""
    user = credentials.assign_role(db, user_id, body.role, assigned_by=admin.id)
    return UserRoleResponse(
        message="Role updated successfully",
        user=CurrentUser.model_validate(user),
    )
