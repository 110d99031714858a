"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Self-registration. Presence and length are checked by the handler so errors stay 400."""

    name: str | None = None
    email: str | None = None
    password: str | None = None
    # Accepted for compatibility with older clients; never honoured.
    role: str | None = None


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = None
    password: str | None = None


class CurrentUser(BaseModel):
    """Public-safe user projection (no password hash); also the authenticated identity."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: str


class AuthResponse(BaseModel):
    """Token plus the user it was issued for."""

    message: str
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
    user: CurrentUser


class VerifyResponse(BaseModel):
    user: CurrentUser


class RoleUpdateRequest(BaseModel):
    role: str = Field(..., description="'user' or 'admin'")


class UserRoleResponse(BaseModel):
    message: str
    user: CurrentUser


class UsersListResponse(BaseModel):
    """Response for GET /auth/users (admin only)."""

    users: list[CurrentUser]
