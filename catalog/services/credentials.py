"""Credential store: user lookup, registration, login and role assignment."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog.core.errors import DuplicateEmail, InvalidCredentials, NotFound, ValidationError
from catalog.core.security import (
    BCRYPT_MAX_BYTES,
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MIN_LEN,
    PasswordHasher,
    utf8_length,
)
from catalog.models.user import ROLE_USER, ROLES, User

logger = logging.getLogger(__name__)


def get_user_by_id(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Exact, case-sensitive match on the stored email."""
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def validate_registration(name: str | None, email: str | None, password: str | None) -> None:
    """Raise ValidationError unless name, email and password are acceptable."""
    if not name or not name.strip() or not email or not email.strip() or not password:
        raise ValidationError("All fields are required")
    if len(password) < PASSWORD_MIN_LEN:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LEN} characters")
    if any(utf8_length(value) is None for value in (name, email, password)):
        raise ValidationError("Fields must be valid UTF-8 text")
    if utf8_length(password) > BCRYPT_MAX_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    if len(name) > NAME_MAX_LEN or len(email) > EMAIL_MAX_LEN:
        raise ValidationError("Name and email must be at most 255 characters")


def create_user(
    db: Session,
    hasher: PasswordHasher,
    name: str,
    email: str,
    password: str,
    role: str = ROLE_USER,
) -> User:
    """
    Persist a new user with a hashed password.

    The lookup gives a clean error in the common case; the unique index on
    email settles concurrent registrations (the loser gets DuplicateEmail).
    """
    if role not in ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")
    if get_user_by_email(db, email) is not None:
        raise DuplicateEmail()
    user = User(
        name=name,
        email=email,
        password_hash=hasher.hash(password),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateEmail() from e
    db.refresh(user)
    return user


def register_user(
    db: Session,
    hasher: PasswordHasher,
    name: str | None,
    email: str | None,
    password: str | None,
    requested_role: str | None = None,
) -> User:
    """Self-registration. Always creates a plain user; requested_role is ignored."""
    validate_registration(name, email, password)
    if requested_role and requested_role != ROLE_USER:
        logger.warning(
            "Ignoring self-registration role request: requested_role=%r",
            requested_role[:32],
        )
    user = create_user(db, hasher, name.strip(), email, password, role=ROLE_USER)
    logger.info("User registered: id=%s", user.id)
    return user


def authenticate_user(
    db: Session,
    hasher: PasswordHasher,
    email: str | None,
    password: str | None,
) -> User:
    """
    Check email/password and return the user.
    Raises InvalidCredentials for both unknown email and wrong password.
    """
    if not email or not password:
        raise ValidationError("Email and password are required")
    # An email that cannot be encoded can never be stored, so it is simply unknown.
    user = get_user_by_email(db, email) if utf8_length(email) is not None else None
    if user is None:
        hasher.verify(password, hasher.dummy_hash)
        raise InvalidCredentials()
    if not hasher.verify(password, user.password_hash):
        raise InvalidCredentials()
    return user


def list_users(db: Session) -> list[User]:
    return list(db.execute(select(User).order_by(User.created_at)).scalars())


def assign_role(db: Session, user_id: str, role: str, *, assigned_by: str | None = None) -> User:
    """Privileged: change a user's role. Callers must already have checked the caller is admin."""
    if role not in ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")
    user = get_user_by_id(db, user_id)
    if user is None:
        raise NotFound("User not found")
    if user.role != role:
        user.role = role
        db.commit()
        db.refresh(user)
    logger.info(
        "Role assigned: user_id=%s role=%s assigned_by=%s",
        user.id,
        role,
        assigned_by or "cli",
    )
    return user
