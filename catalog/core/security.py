"""Password hashing and JWT creation/verification for authentication."""

import uuid
from datetime import UTC, datetime, timedelta
from functools import cached_property
from typing import Any

import bcrypt
import jwt

from catalog.core.config import Settings
from catalog.core.errors import InvalidToken, TokenExpired

# bcrypt only looks at the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72

PASSWORD_MIN_LEN = 6
NAME_MAX_LEN = 255
EMAIL_MAX_LEN = 255


def utf8_length(value: str) -> int | None:
    """Byte length of value as UTF-8, or None when it cannot be encoded (lone surrogates)."""
    try:
        return len(value.encode("utf-8"))
    except UnicodeEncodeError:
        return None


class PasswordHasher:
    """One-way password hashing with bcrypt; cost is fixed at construction."""

    def __init__(self, rounds: int = 10) -> None:
        self.rounds = rounds

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(rounds=settings.BCRYPT_ROUNDS)

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Each call uses a fresh salt."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """
        Verify a plain password against a stored hash.
        Malformed hashes, unencodable input and passwords longer than bcrypt's
        72-byte window never match.
        """
        try:
            pw_bytes = plain_password.encode("utf-8")
            if len(pw_bytes) > BCRYPT_MAX_BYTES:
                return False
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False

    @cached_property
    def dummy_hash(self) -> str:
        """Hash at the same cost as real ones; checked when the email is unknown so timing matches."""
        return self.hash("catalog-timing-dummy")


class TokenService:
    """Issues and verifies signed, time-limited access tokens.

    Claims: sub (user id), role, iat, exp and a random jti. The role claim is
    informational; authorization always reads the role from the user store.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 10080) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def issue(self, sub: str, role: str, ttl: timedelta | None = None) -> str:
        """Create a JWT for sub; ttl overrides the configured lifetime."""
        now = datetime.now(UTC)
        expire = now + (self.ttl if ttl is None else ttl)
        payload: dict[str, Any] = {
            "sub": str(sub),
            "role": role,
            "iat": now,
            "exp": expire,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """
        Decode and validate a JWT; return its claims.
        Raises TokenExpired when the signature is good but exp has passed,
        InvalidToken for anything else.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired() from e
        except jwt.PyJWTError as e:
            raise InvalidToken() from e
        if not payload.get("sub"):
            raise InvalidToken("Token has no subject")
        return payload
