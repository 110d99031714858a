"""Error taxonomy shared by services, auth gates and exception handlers.

Every error carries the message shown to the client and the HTTP status it
maps to. Authentication failures all map to the same 401 body; their class
name is what ends up in the server log.
"""


class CatalogError(Exception):
    """Base class for errors that map to a `{"message": ...}` response."""

    status_code: int = 400
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CatalogError):
    """Request body is missing fields or has invalid values."""

    status_code = 400
    default_message = "Invalid request"


class DuplicateEmail(CatalogError):
    """A user with this email already exists."""

    status_code = 400
    default_message = "Email already registered"


class InvalidCredentials(CatalogError):
    """Unknown email or wrong password; the two are indistinguishable on purpose."""

    status_code = 401
    default_message = "Invalid email or password"


class AuthenticationError(CatalogError):
    """Base for bearer-token failures. Clients only ever see "unauthorized"."""

    status_code = 401
    default_message = "unauthorized"
    client_message = "unauthorized"


class MissingToken(AuthenticationError):
    default_message = "No bearer token provided"


class InvalidToken(AuthenticationError):
    default_message = "Token signature or format is invalid"


class TokenExpired(AuthenticationError):
    default_message = "Token has expired"


class UserNotFound(AuthenticationError):
    default_message = "Token subject does not resolve to a user"


class Forbidden(CatalogError):
    status_code = 403
    default_message = "Access denied. Admin only."


class NotFound(CatalogError):
    status_code = 404
    default_message = "Not found"
