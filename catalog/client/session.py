"""Client-side session store.

State lives in an immutable SessionState that is replaced only by the
store's actions (restore, login, register, logout, fetch_books, submit_book,
update_book, delete_book, set_role, set_search, switch_form). Subscribers
receive the new state after every transition, so anything rendered from it
stays a pure function of the state.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from catalog.client.api import CatalogApi, CatalogApiError

logger = logging.getLogger(__name__)

PASSWORD_MIN_LEN = 6
SESSION_EXPIRED_MESSAGE = "Session expired. Please sign in again."
ADMIN_ONLY_MESSAGE = "Access denied. Admin only."


@dataclass(frozen=True)
class SessionState:
    token: str | None = None
    user: dict[str, Any] | None = None
    books: tuple[dict[str, Any], ...] = field(default_factory=tuple)
    search: str = ""
    auth_form: str = "login"
    error: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.user.get("role") == "admin"

    @property
    def view(self) -> str:
        """Which screen the state calls for: login, register, admin_dashboard or user_dashboard."""
        if not self.is_authenticated:
            return self.auth_form
        return "admin_dashboard" if self.is_admin else "user_dashboard"

    @property
    def visible_books(self) -> tuple[dict[str, Any], ...]:
        """Books matching the search term on title or author (case-insensitive)."""
        term = self.search.strip().lower()
        if not term:
            return self.books
        return tuple(
            b
            for b in self.books
            if term in (b.get("title") or "").lower() or term in (b.get("author") or "").lower()
        )


class TokenStorage:
    """Keeps the token in a file between runs, readable only by the owner."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def load(self) -> str | None:
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return token or None

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token, encoding="utf-8")
        self.path.chmod(0o600)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


Listener = Callable[[SessionState], None]


class SessionStore:
    """Holds the current identity and book list; the only writer of SessionState."""

    def __init__(self, api: CatalogApi, storage: TokenStorage | None = None) -> None:
        self._api = api
        self._storage = storage
        self._state = SessionState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)

    def _fail(self, e: CatalogApiError, fallback: str) -> bool:
        if e.status_code == 401 and self._state.token is not None:
            self._clear_identity(error=SESSION_EXPIRED_MESSAGE)
        else:
            self._set(error=e.message or fallback)
        return False

    def _clear_identity(self, error: str | None = None) -> None:
        if self._storage is not None:
            self._storage.clear()
        self._set(token=None, user=None, books=(), search="", error=error)

    def _signed_in(self, data: dict[str, Any]) -> bool:
        token = data["token"]
        if self._storage is not None:
            self._storage.save(token)
        self._set(token=token, user=data["user"], error=None)
        return True

    # Identity actions

    def restore(self) -> bool:
        """Re-verify a stored token. Any failure drops it and leaves the session signed out."""
        token = self._storage.load() if self._storage is not None else self._state.token
        if not token:
            return False
        try:
            data = self._api.verify(token)
        except CatalogApiError as e:
            logger.info("Stored token rejected (%s); signing out", e.message)
            self._clear_identity()
            return False
        self._set(token=token, user=data["user"], error=None)
        return True

    def login(self, email: str, password: str) -> bool:
        if not email or not password:
            self._set(error="Email and password are required")
            return False
        try:
            data = self._api.login(email, password)
        except CatalogApiError as e:
            self._set(error=e.message or "Login failed")
            return False
        return self._signed_in(data)

    def register(self, name: str, email: str, password: str) -> bool:
        if not name or not email or not password:
            self._set(error="All fields are required")
            return False
        if len(password) < PASSWORD_MIN_LEN:
            self._set(error=f"Password must be at least {PASSWORD_MIN_LEN} characters")
            return False
        try:
            data = self._api.register(name, email, password)
        except CatalogApiError as e:
            self._set(error=e.message or "Registration failed")
            return False
        return self._signed_in(data)

    def logout(self) -> None:
        self._clear_identity()

    def switch_form(self, form: str) -> None:
        if form not in ("login", "register"):
            raise ValueError(f"Unknown form: {form!r}")
        self._set(auth_form=form, error=None)

    # Book actions

    def fetch_books(self) -> bool:
        try:
            books = self._api.list_books()
        except CatalogApiError as e:
            return self._fail(e, "Error fetching books")
        self._set(books=tuple(books), error=None)
        return True

    def set_search(self, term: str) -> None:
        self._set(search=term)

    def _require_admin(self) -> bool:
        if not self._state.is_admin:
            self._set(error=ADMIN_ONLY_MESSAGE)
            return False
        return True

    def submit_book(self, title: str, author: str = "", description: str = "") -> bool:
        """Admin: add a book, then refresh the list."""
        if not self._require_admin():
            return False
        if not title or not title.strip():
            self._set(error="Title is required")
            return False
        try:
            self._api.create_book(self._state.token, title, author or None, description or None)
        except CatalogApiError as e:
            return self._fail(e, "Error adding book")
        return self.fetch_books()

    def update_book(self, book_id: str, **fields: str | None) -> bool:
        if not self._require_admin():
            return False
        try:
            self._api.update_book(self._state.token, book_id, **fields)
        except CatalogApiError as e:
            return self._fail(e, "Error updating book")
        return self.fetch_books()

    def delete_book(self, book_id: str) -> bool:
        if not self._require_admin():
            return False
        try:
            self._api.delete_book(self._state.token, book_id)
        except CatalogApiError as e:
            return self._fail(e, "Error deleting book")
        return self.fetch_books()

    # Admin actions

    def set_role(self, user_id: str, role: str) -> bool:
        """Admin: change another account's role. The signed-in identity is untouched."""
        if not self._require_admin():
            return False
        try:
            self._api.set_role(self._state.token, user_id, role)
        except CatalogApiError as e:
            return self._fail(e, "Error assigning role")
        self._set(error=None)
        return True
