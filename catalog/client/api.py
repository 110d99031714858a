"""HTTP client for the catalog REST API."""

from __future__ import annotations

from typing import Any

import httpx

DEFAULT_BASE_URL = "http://localhost:5000"
DEFAULT_TIMEOUT_SEC = 10.0


class CatalogApiError(Exception):
    """Raised when the API answers with an error, or cannot be reached (status_code is None)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class CatalogApi:
    """
    Thin wrapper over the catalog endpoints.

    Pass `http` to reuse an existing httpx.Client (its base_url is used as is);
    otherwise a client for `base_url` is created and owned by this object.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        http: httpx.Client | None = None,
        api_prefix: str = "/api",
        timeout: float = DEFAULT_TIMEOUT_SEC,
    ) -> None:
        self._owns_http = http is None
        self._http = http or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)
        self._prefix = api_prefix.rstrip("/")

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> CatalogApi:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        try:
            resp = self._http.request(method, f"{self._prefix}{path}", headers=headers, json=json)
        except httpx.HTTPError as e:
            raise CatalogApiError(f"Could not reach the catalog API: {e}") from e
        try:
            data = resp.json()
        except ValueError:
            data = None
        if resp.is_error:
            message = data.get("message") if isinstance(data, dict) else None
            raise CatalogApiError(message or f"HTTP {resp.status_code}", resp.status_code)
        return data

    # Auth

    def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        """Returns {message, token, user}. No role is sent; new accounts are always plain users."""
        return self._request(
            "POST",
            "/auth/register",
            json={"name": name, "email": email, "password": password},
        )

    def login(self, email: str, password: str) -> dict[str, Any]:
        return self._request("POST", "/auth/login", json={"email": email, "password": password})

    def verify(self, token: str) -> dict[str, Any]:
        return self._request("GET", "/auth/verify", token=token)

    def set_role(self, token: str, user_id: str, role: str) -> dict[str, Any]:
        return self._request("PATCH", f"/auth/users/{user_id}/role", token=token, json={"role": role})

    # Books

    def list_books(self) -> list[dict[str, Any]]:
        return self._request("GET", "/books")

    def get_book(self, book_id: str) -> dict[str, Any]:
        return self._request("GET", f"/books/{book_id}")

    def create_book(
        self,
        token: str,
        title: str,
        author: str | None = None,
        description: str | None = None,
    ) -> dict[str, Any]:
        body = {"title": title, "author": author, "description": description}
        return self._request("POST", "/books", token=token, json=body)["book"]

    def update_book(self, token: str, book_id: str, **fields: str | None) -> dict[str, Any]:
        body = {k: v for k, v in fields.items() if v is not None}
        return self._request("PUT", f"/books/{book_id}", token=token, json=body)["book"]

    def delete_book(self, token: str, book_id: str) -> None:
        self._request("DELETE", f"/books/{book_id}", token=token)
