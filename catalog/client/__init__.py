"""Session client for the catalog API."""

from catalog.client.api import CatalogApi, CatalogApiError
from catalog.client.session import SessionState, SessionStore, TokenStorage
from catalog.client.views import render

__all__ = [
    "CatalogApi",
    "CatalogApiError",
    "SessionState",
    "SessionStore",
    "TokenStorage",
    "render",
]
