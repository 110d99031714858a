"""Library catalog: REST backend and session client."""

__version__ = "0.1.0"
