"""
Shared pytest setup.

JWT_SECRET has no default, so it must be in the environment before
catalog.main is imported (the module builds an app at import time).
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-key-for-the-catalog-suite-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")
