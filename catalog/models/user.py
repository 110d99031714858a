"""ORM model for library users (auth and RBAC)."""

from sqlalchemy import Column, DateTime, String

from catalog.models.base import Base, new_id, utcnow

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    email is unique and compared exactly as stored (no case folding).
    role: 'admin' or 'user'
    """

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=ROLE_USER)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
