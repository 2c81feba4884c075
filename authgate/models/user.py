"""ORM model for application users (credentials and role)."""

from sqlalchemy import Column, Enum, Integer, String

from authgate.models.base import Base
from authgate.schemas.auth import Role


class User(Base):
    """
    Registered account. username uniqueness is enforced by the unique index,
    which is what makes signup's insert atomic under concurrency.

    role: 'ADMIN', 'EDITOR' or NULL (no role; the signup default)
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="user_role", native_enum=False, length=32, validate_strings=True),
        nullable=True,
        default=None,
    )
