"""SQLAlchemy ORM models."""

from authgate.models.base import Base
from authgate.models.user import User

__all__ = ["Base", "User"]
