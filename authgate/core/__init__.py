"""Core app configuration, database and security primitives."""

from authgate.core.config import Settings, get_settings
from authgate.core.security import PasswordHasher

__all__ = ["PasswordHasher", "Settings", "get_settings"]
