"""Pydantic request/response schemas."""

from authgate.schemas.auth import PageResponse, PublicUser, Role, UserRecord
from authgate.schemas.health import HealthResponse

__all__ = [
    "HealthResponse",
    "PageResponse",
    "PublicUser",
    "Role",
    "UserRecord",
]
