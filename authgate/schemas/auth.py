"""Identity types and page payload schemas for auth routes."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Closed set of capability labels a user can carry. No role is None."""

    ADMIN = "ADMIN"
    EDITOR = "EDITOR"


class UserRecord(BaseModel):
    """Immutable view of a stored user, detached from any DB session."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    username: str
    password_hash: str = Field(repr=False)
    role: Role | None = None


class PublicUser(BaseModel):
    """User fields safe to return to clients (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: Role | None = None


class PageResponse(BaseModel):
    """Data handed to the page renderer for one section."""

    section: str = Field(..., description="Page section to render (index, login, signup, private, remember)")
    page: str | None = Field(default=None, description="Specific template within the section")
    message: str | None = Field(default=None, description="Inline form message")
    messages: list[str] = Field(default_factory=list, description="One-shot flash messages")
    user: PublicUser | None = None
