"""Credential store: async lookup and atomic insert of user records."""

import logging
from typing import Protocol

from sqlalchemy import ColumnElement, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from authgate.core.exceptions import DuplicateUsername, StoreUnavailable
from authgate.models.user import User
from authgate.schemas.auth import Role, UserRecord

logger = logging.getLogger(__name__)

# Driver/connection level failures; anything else is a programming error and propagates as-is.
_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError, OSError)

# SQLSTATE unique_violation (PostgreSQL); SQLite reports it only in the message.
UNIQUE_VIOLATION_SQLSTATE = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    if getattr(orig, "sqlstate", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return "UNIQUE constraint failed" in str(orig)


class UserStore(Protocol):
    """What the auth components need from persistence."""

    async def get_by_username(self, username: str) -> UserRecord | None: ...

    async def get_by_id(self, user_id: int) -> UserRecord | None: ...

    async def create(self, username: str, password_hash: str, role: Role | None = None) -> UserRecord: ...


class SqlAlchemyUserStore:
    """
    UserStore backed by the users table.

    create() relies on the unique index on username: the insert either
    succeeds or raises DuplicateUsername, with no separate existence check.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_by_username(self, username: str) -> UserRecord | None:
        return await self._fetch_one(User.username == username, lookup="username")

    async def get_by_id(self, user_id: int) -> UserRecord | None:
        return await self._fetch_one(User.id == user_id, lookup="id")

    async def create(self, username: str, password_hash: str, role: Role | None = None) -> UserRecord:
        user = User(username=username, password_hash=password_hash, role=role)
        try:
            async with self._session_factory() as session:
                session.add(user)
                try:
                    await session.commit()
                except IntegrityError as e:
                    await session.rollback()
                    if not _is_unique_violation(e):
                        raise
                    raise DuplicateUsername(username) from e
                await session.refresh(user)
                return UserRecord.model_validate(user)
        except _UNAVAILABLE_ERRORS as e:
            logger.error("User store unavailable", extra={"operation": "create", "error": type(e).__name__})
            raise StoreUnavailable("User store is unavailable") from e

    async def _fetch_one(self, clause: ColumnElement[bool], lookup: str) -> UserRecord | None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(User).where(clause))
                user = result.scalar_one_or_none()
        except _UNAVAILABLE_ERRORS as e:
            logger.error(
                "User store unavailable",
                extra={"operation": f"get_by_{lookup}", "error": type(e).__name__},
            )
            raise StoreUnavailable("User store is unavailable") from e
        if user is None:
            return None
        return UserRecord.model_validate(user)
