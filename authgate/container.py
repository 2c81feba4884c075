"""Builds the auth components from explicit settings; one instance per app."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from authgate.core.config import Settings
from authgate.core.database import create_engine, create_session_factory
from authgate.core.security import PasswordHasher
from authgate.services.access_guard import AccessGuard
from authgate.services.authenticator import Authenticator
from authgate.services.session_codec import SessionIdentityCodec
from authgate.services.user_store import SqlAlchemyUserStore, UserStore


@dataclass
class AuthComponents:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    store: UserStore
    hasher: PasswordHasher
    authenticator: Authenticator
    codec: SessionIdentityCodec
    guard: AccessGuard


def build_components(settings: Settings) -> AuthComponents:
    engine = create_engine(settings)
    session_factory = create_session_factory(engine)
    store = SqlAlchemyUserStore(session_factory)
    hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    return AuthComponents(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        store=store,
        hasher=hasher,
        authenticator=Authenticator(store, hasher),
        codec=SessionIdentityCodec(store),
        guard=AccessGuard(login_page=settings.LOGIN_PAGE, home_page=settings.HOME_PAGE),
    )
