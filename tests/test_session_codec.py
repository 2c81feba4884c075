"""Tests for authgate.services.session_codec: user id in, full user record out."""

import unittest
from unittest.mock import AsyncMock

from authgate.core.exceptions import IdentityGone, StoreUnavailable
from authgate.schemas.auth import Role, UserRecord
from authgate.services.session_codec import SessionIdentityCodec


def _user(user_id: int = 7, role: Role | None = Role.EDITOR) -> UserRecord:
    return UserRecord(id=user_id, username="carol", password_hash="$2b$04$x", role=role)


class TestSerialize(unittest.TestCase):
    def test_returns_user_id(self) -> None:
        codec = SessionIdentityCodec(AsyncMock())
        self.assertEqual(codec.serialize(_user(42)), 42)


class TestDeserialize(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.store = AsyncMock()
        self.codec = SessionIdentityCodec(self.store)

    async def test_resolves_existing_user(self) -> None:
        user = _user(7)
        self.store.get_by_id.return_value = user
        self.assertEqual(await self.codec.deserialize(7), user)
        self.store.get_by_id.assert_awaited_once_with(7)

    async def test_accepts_string_token(self) -> None:
        self.store.get_by_id.return_value = _user(7)
        await self.codec.deserialize("7")
        self.store.get_by_id.assert_awaited_once_with(7)

    async def test_round_trip_through_serialize(self) -> None:
        user = _user(3, role=None)
        self.store.get_by_id.return_value = user
        self.assertEqual(await self.codec.deserialize(self.codec.serialize(user)), user)

    async def test_deleted_user_raises_identity_gone(self) -> None:
        self.store.get_by_id.return_value = None
        with self.assertRaises(IdentityGone) as ctx:
            await self.codec.deserialize(7)
        self.assertEqual(ctx.exception.token, 7)

    async def test_malformed_tokens_raise_identity_gone(self) -> None:
        for token in ["abc", None, {"id": 1}, True, ""]:
            with self.subTest(token=token):
                with self.assertRaises(IdentityGone):
                    await self.codec.deserialize(token)
        self.store.get_by_id.assert_not_awaited()

    async def test_store_unavailable_propagates(self) -> None:
        self.store.get_by_id.side_effect = StoreUnavailable("User store is unavailable")
        with self.assertRaises(StoreUnavailable):
            await self.codec.deserialize(7)


if __name__ == "__main__":
    unittest.main()
