"""Tests for password hashing, bearer parsing and role scoping."""

from datetime import datetime, timedelta, timezone

import pytest

from salesdesk.accounts.models import CurrentSeller
from salesdesk.auth import (
    bearer_token,
    hash_password,
    new_token,
    resolve_target_seller,
    token_expiry,
    verify_password,
)
from salesdesk.config import settings
from salesdesk.exceptions import AuthenticationError, AuthorizationError

SELLER = CurrentSeller(id=1, name="Ana", is_manager=False)
MANAGER = CurrentSeller(id=10, name="Gerente", is_manager=True)


class TestPasswords:
    @pytest.mark.asyncio
    async def test_hash_verifies(self):
        hashed = await hash_password("allane2025")
        assert hashed != "allane2025"
        assert await verify_password("allane2025", hashed)

    @pytest.mark.asyncio
    async def test_wrong_password(self):
        assert not await verify_password("nope", await hash_password("secret"))

    @pytest.mark.asyncio
    async def test_malformed_hash(self):
        assert not await verify_password("secret", "not-a-bcrypt-hash")


class TestTokens:
    def test_tokens_are_unique(self):
        assert len({new_token() for _ in range(20)}) == 20

    def test_expiry(self):
        now = datetime(2024, 3, 10, tzinfo=timezone.utc)
        assert token_expiry(now) == now + timedelta(hours=settings.token_ttl_hours)


class TestBearerToken:
    def test_ok(self):
        assert bearer_token("Bearer abc123") == "abc123"

    @pytest.mark.parametrize("header", [None, "", "abc123", "Basic abc", "Bearer ", "Bearer    "])
    def test_missing_or_malformed(self, header):
        with pytest.raises(AuthenticationError):
            bearer_token(header)


class TestResolveTargetSeller:
    def test_default_is_self(self):
        assert resolve_target_seller(SELLER, None) == 1

    def test_explicit_self(self):
        assert resolve_target_seller(SELLER, 1) == 1

    def test_seller_cannot_view_others(self):
        with pytest.raises(AuthorizationError):
            resolve_target_seller(SELLER, 2)

    def test_manager_can_view_others(self):
        assert resolve_target_seller(MANAGER, 2) == 2
