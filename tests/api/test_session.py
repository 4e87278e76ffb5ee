"""Tests for session management."""

import pytest
from datetime import datetime, timedelta

from api.session import (
    InMemorySessionStore,
    SessionSigner,
    get_session_signer,
    get_session_store,
    new_game,
)
from core.game import KlondikeGame


class TestSessionSigner:
    """Tests for SessionSigner class."""

    def test_sign_creates_token(self):
        """Test that sign creates a non-empty token."""
        signer = SessionSigner(secret_key="test-secret")
        token = signer.sign("test-session-123")
        assert token
        assert token != "test-session-123"

    def test_unsign_returns_original_id(self):
        """Test that unsign returns the original session ID."""
        signer = SessionSigner(secret_key="test-secret")
        token = signer.sign("test-session-456")
        assert signer.unsign(token, max_age=3600) == "test-session-456"

    def test_unsign_invalid_token_returns_none(self):
        """Test that unsign returns None for invalid tokens."""
        signer = SessionSigner(secret_key="test-secret")
        assert signer.unsign("invalid-token-data", max_age=3600) is None

    def test_unsign_wrong_secret_returns_none(self):
        """Test that unsign returns None when using wrong secret key."""
        token = SessionSigner(secret_key="secret-one").sign("test-session")
        assert SessionSigner(secret_key="secret-two").unsign(token, max_age=3600) is None

    def test_global_signer_is_shared(self):
        """Test the module signer is created once."""
        assert get_session_signer() is get_session_signer()


class TestInMemorySessionStore:
    """Tests for InMemorySessionStore."""

    @pytest.mark.asyncio
    async def test_create_and_get(self):
        """Test a created session can be fetched."""
        store = InMemorySessionStore(ttl=60)
        token = await store.create()
        session = await store.get(token)
        assert isinstance(session.game, KlondikeGame)
        assert await store.exists(token)
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_create_with_game(self):
        """Test an explicit game is stored as given."""
        store = InMemorySessionStore(ttl=60)
        game = new_game()
        token = await store.create(game)
        assert (await store.get(token)).game is game

    @pytest.mark.asyncio
    async def test_unsigned_token_rejected(self):
        """Test tokens that fail verification are unknown."""
        store = InMemorySessionStore(ttl=60)
        await store.create()
        assert await store.get("forged") is None

    @pytest.mark.asyncio
    async def test_delete(self):
        """Test deleting a session."""
        store = InMemorySessionStore(ttl=60)
        token = await store.create()
        await store.delete(token)
        assert await store.get(token) is None

    @pytest.mark.asyncio
    async def test_expired_session(self):
        """Test expired sessions are dropped on access."""
        store = InMemorySessionStore(ttl=60)
        token = await store.create()
        store._sessions[token].expires_at = datetime.now() - timedelta(seconds=1)
        assert await store.get(token) is None
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_cleanup_expired(self):
        """Test bulk expiry."""
        store = InMemorySessionStore(ttl=60)
        old = await store.create()
        fresh = await store.create()
        store._sessions[old].expires_at = datetime.now() - timedelta(seconds=1)
        assert await store.cleanup_expired() == 1
        assert await store.exists(fresh)

    @pytest.mark.asyncio
    async def test_create_drops_expired_sessions(self):
        """Test starting a session frees expired ones without any lookup."""
        store = InMemorySessionStore(ttl=60)
        stale = [await store.create() for _ in range(3)]
        for token in stale:
            store._sessions[token].expires_at = datetime.now() - timedelta(seconds=1)
        assert len(store) == 3

        fresh = await store.create()

        assert len(store) == 1
        assert await store.exists(fresh)

    @pytest.mark.asyncio
    async def test_access_extends_expiry(self):
        """Test reading a session pushes its expiry out."""
        store = InMemorySessionStore(ttl=60)
        token = await store.create()
        soon = datetime.now() + timedelta(seconds=5)
        store._sessions[token].expires_at = soon
        session = await store.get(token)
        assert session.expires_at > soon

    def test_global_store_is_shared(self):
        """Test the module store is created once."""
        assert get_session_store() is get_session_store()
