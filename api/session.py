"""In-memory game sessions with signed session IDs."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from random import Random
from uuid import uuid4

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from config import config
from core.game import KlondikeGame

logger = logging.getLogger(__name__)


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID if valid, None otherwise
        """
        max_age = max_age or config.session_ttl
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


# Global signer instance
_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


def new_game() -> KlondikeGame:
    """Create a game using the configured undo limit and seed."""
    rng = Random(config.game.seed) if config.game.seed is not None else None
    return KlondikeGame(rng=rng, undo_limit=config.game.undo_limit)


@dataclass
class GameSession:
    """A live game plus the lock serialising its moves."""

    game: KlondikeGame
    expires_at: datetime
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class InMemorySessionStore:
    """
    Session store keyed by signed token.

    Games live only as long as the process; nothing is persisted.
    """

    def __init__(self, ttl: int | None = None) -> None:
        self._ttl = ttl or config.session_ttl
        self._sessions: dict[str, GameSession] = {}

    def _expiry(self) -> datetime:
        return datetime.now() + timedelta(seconds=self._ttl)

    async def create(self, game: KlondikeGame | None = None) -> str:
        """Start a session and return its signed token, dropping expired ones first."""
        await self.cleanup_expired()
        token = get_session_signer().sign(str(uuid4()))
        self._sessions[token] = GameSession(game=game or new_game(), expires_at=self._expiry())
        logger.info("Created game session (%d active)", len(self._sessions))
        return token

    async def get(self, token: str) -> GameSession | None:
        """Return a live session and extend its expiry, or None."""
        if get_session_signer().unsign(token) is None:
            return None

        session = self._sessions.get(token)
        if session is None:
            return None

        if session.expires_at < datetime.now():
            await self.delete(token)
            return None

        session.expires_at = self._expiry()
        return session

    async def delete(self, token: str) -> None:
        """Delete session."""
        self._sessions.pop(token, None)

    async def exists(self, token: str) -> bool:
        """Check if session exists."""
        return await self.get(token) is not None

    async def cleanup_expired(self) -> int:
        """Remove expired sessions."""
        now = datetime.now()
        expired = [
            token for token, session in self._sessions.items() if session.expires_at < now
        ]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.info("Expired %d game sessions", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


# Global session store instance
_session_store: InMemorySessionStore | None = None


def get_session_store() -> InMemorySessionStore:
    """Get or create the session store."""
    global _session_store
    if _session_store is None:
        _session_store = InMemorySessionStore()
    return _session_store
