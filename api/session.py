"""Table sessions: signed session ids and the in-memory session registry."""

import logging
from datetime import datetime, timedelta
from uuid import uuid4

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from config import config
from twentyone.game import GameSession

logger = logging.getLogger(__name__)


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._serializer = URLSafeTimedSerializer(secret_key or config.security.secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum token age in seconds, or None to skip the age check

        Returns:
            The session ID if valid, None otherwise
        """
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


class SessionRegistry:
    """
    Live game sessions keyed by raw session id.

    Sessions expire after ``ttl`` seconds without activity; nothing is
    written to disk.
    """

    def __init__(self, ttl: int | None = None) -> None:
        self._ttl = ttl or config.session_ttl
        self._sessions: dict[str, tuple[GameSession, datetime]] = {}

    def create(self) -> tuple[str, GameSession]:
        """Open a new table and return its id with the session."""
        self.cleanup_expired()
        session_id = str(uuid4())
        game = GameSession()
        game.start()
        self._sessions[session_id] = (game, self._expiry())
        logger.info("Opened session %s", session_id)
        return session_id, game

    def get(self, session_id: str) -> GameSession | None:
        """Look up a live session, refreshing its expiry."""
        entry = self._sessions.get(session_id)
        if entry is None:
            return None

        game, expiry = entry
        if expiry < datetime.now():
            self.delete(session_id)
            return None

        self._sessions[session_id] = (game, self._expiry())
        return game

    def delete(self, session_id: str) -> None:
        """Drop a session."""
        if self._sessions.pop(session_id, None) is not None:
            logger.info("Closed session %s", session_id)

    def cleanup_expired(self) -> int:
        """Remove expired sessions."""
        now = datetime.now()
        expired = [sid for sid, (_, expiry) in self._sessions.items() if expiry < now]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Dropped %d expired sessions", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)

    def _expiry(self) -> datetime:
        return datetime.now() + timedelta(seconds=self._ttl)


# Global instances
_session_signer: SessionSigner | None = None
_registry: SessionRegistry | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


def get_registry() -> SessionRegistry:
    """Get or create the session registry."""
    global _registry
    if _registry is None:
        _registry = SessionRegistry()
    return _registry


def create_session() -> tuple[str, GameSession]:
    """Open a table and return the signed token for it."""
    session_id, game = get_registry().create()
    return get_session_signer().sign(session_id), game


def get_session(token: str) -> GameSession | None:
    """Resolve a signed token to its live session."""
    session_id = extract_session_id(token)
    if session_id is None:
        return None
    return get_registry().get(session_id)


def extract_session_id(token: str) -> str | None:
    """
    Extract the raw session ID from a signed token, or None if invalid.

    Token age is not checked here; the registry expires idle tables.
    """
    return get_session_signer().unsign(token)
