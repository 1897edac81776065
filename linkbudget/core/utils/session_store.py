"""Server-side session storage keyed by a cookie token.

Each session is persisted as a record of the form::

    {"data": {"last_calculation": "-56.00"}, "last_accessed": 1792310400}

The file backend stores one ``<session_id>.json`` per session under the
session directory. Writes are synchronous and unlocked: concurrent requests
for the same session race and the last write wins.
"""
from __future__ import annotations

import json
import logging
import re
import time
import uuid
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional, Protocol, Union

from linkbudget.core.config import Settings
from linkbudget.core.exceptions import SessionStorageError

logger = logging.getLogger(__name__)

SessionRecord = Dict[str, Any]
Clock = Callable[[], float]

DEFAULT_SESSION_EXPIRY = 3600

# Tokens are used as file names, so only a conservative alphabet is accepted
_SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


def generate_session_id() -> str:
    """Return a new random session identifier (UUID4, lower-case)."""
    return str(uuid.uuid4())


def is_valid_session_id(token: str) -> bool:
    """Check whether a cookie token can name a stored session."""
    return bool(_SESSION_ID_PATTERN.match(token))


class SessionBackend(Protocol):
    """Storage interface for persisted session records."""

    def get(self, session_id: str) -> Optional[SessionRecord]:
        ...

    def set(self, session_id: str, record: SessionRecord) -> None:
        ...

    def delete(self, session_id: str) -> None:
        ...

    def keys(self) -> Iterator[str]:
        ...


class FileSessionBackend:
    """One JSON file per session under a fixed directory."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self._ensure_directory()

    def _ensure_directory(self) -> None:
        # Not fatal: a missing directory surfaces later as a write failure
        try:
            self.directory.mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create session directory {self.directory}: {e}")

    def _path(self, session_id: str) -> Path:
        return self.directory / f"{session_id}.json"

    def get(self, session_id: str) -> Optional[SessionRecord]:
        path = self._path(session_id)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                record = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read session file {path.name}: {e}")
            raise SessionStorageError(f"Could not read session state: {e}") from e
        if not isinstance(record, dict):
            raise SessionStorageError("Session file does not contain an object")
        return record

    def set(self, session_id: str, record: SessionRecord) -> None:
        path = self._path(session_id)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(record, f)
        except OSError as e:
            logger.error(f"Failed to write session file {path.name}: {e}")
            raise SessionStorageError(f"Could not save session state: {e}") from e

    def delete(self, session_id: str) -> None:
        try:
            self._path(session_id).unlink(missing_ok=True)
        except OSError as e:
            raise SessionStorageError(f"Could not delete session state: {e}") from e

    def keys(self) -> Iterator[str]:
        if not self.directory.is_dir():
            return iter(())
        return (path.stem for path in self.directory.glob("*.json"))


class MemorySessionBackend:
    """In-process backend, used by tests and single-process deployments."""

    def __init__(self) -> None:
        self._records: Dict[str, SessionRecord] = {}

    def get(self, session_id: str) -> Optional[SessionRecord]:
        record = self._records.get(session_id)
        if record is None:
            return None
        # Hand out a copy so callers cannot mutate stored state in place
        return json.loads(json.dumps(record))

    def set(self, session_id: str, record: SessionRecord) -> None:
        self._records[session_id] = json.loads(json.dumps(record))

    def delete(self, session_id: str) -> None:
        self._records.pop(session_id, None)

    def keys(self) -> Iterator[str]:
        return iter(list(self._records))


class Session:
    """A single client session: string key/value data plus last access time."""

    def __init__(
        self,
        session_id: str,
        backend: SessionBackend,
        expiry_seconds: int = DEFAULT_SESSION_EXPIRY,
        clock: Clock = time.time,
    ):
        self._id = session_id
        self._backend = backend
        self._expiry_seconds = expiry_seconds
        self._clock = clock
        self.data: Dict[str, str] = {}
        self.last_accessed: int = self._now()

    @property
    def id(self) -> str:
        return self._id

    def _now(self) -> int:
        return int(self._clock())

    def _touch(self) -> None:
        self.last_accessed = self._now()

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Retrieve the value stored under ``key``.

        Every read refreshes the last access time and persists the session,
        including reads that fall back to ``default``.
        """
        value = self.data.get(key, default)
        self._touch()
        self.save()
        return value

    def set(self, key: str, value: str) -> None:
        """Store a value and persist the session immediately."""
        self.data[key] = value
        self._touch()
        self.save()

    def save(self) -> None:
        self._backend.set(
            self._id, {"data": self.data, "last_accessed": self.last_accessed}
        )

    def load(self) -> bool:
        """
        Load persisted state for this session.

        Expired data is discarded while the identifier and the stale access
        time are kept, so :meth:`is_expired` still reports the expiry.

        Returns:
            True if persisted state existed, False otherwise
        """
        record = self._backend.get(self._id)
        if record is None:
            return False

        data = record.get("data") or {}
        if not isinstance(data, dict):
            raise SessionStorageError("Session data is not a mapping")
        self.data = {str(k): str(v) for k, v in data.items()}
        try:
            self.last_accessed = int(record.get("last_accessed", self._now()))
        except (TypeError, ValueError, OverflowError) as e:
            raise SessionStorageError(f"Invalid last_accessed value: {e}") from e

        if self.is_expired():
            logger.debug("Session expired, clearing data")
            self.data = {}
        return True

    def is_expired(self) -> bool:
        return self._now() - self.last_accessed > self._expiry_seconds

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Session(keys={sorted(self.data)!r}, last_accessed={self.last_accessed})>"


class SessionStore:
    """Resolves cookie tokens to sessions held by a storage backend."""

    def __init__(
        self,
        backend: SessionBackend,
        expiry_seconds: int = DEFAULT_SESSION_EXPIRY,
        clock: Clock = time.time,
    ):
        self.backend = backend
        self.expiry_seconds = expiry_seconds
        self.clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionStore":
        """Build a file-backed store from application settings."""
        return cls(
            FileSessionBackend(settings.SESSION_DIR),
            expiry_seconds=settings.SESSION_EXPIRY_SECONDS,
        )

    def _new_session(self, session_id: str) -> Session:
        return Session(session_id, self.backend, self.expiry_seconds, self.clock)

    def resolve(self, token: str) -> Session:
        """
        Return the session named by a cookie token.

        An empty token (or one that cannot name a session) yields a new
        session with a freshly generated identifier. A known token is loaded
        from storage; an unknown one starts an empty session under that
        identifier.
        """
        if token and not is_valid_session_id(token):
            logger.warning("Ignoring malformed session token")
            token = ""

        if not token:
            return self._new_session(generate_session_id())

        session = self._new_session(token)
        session.load()
        return session

    def purge_expired(self) -> int:
        """
        Delete persisted sessions whose last access is older than the expiry.

        Returns:
            Number of sessions removed
        """
        now = int(self.clock())
        removed = 0
        for session_id in list(self.backend.keys()):
            try:
                record = self.backend.get(session_id)
            except SessionStorageError:
                logger.warning(f"Skipping unreadable session {session_id}")
                continue
            if record is None:
                continue
            try:
                last_accessed = int(record.get("last_accessed", 0))
            except (TypeError, ValueError, OverflowError):
                logger.warning(f"Skipping session {session_id} with invalid last_accessed")
                continue
            if now - last_accessed > self.expiry_seconds:
                self.backend.delete(session_id)
                removed += 1
        if removed:
            logger.info(f"Purged {removed} expired session(s)")
        return removed
