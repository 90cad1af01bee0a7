"""
Admin session registry.

Sessions map an opaque bearer token to the admin it was issued to and a
fixed expiry. Expired sessions are dropped lazily when they are looked at;
``sweep_expired`` exists for stores that want a periodic purge but nothing
in the request path depends on it.
"""
import abc
import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Tuple

from api.admin.admin_model import Admin
from api.admin.admin_service import AdminStore, verify_password
from helpers.errors import InvalidCredentials

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(hours=24)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AdminSession:
    admin_id: str
    expires_at: datetime


class SessionStore(abc.ABC):
    @abc.abstractmethod
    def get(self, token: str) -> Optional[AdminSession]:
        ...

    @abc.abstractmethod
    def set(self, token: str, session: AdminSession) -> None:
        ...

    @abc.abstractmethod
    def delete(self, token: str) -> None:
        """Remove the token; unknown tokens are ignored."""

    @abc.abstractmethod
    def sweep_expired(self, now: datetime) -> int:
        """Drop every session expired at ``now``; returns how many went."""


class InMemorySessionStore(SessionStore):
    """Process-local sessions; not shared between workers or restarts."""

    def __init__(self):
        self._sessions: Dict[str, AdminSession] = {}
        self._lock = threading.Lock()

    def get(self, token: str) -> Optional[AdminSession]:
        with self._lock:
            return self._sessions.get(token)

    def set(self, token: str, session: AdminSession) -> None:
        with self._lock:
            self._sessions[token] = session

    def delete(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def sweep_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [t for t, s in self._sessions.items() if s.expires_at <= now]
            for token in expired:
                del self._sessions[token]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class SessionRegistry:
    def __init__(
        self,
        store: Optional[SessionStore] = None,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.store = store if store is not None else InMemorySessionStore()
        self.ttl = ttl
        self._clock = clock

    @staticmethod
    def _new_token() -> str:
        return secrets.token_urlsafe(32)

    def login(self, admins: AdminStore, email: str, password: str) -> Tuple[str, Admin]:
        """
        Check credentials and open a session.

        Unknown email and wrong password raise the same InvalidCredentials.
        """
        admin = admins.get_admin_by_email(email)
        if admin is None or not verify_password(password, admin.password):
            logger.info("Failed admin login for %s", email)
            raise InvalidCredentials()

        token = self._new_token()
        self.store.set(token, AdminSession(admin_id=admin.id, expires_at=self._clock() + self.ttl))
        logger.info("Admin %s logged in", admin.email)
        return token, admin

    def authenticate(self, token: Optional[str]) -> bool:
        if not token:
            return False
        session = self.store.get(token)
        if session is None:
            return False
        if session.expires_at > self._clock():
            return True
        self.store.delete(token)
        logger.debug("Evicted expired admin session")
        return False

    def logout(self, token: Optional[str]) -> None:
        if token:
            self.store.delete(token)
