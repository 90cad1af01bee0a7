import abc
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from api.admin.admin_model import Admin
from api.admin.admin_schema import AdminCreate

logger = logging.getLogger(__name__)

# Initialize password hashing context (pure-python backend, no bcrypt build needed)
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash the given password with a per-password salt."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time check of a plain password against its stored hash."""
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # stored value is not a recognised hash
        return False


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AdminStore(abc.ABC):
    """Lookup and creation of administrators."""

    @abc.abstractmethod
    def get_admin_by_email(self, email: str) -> Optional[Admin]:
        """Exact, case-sensitive email match."""

    @abc.abstractmethod
    def create_admin(self, data: AdminCreate) -> Admin:
        """Persist a new admin. Email uniqueness is the caller's concern."""


class MemoryAdminStore(AdminStore):
    def __init__(self, clock: Callable[[], datetime] = _utc_now):
        self._clock = clock
        self._admins: Dict[str, Admin] = {}
        self._lock = threading.Lock()

    def get_admin_by_email(self, email: str) -> Optional[Admin]:
        with self._lock:
            return next((a for a in self._admins.values() if a.email == email), None)

    def create_admin(self, data: AdminCreate) -> Admin:
        admin = Admin(
            id=str(uuid.uuid4()),
            email=data.email,
            password=hash_password(data.password),
            created_at=self._clock(),
        )
        with self._lock:
            self._admins[admin.id] = admin
        return admin


class DatabaseAdminStore(AdminStore):
    def __init__(self, db: Session, clock: Callable[[], datetime] = _utc_now):
        self.db = db
        self._clock = clock

    def get_admin_by_email(self, email: str) -> Optional[Admin]:
        # SQLite and PostgreSQL both compare text case-sensitively with "="
        return self.db.query(Admin).filter(Admin.email == email).first()

    def create_admin(self, data: AdminCreate) -> Admin:
        admin = Admin(
            id=str(uuid.uuid4()),
            email=data.email,
            password=hash_password(data.password),
            created_at=self._clock(),
        )
        try:
            self.db.add(admin)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(admin)
        return admin


def seed_default_admin(store: AdminStore, email: str, password: str) -> Admin:
    """Create the well-known admin unless one with that email already exists."""
    existing = store.get_admin_by_email(email)
    if existing:
        logger.debug("Default admin %s already present", email)
        return existing
    admin = store.create_admin(AdminCreate(email=email, password=password))
    logger.info("Seeded default admin %s", email)
    return admin
