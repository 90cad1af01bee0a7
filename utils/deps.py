from datetime import timedelta
from fastapi import Depends
from sqlalchemy.orm import Session

from config.database import get_db
from config.settings import settings
from api.garbage_reports.garbage_reports_service import (
    ReportStore,
    MemoryReportStore,
    DatabaseReportStore,
)
from api.admin.admin_service import AdminStore, MemoryAdminStore, DatabaseAdminStore
from api.sessions.sessions_service import SessionRegistry, InMemorySessionStore

# Process-wide instances; the memory stores are only used with STORAGE_BACKEND=memory
memory_report_store = MemoryReportStore()
memory_admin_store = MemoryAdminStore()
session_registry = SessionRegistry(
    store=InMemorySessionStore(),
    ttl=timedelta(hours=settings.SESSION_TTL_HOURS),
)


def get_report_store(db: Session = Depends(get_db)) -> ReportStore:
    if settings.use_memory_storage:
        return memory_report_store
    return DatabaseReportStore(db)


def get_admin_store(db: Session = Depends(get_db)) -> AdminStore:
    if settings.use_memory_storage:
        return memory_admin_store
    return DatabaseAdminStore(db)


def get_session_registry() -> SessionRegistry:
    return session_registry
