from typing import Optional
from fastapi import APIRouter, Depends

from middlewares.auth_middleware import auth_middleware, bearer_token
from utils.deps import get_admin_store, get_report_store, get_session_registry
from api.admin.admin_controller import login_admin, logout_admin, admin_stats
from api.admin.admin_schema import LoginRequest, LoginResponse, Message, SessionStatus
from api.admin.admin_service import AdminStore
from api.garbage_reports.garbage_reports_schema import ReportStats
from api.garbage_reports.garbage_reports_service import ReportStore
from api.sessions.sessions_service import SessionRegistry

router = APIRouter(prefix="/admin", tags=["Admin"])


# ─── Authentication Routes ─────────────────────────────────────────────────────
@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    admins: AdminStore = Depends(get_admin_store),
    registry: SessionRegistry = Depends(get_session_registry),
):
    return login_admin(credentials, admins, registry)


@router.post("/logout", response_model=Message)
def logout(
    token: Optional[str] = Depends(bearer_token),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Always succeeds; drops the presented session if there is one."""
    return logout_admin(token, registry)


@router.get(
    "/me",
    response_model=SessionStatus,
    dependencies=[Depends(auth_middleware)]
)
def me():
    return {"authenticated": True}


# ─── Dashboard ─────────────────────────────────────────────────────────────────
@router.get(
    "/stats",
    response_model=ReportStats,
    dependencies=[Depends(auth_middleware)],
    summary="Report counts per status"
)
def stats(store: ReportStore = Depends(get_report_store)):
    return admin_stats(store)
