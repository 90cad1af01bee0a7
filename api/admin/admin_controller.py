from typing import Optional

from api.admin.admin_schema import LoginRequest, LoginResponse, AdminSummary
from api.admin.admin_service import AdminStore
from api.garbage_reports.garbage_reports_controller import report_stats_controller
from api.garbage_reports.garbage_reports_schema import ReportStats
from api.garbage_reports.garbage_reports_service import ReportStore
from api.sessions.sessions_service import SessionRegistry


def login_admin(
    credentials: LoginRequest,
    admins: AdminStore,
    registry: SessionRegistry,
) -> LoginResponse:
    # InvalidCredentials from the registry becomes a 401
    token, admin = registry.login(admins, credentials.email, credentials.password)
    return LoginResponse(
        session_id=token,
        admin=AdminSummary.model_validate(admin),
    )


def logout_admin(token: Optional[str], registry: SessionRegistry) -> dict:
    registry.logout(token)
    return {"message": "Logged out successfully"}


def admin_stats(store: ReportStore) -> ReportStats:
    return report_stats_controller(store)
