from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.sessions.sessions_service import SessionRegistry
from helpers.errors import Unauthorized
from utils.deps import get_session_registry

# auto_error=False: a missing header must be a 401, not HTTPBearer's 403
security = HTTPBearer(auto_error=False)


def bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """The presented bearer token, if any."""
    if credentials is None:
        return None
    return credentials.credentials


def auth_middleware(
    token: Optional[str] = Depends(bearer_token),
    registry: SessionRegistry = Depends(get_session_registry),
) -> str:
    """Require a live admin session; returns its token."""
    if not registry.authenticate(token):
        raise Unauthorized()
    return token
