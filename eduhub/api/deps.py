from fastapi import HTTPException, Depends, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import logging

from eduhub.db.database import Database, get_db
from eduhub.models import User
from eduhub.repositories.store import RepositoryStore
from eduhub.services.auth_service import AuthService, CurrentSession
from eduhub.services.session_manager import SessionManager

logger = logging.getLogger(__name__)

# Security scheme for Swagger UI. Missing credentials are reported as 401
# by the dependencies below rather than by the scheme itself.
security = HTTPBearer(auto_error=False)


# =====================================================
# Shared State
# =====================================================
def get_session_manager(request: Request) -> SessionManager:
    """The session registry created at startup."""
    return request.app.state.sessions


def get_store(db: Database = Depends(get_db)) -> RepositoryStore:
    """Repository store over the application database."""
    return RepositoryStore(db)


def get_auth_service(
    store: RepositoryStore = Depends(get_store),
    sessions: SessionManager = Depends(get_session_manager),
) -> AuthService:
    return AuthService(store, sessions)


# =====================================================
# Get Current Session
# =====================================================
async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> CurrentSession:
    """
    Dependency that validates the access token and returns the session.

    Raises:
        HTTPException 401: If token is missing or invalid, or the session
            was closed or ran out of time
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"}
        )

    try:
        return await auth_service.get_current_session(credentials.credentials)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"}
        )


# =====================================================
# Get Current user
# =====================================================
async def get_current_user(
    current: CurrentSession = Depends(get_current_session)
) -> User:
    """Dependency that returns the authenticated user."""
    return current.user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[User]:
    """
    Like get_current_user, but anonymous requests resolve to None.

    Used by public reads that personalize their answer when signed in.
    """
    if credentials is None:
        return None

    try:
        current = await auth_service.get_current_session(credentials.credentials)
    except ValueError as e:
        logger.debug(f"Ignoring invalid credentials on public endpoint: {e}")
        return None

    return current.user
