"""
Demo Service

Provisions throwaway guest accounts. Each activation creates a fresh user
with placeholder profile data and binds it to a demo session that expires
after a fixed time (10 minutes by default).
"""

import logging
from typing import Any, Dict

from eduhub.core.config import settings
from eduhub.core.security import get_password_hash
from eduhub.models import User, UserRole
from eduhub.repositories.store import RepositoryStore
from eduhub.schemas.auth import DemoStatusResponse, TokenResponse
from eduhub.services.auth_service import AuthService, CurrentSession
from eduhub.services.exceptions import ServiceError
from eduhub.services.session_manager import SessionManager

logger = logging.getLogger(__name__)


class DemoActivationError(ServiceError):
    """The demo account could not be provisioned."""
    pass


# Placeholder profile fields per role
DEMO_PROFILES: Dict[UserRole, Dict[str, Any]] = {
    UserRole.STUDENT: {
        "school_name": "Demo School",
        "age": 16,
        "grade": "10th",
    },
    UserRole.TEACHER: {
        "school_name": "Demo School",
        "teaching_grades": "9th, 10th, 11th",
    },
    UserRole.SCHOOL: {
        "ceo_name": "Demo Principal",
    },
}


class DemoService:
    """Service for demo mode."""

    def __init__(self, store: RepositoryStore, sessions: SessionManager):
        self.store = store
        self.sessions = sessions
        self.auth_service = AuthService(store, sessions)

    # ============================================================
    # Activation
    # ============================================================

    async def activate(self, role: UserRole) -> TokenResponse:
        """
        Create a demo user and open a demo session for it.

        Raises:
            DemoActivationError: If the user could not be stored. No session
                is opened in that case.
        """
        role = UserRole(role)

        try:
            user = await self._create_demo_user(role)
        except Exception as e:
            logger.error(f"Demo activation failed for role={role.value}: {e}")
            raise DemoActivationError("Failed to create demo account") from e

        session = self.sessions.open_demo(user.id)
        logger.info(f"Demo activated: user={user.id}, role={role.value}")
        return self.auth_service.create_token_response(user, session)

    async def _create_demo_user(self, role: UserRole) -> User:
        email = await self._unique_demo_email(role)
        fields = {
            "email": email,
            "password": get_password_hash(settings.DEMO_PASSWORD),
            "full_name": f"Demo {role.value.capitalize()}",
            "phone": "555-555-5555",
            "role": role,
            "address": "123 Demo St",
            "is_demo": True,
            **DEMO_PROFILES[role],
        }
        return await self.store.create_user(fields)

    async def _unique_demo_email(self, role: UserRole) -> str:
        """demo_<role>_<epoch millis>@<domain>, suffixed if already taken."""
        millis = int(self.sessions.clock() * 1000)
        base = f"demo_{role.value}_{millis}"
        email = f"{base}@{settings.DEMO_EMAIL_DOMAIN}"

        suffix = 1
        while await self.store.get_user_by_email(email):
            email = f"{base}_{suffix}@{settings.DEMO_EMAIL_DOMAIN}"
            suffix += 1

        return email

    # ============================================================
    # Countdown
    # ============================================================

    def status(self, current: CurrentSession) -> DemoStatusResponse:
        """
        Countdown state of the current demo session.

        Raises:
            ServiceError: If the session is not a demo session
        """
        countdown = current.session.countdown
        if countdown is None:
            raise ServiceError("Not a demo session")

        countdown.tick()
        return DemoStatusResponse(**countdown.status())
