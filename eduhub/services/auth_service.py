import logging
from dataclasses import dataclass

from eduhub.models import User
from eduhub.repositories.store import RepositoryStore
from eduhub.schemas.auth import UserRegister, UserLogin, TokenResponse, UserResponse
from eduhub.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    verify_token,
)
from eduhub.services.session_manager import (
    Session,
    SessionError,
    SessionManager,
)

logger = logging.getLogger(__name__)


@dataclass
class CurrentSession:
    """The identity a request acts as, resolved once per request."""
    user: User
    session: Session

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def is_demo(self) -> bool:
        return self.session.is_demo


class AuthService:
    """
    Service class for authentication operations.

    """
    def __init__(self, store: RepositoryStore, sessions: SessionManager):
        """
        Initialize with the repository store and the session registry.

        Args:
            store: RepositoryStore instance
            sessions: SessionManager shared by the whole application
        """
        self.store = store
        self.sessions = sessions

    # ============================================================
    # User Registration
    # ============================================================
    async def register(self, user_data: UserRegister) -> TokenResponse:
        """
        Register a new user and sign them in.

        Args:
            user_data: Validated registration data

        Returns:
            TokenResponse with token and user info

        Raises:
            ValueError: If email already exists
        """
        # The store does not enforce uniqueness, so check here
        existing_user = await self.store.get_user_by_email(user_data.email)

        if existing_user:
            raise ValueError("Email already in use")

        fields = user_data.model_dump(exclude={"password"})
        fields["password"] = get_password_hash(user_data.password)
        user = await self.store.create_user(fields)

        logger.info(f"User registered: id={user.id}, role={user.role}")

        session = self.sessions.open(user.id)
        return self.create_token_response(user, session)

    # ============================================================
    # User Login
    # ============================================================
    async def login(self, login_data: UserLogin) -> TokenResponse:
        """
        Authenticate user and return a token.

        Args:
            login_data: Email and password

        Returns:
            TokenResponse with token and user info

        Raises:
            ValueError: If credentials are invalid
        """
        user = await self.store.get_user_by_email(login_data.email)

        if not user or not verify_password(login_data.password, user.password):
            raise ValueError("Invalid email or password")

        # Demo identities only live as long as their demo session
        if user.is_demo:
            raise ValueError("Demo accounts cannot sign in")

        session = self.sessions.open(user.id)
        return self.create_token_response(user, session)

    # ============================================================
    # Logout
    # ============================================================
    def logout(self, current: CurrentSession) -> bool:
        """Close the session behind the current request."""
        return self.sessions.close(current.session.id)

    # ============================================================
    # Get Current Session
    # ============================================================

    async def get_current_session(self, token: str) -> CurrentSession:
        """
        Resolve the user and session behind an access token.

        Args:
            token: Access token from request

        Returns:
            CurrentSession

        Raises:
            ValueError: If the token is invalid or its session is gone
        """
        payload = verify_token(token)
        token_expired = False

        if not payload:
            # An expired but authentic token still names its session, and
            # the session knows why it ended
            payload = verify_token(token, allow_expired=True)
            if not payload:
                raise ValueError("Invalid or expired token")
            token_expired = True

        try:
            session = self.sessions.resolve(payload["sid"])
        except SessionError as e:
            raise ValueError(str(e))

        if token_expired:
            # Only reachable when the server clock disagrees with the token
            raise ValueError(
                "Demo session expired" if session.is_demo else "Session expired"
            )

        if str(session.user_id) != payload["sub"]:
            raise ValueError("Invalid token")

        user = await self.store.get_user(session.user_id)

        if not user:
            self.sessions.close(session.id)
            raise ValueError("User not found")

        return CurrentSession(user=user, session=session)

    # ============================================================
    # Helper Methods
    # ============================================================

    def create_token_response(self, user: User, session: Session) -> TokenResponse:
        """
        Create token response for a user session.

        Args:
            user: User record
            session: Freshly opened session

        Returns:
            TokenResponse with access token and user info
        """
        access_token = create_access_token(
            subject=user.id,
            session_id=session.id,
            expires_at=session.expires_at_datetime,
            is_demo=session.is_demo,
        )

        return TokenResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=session.seconds_left(self.sessions.clock()),
            is_demo=session.is_demo,
            user=UserResponse.model_validate(user),
        )
