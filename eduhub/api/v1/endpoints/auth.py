import logging

from fastapi import APIRouter, Depends, HTTPException, status

from eduhub.schemas.auth import (
    UserRegister,
    UserLogin,
    DemoRequest,
    DemoStatusResponse,
    TokenResponse,
    UserResponse,
    ErrorResponse,
    MessageResponse,
)
from eduhub.repositories.store import RepositoryStore
from eduhub.services.auth_service import AuthService, CurrentSession
from eduhub.services.demo_service import DemoService, DemoActivationError
from eduhub.services.exceptions import ServiceError
from eduhub.services.session_manager import SessionManager
from eduhub.api.deps import (
    get_auth_service,
    get_current_session,
    get_session_manager,
    get_store,
)

logger = logging.getLogger(__name__)

# ============================================================
# Router Setup
# ============================================================

router = APIRouter(tags=["Authentication"])


def get_demo_service(
    store: RepositoryStore = Depends(get_store),
    sessions: SessionManager = Depends(get_session_manager),
) -> DemoService:
    """Dependency that provides DemoService instance."""
    return DemoService(store, sessions)


# ============================================================
# Registration Endpoint
# ============================================================

@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "User created successfully"},
        400: {"model": ErrorResponse, "description": "Email already exists"},
        422: {"description": "Validation error"}
    }
)
async def register(
    user_data: UserRegister,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new user account.

    Returns an access token and the created user.
    """
    try:
        return await auth_service.register(user_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


# ============================================================
# Login Endpoint
# ============================================================
@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        200: {"description": "Login successful"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    }
)
async def login(
    login_data: UserLogin,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Authenticate user and get a token.

    - **email**: Registered email address (case-insensitive)
    - **password**: Account password
    """
    try:
        return await auth_service.login(login_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"}
        )


# ============================================================
# Logout Endpoint
# ============================================================
@router.post(
    "/logout",
    response_model=MessageResponse,
)
async def logout(
    current: CurrentSession = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service)
):
    """End the current session. The token stops working immediately."""
    auth_service.logout(current)
    return MessageResponse(message="Logged out successfully")


# ============================================================
# Get Current User Endpoint
# ============================================================

@router.get(
    "/me",
    response_model=UserResponse,
    responses={
        200: {"description": "Current user info"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    }
)
async def get_me(
    current: CurrentSession = Depends(get_current_session)
):
    """
    Get current authenticated user's information.

    Requires valid access token in Authorization header:
    `Authorization: Bearer <access_token>`
    """
    return UserResponse.model_validate(current.user)


# ============================================================
# Demo Mode Endpoints
# ============================================================

@router.post(
    "/demo",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Demo session started"},
        500: {"model": ErrorResponse, "description": "Demo account could not be created"},
    }
)
async def start_demo(
    request_data: DemoRequest,
    demo_service: DemoService = Depends(get_demo_service)
):
    """
    Start a demo session for the given role.

    Creates a throwaway account and returns a token that stops working
    after 10 minutes.
    """
    try:
        return await demo_service.activate(request_data.role)
    except DemoActivationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.get(
    "/demo/status",
    response_model=DemoStatusResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Not a demo session"},
        401: {"model": ErrorResponse, "description": "Not authenticated or expired"},
    }
)
async def demo_status(
    current: CurrentSession = Depends(get_current_session),
    demo_service: DemoService = Depends(get_demo_service)
):
    """Seconds left in the demo session and whether it is about to expire."""
    try:
        return demo_service.status(current)
    except ServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
