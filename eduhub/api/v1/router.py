from fastapi import APIRouter
from eduhub.api.v1.endpoints import auth, posts, messages, resources, users

# ============================================================
# Main API v1 Router
# ============================================================

api_router = APIRouter()

# Include auth routes at /auth
api_router.include_router(
    auth.router,
    prefix="/auth"
)

api_router.include_router(
    posts.router,
    prefix=""  # Routes define their own prefix (/posts)
)

api_router.include_router(
    messages.router,
    prefix=""  # Routes define their own prefix (/messages)
)

api_router.include_router(
    resources.router,
    prefix=""  # Routes define their own prefix (/resources)
)

api_router.include_router(
    users.router,
    prefix=""  # Routes define their own prefix (/users)
)
