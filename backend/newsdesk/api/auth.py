"""Dashboard authentication routes."""
from fastapi import APIRouter, Depends

from newsdesk.auth.users import auth_backend, current_active_user, fastapi_users
from newsdesk.models.user import User
from newsdesk.schemas.user import UserCreate, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])

# POST /auth/login sets the session cookie, POST /auth/logout clears it
router.include_router(fastapi_users.get_auth_router(auth_backend), prefix="")
router.include_router(fastapi_users.get_register_router(UserRead, UserCreate), prefix="")


@router.get("/me", response_model=UserRead, summary="Get current user")
async def get_current_user(user: User = Depends(current_active_user)):
    return user
