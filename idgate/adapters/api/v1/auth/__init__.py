"""Authentication router package: login, logout, OAuth and password reset endpoints."""

from fastapi import APIRouter

from .routes import forgot_password as forgot_password_route
from .routes import login as login_route
from .routes import logout as logout_route
from .routes import oauth as oauth_route
from .routes import reset_password as reset_password_route
from .routes import user_exists as user_exists_route

router = APIRouter(prefix="/auth", tags=["auth"])

router.include_router(login_route.router, prefix="/login")
router.include_router(logout_route.router, prefix="/logout")
router.include_router(user_exists_route.router, prefix="/user-exists")
router.include_router(forgot_password_route.router, prefix="/forgot-password")
router.include_router(reset_password_route.router, prefix="/reset-password")
router.include_router(oauth_route.router, prefix="/oauth")

__all__ = ["router"]
