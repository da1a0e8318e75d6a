from fastapi import APIRouter, Depends, Response
from floortrack.config import settings
from floortrack.core.dependencies import (
    get_auth_service, get_current_auth_user, get_optional_token
)
from floortrack.core.rbac import get_app_user
from floortrack.database.supabase_client import get_supabase
from floortrack.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    ResetPasswordRequest, MessageResponse, MeResponse
)
from floortrack.modules.auth.service import AuthService
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user; Supabase mails the verification link"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    """Login, set the httpOnly session cookie and return the access token"""
    token = service.login(login_data)
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token.access_token,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="lax",
    )
    return token


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    token: Optional[str] = Depends(get_optional_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and clear the session cookie"""
    service.logout(token)
    response.delete_cookie(settings.auth_cookie_name)
    return MessageResponse(message="User logged out successfully")


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    reset_data: ResetPasswordRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Send a password reset mail"""
    service.send_password_reset(reset_data.email)
    return MessageResponse(message="Password reset email sent successfully!")


@router.get("/me", response_model=MeResponse)
async def me(
    auth_user: Dict = Depends(get_current_auth_user),
    supabase: Client = Depends(get_supabase)
):
    """Authenticated identity and the app user record linked to it"""
    return MeResponse(auth_uid=auth_user["id"], user=get_app_user(auth_user["id"], supabase))
