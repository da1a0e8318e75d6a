"""
Core dependencies for route protection
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from floortrack.config import settings
from floortrack.core.rbac import get_app_user, is_owner
from floortrack.database.supabase_client import get_supabase, get_supabase_admin, get_supabase_auth
from floortrack.modules.auth.service import AuthService
from supabase import Client
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    admin_supabase: Client = Depends(get_supabase_admin),
    auth_client: Client = Depends(get_supabase_auth)
) -> AuthService:
    return AuthService(supabase, admin_supabase, auth_client)


def get_optional_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> Optional[str]:
    """Bearer token from the Authorization header, else the session cookie"""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.auth_cookie_name)


def get_current_token(token: Optional[str] = Depends(get_optional_token)) -> str:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing access token"
        )
    return token


def get_current_auth_user(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Dict[str, Any]:
    """Identity-provider user behind the request token"""
    return auth_service.get_current_user(token)


def get_current_app_user(
    auth_user: Dict[str, Any] = Depends(get_current_auth_user),
    supabase: Client = Depends(get_supabase)
) -> Dict[str, Any]:
    """users row (with role and groups) for the authenticated identity"""
    user = get_app_user(auth_user["id"], supabase)
    if not user:
        logger.info(f"No app user for auth uid {auth_user['id']}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
    return user


def require_owner(detail: str = "Forbidden"):
    """Factory function to create an Owner-only dependency"""
    def check_owner(user: Dict[str, Any] = Depends(get_current_app_user)) -> Dict[str, Any]:
        if not is_owner(user):
            logger.info(f"User {user.get('id')} denied Owner-only action: {detail}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
        return user
    return check_owner
