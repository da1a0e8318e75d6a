import hashlib
import logging
import time
from supabase import Client
from floortrack.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from floortrack.config import settings
from floortrack.core.errors import extract_store_error, is_unique_violation
from floortrack.modules.roles.service import RoleService
from fastapi import HTTPException
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}


def _cache_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


def _remember(cache_key: str, user_data: Dict[str, Any], now: float) -> None:
    """Store a verified user, making room by dropping expired entries and then the oldest ones"""
    if len(_AUTH_USER_CACHE) >= settings.auth_cache_max_size:
        for key in [k for k, (_, expiry) in _AUTH_USER_CACHE.items() if expiry <= now]:
            del _AUTH_USER_CACHE[key]
    while _AUTH_USER_CACHE and len(_AUTH_USER_CACHE) >= settings.auth_cache_max_size:
        del _AUTH_USER_CACHE[next(iter(_AUTH_USER_CACHE))]
    if settings.auth_cache_max_size > 0:
        _AUTH_USER_CACHE[cache_key] = (user_data, now + settings.auth_cache_ttl_sec)


class AuthService:
    def __init__(
        self,
        supabase: Client,
        admin_supabase: Optional[Client] = None,
        auth_client: Optional[Client] = None
    ):
        self.supabase = supabase
        self.admin_supabase = admin_supabase or supabase
        # Identity calls only; table queries stay on self.supabase
        self.auth_client = auth_client or supabase

    def _default_role_id(self) -> Optional[int]:
        role = RoleService(self.supabase).find_role_by_name(settings.default_role_name)
        if not role:
            logger.warning(f"Default role '{settings.default_role_name}' missing; registering without role")
            return None
        return role["id"]

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Create the identity account, then the users row linked to it"""
        try:
            auth_response = self.auth_client.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": {
                        "first_name": register_data.first_name,
                        "last_name": register_data.last_name,
                    }
                }
            })
        except Exception as e:
            error_message = extract_store_error(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=409, detail="User already exists")
            logger.error(f"Register error: {error_message}")
            raise HTTPException(status_code=500, detail="Registration failed")

        if not auth_response.user:
            raise HTTPException(status_code=500, detail="Registration failed")
        auth_uid = auth_response.user.id
        role_id = self._default_role_id()

        try:
            result = self.supabase.table("users").insert({
                "auth_uid": auth_uid,
                "email": register_data.email,
                "first_name": register_data.first_name,
                "last_name": register_data.last_name,
                "role_id": role_id,
            }).execute()
        except Exception as e:
            logger.error(f"DB error during registration: {extract_store_error(e)}")
            if is_unique_violation(e):
                raise HTTPException(status_code=409, detail="User already exists")
            raise HTTPException(status_code=500, detail="Error saving to the database!")

        if not result.data:
            raise HTTPException(status_code=500, detail="Error saving to the database!")

        return RegisterResponse(
            user_id=result.data[0]["id"],
            email=register_data.email,
            message="Verification email sent! User created successfully!"
        )

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.auth_client.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            error_message = extract_store_error(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            logger.error(f"Login error: {error_message}")
            raise HTTPException(status_code=500, detail="An error occurred while logging in")

        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid email or password")

        return TokenResponse(
            access_token=auth_response.session.access_token,
            user_id=auth_response.user.id,
            email=auth_response.user.email or login_data.email
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Verify a token with Supabase Auth. Uses short TTL cache to reduce auth API calls."""
        cache_key = _cache_key(token)
        now = time.monotonic()
        if cache_key in _AUTH_USER_CACHE:
            user_data, expiry = _AUTH_USER_CACHE[cache_key]
            if now < expiry:
                return user_data
            del _AUTH_USER_CACHE[cache_key]
        try:
            user_response = self.auth_client.auth.get_user(jwt=token)
        except Exception as e:
            error_msg = extract_store_error(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")
        if not user_response or not user_response.user:
            raise HTTPException(status_code=401, detail="Invalid or expired token")
        user = user_response.user
        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "app_metadata": user.app_metadata or {},
        }
        _remember(cache_key, user_data, now)
        return user_data

    def logout(self, token: Optional[str]) -> bool:
        """Sign out at Supabase Auth and forget the cached verification"""
        if token:
            _AUTH_USER_CACHE.pop(_cache_key(token), None)
        try:
            self.auth_client.auth.sign_out()
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {extract_store_error(e)}")
            return False

    def send_password_reset(self, email: str) -> None:
        """Ask Supabase Auth to mail a password reset link"""
        options = {}
        if settings.password_reset_redirect_url:
            options["redirect_to"] = settings.password_reset_redirect_url
        try:
            self.auth_client.auth.reset_password_for_email(email, options)
        except Exception as e:
            logger.error(f"Password reset for {email} failed: {extract_store_error(e)}")
            raise HTTPException(status_code=500, detail="Internal Server Error")

    def delete_account(self, auth_uid: str) -> None:
        """Delete the identity account (requires service role key)"""
        try:
            self.admin_supabase.auth.admin.delete_user(auth_uid)
        except Exception as e:
            logger.error(f"Deleting identity account {auth_uid} failed: {extract_store_error(e)}")
            raise HTTPException(status_code=500, detail="Failed to delete account")
