from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List

from floortrack.config.roles_config import PENDING_USER


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for deleting identity accounts

    # Auth
    auth_cookie_name: str = "access_token"
    auth_cookie_secure: bool = False
    auth_cache_ttl_sec: int = 60
    auth_cache_max_size: int = 500
    password_reset_redirect_url: Optional[str] = None
    default_role_name: str = PENDING_USER  # Role given to self-registered users

    # App
    app_name: str = "floortrack"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
