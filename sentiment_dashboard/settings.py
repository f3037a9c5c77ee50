from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SENTIMENT_DASHBOARD_",
        env_file=".env",
        extra="ignore",
    )

    config_file: Path = Path("config/settings.yaml")
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_base_url: str = "http://127.0.0.1:8000"
    auth_enabled: bool = True
    jwt_secret_key: str = "change-me-in-production-with-a-secure-random-key"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 240
    admin_cookie_name: str = "admin_auth"
    cookie_secure: bool = False
    default_admin_username: str = "admin"
    default_admin_password: Optional[str] = None
