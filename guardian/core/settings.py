from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, case_sensitive=False)

    # App
    app_name: str = "Sahyadri Guardian API"
    environment: Literal["development", "test", "production"] = "development"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./guardian.db"

    # Session tokens
    session_secret: str = "dev-session-secret-change-me"
    jwt_algorithm: str = "HS256"
    session_ttl_days: int = 7
    # Accept `userId` / `id` subject keys from older tokens
    accept_legacy_claims: bool = False

    # Cookies
    session_cookie_name: str = "auth-token"
    session_cookie_path: str = "/"
    session_cookie_samesite: Literal["lax", "strict", "none"] = "strict"

    # Passwords
    password_min_length: int = 6
    password_max_length: int = 128
    password_hash_rounds: int = 600_000

    # Bootstrap admin, created at startup when both are set
    first_admin_email: str = ""
    first_admin_password: str = ""

    @property
    def session_cookie_secure(self) -> bool:
        return self.environment == "production"

    @property
    def session_max_age_seconds(self) -> int:
        return self.session_ttl_days * 24 * 60 * 60


@lru_cache
def get_settings() -> Settings:
    return Settings()
