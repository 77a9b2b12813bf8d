"""
Application settings.
"""
from pathlib import Path
from typing import Annotated, List, Optional, Union

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Project root (backend directory)
# From steam_openid/core/settings.py up two levels to backend/
BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_FILE = BASE_DIR / ".env"

STEAM_OPENID_LOGIN_URL = "https://steamcommunity.com/openid/login"
STEAM_API_URL = "https://api.steampowered.com"


def _split_csv(v: Union[str, List[str], None]) -> List[str]:
    """Accept a comma-separated string or a list."""
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    elif isinstance(v, list):
        return v
    else:
        return []


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = Field(
        default="Steam OpenID Gateway",
        description="Application name"
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        validation_alias=AliasChoices("DEBUG", "APP_DEBUG"),
        description="Enable debug mode"
    )
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "ENV", "APP_ENV"),
        description="Application environment (development, staging, production)"
    )

    # Server
    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("BACKEND_HOST", "HOST", "SERVER_HOST"),
        description="Backend server host"
    )
    port: int = Field(
        default=8000,
        validation_alias=AliasChoices("BACKEND_PORT", "PORT", "SERVER_PORT"),
        description="Backend server port"
    )
    reload: bool = Field(
        default=False,
        validation_alias=AliasChoices("RELOAD", "AUTO_RELOAD"),
        description="Enable auto-reload on code changes"
    )
    workers: int = Field(
        default=1,
        validation_alias=AliasChoices("WORKERS", "UVICORN_WORKERS"),
        description="Number of worker processes"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL"),
        description="Minimum level for console and app.log sinks"
    )
    log_dir: str = Field(
        default="logs",
        validation_alias=AliasChoices("LOG_DIR"),
        description="Directory for rotating log files"
    )

    # CORS
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default=["*"],
        validation_alias=AliasChoices("CORS_ORIGINS", "CORS_ALLOWED_ORIGINS"),
        description="Allowed CORS origins (comma-separated string)"
    )

    # Steam OpenID provider
    steam_openid_login_url: str = Field(
        default=STEAM_OPENID_LOGIN_URL,
        validation_alias=AliasChoices("STEAM_OPENID_LOGIN_URL"),
        description="OpenID 2.0 login endpoint (also used for check_authentication)"
    )
    steam_openid_claimed_id_hosts: Annotated[List[str], NoDecode] = Field(
        default=["steamcommunity.com"],
        validation_alias=AliasChoices("STEAM_OPENID_CLAIMED_ID_HOSTS"),
        description="Hosts accepted inside openid.claimed_id (comma-separated string)"
    )
    steam_openid_timeout: float = Field(
        default=10.0,
        validation_alias=AliasChoices("STEAM_OPENID_TIMEOUT"),
        description="Timeout in seconds for outbound calls to Steam"
    )
    steam_realm_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("STEAM_REALM_URL", "STEAM_TRUST_ROOT"),
        description="Realm sent to Steam; defaults to the scheme and host of the request"
    )

    # Steam Web API
    steam_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("STEAM_API_KEY", "STEAM_WEB_API_KEY"),
        description="Steam Web API key; enables profile lookup after login"
    )
    steam_api_url: str = Field(
        default=STEAM_API_URL,
        validation_alias=AliasChoices("STEAM_API_URL"),
        description="Steam Web API base URL"
    )

    @field_validator("cors_origins", "steam_openid_claimed_id_hosts", mode="before")
    @classmethod
    def parse_csv_list(cls, v: Union[str, List[str], None]) -> List[str]:
        return _split_csv(v)


settings = Settings()
