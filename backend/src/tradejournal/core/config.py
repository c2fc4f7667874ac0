"""
Configuration management for the Trading Journal application.

Supports multiple environments (development, testing, production) with
environment-specific settings. Values come from the process environment and
from an env file: ``.env.development`` is preferred for local work, ``.env``
otherwise.
"""

import os
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from .exceptions import ConfigurationError


DEFAULT_SECRET_KEY = "change-me-in-production"
DEFAULT_SESSION_SECRET = "change-me-session-secret"


class BaseConfig(BaseSettings):
    """Base configuration with common settings for all environments."""

    # Application
    APP_NAME: str = "Trading Journal"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development", description="Environment: development, testing, production")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # API Server
    API_HOST: str = Field(default="0.0.0.0", description="API server host")
    API_PORT: int = Field(default=4000, description="API server port")
    CORS_ORIGINS: str = Field(default="http://localhost:4000,http://localhost:5173", description="CORS allowed origins (comma-separated)")

    # Database
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./trades.db", description="Database connection URL")
    DATABASE_ECHO: bool = Field(default=False, description="Echo SQL queries")
    DATABASE_POOL_SIZE: int = Field(default=20, description="Database connection pool size (server databases only)")
    DATABASE_MAX_OVERFLOW: int = Field(default=10, description="Database max overflow connections (server databases only)")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL")
    LOG_FORMAT: str = Field(default="json", description="Log format: json or text")
    LOG_DIR: str = Field(default="logs", description="Directory for log files")

    # Authentication
    SECRET_KEY: str = Field(default=DEFAULT_SECRET_KEY, description="JWT signing key")
    ALGORITHM: str = Field(default="HS256", description="JWT signing algorithm")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24 * 7, description="Access token lifetime in minutes")
    SESSION_SECRET: str = Field(default=DEFAULT_SESSION_SECRET, description="Secret for the OAuth state session cookie")
    COOKIE_NAME: str = Field(default="session", description="Name of the cookie carrying the access token")
    COOKIE_SECURE: bool = Field(default=False, description="Mark auth cookies as Secure (HTTPS only)")

    # Google OAuth
    GOOGLE_CLIENT_ID: Optional[str] = Field(default=None, description="Google OAuth client ID")
    GOOGLE_CLIENT_SECRET: Optional[str] = Field(default=None, description="Google OAuth client secret")
    OAUTH_REDIRECT_URL: str = Field(default="http://localhost:4000", description="Frontend URL to return to after OAuth")

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def google_oauth_enabled(self) -> bool:
        """True when both Google OAuth credentials are configured."""
        return bool(self.GOOGLE_CLIENT_ID and self.GOOGLE_CLIENT_SECRET)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


class DevelopmentConfig(BaseConfig):
    """Development environment configuration."""

    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"
    LOG_FORMAT: str = "text"


class TestingConfig(BaseConfig):
    """Testing environment configuration."""

    ENVIRONMENT: str = "testing"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"
    DATABASE_ECHO: bool = False
    DATABASE_URL: str = "sqlite+aiosqlite:///./test_trades.db"
    SECRET_KEY: str = "testing-secret-key"


class ProductionConfig(BaseConfig):
    """Production environment configuration."""

    ENVIRONMENT: str = "production"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    DATABASE_ECHO: bool = False
    COOKIE_SECURE: bool = True


def resolve_env_file(environment: str, root_dir: str = ".") -> str:
    """
    Pick the env file to load.

    ``.env.development`` wins when it exists and the environment is not
    production; otherwise ``.env`` is used.
    """
    dev_env_path = os.path.join(root_dir, ".env.development")
    if environment != "production" and os.path.exists(dev_env_path):
        return dev_env_path
    return os.path.join(root_dir, ".env")


def get_config() -> BaseConfig:
    """
    Get configuration based on ENVIRONMENT variable.

    Returns:
        BaseConfig: Configuration object for the current environment

    Raises:
        ConfigurationError: If production still uses the default secrets
    """
    environment = os.getenv("ENVIRONMENT", "development").lower()

    config_map = {
        "development": DevelopmentConfig,
        "testing": TestingConfig,
        "production": ProductionConfig,
    }

    config_class = config_map.get(environment, DevelopmentConfig)
    settings = config_class(_env_file=resolve_env_file(environment))

    if settings.ENVIRONMENT == "production":
        if settings.SECRET_KEY == DEFAULT_SECRET_KEY or settings.SESSION_SECRET == DEFAULT_SESSION_SECRET:
            raise ConfigurationError("SECRET_KEY and SESSION_SECRET must be set in production")
    return settings


# Global configuration instance
config = get_config()
