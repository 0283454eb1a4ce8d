"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Supports three modes:
    - DEVELOPMENT: Local MongoDB or the in-memory store, placeholder secret
    - STAGING: Real Atlas cluster, pre-production secrets
    - PRODUCTION: Real Atlas cluster, secrets required

The database credentials mirror the variables the frontend team already
deploys with (DB_USER / DB_PASS / ACCESS_TOKEN_SECRET / PORT).

Usage:
    from app.core.config import get_settings

    settings = get_settings()
    uri = settings.mongodb_uri

Author: Bistro Boss Team
Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from typing import Optional
from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_TOKEN_SECRET = "bistro-boss-development-secret"


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local work, placeholder secrets allowed
        PRODUCTION: Live environment
        STAGING: Pre-production testing against a real cluster
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Sensitive values (database password, token secret) should NEVER be
    committed to version control.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Bistro Boss",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=5000,
        validation_alias=AliasChoices("api_port", "port"),
        description="API server port"
    )
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    # ==========================================================================
    # DATABASE
    # ==========================================================================

    db_user: Optional[str] = Field(
        default=None,
        description="MongoDB Atlas username"
    )
    db_pass: Optional[str] = Field(
        default=None,
        description="MongoDB Atlas password"
    )
    db_cluster: str = Field(
        default="cluster0.a1a1zbo.mongodb.net",
        description="MongoDB Atlas cluster host"
    )
    mongodb_url: Optional[str] = Field(
        default=None,
        description="Full MongoDB URI, overrides the Atlas credentials"
    )
    database_name: str = Field(
        default="BistroBoss",
        description="Database holding all collections"
    )
    use_memory_store: bool = Field(
        default=False,
        description="Serve from the in-memory store instead of MongoDB"
    )

    menu_collection: str = Field(default="menuItems")
    testimonial_collection: str = Field(default="testimonials")
    user_collection: str = Field(default="users")
    cart_collection: str = Field(default="carts")

    # ==========================================================================
    # SESSION TOKENS
    # ==========================================================================

    access_token_secret: str = Field(
        default=DEFAULT_TOKEN_SECRET,
        description="HS256 signing secret for session tokens"
    )
    access_token_algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )
    access_token_expire_days: int = Field(
        default=365,
        description="Session token lifetime in days"
    )
    cookie_name: str = Field(
        default="token",
        description="Name of the httpOnly session cookie"
    )
    cookie_secure: bool = Field(
        default=False,
        description="Send the session cookie over HTTPS only"
    )

    # ==========================================================================
    # BUSINESS CONFIGURATION
    # ==========================================================================

    featured_menu_limit: int = Field(
        default=6,
        description="Number of menu items on the home page"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def mongodb_uri(self) -> str:
        """
        Connection string for the MongoDB client.

        MONGODB_URL wins when set; otherwise the Atlas SRV URI is built
        from DB_USER / DB_PASS / DB_CLUSTER.
        """
        if self.mongodb_url:
            return self.mongodb_url
        return (
            f"mongodb+srv://{self.db_user}:{self.db_pass}@{self.db_cluster}/"
            f"?retryWrites=true&w=majority&appName=Cluster0"
        )

    @property
    def cors_origins_list(self) -> list[str]:
        """Get allowed CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    # ==========================================================================
    # VALIDATION METHODS
    # ==========================================================================

    def validate_production_config(self) -> list[str]:
        """
        Validate that all required production settings are configured.

        Returns:
            List of missing configuration keys (empty if all present)
        """
        missing = []

        if not self.is_development:
            if not self.mongodb_url and not (self.db_user and self.db_pass):
                missing.append("DB_USER/DB_PASS or MONGODB_URL")
            if self.access_token_secret == DEFAULT_TOKEN_SECRET:
                missing.append("ACCESS_TOKEN_SECRET")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Configured application settings
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured application logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger("app")
