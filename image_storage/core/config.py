"""
Configuration Management
========================
Loads and validates environment variables using Pydantic Settings.
Provides type-safe access to configuration throughout the application.

Enhanced features:
- Object storage client selection (signed vs unsigned requests)
- Storage configuration export for health checks
- Production configuration validation
"""

from functools import lru_cache
from typing import List, Optional, Dict, Any
import json

from pydantic import Field, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


AUTH_STYLE_SIGV4 = "SIGV4"
AUTH_STYLE_NONE = "NONE"


class Settings(BaseSettings):
    """
    Application Settings

    All settings are loaded from environment variables or .env file.
    Pydantic validates types and required fields automatically.
    """

    # ========================================================================
    # APPLICATION
    # ========================================================================
    APP_NAME: str = "Image Storage Service"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # ========================================================================
    # API SERVER
    # ========================================================================
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000)
    API_WORKERS: int = Field(default=4)

    # ========================================================================
    # OBJECT STORAGE
    # ========================================================================
    IMAGE_STORAGE_BUCKET: str = Field(default="images")
    IMAGE_STORAGE_ENDPOINT: Optional[str] = Field(default=None)
    IMAGE_STORAGE_REGION: Optional[str] = Field(default=None)
    IMAGE_STORAGE_FORCE_PATH_STYLE: bool = Field(default=False)
    IMAGE_STORAGE_AUTH_STYLE: str = Field(default=AUTH_STYLE_SIGV4)

    @field_validator("IMAGE_STORAGE_AUTH_STYLE")
    def normalize_auth_style(cls, v):
        """Upper-case the auth style and reject blank values"""
        if not v or not v.strip():
            raise ValueError("IMAGE_STORAGE_AUTH_STYLE must not be empty")
        return v.strip().upper()

    # ========================================================================
    # CORS
    # ========================================================================
    CORS_ORIGINS: str = Field(
        default='["http://localhost:5173","http://localhost:3000"]'
    )

    @field_validator("CORS_ORIGINS")
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from JSON string to list"""
        if isinstance(v, str):
            return json.loads(v)
        return v

    # ========================================================================
    # PYDANTIC CONFIGURATION
    # ========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Ignore extra fields in .env
    )

    # ========================================================================
    # COMPUTED PROPERTIES
    # ========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.ENVIRONMENT.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.ENVIRONMENT.lower() == "production"

    @computed_field
    @property
    def storage_signed_requests(self) -> bool:
        """Check if storage requests should be signed with SigV4"""
        return self.IMAGE_STORAGE_AUTH_STYLE == AUTH_STYLE_SIGV4

    # ========================================================================
    # VALIDATION METHODS
    # ========================================================================

    def validate_required_for_production(self) -> List[str]:
        """
        Validate that all required settings for production are configured

        Returns:
            List[str]: List of missing required settings
        """
        if not self.is_production:
            return []

        missing = []

        if not self.IMAGE_STORAGE_BUCKET:
            missing.append("IMAGE_STORAGE_BUCKET must be set")

        if not self.IMAGE_STORAGE_ENDPOINT and not self.IMAGE_STORAGE_REGION:
            missing.append(
                "Either IMAGE_STORAGE_ENDPOINT or IMAGE_STORAGE_REGION must be configured"
            )

        return missing

    def get_storage_config(self) -> Dict[str, Any]:
        """
        Get object storage configuration

        Returns:
            Dict[str, Any]: Storage configuration
        """
        return {
            "bucket": self.IMAGE_STORAGE_BUCKET,
            "endpoint": self.IMAGE_STORAGE_ENDPOINT,
            "region": self.IMAGE_STORAGE_REGION,
            "force_path_style": self.IMAGE_STORAGE_FORCE_PATH_STYLE,
            "auth_style": self.IMAGE_STORAGE_AUTH_STYLE,
            "signed_requests": self.storage_signed_requests,
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance

    Uses lru_cache to ensure settings are loaded only once.
    This is the recommended way to access settings throughout the app.

    Returns:
        Settings: Validated settings instance
    """
    return Settings()


# Convenience: Create a global settings instance
settings = get_settings()


# ============================================================================
# CONFIGURATION VALIDATION ON IMPORT
# ============================================================================

def validate_configuration(config: Optional[Settings] = None):
    """
    Validate configuration on module import

    Raises:
        ValueError: If production configuration is invalid
    """
    config = config or settings
    if config.is_production:
        missing = config.validate_required_for_production()
        if missing:
            error_msg = "Production configuration validation failed:\n" + "\n".join(f"  - {m}" for m in missing)
            raise ValueError(error_msg)


# Run validation on import (will only raise in production)
try:
    validate_configuration()
except ValueError as e:
    # In production, this should crash the application
    # In development, we just warn
    if settings.is_production:
        raise
    else:
        print(f"⚠️  Configuration warning: {e}")
