# backend/pof/core/settings.py
"""
Purchase Order Fulfillment API - Configuration Management with pydantic-settings

- Loads from environment and root .env
- Validates and normalizes values
- Cached singleton via get_settings()
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# backend/pof/core/settings.py -> <repo>/.env
_ENV_FILE = Path(__file__).resolve().parent.parent.parent.parent / ".env"


class Settings(BaseSettings):
    """
    Application settings with validation.

    Environment variables take precedence over .env file values.
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===================
    # Application Settings
    # ===================
    PROJECT_NAME: str = "Purchase Order Fulfillment"
    VERSION: str = "1.0.0"
    ODATA_ROOT: str = Field(
        default="/sap/logistics/gtt/v2/pof/odata/v1",
        description="Mount point of the OData read routes",
    )
    DEBUG: bool = Field(default=False, description="Enable debug mode")
    ENVIRONMENT: str = Field(default="development", description="Deployment environment")

    @field_validator("ODATA_ROOT")
    @classmethod
    def normalize_odata_root(cls, v: str) -> str:
        return "/" + v.strip("/")

    # ===================
    # GTT Core Service
    # ===================
    GTT_CORE_SERVICE_URL: str = Field(
        default="http://localhost:8080/sap/logistics/gtt/v2/odata/v1/com.sap.gtt.app.pof.POFService",
        description="Root URL of the backend OData service the reads are delegated to",
    )
    GTT_CORE_SERVICE_TOKEN: Optional[str] = Field(
        default=None, description="Bearer token forwarded to the core service"
    )
    GTT_REQUEST_TIMEOUT: float = Field(
        default=60.0, description="Timeout (seconds) for a single core service request"
    )
    GTT_MODEL_NAMESPACE: str = Field(
        default="com.sap.gtt.app.pof.POFModel",
        description="Model namespace prefixed to event type names",
    )

    @field_validator("GTT_CORE_SERVICE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # ===================
    # Batch Lookups
    # ===================
    FILTER_BATCH_SIZE: int = Field(
        default=50, ge=1, description="Max identifiers OR-combined into one $filter"
    )
    FILTER_MAX_WORKERS: int = Field(
        default=4, ge=1, description="Parallel lookups for split filters"
    )

    # ===================
    # CORS Settings
    # ===================
    ALLOWED_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
            "http://127.0.0.1:8080",
        ],
        description="Allowed CORS origins",
    )

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # ===================
    # Logging
    # ===================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or text
    LOG_FILE: Optional[str] = None

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Singleton settings loader (cached)."""
    return Settings()


# Convenience alias
settings = get_settings()
