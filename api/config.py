"""
API Configuration using Pydantic Settings.

Provides centralized configuration management with environment variable loading,
validation, and sensible defaults for development and production environments.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Dict, List

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Environment(str, Enum):
    """Application environment modes."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DatabaseSettings(BaseSettings):
    """SQLite database settings."""

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_",
        env_file=".env",
        extra="ignore",
    )

    path: Path = Field(
        default=Path("./data/reportforge.db"), description="SQLite database file"
    )


class StorageSettings(BaseSettings):
    """Locations of generated PDFs and report templates."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        extra="ignore",
    )

    downloads_dir: Path = Field(
        default=Path("./downloads"), description="Directory for generated PDFs"
    )
    templates_dir: Path = Field(
        default=Path(__file__).resolve().parent.parent / "core" / "reporting" / "templates" / "html",
        description="Directory holding <report_type>.html templates",
    )


class PDFSettings(BaseSettings):
    """Headless browser settings for PDF rasterization."""

    model_config = SettingsConfigDict(
        env_prefix="PDF_",
        env_file=".env",
        extra="ignore",
    )

    headless: bool = Field(default=True, description="Run Chromium headless")
    timeout_ms: float = Field(
        default=30_000, description="Content load timeout in milliseconds"
    )
    margin_mm: float = Field(default=20.0, description="Page margin on all sides")
    launch_args: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["--no-sandbox", "--disable-setuid-sandbox"],
        description="Extra Chromium command line arguments",
    )

    @field_validator("launch_args", mode="before")
    @classmethod
    def parse_launch_args(cls, v: Any) -> List[str]:
        """Parse comma-separated launch arguments from environment variable."""
        if isinstance(v, str):
            return [arg.strip() for arg in v.split(",") if arg.strip()]
        return v or []


class CORSSettings(BaseSettings):
    """Cross-Origin Resource Sharing settings."""

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        env_file=".env",
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Enable CORS")
    allow_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["*"], description="Allowed origins"
    )
    allow_methods: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["*"], description="Allowed HTTP methods"
    )
    allow_headers: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["*"], description="Allowed headers"
    )
    allow_credentials: bool = Field(default=False, description="Allow credentials")
    max_age: int = Field(default=600, description="Preflight cache max age")

    @field_validator("allow_origins", "allow_methods", "allow_headers", mode="before")
    @classmethod
    def parse_list(cls, v: Any) -> List[str]:
        """Parse comma-separated lists from environment variables."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v or []


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="REPORTFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="ReportForge", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Environment mode"
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    # API Server
    host: str = Field(default="0.0.0.0", description="API server host")
    port: int = Field(
        default=3001,
        validation_alias=AliasChoices("REPORTFORGE_PORT", "PORT"),
        description="API server port",
    )
    reload: bool = Field(default=False, description="Auto-reload on code changes")

    # Request handling
    max_request_size: int = Field(
        default=1024 * 1024, description="Max request size in bytes"
    )

    # Data
    seed_sample_data: bool = Field(
        default=True, description="Insert sample employees on first start"
    )
    default_generated_by: str = Field(
        default="System", description="Label stored on reports without an author"
    )

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    pdf: PDFSettings = Field(default_factory=PDFSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)

    @model_validator(mode="after")
    def configure_environment_defaults(self) -> "Settings":
        """Set environment-specific defaults."""
        if self.environment == Environment.DEVELOPMENT:
            if self.log_level == LogLevel.INFO:
                object.__setattr__(self, "log_level", LogLevel.DEBUG)
        elif self.environment == Environment.PRODUCTION:
            if self.debug:
                object.__setattr__(self, "debug", False)
            if self.reload:
                object.__setattr__(self, "reload", False)
        return self

    def get_openapi_config(self) -> Dict[str, Any]:
        """Get OpenAPI configuration."""
        return {
            "title": self.app_name,
            "version": self.app_version,
            "description": (
                "Employee records and PDF report generation. "
                "Renders stored users through HTML templates and rasterizes "
                "them to downloadable PDFs."
            ),
            "license_info": {
                "name": "MIT",
                "url": "https://opensource.org/licenses/MIT",
            },
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.

    Returns:
        Settings instance with loaded configuration.
    """
    return Settings()
