"""
Configuration management for the Workbench extension host.

This module provides centralized configuration using Pydantic settings
with support for environment variables and .env files.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ValidationResult(BaseModel):
    valid: bool = True
    errors: list[str] = []
    warnings: list[str] = []

    def merge(self, other: "ValidationResult") -> None:
        """Fold another result into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        if not other.valid:
            self.valid = False


class WorkbenchSettings(BaseSettings):
    """Workbench extension host configuration settings."""

    # Application
    app_name: str = "workbench"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False)

    # Logging settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_structured: bool = Field(default=False, description="Emit JSON structured log lines")
    log_file: str | None = Field(default=None, description="Optional log file path")

    # Extension system settings
    extensions_auto_load: dict[str, str] = Field(
        default={},
        description="Extension path -> 'module:attr' target registered on startup"
    )
    extensions_config: dict[str, dict[str, Any]] = Field(
        default={},
        description="Extension-specific configuration keyed by extension path"
    )
    default_layout_mode: str | None = Field(
        default=None,
        description="Layout extension path activated after auto-loading"
    )

    # Manifest persistence
    manifest_path: str | None = Field(default=None, description="Where the manifest is written on shutdown")

    # Host integration
    dialogs_enabled: bool = Field(default=True, description="Forward alerts to the dialog presenter")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="WORKBENCH_",
        extra="ignore",
    )

    def get_log_file_path(self) -> Path | None:
        """Get log file path as Path object."""
        if not self.log_file:
            return None
        path = Path(self.log_file).expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def get_manifest_path(self) -> Path | None:
        """Get manifest output path as Path object."""
        if not self.manifest_path:
            return None
        return Path(self.manifest_path).expanduser().resolve()

    def validate_settings(self) -> ValidationResult:
        """Validate settings and return status information."""
        status = ValidationResult()

        if self.log_level.upper() not in LOG_LEVELS:
            status.errors.append(f"Unknown log level: {self.log_level}")
            status.valid = False

        for path, target in self.extensions_auto_load.items():
            if not path:
                status.errors.append(f"Auto-load target {target!r} has an empty extension path")
                status.valid = False
            if not target or target.startswith((":", ".")):
                status.errors.append(f"Auto-load target for {path!r} is not an importable name: {target!r}")
                status.valid = False

        for path in self.extensions_config:
            if path not in self.extensions_auto_load:
                status.warnings.append(f"Configuration given for extension that is not auto-loaded: {path}")

        if self.default_layout_mode and self.default_layout_mode not in self.extensions_auto_load:
            status.warnings.append(
                f"Default layout mode {self.default_layout_mode!r} is not among auto-loaded extensions"
            )

        return status


# Global settings instance
settings = WorkbenchSettings()


def get_settings() -> WorkbenchSettings:
    """Get the global settings instance."""
    return settings


def reload_settings() -> WorkbenchSettings:
    """Reload settings from environment and return new instance."""
    global settings
    settings = WorkbenchSettings()
    return settings
