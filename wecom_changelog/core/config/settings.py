"""
Settings for the WeCom edition changelog service.

Plain environment variable configuration for the database, logging and the
WeCom third-party (ISV) suite credentials.
"""

import os
import tomllib
from pathlib import Path

from dotenv import load_dotenv

# Load .env file for local development - look in current working directory
load_dotenv(".env")


def _get_version_from_pyproject() -> str:
    """
    Read version from pyproject.toml file.

    Returns:
        Version string from pyproject.toml, or fallback version
    """
    current_path = Path(__file__)
    for parent in [current_path.parent, *current_path.parents]:
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            try:
                with open(pyproject_path, "rb") as f:
                    pyproject_data = tomllib.load(f)
                    version = pyproject_data.get("project", {}).get("version")
                    if version:
                        return version
            except (OSError, tomllib.TOMLDecodeError):
                continue

    return "0.1.0"


def _get_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings with environment-based configuration."""

    def __init__(self):
        # ================================================================
        # Version & Environment
        # ================================================================
        self.version: str = _get_version_from_pyproject()
        self.port: int = int(os.getenv("PORT", "8000"))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_dir: str = os.getenv("LOG_DIR", "./logs")
        self.environment: str = os.getenv("ENVIRONMENT", "DEV")

        # ================================================================
        # Database Configuration
        # ================================================================
        self.database_url: str = os.getenv(
            "DATABASE_URL", "sqlite+aiosqlite:///./wecom_changelog.db"
        )
        self.database_echo: bool = _get_bool("DATABASE_ECHO")
        self.database_init_schema: bool = _get_bool("DATABASE_INIT_SCHEMA", "1")

        # ================================================================
        # WeCom ISV Configuration
        # ================================================================
        self.wecom_base_url: str = os.getenv(
            "WECOM_BASE_URL", "https://qyapi.weixin.qq.com"
        )
        self.wecom_suite_id: str | None = os.getenv("WECOM_SUITE_ID")
        self.wecom_suite_secret: str | None = os.getenv("WECOM_SUITE_SECRET")
        self.wecom_suite_ticket: str | None = os.getenv("WECOM_SUITE_TICKET")

        # HTTP client settings
        self.http_timeout: int = int(os.getenv("HTTP_TIMEOUT", "30"))
        self.http_max_connections: int = int(os.getenv("HTTP_MAX_CONNECTIONS", "100"))

        self._validate_settings()

    def _validate_settings(self):
        """Validate settings values."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        self.log_level = self.log_level.upper()

        valid_environments = ["DEV", "PROD"]
        if self.environment.upper() not in valid_environments:
            self.environment = "DEV"  # Default fallback
        self.environment = self.environment.upper()

        # A suite id without its secret cannot fetch a suite access token
        if self.wecom_suite_id and not self.wecom_suite_secret:
            raise ValueError("WECOM_SUITE_SECRET is required when WECOM_SUITE_ID is set")

    @property
    def has_wecom_suite(self) -> bool:
        """Check if a WeCom suite is configured."""
        return bool(self.wecom_suite_id and self.wecom_suite_secret)

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "DEV"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "PROD"


# Global settings instance
settings = Settings()
