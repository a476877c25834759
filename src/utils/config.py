"""Centralized configuration management for ISS Flyover.

This module provides application-level configuration from environment variables.

Features:
- Environment variable support via .env files
- Fallback priority: .env → hardcoded defaults
- .env.example generation from defaults
- Type-safe configuration using Pydantic
- Singleton pattern for global access

Usage:
    from utils import get_config

    client = IPClient(request_timeout=get_config().lookup.request_timeout)
"""

from __future__ import annotations

import threading
import tomllib
from logging import getLogger
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.exceptions import ConfigurationError

logger = getLogger(__name__)

DEFAULT_PROJECT_NAME = "iss-flyover"


def _read_pyproject() -> dict:
    """Read pyproject.toml and extract project metadata."""
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
            project = data.get("project", {})

            urls = {}
            if isinstance(project.get("urls"), dict):
                for k, v in project.get("urls", {}).items():
                    if isinstance(v, str):
                        urls[str(k).lower()] = v

            return {
                "name": project.get("name", DEFAULT_PROJECT_NAME),
                "version": project.get("version", "?.?.?"),
                "urls": urls,
                "repository": urls.get("repository") or urls.get("homepage"),
            }
    except Exception as e:
        # Fallback to defaults if pyproject.toml can't be read
        logger.warning("Could not read pyproject.toml: %s", e)
        return {
            "name": DEFAULT_PROJECT_NAME,
            "version": "?.?.?",
            "urls": {},
            "repository": None,
        }


# Read project metadata once at module load
_PROJECT_METADATA = _read_pyproject()


class LookupConfig(BaseSettings):
    """Remote lookup service configuration."""

    ip_echo_url: str = Field(
        default="https://api64.ipify.org/",
        description="IP echo endpoint returning the caller's public IP as JSON",
    )
    geo_base_url: str = Field(
        default="http://ip-api.com/json",
        description="Base URL of the IP geolocation service (IP is appended as a path segment)",
    )
    pass_times_url: str = Field(
        default="http://api.open-notify.org/iss-pass.json",
        description="ISS pass prediction endpoint",
    )
    pass_count: int = Field(
        default=5,
        description="Number of upcoming passes to request",
        ge=1,
    )
    request_timeout: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="LOOKUP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("ip_echo_url", "geo_base_url", "pass_times_url")
    @classmethod
    def validate_http_url(cls, v: str) -> str:
        """Ensure service URLs use http or https."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                f"Service URL must start with http:// or https://, got: {v}"
            )
        return v


class AppConfig(BaseSettings):
    """Application-wide configuration."""

    name: str = Field(
        default_factory=lambda: _PROJECT_METADATA["name"],
        description="Application name (from pyproject.toml)",
    )
    version: str = Field(
        default_factory=lambda: _PROJECT_METADATA["version"],
        description="Application version (from pyproject.toml)",
    )
    user_agent: str = Field(
        default="",
        description="HTTP User-Agent header (auto-generated if empty)",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )
    log_to_file: bool = Field(
        default=False,
        description="Also write logs to rotating files under user_data_dir/logs",
    )

    # Project paths
    project_root: Path = Field(
        default_factory=lambda: Path(__file__).parent.parent.parent,
        description="Project root directory",
    )
    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).parent.parent.parent / "data",
        description="Directory for writable files such as logs",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v

    @property
    def user_data_dir(self) -> Path:
        """Get user data directory for writable files.

        Returns:
            Path to directory for logs and other writable data.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir

    @property
    def computed_user_agent(self) -> str:
        """Generate User-Agent header if not explicitly set."""
        if self.user_agent:
            return self.user_agent
        parts = [f"{self.name}/{self.version}"]
        repository = _PROJECT_METADATA.get("repository")
        if repository:
            parts.append(f"(+{repository})")
        return " ".join(parts)


class Config:
    """Main configuration container with auto-initialization."""

    def __init__(self) -> None:
        """Initialize configuration from environment and defaults.

        Raises:
            ConfigurationError: A setting from the environment or .env is invalid.
        """
        try:
            self.app = AppConfig()
            self.lookup = LookupConfig()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def render_env_example(self) -> str:
        """Render .env.example content from field descriptions and defaults."""
        lines = [
            "# ISS Flyover - Environment Configuration",
            "# Copy this file to .env and customize the values",
            "#",
            "# Priority: .env > hardcoded defaults",
            "",
        ]

        sections = (
            ("Application Settings", "APP_", AppConfig),
            ("Lookup Service Settings", "LOOKUP_", LookupConfig),
        )
        for title, prefix, settings_cls in sections:
            lines.extend(
                [
                    "# " + "=" * 76,
                    f"# {title}",
                    "# " + "=" * 76,
                    "",
                ]
            )
            for field_name, field_info in settings_cls.model_fields.items():
                if field_name in ("project_root", "data_dir"):
                    continue  # Skip computed paths

                if field_info.default_factory:
                    try:
                        default = field_info.default_factory()
                    except Exception:
                        default = None
                else:
                    default = field_info.default

                env_var = f"{prefix}{field_name.upper()}"
                lines.append(f"# {field_info.description or ''}")
                if field_name == "user_agent":
                    lines.append(f"# {env_var}={self.app.computed_user_agent}")
                elif default is None:
                    lines.append(f"# {env_var}=")
                else:
                    lines.append(f"# {env_var}={default}")
                lines.append("")

        return "\n".join(lines)

    def write_env_example(self, path: Path | None = None) -> Path:
        """Write .env.example next to the project root (or to ``path``)."""
        env_example_path = path or self.app.project_root / ".env.example"
        env_example_path.parent.mkdir(parents=True, exist_ok=True)
        env_example_path.write_text(self.render_env_example(), encoding="utf-8")
        logger.info("Wrote %s", env_example_path)
        return env_example_path

    def reload(self) -> None:
        """Reload configuration from environment variables."""
        self.__init__()

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(\n  app={self.app},\n  lookup={self.lookup}\n)"


# Global configuration instance (singleton)
_config_instance: Config | None = None
_config_lock = threading.Lock()


def get_config(config: Config | None = None) -> Config:
    """Get the global configuration instance (lazy initialization).

    Args:
        config: Optional config instance to use instead of singleton.
                If provided, replaces the singleton.

    Returns:
        Global Config instance
    """
    global _config_instance  # noqa: PLW0603

    if config is not None:
        with _config_lock:
            _config_instance = config
        return _config_instance

    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = Config()

    assert _config_instance is not None
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment.

    Returns:
        Reloaded Config instance
    """
    global _config_instance  # noqa: PLW0603
    with _config_lock:
        _config_instance = Config()
    return _config_instance


def reset_config() -> None:
    """Reset the global config instance.

    Primarily for testing.
    """
    global _config_instance  # noqa: PLW0603
    with _config_lock:
        _config_instance = None
