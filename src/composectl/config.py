"""
Configuration management for composectl

Handles configuration loading from environment variables, the .env file
and command-line arguments using Pydantic settings.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .environment import DEFAULT_COMPOSE_FILE

logger = logging.getLogger(__name__)


class ComposectlConfig(BaseSettings):
    """
    Main configuration class for composectl.

    Configuration is loaded from:
    1. Environment variables (highest priority)
    2. .env file
    3. Default values (lowest priority)
    """

    model_config = SettingsConfigDict(
        env_prefix="COMPOSECTL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project configuration
    root: str = Field(
        default=".",
        description="Project root directory containing the env and compose files",
    )
    env_file: str = Field(
        default=".env",
        description="Environment file, relative to the project root",
    )

    # Orchestration configuration
    compose_binary: str = Field(
        default="docker compose",
        description="Orchestration binary used to run compose commands",
    )
    default_compose_file: str = Field(
        default=DEFAULT_COMPOSE_FILE,
        description="Compose file used when the env file does not set COMPOSE_FILES",
    )
    dry_run: bool = Field(
        default=False,
        description="Print commands instead of executing them",
    )

    # Logging configuration
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_dir: Optional[str] = Field(
        default=None,
        description="Directory for log files (file logging disabled if unset)",
    )
    verbose: bool = Field(
        default=False,
        description="Enable verbose console output",
    )

    @validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @validator("compose_binary")
    def validate_compose_binary(cls, v: str) -> str:
        """Validate the compose binary is not empty."""
        if not v.strip():
            raise ValueError("compose_binary must not be empty")
        return v.strip()

    @property
    def project_root(self) -> Path:
        """Get project root directory as Path object."""
        return Path(self.root)

    @property
    def env_file_path(self) -> Path:
        """Get the environment file path within the project root."""
        return self.project_root / self.env_file


def load_config(cli_overrides: Optional[dict] = None) -> ComposectlConfig:
    """
    Load configuration with optional CLI overrides.

    Args:
        cli_overrides: CLI argument overrides; None values are ignored

    Returns:
        Loaded configuration
    """
    config = ComposectlConfig()

    if cli_overrides:
        config_data = config.model_dump()
        config_data.update({k: v for k, v in cli_overrides.items() if v is not None})
        config = ComposectlConfig(**config_data)

    logger.debug(f"Loaded configuration: root={config.root}, env_file={config.env_file}")
    return config
