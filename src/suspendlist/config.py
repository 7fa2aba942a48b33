"""
Centralized configuration for suspendlist.

Uses Pydantic BaseSettings for environment variable integration
and validation. All configurable values should be defined here.

Configuration sources (in order of precedence):
1. Explicit constructor arguments
2. Environment variables (SUSPENDLIST_*)
3. .env file
4. Default values

Example:
    from suspendlist.config import get_config

    config = get_config()
    print(config.transactional)  # From SUSPENDLIST_TRANSACTIONAL or default

    # Override at runtime
    config = get_config(transactional=False)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SuspendListConfig(BaseSettings):
    """
    Central configuration for suspendlist.

    All settings can be overridden via environment variables
    prefixed with SUSPENDLIST_.

    Example:
        export SUSPENDLIST_TRANSACTIONAL=false
        export SUSPENDLIST_LOG_LEVEL=debug
    """

    model_config = SettingsConfigDict(
        env_prefix="SUSPENDLIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Service identification
    service_name: str = Field(
        default="suspendlist",
        description="Service name for structured event attribution",
    )

    # Enforcement
    transactional: bool = Field(
        default=True,
        description=(
            "Apply each mutation to a scratch copy and commit only on success, "
            "so a conflicting call leaves the list unchanged"
        ),
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Logging level for suspendlist",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log output format (json for log shippers, text for console)",
    )

    # Rule sets
    rule_set_dir: str = Field(
        default=".",
        description="Base directory for relative rule-set paths",
    )

    @field_validator("rule_set_dir")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ and environment variables in paths."""
        return os.path.expanduser(os.path.expandvars(v))

    def resolve_rule_set_path(self, path: Union[str, Path]) -> Path:
        """Resolve a rule-set path against ``rule_set_dir`` when relative."""
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return Path(self.rule_set_dir) / candidate


# Global singleton
_config: Optional[SuspendListConfig] = None


def get_config(**overrides) -> SuspendListConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.

    Args:
        **overrides: Override any config values

    Returns:
        SuspendListConfig instance
    """
    global _config

    if overrides or _config is None:
        _config = SuspendListConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None


def get_log_level() -> str:
    """Get the configured log level."""
    return get_config().log_level
