"""Configuration management for the vcheck CLI tool.

Handles configuration loading from multiple sources with precedence:
CLI args > environment variables > .vcheckrc > pyproject.toml > defaults
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class VcheckConfig:
    """Configuration for the vcheck CLI tool.

    Attributes:
        checkers: Checker references ("package.module:Name") in the order
            they are registered.
        log_level: Logging level name (default: "WARNING").
    """

    checkers: list[str] = field(default_factory=list)
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid.
        """
        if not isinstance(self.checkers, list):
            raise ValueError("checkers must be a list of checker references")
        for reference in self.checkers:
            validate_reference(reference)

        if not self.log_level or not isinstance(self.log_level, str):
            raise ValueError("log_level must be a non-empty string")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(LOG_LEVELS)}")


def validate_reference(reference: Any) -> None:
    """Check that a checker reference has the "module:attribute" shape.

    Args:
        reference: The reference to check.

    Raises:
        ValueError: If the reference is malformed.
    """
    if not isinstance(reference, str) or reference.count(":") != 1:
        raise ValueError(
            f"Invalid checker reference {reference!r}: expected 'package.module:Name'"
        )
    module_name, attr_path = reference.split(":")
    if not module_name.strip() or not attr_path.strip():
        raise ValueError(
            f"Invalid checker reference {reference!r}: module and name must be non-empty"
        )


def _get_config_field_names() -> set[str]:
    """Get the set of valid configuration field names."""
    return {f.name for f in fields(VcheckConfig)}


def find_config_file(filename: str = ".vcheckrc", start_dir: Path | None = None) -> Path | None:
    """Find a configuration file by traversing up the directory tree.

    Args:
        filename: Name of the config file to find.
        start_dir: Directory to start searching from. Defaults to current directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        config_path = current / filename
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            return None
        current = parent


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    with open(path, "rb") as f:
        result: dict[str, Any] = tomllib.load(f)
        return result


def _load_from_vcheckrc(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from .vcheckrc file.

    Args:
        start_dir: Directory to start searching from.

    Returns:
        Dictionary containing configuration from .vcheckrc, or empty dict if not found.
    """
    config_path = find_config_file(".vcheckrc", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
        valid_fields = _get_config_field_names()
        return {k: v for k, v in data.items() if k in valid_fields}
    except (tomllib.TOMLDecodeError, OSError):
        return {}


def _load_from_pyproject(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from pyproject.toml [tool.vcheck] section.

    Args:
        start_dir: Directory to start searching from.

    Returns:
        Dictionary containing configuration from pyproject.toml, or empty dict if not found.
    """
    config_path = find_config_file("pyproject.toml", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
        vcheck_section = data.get("tool", {}).get("vcheck", {})

        valid_fields = _get_config_field_names()
        return {k: v for k, v in vcheck_section.items() if k in valid_fields}
    except (tomllib.TOMLDecodeError, OSError):
        return {}


def _load_from_env() -> dict[str, Any]:
    """Load configuration from environment variables.

    VCHECK_CHECKERS holds a comma-separated list of checker references;
    VCHECK_LOG_LEVEL holds a level name. Empty or blank values are treated
    as unset, so they never clear settings from config files.

    Returns:
        Dictionary containing configuration from environment variables.
    """
    result: dict[str, Any] = {}

    checkers = os.environ.get("VCHECK_CHECKERS", "")
    references = [ref.strip() for ref in checkers.split(",") if ref.strip()]
    if references:
        result["checkers"] = references

    log_level = os.environ.get("VCHECK_LOG_LEVEL", "").strip()
    if log_level:
        result["log_level"] = log_level

    return result


def _merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge multiple configuration dictionaries.

    Later dictionaries take precedence over earlier ones.
    """
    result: dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if value is not None:
                result[key] = value
    return result


def load_config(
    cli_overrides: dict[str, Any] | None = None,
    start_dir: Path | None = None,
) -> VcheckConfig:
    """Load configuration with full precedence chain.

    Precedence (highest to lowest):
    1. CLI arguments (cli_overrides)
    2. Environment variables (VCHECK_*)
    3. .vcheckrc file
    4. pyproject.toml [tool.vcheck] section
    5. Default values

    Checkers given on the command line under "extra_checkers" are appended to
    the resolved list rather than replacing it.

    Args:
        cli_overrides: Configuration overrides from CLI arguments.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved VcheckConfig instance.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    pyproject_config = _load_from_pyproject(start_dir)
    vcheckrc_config = _load_from_vcheckrc(start_dir)
    env_config = _load_from_env()
    cli_config = dict(cli_overrides or {})

    extra_checkers = cli_config.pop("extra_checkers", None) or []

    valid_fields = _get_config_field_names()
    cli_config = {k: v for k, v in cli_config.items() if k in valid_fields and v is not None}

    merged = _merge_configs(
        pyproject_config,
        vcheckrc_config,
        env_config,
        cli_config,
    )

    if extra_checkers:
        configured = merged.get("checkers", [])
        if not isinstance(configured, list):
            configured = [configured]
        merged["checkers"] = configured + list(extra_checkers)

    return VcheckConfig(**merged)
