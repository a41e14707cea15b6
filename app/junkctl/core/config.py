"""junkctl configuration and settings.

This module provides the configuration model and I/O functions for the
scan and clean commands. Configuration is stored in
~/.config/junkctl/config.toml; a missing file means all defaults apply.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from junkctl.core.paths import get_config_path
from junkctl.filesystem.locations import DEFAULT_EXTENSIONS
from junkctl.filesystem.scanner import MAX_WORKERS, normalize_extensions

logger = logging.getLogger(__name__)


class JunkctlConfig(BaseModel):
    """Configuration for scanning and cleaning.

    Attributes:
        extensions: Extensions that always qualify a file as junk.
        max_depth: Directory levels listed by a normal scan.
        deep_max_depth: Directory levels listed by ``scan --deep``.
        workers: Threads used to walk sibling subtrees (1 = sequential).
        scan_paths: Roots scanned when none are given. Empty means the
            platform's temp and cache locations.
        record_history: Whether cleanups are appended to the history file.
    """

    model_config = ConfigDict(extra="forbid")

    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="Extensions that always qualify a file as junk",
    )
    max_depth: Annotated[
        int,
        Field(ge=0, le=64, description="Scan depth (0-64)"),
    ] = 3
    deep_max_depth: Annotated[
        int,
        Field(ge=0, le=64, description="Scan depth for deep scans (0-64)"),
    ] = 5
    workers: Annotated[
        int,
        Field(ge=1, le=MAX_WORKERS, description=f"Scan threads (1-{MAX_WORKERS})"),
    ] = 1
    scan_paths: list[str] = Field(
        default_factory=list,
        description="Default scan roots (empty = platform defaults)",
    )
    record_history: Annotated[
        bool,
        Field(description="Record cleanups in the history file"),
    ] = True

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, v: list[str]) -> list[str]:
        return sorted(normalize_extensions(v))

    @field_validator("scan_paths")
    @classmethod
    def _expand_scan_paths(cls, v: list[str]) -> list[str]:
        return [os.path.expanduser(p) for p in v]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> JunkctlConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated JunkctlConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return JunkctlConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> JunkctlConfig:
    """Load configuration, falling back to defaults when no file exists.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Loaded or default JunkctlConfig.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file at %s, using defaults", path or get_config_path())
        return JunkctlConfig()


def save_config(config: JunkctlConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The JunkctlConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def require_config(path: Path | None = None) -> JunkctlConfig:
    """Load configuration or exit with a helpful error message.

    A missing file is not an error: the defaults apply.

    Args:
        path: Optional custom config path.

    Returns:
        Loaded or default JunkctlConfig.

    Raises:
        typer.Exit: If the config file exists but cannot be loaded.
    """
    import typer

    from junkctl.utils.formatting import print_error, print_info

    try:
        return load_config_or_default(path)
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        print_info("Fix the file or recreate it with 'junkctl config init --force'.")
        raise typer.Exit(code=1) from e
