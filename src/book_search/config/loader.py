"""Configuration loading from TOML files and environment variables."""

import contextlib
import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from book_search.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_FORMAT,
    ENV_LOG_LEVEL,
    ENV_MAX_RESULTS,
    ensure_directories,
    get_config_path,
)
from book_search.config.schema import BookSearchConfig, OutputFormat
from book_search.exceptions import ConfigError, ConfigValidationError

# Global config instance (singleton)
_config: BookSearchConfig | None = None


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = False,
) -> BookSearchConfig:
    """Load configuration from TOML file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Write the default config if the file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigError: If the file cannot be read or parsed.
        ConfigValidationError: If configuration is invalid.
    """
    path = config_path or get_config_path()

    if not path.exists():
        if create_if_missing:
            if config_path is None:
                ensure_directories()
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(DEFAULT_CONFIG_TOML)
        else:
            # Return default config without file
            return _apply_env_overrides(BookSearchConfig())

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        config = BookSearchConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e

    return _apply_env_overrides(config)


def _apply_env_overrides(config: BookSearchConfig) -> BookSearchConfig:
    """Apply environment variable overrides to configuration."""
    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    max_results = os.environ.get(ENV_MAX_RESULTS)
    if max_results:
        with contextlib.suppress(ValueError):
            value = int(max_results)
            if value >= 1:
                config.search.max_results = value

    format_env = os.environ.get(ENV_FORMAT)
    if format_env:
        with contextlib.suppress(ValueError):
            config.output.default_format = OutputFormat(format_env.lower())

    return config


def get_config() -> BookSearchConfig:
    """Get the current configuration (singleton).

    Loads config on first access, caches for subsequent calls.

    Returns:
        Current configuration.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Path | None = None) -> BookSearchConfig:
    """Reload configuration from disk.

    Args:
        config_path: Path to config file. If None, uses default.

    Returns:
        Reloaded configuration.
    """
    global _config
    _config = load_config(config_path)
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None
