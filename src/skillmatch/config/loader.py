"""
Configuration loader for skillmatch.

Loads and merges configuration from multiple sources:
1. Default values
2. Global config ($SKILLMATCH_HOME/config.yaml, default ~/.skillmatch)
3. Project config (nearest .skillmatch/project.yaml)
4. Environment variables (SKILLMATCH_<SECTION>__<KEY>)
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from skillmatch.config.merger import deep_merge, set_nested_value
from skillmatch.config.schema import Config
from skillmatch.storage.paths import find_project_config, get_global_config_path

ENV_PREFIX = "SKILLMATCH_"
ENV_NESTING = "__"

# Environment variables that are not configuration keys.
_RESERVED_ENV = {"SKILLMATCH_HOME"}


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed configuration dictionary (empty if the file is missing or empty).

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Configuration in {path} must be a YAML mapping")
    return content


def apply_env_overrides(config: dict[str, Any], environ: dict[str, str] | None = None) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Double underscores separate nesting levels, so single underscores can
    stay inside key names:
    SKILLMATCH_MATCHER__MIN_SCORE=0.2 sets matcher.min_score.

    Args:
        config: Configuration dictionary to modify.
        environ: Environment mapping (default: os.environ).

    Returns:
        Configuration with environment overrides applied.
    """
    environ = os.environ if environ is None else environ

    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX) or key in _RESERVED_ENV:
            continue

        config_key = ".".join(part.lower() for part in key[len(ENV_PREFIX) :].split(ENV_NESTING) if part)
        if not config_key:
            continue

        config = set_nested_value(config, config_key, _parse_env_value(value))

    return config


def _parse_env_value(value: str) -> Any:
    """
    Parse an environment variable value to the appropriate type.

    Returns:
        Parsed value (bool, int, float, list, or string).
    """
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    if re.match(r"^-?\d+$", value):
        return int(value)

    if re.match(r"^-?\d+\.\d+$", value):
        return float(value)

    if "," in value:
        return [item.strip() for item in value.split(",") if item.strip()]

    return value


def load_config(
    project_path: Path | None = None,
    skip_project: bool = False,
    skip_env: bool = False,
) -> Config:
    """
    Load and merge configuration from all sources.

    Args:
        project_path: Starting path to search for project config. Defaults to cwd.
        skip_project: Skip loading project configuration.
        skip_env: Skip environment variable overrides.

    Returns:
        Merged and validated Config object.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    config_dict = Config().model_dump()

    global_path = get_global_config_path()
    if global_path.exists():
        config_dict = deep_merge(config_dict, load_yaml_file(global_path))

    if not skip_project:
        project_config_path = find_project_config(project_path)
        if project_config_path:
            config_dict = deep_merge(config_dict, load_yaml_file(project_config_path))

    if not skip_env:
        config_dict = apply_env_overrides(config_dict)

    try:
        return Config.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


def get_config_sources(project_path: Path | None = None) -> dict[str, Path | None]:
    """
    Get paths to all configuration sources.

    Returns:
        Dictionary mapping source names to paths (None if not found).
    """
    global_path = get_global_config_path()
    return {
        "global": global_path if global_path.exists() else None,
        "project": find_project_config(project_path),
    }


# Singleton for cached config
_cached_config: Config | None = None


def get_config(reload: bool = False) -> Config:
    """
    Get the global configuration instance.

    Uses a cached instance. Use reload=True to force refresh.
    """
    global _cached_config

    if _cached_config is None or reload:
        _cached_config = load_config()

    return _cached_config


def clear_config_cache() -> None:
    """Clear the cached configuration."""
    global _cached_config
    _cached_config = None
