"""Configuration for skillmatch."""

from skillmatch.config.loader import (
    ConfigurationError,
    apply_env_overrides,
    clear_config_cache,
    get_config,
    get_config_sources,
    load_config,
    load_yaml_file,
)
from skillmatch.config.merger import deep_merge, get_nested_value, set_nested_value
from skillmatch.config.schema import Config, LoggingConfig, MatcherConfig, SkillsConfig

__all__ = [
    "Config",
    "ConfigurationError",
    "LoggingConfig",
    "MatcherConfig",
    "SkillsConfig",
    "apply_env_overrides",
    "clear_config_cache",
    "deep_merge",
    "get_config",
    "get_config_sources",
    "get_nested_value",
    "load_config",
    "load_yaml_file",
    "set_nested_value",
]
