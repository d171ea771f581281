"""
Configuration merger for skillmatch.

Deep merge of configuration layers, with +key/-key list operations so a
project file can extend or trim the global skill paths.
"""

from typing import Any


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries with list operation support.

    Merge rules:
    - Scalar values: override replaces base
    - Dicts: recursive deep merge
    - Lists (default): override replaces base
    - '+key' with a list: append items missing from the base list
    - '-key' with a list: remove items from the base list
    - null/None value: remove key from result

    Args:
        base: Base configuration dictionary.
        override: Override configuration dictionary.

    Returns:
        Merged configuration dictionary.

    Examples:
        >>> deep_merge({"paths": ["~/.claude/skills"]}, {"+paths": ["./skills"]})
        {'paths': ['~/.claude/skills', './skills']}

        >>> deep_merge({"paths": ["a", "b"]}, {"-paths": ["a"]})
        {'paths': ['b']}
    """
    result = base.copy()

    for key, value in override.items():
        if key.startswith("+") and isinstance(value, list):
            actual_key = key[1:]
            current = result.get(actual_key)
            if isinstance(current, list):
                result[actual_key] = current + [item for item in value if item not in current]
            else:
                result[actual_key] = list(value)

        elif key.startswith("-") and isinstance(value, list):
            actual_key = key[1:]
            current = result.get(actual_key)
            if isinstance(current, list):
                result[actual_key] = [item for item in current if item not in value]

        elif value is None:
            result.pop(key, None)

        elif isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)

        else:
            result[key] = value

    return result


def get_nested_value(config: dict[str, Any], key_path: str) -> Any:
    """
    Get a nested value by dot-separated path (e.g. "matcher.min_score").

    Returns:
        The value at the key path, or None if not found.
    """
    current: Any = config
    for key in key_path.split("."):
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return None
    return current


def set_nested_value(config: dict[str, Any], key_path: str, value: Any) -> dict[str, Any]:
    """
    Set a nested value by dot-separated path, creating intermediate dicts.

    Examples:
        >>> set_nested_value({}, "matcher.min_score", 0.2)
        {'matcher': {'min_score': 0.2}}
    """
    keys = key_path.split(".")
    current = config

    for key in keys[:-1]:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]

    current[keys[-1]] = value
    return config
