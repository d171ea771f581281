"""
Path utilities for skillmatch.

Provides consistent path resolution for configuration and skill roots.
"""

import os
from pathlib import Path

PROJECT_DIR_NAME = ".skillmatch"
PROJECT_CONFIG_NAME = "project.yaml"
DEFAULT_SKILLS_DIR = "~/.claude/skills"


def get_skillmatch_home() -> Path:
    """
    Get the skillmatch home directory.

    Resolution order:
    1. SKILLMATCH_HOME environment variable
    2. Default: ~/.skillmatch

    Returns:
        Path to the skillmatch home directory.
    """
    env_home = os.environ.get("SKILLMATCH_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".skillmatch"


def get_global_config_path() -> Path:
    """
    Get the path to the global configuration file.

    Returns:
        Path to ~/.skillmatch/config.yaml
    """
    return get_skillmatch_home() / "config.yaml"


def get_default_skills_dir() -> Path:
    """
    Get the directory skills are installed into by default.

    Returns:
        Path to ~/.claude/skills/
    """
    return Path(DEFAULT_SKILLS_DIR).expanduser()


def find_project_config(start_path: Path | None = None) -> Path | None:
    """
    Find the project configuration file by traversing up the directory tree.

    Looks for .skillmatch/project.yaml starting from the given path
    (or current directory) and moving up to the root.

    Args:
        start_path: Starting directory to search from. Defaults to cwd.

    Returns:
        Path to the project config if found, None otherwise.
    """
    current = Path.cwd() if start_path is None else Path(start_path).resolve()

    for directory in (current, *current.parents):
        project_config = directory / PROJECT_DIR_NAME / PROJECT_CONFIG_NAME
        if project_config.is_file():
            return project_config

    return None


def expand_path(path: str | Path) -> Path:
    """
    Expand a path string, handling ~ and environment variables.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded Path.
    """
    if isinstance(path, str):
        path = os.path.expandvars(path)
    return Path(path).expanduser()
