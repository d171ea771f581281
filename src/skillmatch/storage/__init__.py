"""Storage utilities for skillmatch."""

from skillmatch.storage.paths import (
    expand_path,
    find_project_config,
    get_default_skills_dir,
    get_global_config_path,
    get_skillmatch_home,
)

__all__ = [
    "expand_path",
    "find_project_config",
    "get_default_skills_dir",
    "get_global_config_path",
    "get_skillmatch_home",
]
