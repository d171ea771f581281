"""
Skill manager for skillmatch.

Provides the main interface for working with skills: it owns the current
registry snapshot for the configured skill roots and the matcher settings.
"""

import logging
import threading
from pathlib import Path
from typing import Any

from skillmatch.config.schema import Config
from skillmatch.skills.matcher import SkillMatcher
from skillmatch.skills.models import MatchResult, SkillDescriptor
from skillmatch.skills.parser import validate_skill_directory
from skillmatch.skills.registry import SkillRegistry
from skillmatch.storage.paths import expand_path

logger = logging.getLogger(__name__)


class SkillManager:
    """Main interface for working with skills.

    Provides methods to:
    - Load the registry from the configured roots (lazily)
    - Reload it, swapping in a fresh snapshot
    - Match requests, look up skills and their related skills
    - Validate skill directories
    """

    def __init__(
        self,
        paths: list[Path | str] | None = None,
        config: Config | None = None,
        strict: bool | None = None,
    ):
        """Initialize the skill manager.

        Args:
            paths: Skill roots; defaults to ``config.skills.paths``.
            config: Configuration (defaults to built-in defaults).
            strict: Override ``config.skills.strict``.
        """
        self.config = config or Config()
        raw_paths = paths if paths is not None else self.config.skills.paths
        self.paths = [expand_path(p) for p in raw_paths]
        self.strict = self.config.skills.strict if strict is None else strict
        self.matcher = SkillMatcher(self.config.matcher)
        self._registry: SkillRegistry | None = None
        self._lock = threading.Lock()

    @property
    def registry(self) -> SkillRegistry:
        """The current registry snapshot (loaded on first access)."""
        registry = self._registry
        if registry is None:
            registry = self.reload()
        return registry

    def reload(self) -> SkillRegistry:
        """Load the roots again and swap the new registry in.

        Readers holding the previous snapshot keep using it unchanged.

        Raises:
            MalformedDescriptorError: If loading strictly and a manifest is invalid.
            DuplicateNameError: If two skill units declare the same name.
        """
        with self._lock:
            registry = SkillRegistry.load_all(
                self.paths,
                strict=self.strict,
                manifest_name=self.config.skills.manifest_name,
            )
            self._registry = registry
        logger.debug(f"Registry reloaded from {', '.join(str(p) for p in self.paths)}")
        return registry

    def match(self, query: str, max_results: int | None = None) -> MatchResult:
        """Match a request against the current registry.

        Raises:
            EmptyQueryError: If the query is blank.
        """
        return self.matcher.match(query, self.registry, max_results=max_results)

    def get_skill(self, name: str) -> SkillDescriptor:
        """Look up a skill by name.

        Raises:
            SkillNotFoundError: If skill not found.
        """
        return self.registry.get(name)

    def list_skills(self) -> list[SkillDescriptor]:
        return list(self.registry.list())

    def related(self, name: str) -> list[SkillDescriptor]:
        return self.registry.related(name)

    def validate_skill(self, path: Path) -> list[str]:
        """Validate a skill directory.

        Returns:
            List of validation issues (empty if valid).
        """
        return validate_skill_directory(path, self.config.skills.manifest_name)

    def get_skill_info(self, name: str) -> dict[str, Any]:
        """Get detailed information about a skill, including related skills.

        Raises:
            SkillNotFoundError: If skill not found.
        """
        descriptor = self.get_skill(name)
        info = descriptor.to_dict()
        info["related_resolved"] = [d.name for d in self.related(name)]
        info["instructions_preview"] = (
            descriptor.instructions[:500] + "..."
            if len(descriptor.instructions) > 500
            else descriptor.instructions
        )
        return info


# Singleton instance for convenience
_manager: SkillManager | None = None


def get_skill_manager(config: Config | None = None) -> SkillManager:
    """Get the skill manager singleton.

    Passing a config replaces the singleton.
    """
    global _manager
    if _manager is None or config is not None:
        _manager = SkillManager(config=config)
    return _manager


def reset_skill_manager() -> None:
    """Drop the singleton (the next call builds a new one)."""
    global _manager
    _manager = None
