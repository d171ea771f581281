"""
Skill registry for skillmatch.

Scans a skills root (one level deep) and exposes the parsed descriptors as
an immutable, name-indexed set. A registry is never mutated after it is
built; reloading means building a new one.
"""

import logging
from collections.abc import Iterable, Iterator, ValuesView
from pathlib import Path
from types import MappingProxyType
from typing import Any

from skillmatch.skills.errors import (
    DuplicateNameError,
    MalformedDescriptorError,
    SkillError,
    SkillNotFoundError,
)
from skillmatch.skills.models import LoadIssue, SkillDescriptor
from skillmatch.skills.parser import (
    DEFAULT_MANIFEST_NAME,
    parse_skill_directory,
    parse_skill_file,
)

logger = logging.getLogger(__name__)


def discover_skill_units(root: Path, manifest_name: str = DEFAULT_MANIFEST_NAME) -> list[Path]:
    """Discover skill units directly below a root directory.

    A subdirectory holding the manifest file is a skill unit, and so is a
    top-level markdown file that starts with a frontmatter block.

    Args:
        root: Directory to scan.
        manifest_name: Manifest file name inside skill directories.

    Returns:
        Paths to skill directories and single-file manifests, sorted by name.
    """
    units: list[Path] = []
    for item in sorted(root.iterdir(), key=lambda p: p.name):
        if item.name.startswith("."):
            continue
        if item.is_dir():
            if (item / manifest_name).is_file():
                units.append(item)
            else:
                logger.debug(f"Ignoring {item}: no {manifest_name}")
        elif item.is_file() and item.suffix.lower() == ".md":
            if _has_frontmatter(item):
                units.append(item)
            else:
                logger.debug(f"Ignoring {item}: no frontmatter")
    return units


def _has_frontmatter(path: Path) -> bool:
    try:
        with open(path, encoding="utf-8") as f:
            return f.readline().lstrip("\ufeff").rstrip() == "---"
    except (OSError, UnicodeDecodeError):
        return False


class SkillRegistry:
    """Immutable set of skill descriptors indexed by name."""

    def __init__(
        self,
        descriptors: Iterable[SkillDescriptor] = (),
        issues: Iterable[LoadIssue] = (),
    ):
        """Build a registry from descriptors.

        Raises:
            DuplicateNameError: If two descriptors share a name.
        """
        by_name: dict[str, SkillDescriptor] = {}
        for descriptor in descriptors:
            existing = by_name.get(descriptor.name)
            if existing is not None:
                raise DuplicateNameError(
                    descriptor.name,
                    [p for p in (existing.path, descriptor.path) if p is not None],
                )
            by_name[descriptor.name] = descriptor

        self._by_name = MappingProxyType(dict(sorted(by_name.items())))
        self._issues = tuple(issues)

    @classmethod
    def load(
        cls,
        root: Path | str,
        strict: bool = True,
        manifest_name: str = DEFAULT_MANIFEST_NAME,
    ) -> "SkillRegistry":
        """Load every skill unit found directly below ``root``.

        Args:
            root: Skills root directory.
            strict: Raise on the first malformed skill instead of skipping it.
            manifest_name: Manifest file name inside skill directories.

        Returns:
            The loaded registry.

        Raises:
            SkillError: If the root is not a directory.
            MalformedDescriptorError: If ``strict`` and a manifest is invalid.
            DuplicateNameError: If two skill units declare the same name.
        """
        return cls.load_all([root], strict=strict, manifest_name=manifest_name, require_roots=True)

    @classmethod
    def load_all(
        cls,
        roots: Iterable[Path | str],
        strict: bool = True,
        manifest_name: str = DEFAULT_MANIFEST_NAME,
        require_roots: bool = False,
    ) -> "SkillRegistry":
        """Load skill units from several roots into one registry.

        Roots that do not exist are skipped unless ``require_roots`` is set.
        Names must be unique across all roots.
        """
        descriptors: list[SkillDescriptor] = []
        issues: list[LoadIssue] = []

        for root in roots:
            root = Path(root).expanduser()
            if not root.is_dir():
                if require_roots:
                    raise SkillError("Skills root is not a directory", root)
                logger.debug(f"Skills root does not exist, skipping: {root}")
                continue

            for unit in discover_skill_units(root, manifest_name):
                try:
                    if unit.is_dir():
                        descriptor = parse_skill_directory(unit, manifest_name)
                    else:
                        descriptor = parse_skill_file(unit)
                except MalformedDescriptorError as e:
                    if strict:
                        raise
                    logger.warning(f"Skipping malformed skill {unit}: {e}")
                    issues.append(LoadIssue(path=unit, message=str(e)))
                    continue
                descriptors.append(descriptor)

        registry = cls(descriptors, issues)
        logger.info(f"Loaded {len(registry)} skill(s), skipped {len(issues)}")
        return registry

    @property
    def issues(self) -> tuple[LoadIssue, ...]:
        """Skill units skipped during a lenient load."""
        return self._issues

    def names(self) -> tuple[str, ...]:
        return tuple(self._by_name)

    def get(self, name: str) -> SkillDescriptor:
        """Look up a descriptor by name.

        Raises:
            SkillNotFoundError: If no skill has that name.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise SkillNotFoundError(name) from None

    def related(self, name: str) -> list[SkillDescriptor]:
        """Resolve a skill's related skill names against this registry.

        Names that are not registered are skipped.
        """
        descriptor = self.get(name)
        resolved = []
        for related_name in sorted(descriptor.related_skills):
            related = self._by_name.get(related_name)
            if related is None:
                logger.debug(f"Skill '{name}' references unknown skill '{related_name}'")
                continue
            resolved.append(related)
        return resolved

    def catalog(self) -> list[dict[str, Any]]:
        """Serializable (name, description) listing of every skill."""
        return [{"name": d.name, "description": d.description} for d in self._by_name.values()]

    def __iter__(self) -> Iterator[SkillDescriptor]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"SkillRegistry({len(self)} skills)"

    # Defined last: the name shadows the builtin inside the class body.
    def list(self) -> ValuesView[SkillDescriptor]:
        """All descriptors in name order.

        The returned view is lazy and can be iterated any number of times.
        """
        return self._by_name.values()
