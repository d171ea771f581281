"""
Error taxonomy for the skills system.

All errors are local and recoverable: load errors are raised while building
a registry, EmptyQueryError is raised before any scoring happens.
"""

from pathlib import Path


class SkillError(Exception):
    """Base error for the skills system."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(f"{message}" + (f" (at {path})" if path else ""))


class MalformedDescriptorError(SkillError):
    """A skill manifest is missing a required field or cannot be parsed."""

    pass


class DuplicateNameError(SkillError):
    """Two skill units declare the same name."""

    def __init__(self, name: str, paths: list[Path] | None = None):
        self.name = name
        self.paths = paths or []
        paths_str = ", ".join(str(p) for p in self.paths)
        super().__init__(
            f"Duplicate skill name: {name}" + (f" (declared by: {paths_str})" if paths_str else "")
        )


class SkillNotFoundError(SkillError):
    """Skill not found error."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Skill not found: {name}")


class EmptyQueryError(SkillError, ValueError):
    """Matching was attempted with a blank query."""

    def __init__(self) -> None:
        super().__init__("Query must not be empty")
