"""
Skill models for skillmatch.

Descriptors are parsed from each skill's manifest at registry load time and
stay immutable for the lifetime of the registry. Match results are plain
frozen dataclasses owned by the caller.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SkillReference(BaseModel):
    """A reference document owned by a single skill."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Path to the markdown document")
    title: str = Field(..., description="Document title")

    def read(self) -> str:
        """Load the document text."""
        return self.path.read_text(encoding="utf-8")


class SkillDescriptor(BaseModel):
    """In-memory representation of a parsed skill manifest.

    Only ``name``, ``description`` and ``triggers`` take part in matching;
    references and instructions are carried for callers that present the
    selected skill.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Unique skill identifier")
    description: str = Field(..., min_length=1, description="Capability summary")
    triggers: tuple[str, ...] = Field(
        default=(),
        description="Trigger phrases, any language",
    )
    references: tuple[SkillReference, ...] = Field(
        default=(),
        description="Reference documents, in file name order",
    )
    related_skills: frozenset[str] = Field(
        default_factory=frozenset,
        description="Names of related skills (not owned)",
    )
    path: Path | None = Field(default=None, description="Skill directory or manifest file")
    instructions: str = Field(default="", description="Markdown body after the front matter")
    version: str | None = Field(default=None, description="Optional version string")

    @field_validator("name", "description")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "name": self.name,
            "description": self.description,
            "triggers": list(self.triggers),
            "references": [{"path": str(r.path), "title": r.title} for r in self.references],
            "related_skills": sorted(self.related_skills),
            "path": str(self.path) if self.path else None,
            "version": self.version,
        }


@dataclass(frozen=True)
class LoadIssue:
    """A skill unit that was skipped during a lenient load."""

    path: Path
    message: str


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-component scores for one descriptor."""

    trigger: float = 0.0
    overlap: float = 0.0
    name: float = 0.0
    matched_triggers: tuple[str, ...] = ()
    exact_name: bool = False

    @property
    def relevance(self) -> float:
        """Trigger and overlap score, without the name tie-break."""
        return round(self.trigger + self.overlap, 6)

    @property
    def total(self) -> float:
        return round(self.trigger + self.overlap + self.name, 6)


@dataclass(frozen=True)
class MatchEntry:
    """A scored descriptor in a match result."""

    descriptor: SkillDescriptor
    score: float
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)

    @property
    def name(self) -> str:
        return self.descriptor.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.descriptor.name,
            "score": self.score,
            "exact_name": self.breakdown.exact_name,
            "matched_triggers": list(self.breakdown.matched_triggers),
            "components": {
                "trigger": self.breakdown.trigger,
                "overlap": self.breakdown.overlap,
                "name": self.breakdown.name,
            },
        }


@dataclass(frozen=True)
class MatchResult:
    """Ranked match entries for a single query, best first.

    An entry whose skill name equals the query comes first regardless of
    score; the remaining entries are in descending score order.
    """

    query: str
    entries: tuple[MatchEntry, ...] = ()

    @property
    def best(self) -> MatchEntry | None:
        """The selected skill, or None when nothing matched."""
        return self.entries[0] if self.entries else None

    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]

    def __iter__(self) -> Iterator[MatchEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)
