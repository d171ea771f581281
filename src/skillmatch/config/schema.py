"""
Pydantic configuration schema for skillmatch.

This module defines all configuration models with validation.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from skillmatch.storage.paths import DEFAULT_SKILLS_DIR

# =============================================================================
# Skills Configuration
# =============================================================================


class SkillsConfig(BaseModel):
    """Where skills are loaded from and how strictly."""

    model_config = ConfigDict(extra="forbid")

    paths: list[str] = Field(default_factory=lambda: [DEFAULT_SKILLS_DIR])
    strict: bool = False
    manifest_name: str = "SKILL.md"

    @field_validator("paths", mode="before")
    @classmethod
    def _single_path(cls, value: object) -> object:
        # A single path from an environment override arrives as a string.
        return [value] if isinstance(value, str) else value


# =============================================================================
# Matcher Configuration
# =============================================================================


class MatcherConfig(BaseModel):
    """Scoring weights and result limits for the skill matcher."""

    model_config = ConfigDict(extra="forbid")

    trigger_weight: float = Field(default=3.0, ge=0.0)
    overlap_weight: float = Field(default=1.0, ge=0.0)
    name_weight: float = Field(default=0.1, ge=0.0)
    min_score: float = Field(default=0.0, ge=0.0)
    max_results: int = Field(default=5, ge=0)


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


# =============================================================================
# Root Configuration Model
# =============================================================================


class Config(BaseModel):
    """
    Root configuration model for skillmatch.

    Configuration can be loaded from YAML files and environment variables,
    merged in order of priority.
    """

    model_config = ConfigDict(extra="allow")

    skills: SkillsConfig = Field(default_factory=SkillsConfig)
    matcher: MatcherConfig = Field(default_factory=MatcherConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
