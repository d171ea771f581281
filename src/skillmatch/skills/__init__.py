"""
skillmatch skills system.

A skill is a directory holding a SKILL.md manifest (YAML frontmatter with
``name`` and ``description``, then markdown instructions) and an optional
``references/`` directory of further documents.

Usage:
    from skillmatch.skills import SkillRegistry, SkillMatcher

    registry = SkillRegistry.load("~/.claude/skills")
    result = SkillMatcher().match("how do I write a table driven test in Go", registry)
    if result.best:
        print(result.best.name)
"""

# Errors
from skillmatch.skills.errors import (
    DuplicateNameError,
    EmptyQueryError,
    MalformedDescriptorError,
    SkillError,
    SkillNotFoundError,
)

# Models
from skillmatch.skills.models import (
    LoadIssue,
    MatchEntry,
    MatchResult,
    ScoreBreakdown,
    SkillDescriptor,
    SkillReference,
)

# Parser
from skillmatch.skills.parser import (
    discover_references,
    extract_quoted_phrases,
    parse_manifest,
    parse_skill_directory,
    parse_skill_file,
    parse_yaml_frontmatter,
    validate_skill_directory,
)

# Registry
from skillmatch.skills.registry import SkillRegistry, discover_skill_units

# Tokenizer
from skillmatch.skills.tokenizer import content_tokens, tokenize

# Matcher
from skillmatch.skills.matcher import SkillMatcher, match

# Manager
from skillmatch.skills.manager import SkillManager, get_skill_manager, reset_skill_manager

__all__ = [
    # Errors
    "DuplicateNameError",
    "EmptyQueryError",
    "MalformedDescriptorError",
    "SkillError",
    "SkillNotFoundError",
    # Models
    "LoadIssue",
    "MatchEntry",
    "MatchResult",
    "ScoreBreakdown",
    "SkillDescriptor",
    "SkillReference",
    # Parser
    "discover_references",
    "extract_quoted_phrases",
    "parse_manifest",
    "parse_skill_directory",
    "parse_skill_file",
    "parse_yaml_frontmatter",
    "validate_skill_directory",
    # Registry
    "SkillRegistry",
    "discover_skill_units",
    # Tokenizer
    "content_tokens",
    "tokenize",
    # Matcher
    "SkillMatcher",
    "match",
    # Manager
    "SkillManager",
    "get_skill_manager",
    "reset_skill_manager",
]
