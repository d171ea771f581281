"""
Skill parser for skillmatch.

Parses SKILL.md manifests (YAML front matter plus markdown body) into
skill descriptors.
"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from skillmatch.skills.errors import MalformedDescriptorError
from skillmatch.skills.models import SkillDescriptor, SkillReference

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "SKILL.md"
REFERENCES_DIR_NAME = "references"

# Quoted phrases embedded in descriptions double as trigger phrases.
_QUOTED_PATTERNS = [
    re.compile(r'"([^"\n]{1,80})"'),
    re.compile(r"(?<!\w)'([^'\n]{1,80})'(?!\w)"),
    re.compile(r"“([^”\n]{1,80})”"),
    re.compile(r"‘([^’\n]{1,80})’"),
    re.compile(r"「([^」\n]{1,80})」"),
    re.compile(r"『([^』\n]{1,80})』"),
]

_HEADING_RE = re.compile(r"^#\s+(.+?)\s*#*\s*$")


def parse_yaml_frontmatter(
    content: str, path: Path | None = None
) -> tuple[dict[str, Any] | None, str]:
    """Parse YAML frontmatter from a markdown file.

    Frontmatter is delimited by --- at the start and end.

    Args:
        content: The full markdown content.
        path: Optional path for error messages.

    Returns:
        Tuple of (frontmatter dict or None, remaining content). None means
        the content has no frontmatter block at all.

    Raises:
        MalformedDescriptorError: If the block exists but is not a YAML mapping.
    """
    content = content.lstrip("\ufeff").replace("\r\n", "\n")

    lines = content.split("\n")
    if lines[0].rstrip() != "---":
        return None, content

    end_index = None

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == "---":
            end_index = i
            break

    if end_index is None:
        raise MalformedDescriptorError("Frontmatter has no closing '---' delimiter", path)

    frontmatter_text = "\n".join(lines[1:end_index])
    remaining_content = "\n".join(lines[end_index + 1 :]).strip()

    try:
        frontmatter = yaml.safe_load(frontmatter_text)
    except yaml.YAMLError as e:
        raise MalformedDescriptorError(f"Invalid YAML frontmatter: {e}", path) from e

    if frontmatter is None:
        frontmatter = {}
    if not isinstance(frontmatter, dict):
        raise MalformedDescriptorError("Frontmatter must be a YAML mapping", path)

    return frontmatter, remaining_content


def extract_quoted_phrases(text: str) -> list[str]:
    """Extract quoted phrases from free text, in order of appearance."""
    found: list[tuple[int, str]] = []
    for pattern in _QUOTED_PATTERNS:
        for m in pattern.finditer(text):
            phrase = m.group(1).strip()
            if phrase:
                found.append((m.start(), phrase))
    found.sort(key=lambda item: item[0])
    return [phrase for _, phrase in found]


def _string_list(value: Any, field: str, path: Path | None) -> list[str]:
    """Coerce a front matter list field (list or comma-separated string)."""
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, (list, tuple)):
        items = []
        for item in value:
            if not isinstance(item, (str, int, float)) or isinstance(item, bool):
                raise MalformedDescriptorError(f"'{field}' entries must be strings", path)
            text = str(item).strip()
            if text:
                items.append(text)
        return items
    raise MalformedDescriptorError(f"'{field}' must be a list of strings", path)


def collect_triggers(frontmatter: dict[str, Any], description: str, path: Path | None = None) -> tuple[str, ...]:
    """Build the flat trigger phrase list for a manifest.

    Explicit ``triggers``/``keywords`` entries come first, then quoted
    phrases from the description. Duplicates are dropped case-insensitively.
    """
    phrases = _string_list(frontmatter.get("triggers"), "triggers", path)
    phrases += _string_list(frontmatter.get("keywords"), "keywords", path)
    phrases += extract_quoted_phrases(description)

    seen: set[str] = set()
    unique: list[str] = []
    for phrase in phrases:
        key = phrase.casefold()
        if key not in seen:
            seen.add(key)
            unique.append(phrase)
    return tuple(unique)


def _reference_title(doc_path: Path) -> str:
    try:
        with open(doc_path, encoding="utf-8") as f:
            for line in f:
                m = _HEADING_RE.match(line.strip())
                if m:
                    return m.group(1)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read reference title from {doc_path}: {e}")
    return doc_path.stem.replace("-", " ").replace("_", " ").strip().capitalize()


def discover_references(skill_dir: Path) -> tuple[SkillReference, ...]:
    """List the reference documents of a skill directory, sorted by file name."""
    references_dir = skill_dir / REFERENCES_DIR_NAME
    if not references_dir.is_dir():
        return ()

    return tuple(
        SkillReference(path=doc, title=_reference_title(doc))
        for doc in sorted(references_dir.glob("*.md"))
        if doc.is_file()
    )


def parse_manifest(
    content: str,
    path: Path | None = None,
    references: tuple[SkillReference, ...] = (),
    location: Path | None = None,
) -> SkillDescriptor:
    """Parse manifest content into a descriptor.

    Args:
        content: The manifest file content.
        path: Manifest path, used in error messages.
        references: Reference documents owned by the skill.
        location: Skill location recorded on the descriptor (default: path).

    Returns:
        The parsed SkillDescriptor.

    Raises:
        MalformedDescriptorError: If frontmatter or required fields are missing.
    """
    frontmatter, instructions = parse_yaml_frontmatter(content, path)

    if frontmatter is None:
        raise MalformedDescriptorError("Manifest has no YAML frontmatter", path)

    for required in ("name", "description"):
        if required not in frontmatter:
            raise MalformedDescriptorError(f"Frontmatter missing required '{required}' field", path)
        if not isinstance(frontmatter[required], str):
            raise MalformedDescriptorError(f"Frontmatter field '{required}' must be a string", path)

    description = frontmatter["description"]
    related = frontmatter.get("related_skills", frontmatter.get("related"))
    version = frontmatter.get("version")

    try:
        return SkillDescriptor(
            name=frontmatter["name"],
            description=description,
            triggers=collect_triggers(frontmatter, description, path),
            references=references,
            related_skills=frozenset(_string_list(related, "related_skills", path)),
            path=location or path,
            instructions=instructions,
            version=str(version) if version is not None else None,
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise MalformedDescriptorError(f"Invalid manifest fields: {fields}", path) from e


def parse_skill_directory(skill_dir: Path, manifest_name: str = DEFAULT_MANIFEST_NAME) -> SkillDescriptor:
    """Parse a skill from a directory.

    Args:
        skill_dir: Path to the skill directory.
        manifest_name: Manifest file name inside the directory.

    Returns:
        Parsed SkillDescriptor with its references.

    Raises:
        MalformedDescriptorError: If the manifest is missing or invalid.
    """
    skill_dir = Path(skill_dir)
    manifest_path = skill_dir / manifest_name

    if not manifest_path.is_file():
        raise MalformedDescriptorError(f"Missing required file: {manifest_name}", skill_dir)

    try:
        content = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedDescriptorError(f"Failed to read {manifest_name}: {e}", manifest_path) from e

    return parse_manifest(content, manifest_path, discover_references(skill_dir), location=skill_dir)


def parse_skill_file(manifest_path: Path) -> SkillDescriptor:
    """Parse a single-file skill (a markdown file with frontmatter)."""
    manifest_path = Path(manifest_path)
    try:
        content = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedDescriptorError(f"Failed to read manifest: {e}", manifest_path) from e
    return parse_manifest(content, manifest_path)


def validate_skill_directory(skill_dir: Path, manifest_name: str = DEFAULT_MANIFEST_NAME) -> list[str]:
    """Validate a skill directory and return any issues.

    Issues prefixed with "Warning:" do not prevent the skill from loading.

    Args:
        skill_dir: Path to the skill directory.
        manifest_name: Manifest file name inside the directory.

    Returns:
        List of validation issues (empty if valid).
    """
    issues: list[str] = []
    skill_dir = Path(skill_dir)

    if not skill_dir.exists():
        issues.append(f"Directory does not exist: {skill_dir}")
        return issues

    if not skill_dir.is_dir():
        issues.append(f"Not a directory: {skill_dir}")
        return issues

    try:
        descriptor = parse_skill_directory(skill_dir, manifest_name)
    except MalformedDescriptorError as e:
        issues.append(str(e))
        return issues

    if not descriptor.instructions.strip():
        issues.append(f"Warning: {manifest_name} has no instructions content")
    if not descriptor.triggers:
        issues.append("Warning: No trigger phrases found (only description overlap will match)")
    if descriptor.name in descriptor.related_skills:
        issues.append("Warning: Skill lists itself as related")

    references_dir = skill_dir / REFERENCES_DIR_NAME
    if references_dir.exists() and not descriptor.references:
        issues.append(f"Warning: {REFERENCES_DIR_NAME}/ contains no markdown documents")

    return issues
