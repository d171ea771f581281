"""
Pytest configuration and fixtures for skillmatch tests.
"""

import os
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from skillmatch.config import clear_config_cache
from skillmatch.skills import reset_skill_manager

SkillWriter = Callable[..., Path]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_environment(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Keep tests away from the real ~/.skillmatch and any project config."""
    for key in list(os.environ):
        if key.startswith("SKILLMATCH_"):
            monkeypatch.delenv(key, raising=False)

    home = temp_dir / ".skillmatch-home"
    home.mkdir()
    monkeypatch.setenv("SKILLMATCH_HOME", str(home))

    workdir = temp_dir / "workdir"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    clear_config_cache()
    reset_skill_manager()
    yield home
    clear_config_cache()
    reset_skill_manager()


def _write_skill(
    root: Path,
    dir_name: str,
    name: str | None = None,
    description: str | None = "A sample skill",
    body: str = "# Sample\n\nFollow these steps.",
    references: dict[str, str] | None = None,
    **frontmatter: object,
) -> Path:
    """Write a skill directory with a SKILL.md manifest.

    Passing ``name=None`` keeps the directory name; pass ``description=None``
    to leave the field out entirely.
    """
    skill_dir = root / dir_name
    skill_dir.mkdir(parents=True, exist_ok=True)

    data: dict[str, object] = {"name": name or dir_name}
    if description is not None:
        data["description"] = description
    data.update(frontmatter)

    header = yaml.safe_dump(data, allow_unicode=True, sort_keys=False)
    (skill_dir / "SKILL.md").write_text(f"---\n{header}---\n\n{body}\n", encoding="utf-8")

    if references:
        ref_dir = skill_dir / "references"
        ref_dir.mkdir()
        for file_name, content in references.items():
            (ref_dir / file_name).write_text(content, encoding="utf-8")

    return skill_dir


@pytest.fixture
def write_skill() -> SkillWriter:
    """Provide a helper that writes a skill directory."""
    return _write_skill


GO_BACKEND_DESCRIPTION = (
    "Go backend development patterns: Gin and Echo HTTP handlers, GORM models, "
    "middleware, configuration and structured logging. Use when building REST APIs "
    'or services in Go. Triggers: "golang api", "gin handler".'
)
GO_TESTING_DESCRIPTION = (
    "Go testing patterns: table driven test cases, testify assertions, mocks, "
    'benchmarks and fuzzing. Triggers: "table driven test", "go test", "单元测试".'
)
SWIFT_IOS_DESCRIPTION = (
    "iOS app development with SwiftUI and UIKit: NavigationStack, TabView, Core Data "
    'and push notifications. Triggers: "iOS", "iPhone", "UIKit".'
)
SWIFT_MACOS_DESCRIPTION = (
    "macOS app development with SwiftUI and AppKit: MenuBarExtra, NSWindow, Settings "
    'scenes and sandboxing. Triggers: "macOS", "MenuBarExtra", "AppKit", "菜单栏".'
)
TUTORIAL_DESCRIPTION = (
    "Step-by-step teaching mode that explains concepts before writing code. "
    'Triggers: "teach me", "tutorial mode", "教我", "教程模式".'
)


@pytest.fixture
def skills_root(temp_dir: Path, write_skill: SkillWriter) -> Path:
    """Provide a skills root with a small bilingual corpus."""
    root = temp_dir / "skills"
    root.mkdir()

    write_skill(
        root,
        "go-backend-skill",
        description=GO_BACKEND_DESCRIPTION,
        related_skills=["go-testing-skill"],
        references={
            "gorm.md": "# GORM Patterns\n\nModels and associations.\n",
            "gin.md": "# Gin Handlers\n\nRouting and middleware.\n",
        },
    )
    write_skill(
        root,
        "go-testing-skill",
        description=GO_TESTING_DESCRIPTION,
        related_skills=["go-backend-skill"],
    )
    write_skill(root, "swift-ios-skill", description=SWIFT_IOS_DESCRIPTION)
    write_skill(root, "swift-macos-skill", description=SWIFT_MACOS_DESCRIPTION)
    write_skill(
        root,
        "tutorial-mode",
        description=TUTORIAL_DESCRIPTION,
        related_skills=["git-commit"],
    )

    # Not skill units: no manifest, plain markdown without frontmatter.
    (root / "assets").mkdir()
    (root / "README.md").write_text("# Skills\n\nInstall with make.\n", encoding="utf-8")

    return root
