"""
Unit tests for the skill manager.
"""

import pytest

from skillmatch.config import Config, MatcherConfig, SkillsConfig
from skillmatch.skills import (
    MalformedDescriptorError,
    SkillManager,
    SkillNotFoundError,
    get_skill_manager,
    reset_skill_manager,
)


class TestSkillManager:
    """Tests for SkillManager."""

    def test_paths_from_config(self, skills_root):
        """Test roots default to the configured skill paths."""
        config = Config(skills=SkillsConfig(paths=[str(skills_root)]))
        manager = SkillManager(config=config)
        assert manager.paths == [skills_root]
        assert len(manager.list_skills()) == 5

    def test_paths_are_expanded(self, skills_root, monkeypatch):
        """Test environment variables in configured paths are expanded."""
        monkeypatch.setenv("SKILLS_PARENT", str(skills_root.parent))
        manager = SkillManager(paths=["$SKILLS_PARENT/skills"])
        assert manager.paths == [skills_root]

    def test_registry_is_lazy(self, skills_root):
        """Test the registry is loaded on first access."""
        manager = SkillManager(paths=[skills_root])
        assert manager._registry is None
        assert len(manager.registry) == 5
        assert manager.registry is manager.registry

    def test_match(self, skills_root):
        """Test matching through the manager."""
        manager = SkillManager(paths=[skills_root])
        result = manager.match("how do I write a table driven test in Go", max_results=1)
        assert result.names() == ["go-testing-skill"]

    def test_matcher_uses_config(self, skills_root):
        """Test the matcher is built from the matcher config."""
        config = Config(matcher=MatcherConfig(min_score=1.0))
        manager = SkillManager(paths=[skills_root], config=config)
        assert manager.matcher.settings.min_score == 1.0
        assert manager.match("SwiftUI").names() == []

    def test_reload_swaps_snapshot(self, skills_root, write_skill):
        """Test reload builds a new registry and leaves the old one intact."""
        manager = SkillManager(paths=[skills_root])
        before = manager.registry

        write_skill(skills_root, "docker-skill", description="Container images")
        after = manager.reload()

        assert after is manager.registry
        assert after is not before
        assert len(before) == 5
        assert "docker-skill" not in before
        assert "docker-skill" in after

    def test_reload_failure_keeps_snapshot(self, skills_root, write_skill):
        """Test a failed reload leaves the current registry in place."""
        manager = SkillManager(paths=[skills_root], strict=True)
        before = manager.registry

        write_skill(skills_root, "broken-skill", description=None)
        with pytest.raises(MalformedDescriptorError):
            manager.reload()

        assert manager.registry is before

    def test_strict_override(self, skills_root, write_skill):
        """Test the strict argument overrides the configured mode."""
        write_skill(skills_root, "broken-skill", description=None)

        lenient = SkillManager(paths=[skills_root])
        assert lenient.strict is False
        assert len(lenient.registry) == 5
        assert len(lenient.registry.issues) == 1

        strict = SkillManager(paths=[skills_root], strict=True)
        with pytest.raises(MalformedDescriptorError):
            strict.reload()

    def test_get_skill(self, skills_root):
        """Test skill lookup."""
        manager = SkillManager(paths=[skills_root])
        assert manager.get_skill("swift-ios-skill").name == "swift-ios-skill"
        with pytest.raises(SkillNotFoundError):
            manager.get_skill("nope")

    def test_get_skill_info(self, skills_root):
        """Test detailed skill information."""
        manager = SkillManager(paths=[skills_root])

        info = manager.get_skill_info("go-backend-skill")
        assert info["name"] == "go-backend-skill"
        assert info["related_skills"] == ["go-testing-skill"]
        assert info["related_resolved"] == ["go-testing-skill"]
        assert [r["title"] for r in info["references"]] == ["Gin Handlers", "GORM Patterns"]
        assert info["instructions_preview"].startswith("# Sample")

        tutorial = manager.get_skill_info("tutorial-mode")
        assert tutorial["related_skills"] == ["git-commit"]
        assert tutorial["related_resolved"] == []

    def test_instructions_preview_is_truncated(self, temp_dir, write_skill):
        """Test long instructions are shortened in the info preview."""
        write_skill(temp_dir / "root", "long-skill", body="x" * 600)
        manager = SkillManager(paths=[temp_dir / "root"])

        preview = manager.get_skill_info("long-skill")["instructions_preview"]
        assert len(preview) == 503
        assert preview.endswith("...")

    def test_validate_skill(self, temp_dir, write_skill):
        """Test validation through the manager."""
        skill_dir = write_skill(temp_dir, "valid-skill", triggers=["check"])
        assert SkillManager(paths=[]).validate_skill(skill_dir) == []


class TestSkillManagerSingleton:
    """Tests for the module-level manager."""

    def test_singleton(self):
        """Test the same manager is returned."""
        assert get_skill_manager() is get_skill_manager()

    def test_config_replaces_singleton(self, skills_root):
        """Test passing a config builds a new manager."""
        first = get_skill_manager()
        config = Config(skills=SkillsConfig(paths=[str(skills_root)]))
        second = get_skill_manager(config)
        assert second is not first
        assert second.paths == [skills_root]
        assert get_skill_manager() is second

    def test_reset(self):
        """Test reset drops the singleton."""
        first = get_skill_manager()
        reset_skill_manager()
        assert get_skill_manager() is not first
