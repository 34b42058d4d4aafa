"""Integration tests for ConfigManager."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from scopeconf import ConfigManager
from scopeconf import Scope
from scopeconf import default_paths


class TestConfigIntegration:
    """Integration tests for realistic configuration scenarios."""

    @pytest.fixture
    def manager(self, temp_paths):
        """Create ConfigManager with temp paths."""
        return ConfigManager(temp_paths)

    def test_realistic_workflow_identity(self, manager):
        """Test a user identity overridden for one repository."""
        # 1. Administrator ships a machine-wide default branch
        manager.set_value("init.defaultBranch", "main", scope=Scope.SYSTEM)

        # 2. User sets a global identity
        manager.set_value("user.name", "Alice", scope=Scope.USER)
        manager.set_value("user.email", "alice@home.example", scope=Scope.USER)

        # 3. Work repository uses a work address
        manager.set_value("user.email", "alice@work.example", scope=Scope.LOCAL)

        merged = manager.resolve()
        assert merged.get("init.defaultbranch") == "main"
        assert merged.get("user.name") == "Alice"
        assert merged.get("user.email") == "alice@work.example"
        assert merged.origin("user.email") is Scope.LOCAL

        # 4. Dropping the local override falls back to the user address
        manager.unset_value("user.email", scope=Scope.LOCAL)
        assert manager.get_value("user.email") == "alice@home.example"

    def test_edit_merged_view_and_persist(self, manager, temp_paths):
        """Test editing several scopes through the merged view."""
        temp_paths.user.parent.mkdir(parents=True)
        temp_paths.user.write_text("# my settings\n[alias]\n\tco = checkout\n")

        merged = manager.resolve()
        merged.set("alias.st", "status", scope=Scope.USER)
        merged.set("remote.origin.url", "https://example.com/repo.git")
        manager.persist(merged)

        assert temp_paths.user.read_text() == "[alias]\n\tco = checkout\n\tst = status\n"
        assert temp_paths.local.read_text() == '[remote "origin"]\n\turl = https://example.com/repo.git\n'
        assert manager.resolve() == merged

    def test_hand_written_files(self, manager, temp_paths):
        """Test files in the layout people actually write by hand."""
        temp_paths.local.parent.mkdir(parents=True)
        temp_paths.local.write_text(
            "[core]\n"
            "\trepositoryformatversion = 0\n"
            "\tbare = false\n"
            '[remote "origin"]\n'
            "\turl = git@example.com:team/repo.git\n"
            "\tfetch = +refs/heads/*:refs/remotes/origin/*\n"
            '[branch "main"]\n'
            "\tremote = origin\n"
            "\tmerge = refs/heads/main\n"
        )

        merged = manager.resolve()
        assert merged.get("core.bare") == "false"
        assert merged.get("remote.origin.fetch") == "+refs/heads/*:refs/remotes/origin/*"
        assert merged.get("branch.main.merge") == "refs/heads/main"

    def test_default_paths_in_repository(self, monkeypatch):
        """Test the conventional layout driven by environment overrides."""
        with TemporaryDirectory() as tmpdir:
            tmpdir_path = Path(tmpdir)
            monkeypatch.setenv("GIT_CONFIG_SYSTEM", str(tmpdir_path / "etc" / "gitconfig"))
            monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmpdir_path / "home" / ".gitconfig"))
            monkeypatch.delenv("GIT_CONFIG_NOSYSTEM", raising=False)

            manager = ConfigManager(default_paths(repo_dir=tmpdir_path / "repo"))
            manager.set_value("core.bare", "false", scope=Scope.LOCAL)

            assert (tmpdir_path / "repo" / ".git" / "config").exists()
            assert manager.get_value("core.bare") == "false"
