"""Tests for the query tool environment."""

import os

from yumrepo.common.config import YumRepoConfig
from yumrepo.query.environment import (
    DEFAULT_TMP_DIR_NAME,
    HOME,
    TMPDIR,
    TMPDIR_OVERRIDE,
    YumEnvironment,
)


class TestYumEnvironment:
    """Tests for YumEnvironment."""

    def test_defaults_under_home(self):
        """Test the scratch directory defaults to a folder under HOME."""
        environment = YumEnvironment("repo-1", environ={HOME: "/home/go"})

        assert environment.build() == {
            HOME: "/home/go",
            TMPDIR: os.path.join("/home/go", DEFAULT_TMP_DIR_NAME, "repo-1"),
        }

    def test_config_dirs(self):
        """Test home and scratch directories from configuration."""
        config = YumRepoConfig(home_dir="/srv/home", tmp_dir="/srv/tmp")
        environment = YumEnvironment("repo-1", config=config, environ={})

        assert environment.home_dir() == "/srv/home"
        assert environment.scratch_dir() == os.path.join("/srv/tmp", "repo-1")

    def test_environment_override_wins(self):
        """Test the override variable takes precedence over configuration."""
        config = YumRepoConfig(tmp_dir="/srv/tmp")
        environment = YumEnvironment(
            "repo-1", config=config, environ={HOME: "/home/go", TMPDIR_OVERRIDE: "/override"}
        )

        assert environment.tmp_base_dir() == "/override"

    def test_distinct_ids_get_distinct_scratch_dirs(self):
        """Test concurrent queries do not share scratch space."""
        first = YumEnvironment("repo-1", environ={HOME: "/home/go"})
        second = YumEnvironment("repo-2", environ={HOME: "/home/go"})

        assert first.scratch_dir() != second.scratch_dir()

    def test_cleanup_removes_scratch_dir(self, tmp_path):
        """Test cleanup deletes only this query's scratch directory."""
        config = YumRepoConfig(tmp_dir=str(tmp_path))
        environment = YumEnvironment("repo-1", config=config, environ={})
        scratch = tmp_path / "repo-1"
        (scratch / "cache").mkdir(parents=True)
        (tmp_path / "repo-2").mkdir()

        environment.cleanup()

        assert not scratch.exists()
        assert (tmp_path / "repo-2").exists()

    def test_cleanup_without_scratch_dir(self, tmp_path):
        """Test cleanup is a no-op when nothing was created."""
        config = YumRepoConfig(tmp_dir=str(tmp_path))

        YumEnvironment("repo-1", config=config, environ={}).cleanup()
