"""Tests for the command line entry point."""

import logging
import sys
from unittest.mock import patch

import pytest

from yumrepo import __main__ as cli
from yumrepo.common.config import CONFIG_PATH_ENV
from yumrepo.poller import PackageRepositoryPoller


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_PATH_ENV, str(tmp_path / "missing.yaml"))
    monkeypatch.delenv("YUM_REPO_USERNAME", raising=False)
    monkeypatch.delenv("YUM_REPO_PASSWORD", raising=False)
    yield
    logger = logging.getLogger("yumrepo")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def fake_poller(query_command, cache, config):
    """Patch the CLI to poll through the fake query tool."""
    poller = PackageRepositoryPoller(query_command=query_command, cache=cache, config=config)
    with patch.object(cli, "PackageRepositoryPoller", return_value=poller) as factory:
        yield factory


def run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["yum-repo-material", *args])
    with pytest.raises(SystemExit) as exc_info:
        cli.main()
    return exc_info.value.code


class TestMain:
    """Tests for main."""

    def test_usage(self, monkeypatch, capsys):
        """Test missing arguments print usage."""
        assert run(monkeypatch, "file:///repo") == 1
        assert "Usage:" in capsys.readouterr().err

    def test_prints_revision(self, monkeypatch, capsys, fake_poller, sample_repo_url):
        """Test the latest revision is printed."""
        assert run(monkeypatch, sample_repo_url, "go-agent") == 0

        out = capsys.readouterr().out
        assert "Revision: go-agent-13.1.1-16714.noarch" in out
        assert "LOCATION: " in out

    def test_no_new_revision(self, monkeypatch, capsys, fake_poller, sample_repo_url):
        """Test an unchanged revision."""
        assert run(monkeypatch, sample_repo_url, "go-agent", "go-agent-13.1.1-16714.noarch") == 0
        assert "No new revision" in capsys.readouterr().out

    def test_error(self, monkeypatch, capsys, fake_poller, sample_repo_url):
        """Test resolution errors exit non-zero."""
        assert run(monkeypatch, sample_repo_url, "go*") == 1
        assert "resolves to more than one file" in capsys.readouterr().err

    def test_malformed_config_file(self, monkeypatch, capsys, tmp_path):
        """Test invalid YAML is reported without a traceback."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("query: [unclosed\n")
        monkeypatch.setenv(CONFIG_PATH_ENV, str(config_file))

        assert run(monkeypatch, "file:///repo", "go-agent") == 1
        assert "Error: Invalid configuration" in capsys.readouterr().err

    def test_config_file_with_list_root(self, monkeypatch, capsys, tmp_path):
        """Test a non-mapping document is reported without a traceback."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- a\n- b\n")
        monkeypatch.setenv(CONFIG_PATH_ENV, str(config_file))

        assert run(monkeypatch, "file:///repo", "go-agent") == 1
        assert "Configuration root must be a mapping" in capsys.readouterr().err

    def test_unknown_log_level(self, monkeypatch, capsys, tmp_path):
        """Test an unknown log level in the config file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("logging:\n  level: VERBOSE\n")
        monkeypatch.setenv(CONFIG_PATH_ENV, str(config_file))

        assert run(monkeypatch, "file:///repo", "go-agent") == 1
        assert "Invalid log level: VERBOSE" in capsys.readouterr().err
