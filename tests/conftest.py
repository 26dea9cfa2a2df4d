"""Pytest configuration and shared fixtures."""

import pytest

from yumrepo.common.config import YumRepoConfig
from yumrepo.material.base import PACKAGE_SPEC, REPO_URL
from yumrepo.query.cache import RepoQueryCache
from yumrepo.query.command import RepoQueryCommand
from tests.factories import FakeRepoquery, sample_repo_lines


@pytest.fixture
def sample_repo(tmp_path):
    """Directory laid out like a yum repository with a metadata index."""
    repo_dir = tmp_path / "samplerepo"
    (repo_dir / "repodata").mkdir(parents=True)
    (repo_dir / "repodata" / "repomd.xml").write_text("<repomd/>")
    return repo_dir


@pytest.fixture
def sample_repo_url(sample_repo):
    """``file://`` URL of the sample repository."""
    return f"file://{sample_repo}"


@pytest.fixture
def repository_properties(sample_repo_url):
    return {REPO_URL: sample_repo_url}


@pytest.fixture
def package_properties():
    return {PACKAGE_SPEC: "go-agent"}


@pytest.fixture
def config(tmp_path):
    """Configuration keeping tool scratch space inside the test directory."""
    return YumRepoConfig(tmp_dir=str(tmp_path / "scratch"))


@pytest.fixture
def fake_repoquery(sample_repo_url):
    """Fake query tool serving the sample repository packages."""
    return FakeRepoquery(sample_repo_lines(sample_repo_url))


@pytest.fixture
def query_command(fake_repoquery, config):
    return RepoQueryCommand(runner=fake_repoquery, config=config, environ={})


@pytest.fixture
def cache():
    query_cache = RepoQueryCache()
    yield query_cache
    query_cache.clear()
