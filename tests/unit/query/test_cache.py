"""Tests for the query result cache."""

import threading

import pytest

from yumrepo.material.credentials import Credentials
from yumrepo.material.errors import QueryExecutionError
from yumrepo.material.repo_url import RepoUrl
from yumrepo.query.cache import QuerySignature
from yumrepo.query.parser import RepoQueryOutputParser
from tests.factories import package_line


@pytest.fixture
def records():
    return RepoQueryOutputParser().parse([package_line("go-agent", "13.1.1", "16714")])


@pytest.fixture
def signature():
    return QuerySignature.of(RepoUrl("http://repohost/repo"), "go-agent")


class TestQuerySignature:
    """Tests for QuerySignature."""

    def test_trailing_slash_is_ignored(self):
        """Test equivalent URLs share a signature."""
        assert QuerySignature.of(RepoUrl("http://repohost/repo/"), "go-agent") == (
            QuerySignature.of(RepoUrl("http://repohost/repo"), "go-agent")
        )

    def test_credentials_presence_matters(self):
        """Test authenticated and anonymous queries are kept apart."""
        anonymous = QuerySignature.of(RepoUrl("http://repohost/repo"), "go-agent")
        authenticated = QuerySignature.of(
            RepoUrl("http://repohost/repo", Credentials("user", "pwd")), "go-agent"
        )

        assert anonymous != authenticated

    def test_spec_matters(self):
        """Test different specs get different signatures."""
        repo_url = RepoUrl("http://repohost/repo")

        assert QuerySignature.of(repo_url, "go*") != QuerySignature.of(repo_url, "go-agent")


class TestRepoQueryCache:
    """Tests for RepoQueryCache."""

    def test_loads_once(self, cache, signature, records):
        """Test the loader runs once until the cache is cleared."""
        calls = []

        def loader():
            calls.append(1)
            return records

        first = cache.get_or_load(signature, loader)
        second = cache.get_or_load(signature, loader)

        assert first is second
        assert first.records == tuple(records)
        assert len(calls) == 1
        assert signature in cache
        assert len(cache) == 1

    def test_clear(self, cache, signature, records):
        """Test clearing drops entries and starts a new generation."""
        cache.get_or_load(signature, lambda: records)
        generation = cache.generation

        cache.clear()

        assert cache.get(signature) is None
        assert len(cache) == 0
        assert cache.generation == generation + 1

    def test_empty_result_is_cached(self, cache, signature):
        """Test a query matching nothing is not repeated."""
        calls = []

        def loader():
            calls.append(1)
            return []

        cache.get_or_load(signature, loader)
        cache.get_or_load(signature, loader)

        assert len(calls) == 1

    def test_errors_are_not_cached(self, cache, signature, records):
        """Test a failed load is retried on the next call."""

        def failing_loader():
            raise QueryExecutionError("boom")

        with pytest.raises(QueryExecutionError):
            cache.get_or_load(signature, failing_loader)

        assert signature not in cache
        assert cache.get_or_load(signature, lambda: records).records == tuple(records)

    def test_clear_during_load_discards_result(self, cache, signature, records):
        """Test a load that straddles a clear is not stored."""

        def loader():
            cache.clear()
            return records

        entry = cache.get_or_load(signature, loader)

        assert entry.records == tuple(records)
        assert signature not in cache

    def test_concurrent_loads_share_one_run(self, cache, signature, records):
        """Test concurrent callers wait for a single load."""
        calls = []
        started = threading.Event()
        release = threading.Event()
        results = []

        def loader():
            calls.append(1)
            started.set()
            release.wait(5)
            return records

        def worker():
            results.append(cache.get_or_load(signature, loader))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        assert started.wait(5)
        release.set()
        for thread in threads:
            thread.join(5)

        assert len(calls) == 1
        assert len(results) == 4
        assert all(entry is results[0] for entry in results)
