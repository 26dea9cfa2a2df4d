"""Short-lived cache of query results.

Results are kept per query signature until ``clear`` is called, so a poll
cycle that validates, checks and resolves the same package runs the tool
once. Concurrent callers asking for the same signature share one tool run.
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Optional, Tuple

from ..common.logger import get_logger
from ..material.repo_url import RepoUrl
from .parser import RepoQueryRecord

logger = get_logger("query_cache")


@dataclass(frozen=True)
class QuerySignature:
    """Identifies a query: repository location, credentials presence, spec."""

    repo_url: str
    has_credentials: bool
    package_spec: str

    @classmethod
    def of(cls, repo_url: RepoUrl, package_spec: str) -> "QuerySignature":
        return cls(
            repo_url=(repo_url.url or "").rstrip("/"),
            has_credentials=repo_url.credentials.is_present,
            package_spec=package_spec,
        )


@dataclass(frozen=True)
class CacheEntry:
    """Parsed records of one query and when they were retrieved."""

    records: Tuple[RepoQueryRecord, ...]
    retrieved_at: datetime


class RepoQueryCache:
    """Thread-safe, explicitly cleared cache of query results."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Dict[QuerySignature, CacheEntry] = {}
        self._key_locks: Dict[QuerySignature, threading.Lock] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def get(self, signature: QuerySignature) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get(signature)

    def get_or_load(
        self,
        signature: QuerySignature,
        loader: Callable[[], Iterable[RepoQueryRecord]],
    ) -> CacheEntry:
        """Return the cached entry, running ``loader`` at most once per generation.

        Errors raised by ``loader`` propagate and are not cached.
        """
        with self._lock:
            entry = self._entries.get(signature)
            if entry is not None:
                logger.debug(f"Cache hit for {signature.repo_url} '{signature.package_spec}'")
                return entry
            key_lock = self._key_locks.setdefault(signature, threading.Lock())
            generation = self._generation

        with key_lock:
            with self._lock:
                entry = self._entries.get(signature)
                if entry is not None and self._generation == generation:
                    return entry

            logger.debug(f"Cache miss for {signature.repo_url} '{signature.package_spec}'")
            entry = CacheEntry(
                records=tuple(loader()),
                retrieved_at=datetime.now(timezone.utc),
            )

            with self._lock:
                if self._generation == generation:
                    self._entries[signature] = entry
            return entry

    def clear(self) -> None:
        """Drop every entry and start a new generation."""
        with self._lock:
            self._entries.clear()
            self._key_locks.clear()
            self._generation += 1
        logger.debug("Query cache cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, signature: object) -> bool:
        with self._lock:
            return signature in self._entries
