"""Yum repository material.

Tracks a YUM/DNF repository package as a versioned material: validates
repository and package configuration, checks connectivity and resolves
the single package matching a spec.
"""

from .material.base import (
    ConnectionCheckResult,
    PackageRevision,
    ValidationError,
    ValidationResult,
)
from .material.errors import YumRepoError
from .poller import PackageRepositoryPoller
from .query.cache import RepoQueryCache

__all__ = [
    "ConnectionCheckResult",
    "PackageRepositoryPoller",
    "PackageRevision",
    "RepoQueryCache",
    "ValidationError",
    "ValidationResult",
    "YumRepoError",
]
