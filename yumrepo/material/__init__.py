"""Repository material model: configuration, credentials and connectivity."""

from .base import (
    PACKAGE_SPEC,
    PASSWORD,
    REPO_URL,
    USERNAME,
    ConnectionCheckResult,
    PackageRevision,
    ValidationError,
    ValidationResult,
)
from .checkers import FileConnectionChecker, HttpConnectionChecker, select_checker
from .configuration import PackageRepositoryConfiguration
from .credentials import Credentials
from .errors import (
    AmbiguousMatchError,
    InvalidConfigurationError,
    InvalidRepositoryUrlError,
    PackageNotFoundError,
    ProcessLaunchError,
    QueryExecutionError,
    RepositoryConnectionError,
    YumRepoError,
)
from .repo_url import RepoUrl, Scheme

__all__ = [
    "PACKAGE_SPEC",
    "PASSWORD",
    "REPO_URL",
    "USERNAME",
    "AmbiguousMatchError",
    "ConnectionCheckResult",
    "Credentials",
    "FileConnectionChecker",
    "HttpConnectionChecker",
    "InvalidConfigurationError",
    "InvalidRepositoryUrlError",
    "PackageNotFoundError",
    "PackageRepositoryConfiguration",
    "PackageRevision",
    "ProcessLaunchError",
    "QueryExecutionError",
    "RepoUrl",
    "RepositoryConnectionError",
    "Scheme",
    "ValidationError",
    "ValidationResult",
    "YumRepoError",
    "select_checker",
]
