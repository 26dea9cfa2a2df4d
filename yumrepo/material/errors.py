"""Exceptions raised while resolving a yum repository material."""

from typing import List, Sequence

from .base import ValidationResult


class YumRepoError(Exception):
    """Base exception for all repository material errors."""

    pass


class InvalidConfigurationError(YumRepoError):
    """Raised when repository or package configuration fails validation."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(str(result))


class InvalidRepositoryUrlError(YumRepoError):
    """Raised when a repository URL cannot be turned into a query URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid uri format {url}")


class RepositoryConnectionError(YumRepoError):
    """Raised when the repository metadata index is unreachable."""

    pass


class ProcessLaunchError(YumRepoError):
    """Raised when the query tool could not be started."""

    pass


class QueryExecutionError(YumRepoError):
    """Raised when the query tool fails or prints unparsable output."""

    pass


class PackageNotFoundError(YumRepoError):
    """Raised when no package matches the package spec."""

    def __init__(self, spec: str):
        self.spec = spec
        super().__init__(f"Could not find any package that matched '{spec}'.")


class AmbiguousMatchError(YumRepoError):
    """Raised when the package spec matches more than one package."""

    def __init__(self, spec: str, file_names: Sequence[str]):
        self.spec = spec
        self.file_names: List[str] = list(file_names)
        super().__init__(
            f"Given Package Spec ({spec}) resolves to more than one file on the "
            f"repository: {', '.join(self.file_names)}"
        )
