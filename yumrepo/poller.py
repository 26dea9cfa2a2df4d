"""Polling of a yum repository for the latest revision of a package.

``PackageRepositoryPoller`` is the entry point used by the host: it
validates configuration, checks connectivity, runs the query tool through
the query cache and compares revisions.
"""

import uuid
from typing import Callable, List, Optional

from .common.config import YumRepoConfig
from .common.logger import get_logger
from .material.base import (
    ConnectionCheckResult,
    MaterialProperties,
    PackageRevision,
    ValidationResult,
)
from .material.configuration import (
    PackageRepositoryConfiguration,
    package_spec_from,
    repo_url_from,
)
from .material.errors import (
    InvalidConfigurationError,
    RepositoryConnectionError,
    YumRepoError,
)
from .material.repo_url import RepoUrl
from .query.cache import QuerySignature, RepoQueryCache
from .query.command import RepoQueryCommand
from .query.params import RepoQueryParams
from .query.parser import RepoQueryRecord, select_single

logger = get_logger("poller")

# Resolves (package properties, repository properties) to a revision
RevisionResolver = Callable[[MaterialProperties, MaterialProperties], PackageRevision]


class PackageRepositoryPoller:
    """Resolves the single package matching a spec in a yum repository.

    Every call validates, then connects, then queries. The only state shared
    between calls is the query cache, which the host clears between poll
    cycles.
    """

    def __init__(
        self,
        configuration: Optional[PackageRepositoryConfiguration] = None,
        query_command: Optional[RepoQueryCommand] = None,
        cache: Optional[RepoQueryCache] = None,
        config: Optional[YumRepoConfig] = None,
        repo_id_factory: Optional[Callable[[], str]] = None,
    ):
        self.config = config or YumRepoConfig()
        self.configuration = configuration or PackageRepositoryConfiguration()
        self.query_command = query_command or RepoQueryCommand(config=self.config)
        self.cache = cache if cache is not None else RepoQueryCache()
        self._repo_id_factory = repo_id_factory or (lambda: f"repo-{uuid.uuid4().hex}")

    def validate_repository_configuration(
        self, repository_properties: MaterialProperties
    ) -> ValidationResult:
        return self.configuration.validate_repository_configuration(repository_properties)

    def validate_package_configuration(
        self, package_properties: MaterialProperties
    ) -> ValidationResult:
        return self.configuration.validate_package_configuration(package_properties)

    def check_connection_to_repository(
        self, repository_properties: MaterialProperties
    ) -> ConnectionCheckResult:
        """Check that the repository metadata index is reachable.

        Validation runs first; an invalid configuration is reported without
        any network or filesystem access.
        """
        validation = self.validate_repository_configuration(repository_properties)
        if validation.is_failure:
            return ConnectionCheckResult.failed(validation.messages)

        repo_url = self._repo_url(repository_properties)
        failure = self._connection_failure(repo_url)
        if failure is not None:
            return ConnectionCheckResult.failed([failure])

        return ConnectionCheckResult.succeeded(
            f"Successfully accessed repository metadata at {repo_url.metadata_index_url()}"
        )

    def check_connection_to_package(
        self,
        package_properties: MaterialProperties,
        repository_properties: MaterialProperties,
    ) -> ConnectionCheckResult:
        """Check that the package spec resolves to exactly one package."""
        validation = self._validate(package_properties, repository_properties)
        if validation.is_failure:
            return ConnectionCheckResult.failed(validation.messages)

        repo_url = self._repo_url(repository_properties)
        failure = self._connection_failure(repo_url)
        if failure is not None:
            return ConnectionCheckResult.failed([failure])

        try:
            record = self._resolve(repo_url, package_spec_from(package_properties))
        except YumRepoError as e:
            logger.info(f"Package check failed for {repo_url.for_display()}: {e}")
            return ConnectionCheckResult.failed([str(e)])

        return ConnectionCheckResult.succeeded(f"Found package '{record.revision}'.")

    def get_latest_revision(
        self,
        package_properties: MaterialProperties,
        repository_properties: MaterialProperties,
    ) -> PackageRevision:
        """Resolve the latest revision of the configured package.

        Raises:
            InvalidConfigurationError: If either configuration is invalid
            RepositoryConnectionError: If the repository is unreachable
            ProcessLaunchError: If the query tool cannot be started
            QueryExecutionError: If the query tool fails
            PackageNotFoundError: If nothing matches the package spec
            AmbiguousMatchError: If several packages match the package spec
        """
        validation = self._validate(package_properties, repository_properties)
        if validation.is_failure:
            raise InvalidConfigurationError(validation)

        repo_url = self._repo_url(repository_properties)
        repo_url.check_connection()

        spec = package_spec_from(package_properties)
        revision = self._resolve(repo_url, spec).to_revision()
        logger.info(f"Latest revision of '{spec}' in {repo_url.for_display()} is {revision.revision}")
        return revision

    def get_latest_revision_since(
        self,
        package_properties: MaterialProperties,
        repository_properties: MaterialProperties,
        previous: Optional[PackageRevision],
        resolver: Optional[RevisionResolver] = None,
    ) -> Optional[PackageRevision]:
        """Return the latest revision unless it is the ``previous`` one.

        Revisions are compared by their revision string only.

        Args:
            package_properties: Package configuration
            repository_properties: Repository configuration
            previous: Revision seen by the last poll
            resolver: Resolves the current revision, defaults to
                ``get_latest_revision``

        Returns:
            The latest revision, or None when nothing changed
        """
        resolve = resolver or self.get_latest_revision
        latest = resolve(package_properties, repository_properties)
        if latest.is_same_revision(previous):
            logger.debug(f"No new revision since {previous.revision}")
            return None
        return latest

    def clear_cache(self) -> None:
        self.cache.clear()

    def _validate(
        self,
        package_properties: MaterialProperties,
        repository_properties: MaterialProperties,
    ) -> ValidationResult:
        result = ValidationResult()
        result.extend(self.validate_repository_configuration(repository_properties))
        result.extend(self.validate_package_configuration(package_properties))
        return result

    def _repo_url(self, repository_properties: MaterialProperties) -> RepoUrl:
        return repo_url_from(repository_properties, http_timeout=self.config.http_timeout)

    @staticmethod
    def _connection_failure(repo_url: RepoUrl) -> Optional[str]:
        try:
            repo_url.check_connection()
        except RepositoryConnectionError as e:
            return f"Could not access file - {repo_url.metadata_index_url()}. {e}"
        return None

    def _resolve(self, repo_url: RepoUrl, spec: str) -> RepoQueryRecord:
        signature = QuerySignature.of(repo_url, spec)
        entry = self.cache.get_or_load(signature, lambda: self._query(repo_url, spec))
        return select_single(entry.records, spec)

    def _query(self, repo_url: RepoUrl, spec: str) -> List[RepoQueryRecord]:
        params = RepoQueryParams(self._repo_id_factory(), repo_url, spec)
        return self.query_command.execute(params)
