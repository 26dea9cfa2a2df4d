"""Validation of repository and package configuration supplied by the host."""

from typing import Iterable, List, Optional

from ..common.logger import get_logger
from .base import (
    PACKAGE_KEYS,
    PACKAGE_SPEC,
    PASSWORD,
    REPO_URL,
    REPOSITORY_KEYS,
    USERNAME,
    MaterialProperties,
    ValidationResult,
)
from .checkers import DEFAULT_HTTP_TIMEOUT
from .credentials import Credentials
from .repo_url import RepoUrl

logger = get_logger("configuration")

REPO_URL_NOT_SPECIFIED_MESSAGE = "Repository url not specified"
PACKAGE_SPEC_NOT_SPECIFIED_MESSAGE = "Package spec not specified"
PACKAGE_SPEC_NULL_MESSAGE = "Package spec is null"
PACKAGE_SPEC_EMPTY_MESSAGE = "Package spec is empty"


def credentials_from(repository_properties: MaterialProperties) -> Credentials:
    return Credentials(
        username=repository_properties.get(USERNAME),
        password=repository_properties.get(PASSWORD),
    )


def repo_url_from(
    repository_properties: MaterialProperties,
    http_timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> RepoUrl:
    return RepoUrl(
        repository_properties.get(REPO_URL),
        credentials_from(repository_properties),
        http_timeout=http_timeout,
    )


def package_spec_from(package_properties: MaterialProperties) -> Optional[str]:
    """Return the package spec without surrounding whitespace."""
    spec = package_properties.get(PACKAGE_SPEC)
    return spec.strip() if spec is not None else None


class PackageRepositoryConfiguration:
    """Validates the configuration keys the material understands."""

    def validate_repository_configuration(
        self, repository_properties: MaterialProperties
    ) -> ValidationResult:
        """Validate repository configuration without any I/O.

        Args:
            repository_properties: REPO_URL, USERNAME and PASSWORD values

        Returns:
            ValidationResult with every problem found
        """
        result = ValidationResult()
        self._validate_keys(REPOSITORY_KEYS, repository_properties, result)

        if REPO_URL not in repository_properties:
            result.add_error(REPO_URL, REPO_URL_NOT_SPECIFIED_MESSAGE)
        else:
            repo_url = repo_url_from(repository_properties)
            repo_url.validate(result)
            repo_url.credentials.validate(result)

        if result.is_failure:
            logger.info(f"Repository configuration is invalid: {result}")
        return result

    def validate_package_configuration(
        self, package_properties: MaterialProperties
    ) -> ValidationResult:
        """Validate package configuration without any I/O.

        Args:
            package_properties: PACKAGE_SPEC value

        Returns:
            ValidationResult with every problem found
        """
        result = ValidationResult()
        self._validate_keys(PACKAGE_KEYS, package_properties, result)

        if PACKAGE_SPEC not in package_properties:
            result.add_error(PACKAGE_SPEC, PACKAGE_SPEC_NOT_SPECIFIED_MESSAGE)
        else:
            spec = package_spec_from(package_properties)
            if spec is None:
                result.add_error(PACKAGE_SPEC, PACKAGE_SPEC_NULL_MESSAGE)
            elif not spec:
                result.add_error(PACKAGE_SPEC, PACKAGE_SPEC_EMPTY_MESSAGE)

        if result.is_failure:
            logger.info(f"Package configuration is invalid: {result}")
        return result

    @staticmethod
    def _validate_keys(
        allowed: Iterable[str], properties: MaterialProperties, result: ValidationResult
    ) -> None:
        allowed = list(allowed)
        unsupported: List[str] = [key for key in properties if key not in allowed]
        if unsupported:
            result.add_error(
                "",
                f"Unsupported key(s) found : {', '.join(unsupported)}. "
                f"Allowed key(s) are : {', '.join(allowed)}",
            )
