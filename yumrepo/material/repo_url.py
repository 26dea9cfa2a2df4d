"""Repository location handling.

Validates a repository base URL, derives the metadata index and query URLs
from it, and checks that the repository is reachable.
"""

import re
from enum import Enum
from typing import Callable, Optional
from urllib.parse import SplitResult, urlsplit

from ..common.logger import get_logger
from .base import REPO_URL, ValidationResult
from .checkers import DEFAULT_HTTP_TIMEOUT, ConnectionChecker, select_checker
from .credentials import Credentials
from .errors import InvalidConfigurationError, InvalidRepositoryUrlError

logger = get_logger("repo_url")

METADATA_INDEX_PATH = "repodata/repomd.xml"

EMPTY_URL_MESSAGE = "Repository url is empty"
UNSUPPORTED_PROTOCOL_MESSAGE = (
    "Invalid URL: Only 'file', 'http' and 'https' protocols are supported."
)
USER_INFO_MESSAGE = (
    "User info should not be provided as part of the URL. "
    "Please provide credentials using USERNAME and PASSWORD configuration keys."
)
FILE_CREDENTIALS_MESSAGE = "File protocol does not support username and/or password."

_SCHEME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")


class Scheme(Enum):
    """URL scheme of a repository location."""

    FILE = "file"
    HTTP = "http"
    HTTPS = "https"
    OTHER = "other"

    @classmethod
    def of(cls, scheme: str) -> "Scheme":
        try:
            return cls(scheme.lower())
        except ValueError:
            return cls.OTHER


class RepoUrl:
    """A repository base URL together with its out-of-band credentials."""

    def __init__(
        self,
        url: Optional[str],
        credentials: Optional[Credentials] = None,
        http_timeout: float = DEFAULT_HTTP_TIMEOUT,
        checker_factory: Optional[Callable[["RepoUrl"], ConnectionChecker]] = None,
    ):
        self.url = url.strip() if url is not None else None
        self.credentials = credentials or Credentials()
        self.http_timeout = http_timeout
        self._checker_factory = checker_factory

    @property
    def scheme(self) -> Scheme:
        parts = self._split()
        if parts is None:
            return Scheme.OTHER
        return Scheme.of(parts.scheme)

    def _split(self) -> Optional[SplitResult]:
        """Parse the URL, returning None when it has no usable scheme."""
        if not self.url:
            return None
        try:
            parts = urlsplit(self.url)
            parts.port  # raises ValueError for a malformed port
        except ValueError:
            return None
        if not parts.scheme:
            return None
        return parts

    def validate(self, result: ValidationResult) -> None:
        """Record every problem with the URL.

        Args:
            result: Validation result collecting the errors
        """
        if not self.url:
            result.add_error(REPO_URL, EMPTY_URL_MESSAGE)
            return

        parts = self._split()
        if parts is None:
            result.add_error(REPO_URL, f"Invalid URL : {self.url}")
            return

        scheme = Scheme.of(parts.scheme)
        if scheme in (Scheme.HTTP, Scheme.HTTPS) and not parts.netloc:
            result.add_error(REPO_URL, f"Invalid URL : {self.url}")
            return
        if scheme is Scheme.OTHER:
            result.add_error(REPO_URL, UNSUPPORTED_PROTOCOL_MESSAGE)
        if "@" in parts.netloc:
            result.add_error(REPO_URL, USER_INFO_MESSAGE)
        if scheme is Scheme.FILE and self.credentials.is_present:
            result.add_error(REPO_URL, FILE_CREDENTIALS_MESSAGE)

    def metadata_index_url(self) -> str:
        """Return the URL of ``repodata/repomd.xml`` under this repository."""
        return f"{(self.url or '').rstrip('/')}/{METADATA_INDEX_PATH}"

    def authenticated_url(self) -> str:
        """Return the URL with credentials embedded as userinfo.

        Raises:
            InvalidRepositoryUrlError: If the URL is not ``scheme://...``
        """
        raw = self.url or ""
        scheme, separator, remainder = raw.partition("://")
        if not separator or not _SCHEME_PATTERN.fullmatch(scheme):
            raise InvalidRepositoryUrlError(raw)

        user_info = self.credentials.user_info()
        if not user_info:
            return raw
        return f"{scheme}://{user_info}@{remainder}"

    def for_display(self) -> str:
        return self.url or ""

    def checker(self) -> ConnectionChecker:
        """Return the connection checker matching the URL scheme."""
        if self._checker_factory is not None:
            return self._checker_factory(self)
        return select_checker(self.scheme.value, http_timeout=self.http_timeout)

    def check_connection(self) -> None:
        """Validate the URL and check that its metadata index is reachable.

        Raises:
            InvalidConfigurationError: If the URL fails validation
            RepositoryConnectionError: If the metadata index is unreachable
        """
        result = ValidationResult()
        self.validate(result)
        if result.is_failure:
            raise InvalidConfigurationError(result)

        metadata_url = self.metadata_index_url()
        logger.debug(f"Checking connection to {metadata_url}")
        self.checker().check_connection(metadata_url, self.credentials)

    def __repr__(self) -> str:
        return f"RepoUrl({self.url!r}, {self.credentials!r})"
