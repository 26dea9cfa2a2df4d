"""Connection checkers for repository metadata indexes.

A checker is picked from the URL scheme: ``http``/``https`` locations are
fetched with httpx, ``file`` locations are checked on the local filesystem.
"""

import os
from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import unquote, urlsplit

import httpx

from ..common.logger import get_logger
from .credentials import Credentials
from .errors import RepositoryConnectionError

logger = get_logger("checkers")

INVALID_FILE_PATH_MESSAGE = "Invalid file path."

DEFAULT_HTTP_TIMEOUT = 30.0


class ConnectionChecker(ABC):
    """Verifies that a metadata index URL is reachable."""

    @abstractmethod
    def check_connection(self, url: str, credentials: Credentials) -> None:
        """Check the URL.

        Args:
            url: Metadata index URL
            credentials: Credentials for the repository

        Raises:
            RepositoryConnectionError: If the URL is not reachable
        """
        pass


class HttpConnectionChecker(ConnectionChecker):
    """Issues a GET against the metadata index.

    A 401 response is answered once with basic authentication when
    credentials are available.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport

    def check_connection(self, url: str, credentials: Credentials) -> None:
        try:
            with httpx.Client(
                timeout=self.timeout,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                response = client.get(url)
                if response.status_code == 401 and credentials.is_complete:
                    logger.debug(f"Authentication challenge from {url}, retrying with credentials")
                    response = client.get(
                        url, auth=httpx.BasicAuth(credentials.username, credentials.password)
                    )
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.info(f"Could not reach {url}: {e}")
            raise RepositoryConnectionError(str(e)) from e

        if not response.is_success:
            status_line = (
                f"{response.http_version} {response.status_code} {response.reason_phrase}"
            )
            logger.info(f"Unexpected response from {url}: {status_line}")
            raise RepositoryConnectionError(status_line)

        logger.debug(f"Metadata index reachable at {url}")


class FileConnectionChecker(ConnectionChecker):
    """Checks that the metadata index exists on the local filesystem."""

    def check_connection(self, url: str, credentials: Credentials) -> None:
        path = to_local_path(url)
        if not path or not os.path.isfile(path):
            logger.info(f"Metadata index not found at {url}")
            raise RepositoryConnectionError(INVALID_FILE_PATH_MESSAGE)
        logger.debug(f"Metadata index present at {path}")


def to_local_path(url: str) -> str:
    """Convert a ``file:`` URL into a filesystem path.

    ``file:///abs/path`` maps to ``/abs/path``; ``file://rel/path`` keeps the
    authority as the first path segment and yields ``rel/path``.
    """
    parts = urlsplit(url)
    return unquote(parts.netloc + parts.path)


def select_checker(scheme: str, http_timeout: float = DEFAULT_HTTP_TIMEOUT) -> ConnectionChecker:
    """Select the connection checker for a URL scheme.

    Args:
        scheme: URL scheme (``file``, ``http`` or ``https``)
        http_timeout: Timeout applied to HTTP checks

    Returns:
        ConnectionChecker for the scheme

    Raises:
        ValueError: If no checker handles the scheme
    """
    scheme = scheme.lower()
    if scheme in ("http", "https"):
        return HttpConnectionChecker(timeout=http_timeout)
    if scheme == "file":
        return FileConnectionChecker()
    raise ValueError(f"No connection checker for scheme: {scheme}")
