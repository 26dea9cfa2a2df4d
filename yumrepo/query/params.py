"""Parameters for one repository query."""

from dataclasses import dataclass

from ..material.repo_url import RepoUrl


@dataclass(frozen=True)
class RepoQueryParams:
    """Repository id, repository location and package spec of a query."""

    repo_id: str
    repo_url: RepoUrl
    package_spec: str

    @property
    def repo_from_id(self) -> str:
        """Return ``<id>,<authenticated url>`` for ``--repofrompath``.

        Raises:
            InvalidRepositoryUrlError: If the URL is not ``scheme://...``
        """
        return f"{self.repo_id},{self.repo_url.authenticated_url()}"

    @property
    def repo_path(self) -> str:
        return self.repo_url.for_display()
