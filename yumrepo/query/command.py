"""Invocation of the repository query tool."""

from typing import List, Mapping, Optional

from ..common.config import YumRepoConfig
from ..common.logger import get_logger
from ..material.errors import QueryExecutionError
from .environment import YumEnvironment
from .params import RepoQueryParams
from .parser import RepoQueryOutputParser, RepoQueryRecord
from .process import ProcessRunner

logger = get_logger("repoquery")


class RepoQueryCommand:
    """Runs ``repoquery`` against a single repository and parses the result."""

    def __init__(
        self,
        runner: Optional[ProcessRunner] = None,
        config: Optional[YumRepoConfig] = None,
        parser: Optional[RepoQueryOutputParser] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.runner = runner or ProcessRunner()
        self.config = config or YumRepoConfig()
        self.parser = parser or RepoQueryOutputParser()
        self.environ = environ

    def build_command(self, params: RepoQueryParams, repo_from_id: Optional[str] = None) -> List[str]:
        """Build the command line for a query.

        Args:
            params: Query parameters
            repo_from_id: Replacement for ``params.repo_from_id``, used to
                log the command without credentials

        Raises:
            InvalidRepositoryUrlError: If the repository URL is malformed
        """
        if repo_from_id is None:
            repo_from_id = params.repo_from_id
        return [
            self.config.repoquery_command,
            f"--repofrompath={repo_from_id}",
            "--disablerepo=*",
            f"--enablerepo={params.repo_id}",
            "-q",
            params.package_spec,
            "--qf",
            self.parser.query_format,
        ]

    def execute(self, params: RepoQueryParams) -> List[RepoQueryRecord]:
        """Run the query and return every matching package.

        Raises:
            InvalidRepositoryUrlError: If the repository URL is malformed
            ProcessLaunchError: If the tool cannot be started
            QueryExecutionError: If the tool fails or its output is malformed
        """
        command = self.build_command(params)
        environment = YumEnvironment(params.repo_id, self.config, self.environ)

        logger.debug(
            "Running "
            + " ".join(self.build_command(params, f"{params.repo_id},{params.repo_path}"))
        )
        try:
            output = self.runner.execute(command, environment.build())
        finally:
            environment.cleanup()

        if not output.is_success:
            message = (
                f"Error while querying repository with path '{params.repo_path}' "
                f"and package spec '{params.package_spec}'."
            )
            if output.has_errors():
                message = f"{message} {output.stderr_as_string()}"
            logger.warning(f"repoquery exited with {output.return_code}: {message}")
            raise QueryExecutionError(message)

        records = self.parser.parse(output.stdout)
        logger.debug(f"repoquery matched {len(records)} package(s) for '{params.package_spec}'")
        return records
