"""Runs external commands and captures their output."""

import os
import subprocess
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence

from ..common.logger import get_logger
from ..material.errors import ProcessLaunchError

logger = get_logger("process")


@dataclass
class ProcessOutput:
    """Exit code and captured output lines of a finished process."""

    return_code: int
    stdout: List[str] = field(default_factory=list)
    stderr: List[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.return_code == 0

    def has_output(self) -> bool:
        return any(line.strip() for line in self.stdout)

    def has_errors(self) -> bool:
        return any(line.strip() for line in self.stderr)

    def stderr_as_string(self) -> str:
        return "Error Message: " + "\n".join(self.stderr)


class ProcessRunner:
    """Runs a command to completion and returns its output.

    A non-zero exit code is reported in the result, not raised.
    """

    def execute(
        self, command: Sequence[str], env: Optional[Mapping[str, str]] = None
    ) -> ProcessOutput:
        """Run a command synchronously.

        Args:
            command: Program and arguments
            env: Variables merged over the inherited environment

        Returns:
            ProcessOutput with exit code and output lines

        Raises:
            ProcessLaunchError: If the command cannot be started
        """
        if not command:
            raise ValueError("command must not be empty")
        program = command[0]

        process_env = dict(os.environ)
        process_env.update(env or {})

        try:
            # Popen as a context manager closes the pipes and reaps the child
            # on every exit path.
            with subprocess.Popen(
                list(command),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=process_env,
                text=True,
                errors="replace",
            ) as process:
                stdout, stderr = process.communicate()
                return_code = process.returncode
        except OSError as e:
            logger.error(f"Could not start {program}: {e}")
            raise ProcessLaunchError(f'Cannot run program "{program}": {e}') from e

        return ProcessOutput(
            return_code=return_code,
            stdout=stdout.splitlines(),
            stderr=stderr.splitlines(),
        )
