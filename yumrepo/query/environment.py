"""Environment handed to the query tool.

The tool needs a home directory and a scratch directory for its metadata
cache. Both can be overridden from the environment or the configuration
file.
"""

import os
import shutil
import tempfile
from typing import Dict, Mapping, Optional

from ..common.config import YumRepoConfig
from ..common.logger import get_logger

logger = get_logger("environment")

HOME = "HOME"
TMPDIR = "TMPDIR"

# Overrides the base directory for the tool's scratch space
TMPDIR_OVERRIDE = "YUM_REPO_TMPDIR"

DEFAULT_TMP_DIR_NAME = ".yum-repo-material"


class YumEnvironment:
    """Builds the environment for one query identified by ``repo_id``."""

    def __init__(
        self,
        repo_id: str,
        config: Optional[YumRepoConfig] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.repo_id = repo_id
        self.config = config or YumRepoConfig()
        self.environ = os.environ if environ is None else environ

    def home_dir(self) -> str:
        return self.environ.get(HOME) or self.config.home_dir or tempfile.gettempdir()

    def tmp_base_dir(self) -> str:
        return (
            self.environ.get(TMPDIR_OVERRIDE)
            or self.config.tmp_dir
            or os.path.join(self.home_dir(), DEFAULT_TMP_DIR_NAME)
        )

    def scratch_dir(self) -> str:
        return os.path.join(self.tmp_base_dir(), self.repo_id)

    def build(self) -> Dict[str, str]:
        """Return the variables to set for the query tool."""
        return {HOME: self.home_dir(), TMPDIR: self.scratch_dir()}

    def cleanup(self) -> None:
        """Remove this query's scratch directory."""
        scratch = self.scratch_dir()
        if os.path.isdir(scratch):
            logger.debug(f"Removing scratch directory {scratch}")
            shutil.rmtree(scratch, ignore_errors=True)
