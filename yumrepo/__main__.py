"""CLI interface for resolving a package revision."""

import os
import sys
from datetime import datetime, timezone

import yaml

from .common.config import YumRepoConfig, load_typed_config
from .common.logger import setup_logger
from .material.base import PACKAGE_SPEC, PASSWORD, REPO_URL, USERNAME, PackageRevision
from .material.errors import YumRepoError
from .poller import PackageRepositoryPoller

USAGE = "Usage: python -m yumrepo <repo_url> <package_spec> [previous_revision]"


def main():
    """Main entry point for the revision CLI."""
    if len(sys.argv) < 3:
        print(USAGE, file=sys.stderr)
        sys.exit(1)

    repo_url, package_spec = sys.argv[1], sys.argv[2]
    previous = sys.argv[3] if len(sys.argv) > 3 else None

    try:
        try:
            config = load_typed_config()
        except FileNotFoundError:
            config = YumRepoConfig()
        setup_logger("yumrepo", config)
    except (yaml.YAMLError, TypeError, ValueError) as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    repository_properties = {REPO_URL: repo_url}
    username = os.environ.get("YUM_REPO_USERNAME")
    password = os.environ.get("YUM_REPO_PASSWORD")
    if username or password:
        repository_properties[USERNAME] = username
        repository_properties[PASSWORD] = password
    package_properties = {PACKAGE_SPEC: package_spec}

    poller = PackageRepositoryPoller(config=config)

    try:
        if previous is None:
            revision = poller.get_latest_revision(package_properties, repository_properties)
        else:
            revision = poller.get_latest_revision_since(
                package_properties,
                repository_properties,
                PackageRevision(
                    revision=previous,
                    timestamp=datetime.fromtimestamp(0, tz=timezone.utc),
                ),
            )
    except YumRepoError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        poller.clear_cache()

    if revision is None:
        print("No new revision")
        sys.exit(0)

    print(f"Revision: {revision.revision}")
    print(f"Timestamp: {revision.timestamp.isoformat()}")
    if revision.user:
        print(f"User: {revision.user}")
    for key, value in revision.data.items():
        print(f"{key}: {value}")
    sys.exit(0)


if __name__ == "__main__":
    main()
