"""Data structures shared by the repository material.

Defines the configuration keys, validation and connection-check results,
and the package revision record the poller hands back to its host.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional


REPO_URL = "REPO_URL"
USERNAME = "USERNAME"
PASSWORD = "PASSWORD"
PACKAGE_SPEC = "PACKAGE_SPEC"

REPOSITORY_KEYS = (REPO_URL, USERNAME, PASSWORD)
PACKAGE_KEYS = (PACKAGE_SPEC,)

# Configuration as supplied by the host: key -> value, where a key may be
# present with a None value.
MaterialProperties = Mapping[str, Optional[str]]


@dataclass(frozen=True)
class ValidationError:
    """A single validation failure tied to a configuration key."""

    key: str
    message: str


@dataclass
class ValidationResult:
    """Ordered collection of validation failures."""

    errors: List[ValidationError] = field(default_factory=list)

    def add_error(self, key: str, message: str) -> None:
        self.errors.append(ValidationError(key, message))

    def extend(self, other: "ValidationResult") -> None:
        self.errors.extend(other.errors)

    @property
    def is_success(self) -> bool:
        return not self.errors

    @property
    def is_failure(self) -> bool:
        return bool(self.errors)

    @property
    def messages(self) -> List[str]:
        return [error.message for error in self.errors]

    def __str__(self) -> str:
        return "; ".join(self.messages)


@dataclass
class ConnectionCheckResult:
    """Outcome of a check-connection call."""

    success: bool
    messages: List[str] = field(default_factory=list)

    @classmethod
    def succeeded(cls, message: str) -> "ConnectionCheckResult":
        return cls(success=True, messages=[message])

    @classmethod
    def failed(cls, messages: List[str]) -> "ConnectionCheckResult":
        return cls(success=False, messages=list(messages))


@dataclass(frozen=True)
class PackageRevision:
    """A resolved package revision.

    Two revisions describe the same package state when their ``revision``
    strings are equal; the timestamp is informational only.
    """

    revision: str
    timestamp: datetime
    user: Optional[str] = None
    trackback_url: Optional[str] = None
    data: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    def get_data(self, key: str) -> Optional[str]:
        """Get a tool-reported data field (e.g. ``LOCATION``)."""
        return self.data.get(key)

    def is_same_revision(self, other: Optional["PackageRevision"]) -> bool:
        return other is not None and self.revision == other.revision

    def to_dict(self) -> Dict[str, object]:
        """Serialize to the host's JSON shape."""
        timestamp = self.timestamp
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        timestamp = timestamp.astimezone(timezone.utc)
        payload: Dict[str, object] = {
            "revision": self.revision,
            "timestamp": timestamp.strftime("%Y-%m-%dT%H:%M:%S.")
            + f"{timestamp.microsecond // 1000:03d}Z",
            "data": dict(self.data),
        }
        if self.user is not None:
            payload["user"] = self.user
        if self.trackback_url is not None:
            payload["trackbackUrl"] = self.trackback_url
        return payload
