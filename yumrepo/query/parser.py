"""Parsing of query tool output into package records.

The tool prints one line per matching package with the fields of
``QUERY_FIELDS`` joined by ``FIELD_SEPARATOR``.
"""

import posixpath
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from ..common.logger import get_logger
from ..material.base import PackageRevision
from ..material.errors import AmbiguousMatchError, PackageNotFoundError, QueryExecutionError

logger = get_logger("parser")

FIELD_SEPARATOR = "<=>"

QUERY_FIELDS = (
    "name",
    "epoch",
    "version",
    "release",
    "arch",
    "buildtime",
    "packager",
    "location",
    "url",
)

REQUIRED_FIELDS = ("name", "version", "release", "arch", "buildtime", "location")

# Placeholder the tool prints for tags a package does not define
NONE_VALUE = "(none)"

LOCATION = "LOCATION"

# yum prints build time as epoch seconds, dnf as a minute-precision date
BUILD_TIME_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M")


def query_format(fields: Sequence[str] = QUERY_FIELDS) -> str:
    """Return the ``--qf`` argument printing ``fields`` in order."""
    return FIELD_SEPARATOR.join(f"%{{{name}}}" for name in fields)


def parse_build_time(value: str) -> datetime:
    """Parse a build time printed by the tool as a UTC datetime.

    Raises:
        QueryExecutionError: If the value is in no known format
    """
    value = value.strip()
    if value.isdigit():
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    for fmt in BUILD_TIME_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    raise QueryExecutionError(f"Could not parse build time '{value}' reported by repoquery.")


def _optional(value: str) -> Optional[str]:
    value = value.strip()
    if not value or value == NONE_VALUE:
        return None
    return value


@dataclass(frozen=True)
class RepoQueryRecord:
    """One package reported by the query tool."""

    name: str
    version: str
    release: str
    arch: str
    build_time: datetime
    location: str
    epoch: Optional[str] = None
    packager: Optional[str] = None
    url: Optional[str] = None
    extra: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    @property
    def revision(self) -> str:
        return f"{self.name}-{self.version}-{self.release}.{self.arch}"

    @property
    def file_name(self) -> str:
        return posixpath.basename(self.location)

    def to_revision(self) -> PackageRevision:
        data = {LOCATION: self.location}
        data.update(self.extra)
        return PackageRevision(
            revision=self.revision,
            timestamp=self.build_time,
            user=self.packager,
            trackback_url=self.url,
            data=data,
        )


class RepoQueryOutputParser:
    """Turns query tool stdout into ``RepoQueryRecord`` instances."""

    def __init__(self, fields: Sequence[str] = QUERY_FIELDS):
        missing = [name for name in REQUIRED_FIELDS if name not in fields]
        if missing:
            raise ValueError(f"Query fields missing required tags: {', '.join(missing)}")
        self.fields = tuple(fields)

    @property
    def query_format(self) -> str:
        return query_format(self.fields)

    def parse(self, lines: Iterable[str]) -> List[RepoQueryRecord]:
        """Parse every record line, skipping tool noise and exact duplicates.

        Raises:
            QueryExecutionError: If a record line is malformed
        """
        records: List[RepoQueryRecord] = []
        seen = set()
        for line in lines:
            if FIELD_SEPARATOR not in line:
                if line.strip():
                    logger.debug(f"Ignoring repoquery output line: {line!r}")
                continue
            record = self.parse_line(line)
            key = (record.revision, record.location)
            if key in seen:
                continue
            seen.add(key)
            records.append(record)
        return records

    def parse_line(self, line: str) -> RepoQueryRecord:
        values = line.rstrip("\r\n").split(FIELD_SEPARATOR)
        if len(values) != len(self.fields):
            raise QueryExecutionError(
                f"Unexpected repoquery output, expected {len(self.fields)} fields "
                f"but got {len(values)}: {line.strip()}"
            )
        raw = dict(zip(self.fields, (value.strip() for value in values)))

        for name in REQUIRED_FIELDS:
            if not raw[name]:
                raise QueryExecutionError(
                    f"Unexpected repoquery output, '{name}' is empty: {line.strip()}"
                )

        extra = {
            name.upper(): value
            for name, value in raw.items()
            if name not in QUERY_FIELDS
        }
        return RepoQueryRecord(
            name=raw["name"],
            version=raw["version"],
            release=raw["release"],
            arch=raw["arch"],
            build_time=parse_build_time(raw["buildtime"]),
            location=raw["location"],
            epoch=_optional(raw.get("epoch", "")),
            # "(none)" is kept as reported; it only means no packager was set
            packager=raw.get("packager") or None,
            url=_optional(raw.get("url", "")),
            extra=extra,
        )


def select_single(records: Sequence[RepoQueryRecord], spec: str) -> RepoQueryRecord:
    """Return the only record matching ``spec``.

    Raises:
        PackageNotFoundError: If there are no records
        AmbiguousMatchError: If there is more than one record
    """
    if not records:
        raise PackageNotFoundError(spec)
    if len(records) > 1:
        raise AmbiguousMatchError(spec, [record.file_name for record in records])
    return records[0]
