"""
Data models shared by every stage of the changelog pipeline.

:class:`CommitRecord` is what the caller hands in (one commit read from
the version-control history). :class:`ParsedCommit` and :class:`Unparsed`
are the two possible outcomes of parsing a record's message, and
:class:`ReleaseGroup` / :class:`Changelog` form the intermediate
representation that every renderer walks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

SHORT_HASH_LENGTH = 7
UNRELEASED = "Unreleased"


@dataclass(frozen=True)
class CommitRecord:
    """One commit as supplied by the version-control log reader.

    Attributes
    ----------
    hash : str
        Full commit identifier.
    author : str
        Author name.
    date : datetime
        Commit timestamp.
    message : str
        Full commit message, first line included.
    """

    hash: str
    author: str
    date: datetime
    message: str

    @property
    def short_hash(self) -> str:
        return self.hash[:SHORT_HASH_LENGTH]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CommitRecord":
        """Build a record from a plain mapping.

        ``date`` may be a :class:`datetime`, a :class:`date`, an ISO-8601
        string or a UNIX timestamp. The result is always an aware UTC
        datetime; values without an offset are taken to be UTC.
        """
        return cls(
            hash=str(data["hash"]),
            author=str(data["author"]),
            date=_coerce_datetime(data["date"]),
            message=str(data["message"]),
        )


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _coerce_datetime(value: Union[datetime, date, str, int, float]) -> datetime:
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        return as_utc(datetime.fromisoformat(value))
    raise TypeError(f"Unsupported commit date: {value!r}")


@dataclass(frozen=True)
class ParsedCommit:
    """A commit whose first message line matched the conventional grammar."""

    type: str
    scope: Optional[str]
    breaking: bool
    description: str
    raw: Optional[CommitRecord] = None
    body: str = ""


@dataclass(frozen=True)
class Unparsed:
    """A message rejected by the parser, with the reason it was rejected."""

    message: str
    reason: str
    raw: Optional[CommitRecord] = None


@dataclass
class ReleaseGroup:
    """Commits of one release, partitioned by category.

    Attributes
    ----------
    version : Optional[str]
        Release label, or ``None`` for commits made since the last release.
    date_range : Optional[Tuple[datetime, datetime]]
        ``(oldest, newest)`` commit dates in the group.
    categories : Dict[str, List[ParsedCommit]]
        Category label to commits, in render order. Categories without
        commits are never present.
    """

    version: Optional[str]
    date_range: Optional[Tuple[datetime, datetime]] = None
    categories: Dict[str, List[ParsedCommit]] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return self.version if self.version is not None else UNRELEASED

    @property
    def commits(self) -> List[ParsedCommit]:
        return [commit for commits in self.categories.values() for commit in commits]


@dataclass
class Changelog:
    """Release groups, most recent first, plus the commits left out."""

    releases: List[ReleaseGroup] = field(default_factory=list)
    excluded: List[Unparsed] = field(default_factory=list)

    def __iter__(self) -> Iterator[ReleaseGroup]:
        return iter(self.releases)

    def __len__(self) -> int:
        return len(self.releases)
