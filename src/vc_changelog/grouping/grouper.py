"""
Partitioning of parsed commits into release groups and categories.

Commits arrive most recent first. Boundaries are ``(version, hash)`` pairs,
also most recent first; a boundary's release starts at its own commit and
runs down to, but not including, the next older boundary commit. Commits
newer than the first boundary make up the ``Unreleased`` group.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from vc_changelog.grouping.classifier import DEFAULT_TABLE, CategoryTable
from vc_changelog.models import SHORT_HASH_LENGTH, Changelog, ParsedCommit, ReleaseGroup, as_utc


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

Boundary = Tuple[str, str]


class BoundaryError(ValueError):
    """Raised in strict mode when a boundary cannot be placed in the history."""

    pass


def _commit_hash(commit: ParsedCommit) -> str:
    return commit.raw.hash if commit.raw is not None else ""


def _locate(marker: str, history: Sequence[str]) -> Optional[int]:
    """Index of the first history hash matching ``marker``.

    Either side may be abbreviated: ``marker`` may be a prefix of the history
    hash, or a full hash whose prefix is a short history hash of at least
    ``SHORT_HASH_LENGTH`` characters.
    """
    if not marker:
        return None
    for index, hash_ in enumerate(history):
        if hash_.startswith(marker):
            return index
        if len(hash_) >= SHORT_HASH_LENGTH and marker.startswith(hash_):
            return index
    return None


def _resolve_boundaries(
    boundaries: Sequence[Boundary], history: Sequence[str], strict: bool
) -> List[Tuple[str, int]]:
    resolved: List[Tuple[str, int]] = []
    for version, marker in boundaries:
        position = _locate(marker, history)
        if position is None:
            if strict:
                raise BoundaryError(f"Boundary {version!r} references unknown commit {marker!r}")
            logger.warning(
                "Boundary %s references unknown commit %s; treating it as end of history",
                version,
                marker,
            )
            break
        if resolved and position < resolved[-1][1]:
            if strict:
                raise BoundaryError(f"Boundary {version!r} at {marker!r} is newer than the boundary before it")
            logger.warning(
                "Boundary %s at %s is out of order; treating it as end of history", version, marker
            )
            break
        if resolved and position == resolved[-1][1]:
            logger.debug(
                "Boundary %s shares commit %s with newer boundary %s; keeping %s",
                version,
                marker,
                resolved[-1][0],
                resolved[-1][0],
            )
            continue
        resolved.append((version, position))
    return resolved


def _build_group(
    version: Optional[str], commits: List[ParsedCommit], table: CategoryTable
) -> ReleaseGroup:
    buckets: Dict[str, List[ParsedCommit]] = {}
    for commit in commits:
        buckets.setdefault(table.classify(commit.type, commit.scope), []).append(commit)
    categories = {name: buckets[name] for name in sorted(buckets, key=table.rank)}

    dates = [commit.raw.date for commit in commits if commit.raw is not None]
    date_range = (min(dates, key=as_utc), max(dates, key=as_utc)) if dates else None
    return ReleaseGroup(version=version, date_range=date_range, categories=categories)


def group(
    commits: Sequence[ParsedCommit],
    boundaries: Sequence[Boundary] = (),
    table: CategoryTable = DEFAULT_TABLE,
    history: Optional[Sequence[str]] = None,
    strict: bool = False,
) -> Changelog:
    """Group commits into a :class:`Changelog`.

    Parameters
    ----------
    commits : Sequence[ParsedCommit]
        Parsed commits, most recent first.
    boundaries : Sequence[Tuple[str, str]]
        ``(version, commit hash)`` pairs, most recent first. Hashes may be
        abbreviated.
    table : CategoryTable
        Category table used to classify and order categories.
    history : Sequence[str], optional
        Every commit hash of the run, most recent first, including commits
        that failed to parse. Boundaries are located in this sequence so a
        tag on an unparsable commit still splits releases correctly.
        Defaults to the hashes of ``commits``.
    strict : bool
        Raise :class:`BoundaryError` for a boundary that cannot be placed
        instead of treating it as the end of history.

    Returns
    -------
    Changelog
        Release groups most recent first. Empty groups and empty
        categories are omitted.
    """
    if history is None:
        history = [_commit_hash(commit) for commit in commits]
        positions = list(range(len(commits)))
    else:
        index = {hash_: position for position, hash_ in enumerate(history)}
        positions = []
        last = 0
        for commit in commits:
            last = index.get(_commit_hash(commit), last)
            positions.append(last)
    resolved = _resolve_boundaries(boundaries, history, strict)

    # Each slot covers [start, next start); slot 0 is the unreleased range
    slots: List[Tuple[Optional[str], int]] = [(None, 0)] + resolved
    members: List[List[ParsedCommit]] = [[] for _ in slots]
    starts = [start for _, start in slots]

    slot = 0
    for commit, position in zip(commits, positions):
        while slot + 1 < len(starts) and position >= starts[slot + 1]:
            slot += 1
        members[slot].append(commit)

    releases = [
        _build_group(version, bucket, table)
        for (version, _), bucket in zip(slots, members)
        if bucket
    ]
    return Changelog(releases=releases)
