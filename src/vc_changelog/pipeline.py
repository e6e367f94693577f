"""
End-to-end changelog generation over already-fetched commit records.

The caller supplies the commit history (most recent first) and, optionally,
release boundaries; this module parses, filters, groups and renders it.
Reading history from a VCS and writing the result anywhere are left to
the caller.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Union

from vc_changelog.config.loader import ChangelogConfig
from vc_changelog.grouping.grouper import Boundary, group
from vc_changelog.models import Changelog, CommitRecord, ParsedCommit, Unparsed
from vc_changelog.parsing.message_parser import parse_record
from vc_changelog.render.renderer import OutputFormat, render, resolve_format


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

MERGE_PREFIXES = ("Merge pull request", "Merge branch")


def is_merge_commit(record: CommitRecord) -> bool:
    return record.message.startswith(MERGE_PREFIXES)


def build_changelog(
    records: Iterable[CommitRecord],
    boundaries: Sequence[Boundary] = (),
    config: Optional[ChangelogConfig] = None,
) -> Changelog:
    """Parse, filter and group ``records`` into a :class:`Changelog`.

    Records that fail to parse end up in ``Changelog.excluded``; commits
    dropped by a configured policy (merge commits, unknown types) are only
    logged.
    """
    config = config or ChangelogConfig()
    table = config.table
    known_scopes = set(config.scopes) if config.scopes is not None else None

    history: List[str] = []
    parsed: List[ParsedCommit] = []
    excluded: List[Unparsed] = []
    skipped = 0

    for record in records:
        history.append(record.hash)
        if config.skip_merge_commits and is_merge_commit(record):
            logger.debug("Skip merge commit %s", record.short_hash)
            skipped += 1
            continue

        result = parse_record(record)
        if isinstance(result, Unparsed):
            logger.debug("Could not parse commit %s: %s", record.short_hash, result.reason)
            excluded.append(result)
            continue

        if config.unknown_types == "skip" and not table.knows(result.type):
            logger.debug("Skip commit %s with unknown type %r", record.short_hash, result.type)
            skipped += 1
            continue

        if result.scope and known_scopes is not None:
            unknown = [s.strip() for s in result.scope.split(",") if s.strip() not in known_scopes]
            if unknown:
                logger.warning(
                    "Commit %s uses unknown scope(s): %s", record.short_hash, ", ".join(unknown)
                )

        parsed.append(result)

    changelog = group(
        parsed,
        boundaries,
        table=table,
        history=history,
        strict=config.strict_boundaries,
    )
    changelog.excluded = excluded
    logger.info(
        "Grouped %d commit(s) into %d release(s); %d unparsed, %d skipped",
        len(parsed),
        len(changelog),
        len(excluded),
        skipped,
    )
    return changelog


def generate(
    records: Iterable[CommitRecord],
    fmt: Union[OutputFormat, str] = OutputFormat.MARKDOWN,
    boundaries: Sequence[Boundary] = (),
    config: Optional[ChangelogConfig] = None,
) -> str:
    """Build the changelog for ``records`` and render it as text."""
    config = config or ChangelogConfig()
    fmt = resolve_format(fmt)
    changelog = build_changelog(records, boundaries, config)
    return render(changelog, fmt, link_template=config.link)
