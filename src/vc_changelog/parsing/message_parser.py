"""
Parser for conventional commit messages.

Only the first line of a message carries structure::

    type ["(" scope ")"] ["!"] ":" " " description

``type`` is a lowercase token over ``[a-z0-9-]``, ``scope`` is free text
without parentheses and a ``!`` right before the colon flags a breaking
change. Everything after the first line is kept verbatim as the body; a
``BREAKING CHANGE:`` footer in the body flags a breaking change as well.

Messages that do not match are returned as :class:`~vc_changelog.models.Unparsed`
rather than raising, so a single odd commit never aborts a run.
"""

from __future__ import annotations

import re
from typing import Optional, Union

from vc_changelog.models import CommitRecord, ParsedCommit, Unparsed


HEADER_PATTERN = re.compile(
    r"^(?P<type>[^\s(!:]+)"
    r"(?:\((?P<scope>[^()]*)\))?"
    r"(?P<breaking>!)?"
    r":(?P<space> ?)(?P<description>.*)$"
)
TYPE_PATTERN = re.compile(r"^[a-z0-9-]+$")
BREAKING_FOOTER_PATTERN = re.compile(r"^BREAKING[ -]CHANGE:", re.MULTILINE)


def parse(message: str, raw: Optional[CommitRecord] = None) -> Union[ParsedCommit, Unparsed]:
    """Parse a commit message.

    Parameters
    ----------
    message : str
        Full commit message. Only the first line is matched against the
        grammar.
    raw : Optional[CommitRecord]
        Record the message came from, attached to the result unchanged.

    Returns
    -------
    Union[ParsedCommit, Unparsed]
        The structured commit, or an ``Unparsed`` carrying the reason.
    """
    header, _, body = message.partition("\n")
    header = header.rstrip("\r")

    def reject(reason: str) -> Unparsed:
        return Unparsed(message=message, reason=reason, raw=raw)

    if not header.strip():
        return reject("empty message")

    match = HEADER_PATTERN.match(header)
    if match is None:
        return reject("missing colon after type")

    type_ = match.group("type")
    if not TYPE_PATTERN.match(type_):
        return reject(f"invalid type token {type_!r}")
    if not match.group("space"):
        return reject("missing space after colon")

    description = match.group("description").strip()
    if not description:
        return reject("empty description")

    # ``feat():`` carries no scope
    scope = match.group("scope") or None
    breaking = bool(match.group("breaking")) or bool(BREAKING_FOOTER_PATTERN.search(body))

    return ParsedCommit(
        type=type_,
        scope=scope,
        breaking=breaking,
        description=description,
        raw=raw,
        body=body,
    )


def parse_record(record: CommitRecord) -> Union[ParsedCommit, Unparsed]:
    """Parse ``record.message`` and attach the record to the result."""
    return parse(record.message, raw=record)
