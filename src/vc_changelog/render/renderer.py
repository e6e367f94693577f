"""
Rendering of a :class:`~vc_changelog.models.Changelog` to text.
"""

from __future__ import annotations

import string
from enum import Enum
from typing import Dict, List, Optional, Type, Union

from vc_changelog.models import Changelog
from vc_changelog.render.formatters import Formatter, HtmlFormatter, MarkdownFormatter


class UnknownFormatError(ValueError):
    """Raised when rendering is requested in an unsupported format."""

    pass


class OutputFormat(str, Enum):
    MARKDOWN = "markdown"
    HTML = "html"


FORMATTERS: Dict[OutputFormat, Type[Formatter]] = {
    OutputFormat.MARKDOWN: MarkdownFormatter,
    OutputFormat.HTML: HtmlFormatter,
}

_ALIASES = {"md": OutputFormat.MARKDOWN, "htm": OutputFormat.HTML}


def resolve_format(fmt: Union[OutputFormat, str]) -> OutputFormat:
    """Turn a format name (``"markdown"``, ``"md"``, ``"html"``) into an :class:`OutputFormat`."""
    if isinstance(fmt, OutputFormat):
        return fmt
    if isinstance(fmt, str):
        name = fmt.strip().lower()
        if name in _ALIASES:
            return _ALIASES[name]
        try:
            return OutputFormat(name)
        except ValueError:
            pass
    supported = ", ".join(member.value for member in OutputFormat)
    raise UnknownFormatError(f"Unknown output format {fmt!r}; expected one of: {supported}")


def validate_link_template(template: str) -> None:
    """Raise ``ValueError`` unless ``template`` only uses the ``{hash}`` field."""
    try:
        fields = [name for _, name, _, _ in string.Formatter().parse(template) if name is not None]
    except ValueError as exc:
        raise ValueError(f"Malformed commit link template {template!r}: {exc}") from exc
    unknown = [name for name in fields if name != "hash"]
    if unknown:
        raise ValueError(
            f"Commit link template {template!r} uses unknown placeholders: {', '.join(unknown)}"
        )


def render(
    changelog: Changelog,
    fmt: Union[OutputFormat, str] = OutputFormat.MARKDOWN,
    link_template: Optional[str] = None,
) -> str:
    """Render ``changelog`` in the requested format.

    Release groups are written in changelog order and categories in the
    order they appear in each group (the category table's order). Empty
    categories, and releases left with none, are not written. The
    function is pure: the same changelog always renders to the same text.

    Raises
    ------
    UnknownFormatError
        If ``fmt`` names no supported format.
    ValueError
        If ``link_template`` is malformed.
    """
    formatter_class = FORMATTERS[resolve_format(fmt)]
    if link_template is not None:
        validate_link_template(link_template)
    formatter = formatter_class(link_template)

    pieces: List[str] = [formatter.begin_document()]
    for release in changelog:
        categories = [(name, commits) for name, commits in release.categories.items() if commits]
        if not categories:
            continue
        pieces.append(formatter.release_heading(release))
        for category, commits in categories:
            pieces.append(formatter.category_heading(category))
            pieces.append(formatter.begin_list())
            pieces.extend(formatter.entry(commit) for commit in commits)
            pieces.append(formatter.end_list())
    pieces.append(formatter.end_document())

    text = "".join(pieces).rstrip("\n")
    return text + "\n" if text else ""
