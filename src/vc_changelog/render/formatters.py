"""
Output formats for the changelog renderer.

A :class:`Formatter` knows how to write each structural element of a
changelog (release heading, category heading, list, entry) in one output
format. The renderer walks the changelog and asks the formatter for each
element, so grouping and classification never see format details.
"""

from __future__ import annotations

import html
import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from vc_changelog.models import ParsedCommit, ReleaseGroup

DATE_FORMAT = "%Y-%m-%d"


def code_span(text: str) -> str:
    """Markdown inline code for ``text``, fenced past any backticks it contains."""
    longest = max((len(run) for run in re.findall(r"`+", text)), default=0)
    fence = "`" * (longest + 1)
    pad = " " if text.startswith("`") or text.endswith("`") else ""
    return f"{fence}{pad}{text}{pad}{fence}"


def format_date(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


def format_date_range(group: ReleaseGroup) -> Optional[str]:
    """``start - end`` for the group, a single date when both ends match."""
    if group.date_range is None:
        return None
    start, end = (format_date(value) for value in group.date_range)
    return start if start == end else f"{start} - {end}"


class Formatter(ABC):
    """Writes changelog elements in a single output format.

    ``link_template`` is a ``str.format`` pattern with a ``{hash}``
    placeholder used to link each commit; without it commits are shown
    by short hash only.
    """

    def __init__(self, link_template: Optional[str] = None) -> None:
        self.link_template = link_template

    def link(self, commit: ParsedCommit) -> Optional[str]:
        if self.link_template is None or commit.raw is None:
            return None
        return self.link_template.format(hash=commit.raw.hash)

    def begin_document(self) -> str:
        return ""

    def end_document(self) -> str:
        return ""

    @abstractmethod
    def release_heading(self, group: ReleaseGroup) -> str:
        ...

    @abstractmethod
    def category_heading(self, category: str) -> str:
        ...

    def begin_list(self) -> str:
        return ""

    def end_list(self) -> str:
        return ""

    @abstractmethod
    def entry(self, commit: ParsedCommit) -> str:
        ...


class MarkdownFormatter(Formatter):
    """Markdown output.

    Entries look like::

        - [ [`dd867ce`](https://host/commit/dd867ce...) ] **parser:** implements html output [`Florentin Dubois`] (`2019-10-22`)
    """

    def release_heading(self, group: ReleaseGroup) -> str:
        dates = format_date_range(group)
        suffix = f" ({dates})" if dates else ""
        return f"# {group.label}{suffix}\n\n"

    def category_heading(self, category: str) -> str:
        return f"## {category}\n\n"

    def end_list(self) -> str:
        return "\n"

    def entry(self, commit: ParsedCommit) -> str:
        parts = ["- "]
        if commit.raw is not None:
            reference = code_span(commit.raw.short_hash)
            url = self.link(commit)
            parts.append(f"[ [{reference}]({url}) ] " if url else f"[ {reference} ] ")
        if commit.breaking:
            parts.append("**BREAKING** ")
        if commit.scope:
            parts.append(f"**{commit.scope}:** ")
        parts.append(commit.description)
        if commit.raw is not None:
            author = code_span(commit.raw.author)
            parts.append(f" [{author}] ({code_span(format_date(commit.raw.date))})")
        return "".join(parts) + "\n"


class HtmlFormatter(Formatter):
    """HTML fragment output; every text value is escaped."""

    def begin_document(self) -> str:
        return '<div class="changelog">\n'

    def end_document(self) -> str:
        return "</div>\n"

    def release_heading(self, group: ReleaseGroup) -> str:
        dates = format_date_range(group)
        suffix = f" <small>({html.escape(dates)})</small>" if dates else ""
        return f"<h1>{html.escape(group.label)}{suffix}</h1>\n"

    def category_heading(self, category: str) -> str:
        return f"<h2>{html.escape(category)}</h2>\n"

    def begin_list(self) -> str:
        return "<ul>\n"

    def end_list(self) -> str:
        return "</ul>\n"

    def entry(self, commit: ParsedCommit) -> str:
        parts = ["<li>"]
        if commit.raw is not None:
            reference = f"<code>{html.escape(commit.raw.short_hash)}</code>"
            url = self.link(commit)
            if url:
                reference = f'<a href="{html.escape(url, quote=True)}">{reference}</a>'
            parts.append(f"[ {reference} ] ")
        if commit.breaking:
            parts.append('<strong class="breaking">BREAKING</strong> ')
        if commit.scope:
            parts.append(f"<strong>{html.escape(commit.scope)}:</strong> ")
        parts.append(html.escape(commit.description))
        if commit.raw is not None:
            parts.append(
                f" [<code>{html.escape(commit.raw.author)}</code>]"
                f" (<code>{format_date(commit.raw.date)}</code>)"
            )
        return "".join(parts) + "</li>\n"
