"""
Changelog renderers.

:func:`render` turns a changelog into Markdown or HTML text via the
formatters in :mod:`vc_changelog.render.formatters`.
"""

from .formatters import Formatter, HtmlFormatter, MarkdownFormatter  # noqa: F401
from .renderer import OutputFormat, UnknownFormatError, render, resolve_format  # noqa: F401
