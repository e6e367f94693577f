"""
Commit message parsing.

See :mod:`vc_changelog.parsing.message_parser` for the grammar.
"""

from .message_parser import parse, parse_record  # noqa: F401
