"""
Classification and grouping of parsed commits.

See :mod:`vc_changelog.grouping.classifier` for the category table and
:mod:`vc_changelog.grouping.grouper` for release partitioning.
"""

from .classifier import DEFAULT_TABLE, UNCATEGORIZED, CategoryTable, classify  # noqa: F401
from .grouper import BoundaryError, group  # noqa: F401
