"""
Top-level package for vc_changelog.

The package turns a project's commit history into a changelog: commit
messages are parsed with the Conventional Commits grammar, classified by
type, grouped by release and rendered as Markdown or HTML. The usual entry
points are :func:`vc_changelog.pipeline.generate` and
:func:`vc_changelog.pipeline.build_changelog`.
"""

from vc_changelog.models import Changelog, CommitRecord, ParsedCommit, ReleaseGroup, Unparsed
from vc_changelog.pipeline import build_changelog, generate

__all__ = [
    "__version__",
    "Changelog",
    "CommitRecord",
    "ParsedCommit",
    "ReleaseGroup",
    "Unparsed",
    "build_changelog",
    "generate",
]

__version__ = "0.1.0"
