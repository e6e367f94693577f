from typing import List

import pytest

from vc_changelog.models import CommitRecord


@pytest.fixture(autouse=True)
def isolate_working_directory(tmp_path, monkeypatch):
    """Run every test from an empty directory.

    ``load_config()`` without a path looks for ``changelog.json`` in the
    current directory; a stray file in the checkout must not leak into tests.
    """
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def history() -> List[CommitRecord]:
    """A small history, most recent first, tagged v0.2.0 at 3f1c2aa and v0.1.0 at 7d0e9b1."""
    rows = [
        ("9a8b7c6d5e", "Ann", "2019-11-02", "fix(render)!: escape html entities"),
        ("5e4d3c2b1a", "Bob", "2019-10-30", "update stuff"),
        ("3f1c2aa9b8", "Ann", "2019-10-22", "feat(parser): implements html output"),
        ("c0ffee1234", "Bob", "2019-10-20", "Merge branch 'develop'"),
        ("b412888e77", "Ann", "2019-10-14", "chore: generate changelog"),
        ("7d0e9b1f3c", "Bob", "2019-10-01", "feat: initial release"),
        ("1a2b3c4d5e", "Bob", "2019-09-28", "wip: scratch"),
    ]
    return [
        CommitRecord.from_dict({"hash": h, "author": a, "date": d, "message": m})
        for h, a, d, m in rows
    ]
