"""
Run the unit tests and report line coverage using Python's built-in tracing.

The tests under ``tests`` are discovered with :mod:`unittest` while
``sys.settrace`` records every executed line inside ``src/vc_changelog``.
Coverage is the share of countable lines (not blank, not a comment, not a
docstring, not marked ``# pragma: no cover``) that ran at least once.

No third-party coverage tool is needed::

    PYTHONPATH=src python run_test_coverage.py

Every folder under ``tests`` is discovered on its own, since the test
folders are not packages. Only ``unittest.TestCase`` classes are traced;
plain pytest functions need ``pytest`` for the full suite.
"""

import sys
import unittest
from pathlib import Path
from types import FrameType
from typing import Dict, List, Set

PROJECT_DIR = Path(__file__).resolve().parent
SOURCE_ROOT = PROJECT_DIR / "src" / "vc_changelog"


def find_test_directories(tests_root: Path) -> List[Path]:
    """``tests_root`` and every folder below it that holds test modules."""
    folders = {path.parent for path in tests_root.rglob("test_*.py")}
    folders.add(tests_root)
    return sorted(folders)


def collect_executed_lines(source_root: Path) -> Dict[str, Set[int]]:
    """Run the unittest suite and return executed line numbers per source file."""
    executed: Dict[str, Set[int]] = {}
    root = str(source_root)

    def tracer(frame: FrameType, event: str, arg):
        filename = frame.f_code.co_filename
        if event == "line" and root in filename:
            executed.setdefault(filename, set()).add(frame.f_lineno)
        return tracer

    suite = unittest.TestSuite()
    for directory in find_test_directories(PROJECT_DIR / "tests"):
        # test folders are not packages; each one is its own top level
        suite.addTests(
            unittest.TestLoader().discover(
                str(directory), pattern="test_*.py", top_level_dir=str(directory)
            )
        )
    print(f"Discovered {suite.countTestCases()} unittest case(s)")
    print("Plain pytest test functions are not traced; run pytest for the full suite")

    sys.settrace(tracer)
    try:
        result = unittest.TextTestRunner(verbosity=2).run(suite)
    finally:
        sys.settrace(None)

    if not result.wasSuccessful():
        print(f"Failures: {len(result.failures)}, Errors: {len(result.errors)}")
        sys.exit(1)
    return executed


def countable_lines(path: Path) -> Set[int]:
    lines: Set[int] = set()
    inside_docstring = False
    with path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            stripped = line.strip()
            quotes = stripped.count('"""') + stripped.count("'''")
            if quotes:
                # a one-line docstring opens and closes on the same line
                if quotes % 2:
                    inside_docstring = not inside_docstring
                continue
            if inside_docstring or not stripped or stripped.startswith("#"):
                continue
            if "# pragma: no cover" in line:
                continue
            lines.add(lineno)
    return lines


def calculate_coverage(executed: Dict[str, Set[int]], source_root: Path) -> float:
    """Print per-file coverage and return the overall ratio between 0 and 1."""
    total = covered = 0
    for path in sorted(source_root.rglob("*.py")):
        countable = countable_lines(path)
        hit = countable & executed.get(str(path), set())
        total += len(countable)
        covered += len(hit)
        pct = len(hit) / len(countable) * 100 if countable else 100.0
        rel = path.relative_to(source_root).as_posix()
        print(f"File: {rel:40} Lines: {len(countable):4} Covered: {len(hit):4} ({pct:5.1f}%)")
    return covered / total if total else 1.0


def main() -> None:
    executed = collect_executed_lines(SOURCE_ROOT)
    coverage = calculate_coverage(executed, SOURCE_ROOT)
    print(f"Coverage: {coverage * 100:.2f}%")


if __name__ == "__main__":
    main()
