import unittest
from datetime import datetime

from vc_changelog.grouping.grouper import group
from vc_changelog.models import Changelog, CommitRecord, ParsedCommit, ReleaseGroup
from vc_changelog.parsing.message_parser import parse_record
from vc_changelog.render import (
    HtmlFormatter,
    MarkdownFormatter,
    OutputFormat,
    UnknownFormatError,
    render,
    resolve_format,
)

LINK = "https://github.com/CleverCloud/changelog/commit/{hash}"


def sample_changelog() -> Changelog:
    records = [
        CommitRecord(
            hash="dd867ce5a1",
            author="Florentin Dubois",
            date=datetime(2019, 10, 22),
            message="feat(parser): implements html output",
        ),
        CommitRecord(
            hash="b412888f00",
            author="Florentin Dubois",
            date=datetime(2019, 10, 14),
            message="chore: generate changelog",
        ),
    ]
    return group([parse_record(record) for record in records])


class TestMarkdownRender(unittest.TestCase):
    def test_unreleased_example(self) -> None:
        expected = (
            "# Unreleased (2019-10-14 - 2019-10-22)\n"
            "\n"
            "## Features\n"
            "\n"
            "- [ `dd867ce` ] **parser:** implements html output [`Florentin Dubois`] (`2019-10-22`)\n"
            "\n"
            "## Chore tasks\n"
            "\n"
            "- [ `b412888` ] generate changelog [`Florentin Dubois`] (`2019-10-14`)\n"
        )
        self.assertEqual(render(sample_changelog(), "markdown"), expected)

    def test_linked_entries(self) -> None:
        text = render(sample_changelog(), OutputFormat.MARKDOWN, link_template=LINK)
        self.assertIn(
            "- [ [`dd867ce`](https://github.com/CleverCloud/changelog/commit/dd867ce5a1) ] ",
            text,
        )

    def test_features_before_chore_tasks(self) -> None:
        text = render(sample_changelog(), "md")
        self.assertLess(text.index("## Features"), text.index("## Chore tasks"))

    def test_breaking_marker(self) -> None:
        record = CommitRecord(hash="1234567890", author="A", date=datetime(2020, 1, 2), message="feat!: drop py2")
        text = render(group([parse_record(record)]), "markdown")
        self.assertIn("] **BREAKING** drop py2 [`A`]", text)

    def test_release_with_single_date(self) -> None:
        record = CommitRecord(hash="1234567890", author="A", date=datetime(2020, 1, 2), message="fix: x")
        changelog = group([parse_record(record)], [("v1.0.0", "1234567")])
        self.assertTrue(render(changelog, "markdown").startswith("# v1.0.0 (2020-01-02)\n"))

    def test_empty_changelog(self) -> None:
        self.assertEqual(render(Changelog(), "markdown"), "")

    def test_release_without_entries_is_not_written(self) -> None:
        changelog = Changelog([ReleaseGroup("v1", categories={"Features": []})])
        self.assertEqual(render(changelog, "markdown"), "")
        self.assertEqual(render(changelog, "html"), '<div class="changelog">\n</div>\n')

        kept = sample_changelog().releases[0]
        changelog = Changelog([ReleaseGroup("v2", categories={"Fixes": []}), kept])
        text = render(changelog, "markdown")
        self.assertNotIn("# v2", text)
        self.assertTrue(text.startswith("# Unreleased"))

    def test_render_is_deterministic(self) -> None:
        changelog = sample_changelog()
        self.assertEqual(render(changelog, "markdown"), render(changelog, "markdown"))
        self.assertEqual(render(changelog, "html"), render(changelog, "html"))


class TestHtmlRender(unittest.TestCase):
    def test_structure(self) -> None:
        text = render(sample_changelog(), "html", link_template=LINK)
        self.assertTrue(text.startswith('<div class="changelog">\n'))
        self.assertTrue(text.endswith("</div>\n"))
        self.assertIn("<h1>Unreleased <small>(2019-10-14 - 2019-10-22)</small></h1>", text)
        self.assertIn("<h2>Features</h2>\n<ul>\n<li>", text)
        self.assertIn(
            '<a href="https://github.com/CleverCloud/changelog/commit/dd867ce5a1"><code>dd867ce</code></a>',
            text,
        )
        self.assertIn("[<code>Florentin Dubois</code>] (<code>2019-10-22</code>)</li>", text)
        self.assertLess(text.index("<h2>Features</h2>"), text.index("<h2>Chore tasks</h2>"))

    def test_escaping_and_breaking(self) -> None:
        record = CommitRecord(
            hash="abcdef0123",
            author="Ann <ann@example.com>",
            date=datetime(2020, 5, 1),
            message="fix(ui)!: escape <script> & friends",
        )
        text = render(group([parse_record(record)]), "html")
        self.assertIn('<strong class="breaking">BREAKING</strong>', text)
        self.assertIn("escape &lt;script&gt; &amp; friends", text)
        self.assertIn("<code>Ann &lt;ann@example.com&gt;</code>", text)
        self.assertNotIn("<script>", text)


class TestFormats(unittest.TestCase):
    def test_resolve_format(self) -> None:
        self.assertIs(resolve_format("Markdown"), OutputFormat.MARKDOWN)
        self.assertIs(resolve_format("md"), OutputFormat.MARKDOWN)
        self.assertIs(resolve_format(" HTML "), OutputFormat.HTML)
        self.assertIs(resolve_format(OutputFormat.HTML), OutputFormat.HTML)

    def test_unknown_format(self) -> None:
        for fmt in ("pdf", "", None):
            with self.subTest(fmt=fmt):
                with self.assertRaises(UnknownFormatError):
                    render(sample_changelog(), fmt)

    def test_invalid_link_template(self) -> None:
        for template in ("https://host/{sha}", "https://host/{hash", "https://host/{}"):
            with self.subTest(template=template):
                with self.assertRaises(ValueError):
                    render(sample_changelog(), "markdown", link_template=template)

    def test_entry_without_record(self) -> None:
        commit = ParsedCommit(type="feat", scope=None, breaking=False, description="bare")
        self.assertEqual(MarkdownFormatter().entry(commit), "- bare\n")
        self.assertEqual(HtmlFormatter(LINK).entry(commit), "<li>bare</li>\n")

    def test_backticks_in_author_keep_code_span_intact(self) -> None:
        record = CommitRecord(hash="abcdef0123", author="a`b", date=datetime(2020, 5, 1), message="fix: x")
        entry = MarkdownFormatter().entry(parse_record(record))
        self.assertEqual(entry, "- [ `abcdef0` ] x [``a`b``] (`2020-05-01`)\n")

    def test_author_wrapped_in_backticks(self) -> None:
        record = CommitRecord(hash="abcdef0123", author="`bot`", date=datetime(2020, 5, 1), message="fix: x")
        entry = MarkdownFormatter().entry(parse_record(record))
        self.assertIn(" [`` `bot` ``] ", entry)


if __name__ == "__main__":
    unittest.main()
