"""
Testy ekstraktora: Markdown, HTML, etykiety, wczytywanie dokumentu.
"""

import io
from unittest.mock import MagicMock, patch

import pytest
import requests

from extractor import (
    ParseError,
    extract_examples,
    fetch_document,
    load_document,
    parse_html,
    parse_markdown,
)
from extractor.label_patterns import match_label
from extractor.text_cleaner import normalize_text, strip_markup
from guide_model import ExampleLabel


class TestParseMarkdown:
    """Sekcje, regiony kodu i etykiety w Markdown."""

    def test_parse_when_no_code_regions_then_no_examples(self):
        text = "# Title\n\nJust prose.\n\n## Other\n\nMore prose.\n"
        document = parse_markdown(text)
        assert document.examples == []
        assert [s.title for s in document.sections] == ["Title", "Other"]

    def test_parse_when_empty_text_then_no_sections(self):
        document = parse_markdown("")
        assert document.sections == ()
        assert document.examples == []

    def test_parse_when_guide_then_examples_in_document_order(self, guide_text):
        examples = extract_examples(guide_text)
        assert len(examples) == 17
        keys = [(e.section_index, e.index) for e in examples]
        assert keys == sorted(keys)

    def test_parse_when_guide_then_labels_follow_bad_better_pairs(self, guide_text):
        examples = extract_examples(guide_text)
        assert examples[0].label is ExampleLabel.NEUTRAL
        labels = [e.label for e in examples[1:]]
        assert labels == [ExampleLabel.BAD, ExampleLabel.BETTER] * 8

    def test_parse_when_guide_then_section_titles_and_indices(self, guide_text):
        document = parse_markdown(guide_text, source="guide.md")
        assert document.source == "guide.md"
        assert document.sections[1].title == "Naming your tests"
        assert document.sections[1].level == 2
        bad, better = document.sections[1].examples
        assert (bad.section_index, bad.index) == (1, 0)
        assert (better.section_index, better.index) == (1, 1)
        assert bad.section_title == "Naming your tests"
        assert bad.language == "csharp"

    def test_parse_when_fenced_then_source_excludes_fences(self):
        text = "## S\n\nBad:\n\n```python\nassert x == 1\n```\n"
        (example,) = extract_examples(text)
        assert example.source == "assert x == 1"
        assert example.language == "python"
        assert example.line == 5

    def test_parse_when_unlabeled_then_neutral(self):
        text = "## S\n\nSome prose.\n\n```\ncode();\n```\n"
        (example,) = extract_examples(text)
        assert example.label is ExampleLabel.NEUTRAL

    def test_parse_when_label_not_last_prose_line_then_neutral(self):
        text = "## S\n\nBad:\n\nand then some explanation.\n\n```\ncode();\n```\n"
        (example,) = extract_examples(text)
        assert example.label is ExampleLabel.NEUTRAL

    def test_parse_when_consecutive_blocks_then_second_is_neutral(self):
        text = "## S\n\nBad:\n\n```\na();\n```\n```\nb();\n```\n"
        first, second = extract_examples(text)
        assert first.label is ExampleLabel.BAD
        assert second.label is ExampleLabel.NEUTRAL

    def test_parse_when_heading_is_label_then_no_new_section(self):
        text = "## Naming\n\n#### Bad:\n\n```\na();\n```\n\n#### Better:\n\n```\nb();\n```\n"
        document = parse_markdown(text)
        assert len(document.sections) == 1
        bad, better = document.examples
        assert bad.label is ExampleLabel.BAD
        assert better.label is ExampleLabel.BETTER
        assert better.section_title == "Naming"

    def test_parse_when_heading_inside_fence_then_ignored(self):
        text = "## S\n\n```python\n# not a heading\nx = 1\n```\n"
        document = parse_markdown(text)
        assert len(document.sections) == 1
        assert document.examples[0].source == "# not a heading\nx = 1"

    def test_parse_when_tilde_fence_then_backticks_inside_are_content(self):
        text = "## S\n\nGood:\n\n~~~~\n```\ninner\n```\n~~~~\n"
        (example,) = extract_examples(text)
        assert example.source == "```\ninner\n```"
        assert example.label is ExampleLabel.BETTER

    def test_parse_when_prose_before_first_heading_then_untitled_section(self):
        text = "Intro text.\n\nBad:\n\n```\nx();\n```\n\n# Title\n"
        document = parse_markdown(text)
        assert document.sections[0].title == ""
        assert document.sections[0].level == 0
        assert document.sections[1].index == 1
        assert document.examples[0].label is ExampleLabel.BAD

    def test_parse_when_crlf_line_endings_then_same_result(self, guide_text):
        crlf = guide_text.replace("\n", "\r\n")
        assert extract_examples(crlf) == extract_examples(guide_text)

    def test_parse_when_unterminated_fence_then_parse_error(self):
        text = "# Guide\n\n## Arranging your tests\n\nBad:\n\n```csharp\nvar x = 1;\n"
        with pytest.raises(ParseError) as exc_info:
            parse_markdown(text)
        assert exc_info.value.section_title == "Arranging your tests"
        assert exc_info.value.line == 7
        assert "Arranging your tests" in str(exc_info.value)

    def test_parse_when_closing_fence_shorter_then_unterminated(self):
        with pytest.raises(ParseError):
            parse_markdown("## S\n\n````\ncode\n```\n")

    def test_parse_when_indented_fence_then_indent_removed(self):
        text = "## S\n\n  ```\n    x = 1\n  y = 2\n  ```\n"
        (example,) = extract_examples(text)
        assert example.source == "  x = 1\ny = 2"


class TestLabelPatterns:
    """Rozpoznawanie linii etykiet."""

    @pytest.mark.parametrize("line", [
        "Bad:", "**Bad:**", "> Bad:", "#### Bad:", "Bad", "Not recommended:",
        "bad example:", "- Bad: naming",
    ])
    def test_match_when_bad_variants_then_bad(self, line):
        assert match_label(line) is ExampleLabel.BAD

    @pytest.mark.parametrize("line", ["Better:", "*Good:*", "Recommended:", "Better example"])
    def test_match_when_better_variants_then_better(self, line):
        assert match_label(line) is ExampleLabel.BETTER

    @pytest.mark.parametrize("line", [
        "", "Better tests are easier to read.", "Badly named tests", "For example:",
    ])
    def test_match_when_prose_then_none(self, line):
        assert match_label(line) is None

    def test_strip_markup_removes_emphasis_and_markers(self):
        assert strip_markup("> **Better:**") == "Better:"
        assert strip_markup("### Bad: ###") == "Bad:"

    def test_normalize_text_expands_tabs_and_newlines(self):
        assert normalize_text("\ufeffa\r\n\tb\rc") == "a\n    b\nc"


class TestParseHtml:
    """Strona HTML: h1–h6 to sekcje, <pre> to przykłady."""

    HTML = """
    <html><head><style>pre {}</style></head><body>
      <h1>Unit testing best practices</h1>
      <p>Intro.</p>
      <h2>Naming your tests</h2>
      <div>
        <p><strong>Bad:</strong></p>
        <pre><code class="lang-csharp">public void Test_Single()
{
}</code></pre>
        <p>Better:</p>
        <pre class="language-csharp">public void Add_SingleNumber_ReturnsSameNumber() { }</pre>
      </div>
      <script>var ignored = 1;</script>
    </body></html>
    """

    def test_parse_html_when_pre_blocks_then_examples(self):
        document = parse_html(self.HTML, "page.html")
        assert [s.title for s in document.sections] == [
            "Unit testing best practices", "Naming your tests",
        ]
        bad, better = document.examples
        assert bad.label is ExampleLabel.BAD
        assert better.label is ExampleLabel.BETTER
        assert bad.language == "csharp"
        assert better.language == "csharp"
        assert bad.source.startswith("public void Test_Single()")
        assert "\n{\n}" in bad.source
        assert bad.line == 0

    def test_parse_html_when_no_pre_then_no_examples(self):
        document = parse_html("<html><body><h2>T</h2><p>x</p></body></html>")
        assert document.examples == []

    def test_parse_html_when_bare_label_text_between_pre_then_labels_kept(self):
        html = "<h2>S</h2><div>Bad:<pre>x();</pre>Better:<pre>y();</pre></div>"
        document = parse_html(html)
        assert [e.label for e in document.examples] == [
            ExampleLabel.BAD, ExampleLabel.BETTER,
        ]
        assert [e.source for e in document.examples] == ["x();", "y();"]

    def test_parse_html_when_label_inline_in_list_item_then_labels_kept(self):
        html = (
            "<h2>S</h2><ul>"
            "<li><strong>Bad:</strong><pre>x();</pre></li>"
            "<li><strong>Better:</strong><pre>y();</pre></li>"
            "</ul>"
        )
        document = parse_html(html)
        assert [e.label for e in document.examples] == [
            ExampleLabel.BAD, ExampleLabel.BETTER,
        ]
        assert document.examples[0].section_title == "S"


class TestLoader:
    """Wczytywanie z pliku, stdin i URL."""

    def test_load_document_when_markdown_file_then_parsed(self, guide_path):
        document = load_document(guide_path)
        assert document.source == str(guide_path)
        assert len(document.examples) == 17

    def test_load_document_when_html_suffix_then_html_parser(self, tmp_path):
        page = tmp_path / "guide.html"
        page.write_text(TestParseHtml.HTML, encoding="utf-8")
        document = load_document(page)
        assert len(document.examples) == 2

    def test_load_document_when_stdin_then_read(self, monkeypatch, guide_text):
        monkeypatch.setattr("sys.stdin", io.StringIO(guide_text))
        document = load_document("-")
        assert document.source == "<stdin>"
        assert len(document.examples) == 17

    def test_load_document_when_missing_then_oserror(self, tmp_path):
        with pytest.raises(OSError):
            load_document(tmp_path / "missing.md")

    def test_fetch_document_when_html_content_type_then_html_parser(self):
        response = MagicMock()
        response.text = TestParseHtml.HTML
        response.apparent_encoding = "utf-8"
        response.status_code = 200
        response.headers = {"Content-Type": "text/html; charset=utf-8"}
        with patch("extractor.loader.requests.get", return_value=response) as get:
            document = fetch_document("https://example.org/guide", timeout=5)
        get.assert_called_once()
        assert get.call_args.kwargs["timeout"] == 5
        response.raise_for_status.assert_called_once()
        assert document.source == "https://example.org/guide"
        assert len(document.examples) == 2

    def test_fetch_document_when_markdown_then_markdown_parser(self, guide_text):
        response = MagicMock()
        response.text = guide_text
        response.apparent_encoding = "utf-8"
        response.headers = {"Content-Type": "text/plain"}
        with patch("extractor.loader.requests.get", return_value=response):
            document = fetch_document("https://example.org/guide.md")
        assert len(document.examples) == 17

    def test_fetch_document_when_http_error_then_raises(self):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("404")
        with patch("extractor.loader.requests.get", return_value=response):
            with pytest.raises(requests.HTTPError):
                fetch_document("https://example.org/missing")
