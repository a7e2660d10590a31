"""
extractor — ekstrakcja przykładów kodu z przewodnika (Markdown / HTML).

Interfejs publiczny:
    parse_markdown   — Markdown → Document
    parse_html       — HTML → Document
    extract_examples — Markdown → list[CodeExample]
    load_document    — plik lub stdin → Document
    fetch_document   — URL → Document (requests)
    ParseError       — niezamknięty region kodu

Typowe użycie:
    from extractor import load_document

    document = load_document("unit-testing-best-practices.md")
    for example in document.examples:
        print(example.ref, example.label, example.section_title)
"""

from .errors import ParseError
from .markdown import parse_markdown, extract_examples
from .html_page import parse_html
from .loader import INPUT_FORMATS, fetch_document, load_document, parse_text

__all__ = [
    "ParseError",
    "parse_markdown",
    "extract_examples",
    "parse_html",
    "INPUT_FORMATS",
    "fetch_document",
    "load_document",
    "parse_text",
]
