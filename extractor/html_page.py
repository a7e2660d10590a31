"""extractor/html_page.py — parsowanie strony HTML przewodnika do Document."""

from __future__ import annotations

import logging
from typing import TypeAlias

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from guide_model import Document

from .builder import DocumentBuilder
from .label_patterns import match_label

logger = logging.getLogger(__name__)

_HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
_HEADING_LEVEL: dict[str, int] = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}
_BLOCK_TAGS: set[str] = {
    "div", "p", "article", "section", "main", "aside", "nav",
    "header", "footer", "blockquote", "pre",
    "li", "ul", "ol",
    "td", "th", "tr", "table",
    "details", "summary",
} | _HEADING_TAGS

# Tagi zawierające szum (nie treść)
_NOISE_TAGS = {"script", "style", "noscript"}

_LANG_PREFIXES = ("language-", "lang-")

# (rodzaj, poziom, tekst, język)
_Block: TypeAlias = tuple[str, int, str, str]


def _code_language(pre: Tag) -> str:
    """Język z klasy <pre> lub wewnętrznego <code>: language-csharp, lang-py."""
    candidates = [pre]
    code = pre.find("code")
    if isinstance(code, Tag):
        candidates.append(code)
    for el in candidates:
        for cls in el.get("class") or []:
            for prefix in _LANG_PREFIXES:
                if cls.startswith(prefix):
                    return cls[len(prefix):]
    return ""


def _has_block(el: Tag) -> bool:
    return el.find(_BLOCK_TAGS) is not None


def _extract_blocks(body: Tag) -> list[_Block]:
    """
    Przechodzi drzewo DOM i zwraca spłaszczoną listę bloków.

    - Nagłówek (h1–h6): "heading", cały tekst, bez rekurencji.
    - <pre>: "code", tekst z zachowaniem białych znaków.
    - Blok liściasty: "prose", cały tekst.
    - Kontener z blokami w środku: rekurencja w bloki; tekst między nimi
      (gołe napisy i tagi inline, np. <strong>Bad:</strong>) to "prose".
    """
    blocks: list[_Block] = []

    def emit_prose(parts: list[str]) -> None:
        text = " ".join(" ".join(parts).split())
        if text:
            blocks.append(("prose", 0, text, ""))
        parts.clear()

    def walk(el: Tag) -> None:
        name = el.name
        if name in _NOISE_TAGS:
            return
        if name in _HEADING_TAGS:
            text = el.get_text(" ", strip=True)
            if text:
                blocks.append(("heading", _HEADING_LEVEL[name], text, ""))
            return
        if name == "pre":
            blocks.append(("code", 0, el.get_text().strip("\n"), _code_language(el)))
            return
        if name in _BLOCK_TAGS and not _has_block(el):
            emit_prose([el.get_text(" ", strip=True)])
            return

        inline: list[str] = []
        for child in el.children:
            if isinstance(child, Tag):
                if child.name in _BLOCK_TAGS or _has_block(child):
                    emit_prose(inline)
                    walk(child)
                else:
                    inline.append(child.get_text(" ", strip=True))
            elif isinstance(child, NavigableString) and not isinstance(child, Comment):
                inline.append(str(child))
        emit_prose(inline)

    walk(body)
    return blocks


def parse_html(html: str, source: str = "<html>") -> Document:
    """Parsuje stronę HTML; <pre> to regiony kodu, h1–h6 otwierają sekcje."""
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(_NOISE_TAGS):
        tag.decompose()

    body: Tag = soup.find("body") or soup  # type: ignore[assignment]
    builder = DocumentBuilder()

    for kind, level, text, language in _extract_blocks(body):
        if kind == "heading" and match_label(text) is None:
            builder.start_section(text, level)
        elif kind == "code":
            builder.add_code(text, language)
        else:
            builder.add_prose(text)

    document = builder.build(source)
    logger.debug(
        "%s: %d sekcji, %d przykładów kodu (HTML)",
        source, len(document.sections), len(document.examples),
    )
    return document
