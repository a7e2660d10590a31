"""
extractor/markdown.py — ekstrakcja przykładów kodu z przewodnika w Markdown.

Architektura:
  tekst → normalize_text() → linie
  → nagłówki ATX (#..######) otwierają sekcje
  → ogrodzenia ``` / ~~~ wyznaczają regiony kodu
  → reszta to proza (źródło etykiet "Bad:" / "Better:")
  → DocumentBuilder → Document

Nagłówek, którego treść jest etykietą ("#### Bad:"), nie otwiera sekcji —
traktujemy go jak linię prozy z etykietą.

Kluczowe funkcje publiczne:
  parse_markdown(text, source) -> Document
  extract_examples(text)       -> list[CodeExample]
"""

from __future__ import annotations

import logging
import re

from guide_model import CodeExample, Document

from .builder import DocumentBuilder
from .errors import ParseError
from .label_patterns import match_label
from .text_cleaner import normalize_text

logger = logging.getLogger(__name__)

# Nagłówek ATX: do 3 spacji wcięcia, 1–6 znaków #, opcjonalne zamykające #.
_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ ]+(.*?))?(?:[ ]+#+)?[ ]*$")

# Ogrodzenie otwierające: ``` lub ~~~ (min. 3), opcjonalny info string.
_FENCE_OPEN_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})[ ]*(.*?)[ ]*$")

# Ogrodzenie zamykające: same znaki ogrodzenia, bez info stringu.
_FENCE_CLOSE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ ]*$")


class _OpenFence:
    __slots__ = ("char", "length", "indent", "language", "line", "lines")

    def __init__(self, marker: str, indent: int, info: str, line: int) -> None:
        self.char = marker[0]
        self.length = len(marker)
        self.indent = indent
        self.language = info.split()[0] if info else ""
        self.line = line
        self.lines: list[str] = []

    def closes(self, line: str) -> bool:
        m = _FENCE_CLOSE_RE.match(line)
        if not m:
            return False
        marker = m.group(1)
        return marker[0] == self.char and len(marker) >= self.length

    def add(self, line: str) -> None:
        # Usuwamy wcięcie ogrodzenia z linii treści (nie więcej niż jest spacji).
        strip = min(self.indent, len(line) - len(line.lstrip(" ")))
        self.lines.append(line[strip:])


def _open_fence(line: str, lineno: int) -> _OpenFence | None:
    m = _FENCE_OPEN_RE.match(line)
    if not m:
        return None
    indent, marker, info = m.groups()
    # Info string ogrodzenia z backtickami nie może zawierać backticka.
    if marker[0] == "`" and "`" in info:
        return None
    return _OpenFence(marker, len(indent), info, lineno)


def _heading(line: str) -> tuple[int, str] | None:
    m = _HEADING_RE.match(line)
    if not m:
        return None
    return len(m.group(1)), (m.group(2) or "").strip()


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def parse_markdown(text: str, source: str = "<stdin>") -> Document:
    """
    Parsuje przewodnik w Markdown do Document.

    Raises:
        ParseError: ogrodzenie otwarte bez pasującego zamknięcia.
    """
    builder = DocumentBuilder()
    fence: _OpenFence | None = None

    for lineno, line in enumerate(normalize_text(text).split("\n"), start=1):
        if fence is not None:
            if fence.closes(line):
                builder.add_code("\n".join(fence.lines), fence.language, fence.line)
                fence = None
            else:
                fence.add(line)
            continue

        heading = _heading(line)
        if heading is not None:
            level, title = heading
            if match_label(title) is not None:
                builder.add_prose(line)
            else:
                builder.start_section(title, level)
            continue

        fence = _open_fence(line, lineno)
        if fence is None:
            builder.add_prose(line)

    if fence is not None:
        section = builder.current_title or "(wstęp)"
        raise ParseError(
            f"Niezamknięty region kodu w sekcji '{section}' "
            f"(ogrodzenie {fence.char * fence.length} otwarte w linii {fence.line}).",
            section_title=builder.current_title,
            line=fence.line,
        )

    document = builder.build(source)
    logger.debug(
        "%s: %d sekcji, %d przykładów kodu",
        source, len(document.sections), len(document.examples),
    )
    return document


def extract_examples(text: str) -> list[CodeExample]:
    """Zwraca przykłady kodu w kolejności dokumentu."""
    return parse_markdown(text).examples
