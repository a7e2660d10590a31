"""
extractor/text_cleaner.py — normalizacja tekstu przed skanowaniem.

Co normalizujemy:
  - Końce linii CRLF / CR → LF
  - Tabulatory → spacje (szerokość 4, jak w CommonMark)
  - BOM na początku pliku

Co usuwamy z linii etykiet (strip_markup):
  - Markery cytatu (>), list (-, *, +, "1.") i nagłówków (#)
  - Emfazę (*, _) i kod inline (`)
"""

from __future__ import annotations

import re

_TAB_WIDTH = 4

# Markery blokowe na początku linii: cytat, lista, nagłówek.
_BLOCK_MARKER_RE = re.compile(r"^\s*(?:>\s*)*(?:[-*+]\s+|\d+[.)]\s+|#{1,6}\s+)?")

# Znaki emfazy i kodu inline.
_EMPHASIS_RE = re.compile(r"[*_`]+")

# Zamykające # nagłówka ATX.
_CLOSING_HASHES_RE = re.compile(r"\s+#+\s*$")


def normalize_text(text: str) -> str:
    """Ujednolica końce linii i rozwija tabulatory."""
    if text.startswith("\ufeff"):
        text = text[1:]
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return "\n".join(line.expandtabs(_TAB_WIDTH) for line in text.split("\n"))


def strip_markup(line: str) -> str:
    """Zwraca samą treść linii prozy bez markupu Markdown."""
    text = _BLOCK_MARKER_RE.sub("", line, count=1)
    text = _CLOSING_HASHES_RE.sub("", text)
    text = _EMPHASIS_RE.sub("", text)
    return " ".join(text.split())
