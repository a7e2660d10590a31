"""
extractor/loader.py — wczytywanie przewodnika z pliku, stdin lub URL.

Publiczne API:
  load_document(path, input_format)         -> Document   ("-" = stdin)
  fetch_document(url, timeout, input_format) -> Document
  parse_text(text, source, input_format)     -> Document
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Literal, TypeAlias

import requests

from guide_model import Document

from .html_page import parse_html
from .markdown import parse_markdown

logger = logging.getLogger(__name__)

InputFormat: TypeAlias = Literal["auto", "markdown", "html"]

INPUT_FORMATS: tuple[str, ...] = ("auto", "markdown", "html")

_HTML_SUFFIXES = {".html", ".htm", ".xhtml"}
_HTML_PREFIXES = ("<!doctype", "<html")

_USER_AGENT = "guidelint/0.1 (+https://pypi.org/project/guidelint/)"


def _looks_like_html(text: str, name: str = "", content_type: str = "") -> bool:
    if "html" in content_type.lower():
        return True
    if Path(name.split("?", 1)[0]).suffix.lower() in _HTML_SUFFIXES:
        return True
    return text.lstrip().lower().startswith(_HTML_PREFIXES)


def parse_text(
    text: str,
    source: str = "<stdin>",
    input_format: InputFormat = "auto",
    content_type: str = "",
) -> Document:
    """Wybiera parser wg formatu (auto: typ treści, rozszerzenie, prefiks)."""
    if input_format == "auto":
        is_html = _looks_like_html(text, source, content_type)
    else:
        is_html = input_format == "html"
    logger.debug("%s: parser %s", source, "html" if is_html else "markdown")
    if is_html:
        return parse_html(text, source)
    return parse_markdown(text, source)


def load_document(path: str | Path, input_format: InputFormat = "auto") -> Document:
    """
    Wczytuje przewodnik z pliku lub ze standardowego wejścia ("-").

    Raises:
        OSError:    plik nie istnieje lub nie da się go odczytać.
        ParseError: niezamknięty region kodu (Markdown).
    """
    if str(path) == "-":
        return parse_text(sys.stdin.read(), "<stdin>", input_format)
    p = Path(path)
    return parse_text(p.read_text(encoding="utf-8"), str(p), input_format)


def fetch_document(
    url: str,
    timeout: float = 30,
    input_format: InputFormat = "auto",
) -> Document:
    """
    Pobiera przewodnik spod URL i parsuje go (HTML lub Markdown).

    Raises:
        requests.RequestException: błąd sieci lub status HTTP >= 400.
    """
    resp = requests.get(url, timeout=timeout, headers={"User-Agent": _USER_AGENT})
    resp.raise_for_status()
    resp.encoding = resp.apparent_encoding or "utf-8"
    content_type = resp.headers.get("Content-Type", "")
    logger.debug("GET %s → %s (%s)", url, resp.status_code, content_type or "?")
    return parse_text(resp.text, url, input_format, content_type=content_type)
