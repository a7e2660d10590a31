"""extractor/errors.py — błędy ekstrakcji przykładów z dokumentu."""

from __future__ import annotations


class ParseError(ValueError):
    """
    Niepoprawny lub niezamknięty region kodu.

    Błąd krytyczny: przerywa przebieg bez częściowego raportu.
    - section_title: tytuł sekcji, w której otwarto region ("" dla wstępu)
    - line:          1-based numer linii otwierającego ogrodzenia
    """

    def __init__(self, message: str, section_title: str, line: int) -> None:
        super().__init__(message)
        self.section_title = section_title
        self.line = line
