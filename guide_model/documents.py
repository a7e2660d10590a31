"""
guide_model/documents.py — model dokumentu przewodnika.

Document to cały przewodnik podzielony na sekcje (Section) w kolejności
dokumentu. Każda sekcja ma tytuł, treść prozy i listę przykładów kodu
(CodeExample). Wszystkie struktury są niemutowalne — tworzone raz przez
extractor i porzucane po jednym przebiegu.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ExampleLabel(StrEnum):
    """Etykieta przykładu wynikająca z kontekstu ("Bad:" / "Better:")."""

    BAD     = "bad"
    BETTER  = "better"
    NEUTRAL = "neutral"


@dataclass(frozen=True, slots=True)
class CodeExample:
    """
    Pojedynczy fragment kodu osadzony w przewodniku.

    - source:        tekst fragmentu (bez ogrodzeń ```)
    - label:         bad | better | neutral
    - section_title: tytuł sekcji nadrzędnej ("" dla części przed 1. nagłówkiem)
    - section_index: 0-based pozycja sekcji w dokumencie
    - index:         0-based pozycja przykładu w obrębie sekcji
    - language:      info string ogrodzenia, np. "csharp" (może być pusty)
    - line:          1-based numer linii otwierającego ogrodzenia (0 dla HTML)
    """

    source: str
    label: ExampleLabel
    section_title: str
    section_index: int
    index: int
    language: str = ""
    line: int = 0

    @property
    def ref(self) -> str:
        """Krótki identyfikator przykładu: "<sekcja>:<przykład>"."""
        return f"{self.section_index}:{self.index}"


@dataclass(frozen=True, slots=True)
class Section:
    index: int                          # 0-based, kolejność dokumentu
    title: str                          # tekst nagłówka ("" dla wstępu)
    level: int                          # 1..6; 0 dla części przed 1. nagłówkiem
    body: str                           # proza sekcji bez bloków kodu
    examples: tuple[CodeExample, ...] = ()


@dataclass(frozen=True, slots=True)
class Document:
    """Cały przewodnik: sekcje w kolejności dokumentu + opis źródła."""

    sections: tuple[Section, ...]
    source: str = "<stdin>"

    @property
    def examples(self) -> list[CodeExample]:
        """Wszystkie przykłady kodu w kolejności dokumentu."""
        return [ex for section in self.sections for ex in section.examples]
