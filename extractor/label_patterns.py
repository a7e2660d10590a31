"""
extractor/label_patterns.py — wzorce regex rozpoznające etykiety przykładów.

Każdy LabelPattern zawiera:
  - regex : skompilowany wzorzec (dopasowanie na początku oczyszczonej linii)
  - label : etykieta nadawana przykładowi kodu za linią

Wzorce są testowane w kolejności; pierwsza pasująca wygrywa.
Linia jest wcześniej oczyszczana z markupu (text_cleaner.strip_markup),
więc "**Bad:**", "> Bad:" i "#### Bad:" dają to samo "Bad:".
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from guide_model import ExampleLabel

from .text_cleaner import strip_markup


@dataclass(frozen=True, slots=True)
class LabelPattern:
    regex: re.Pattern[str]
    label: ExampleLabel


def _p(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE | re.UNICODE)


# Etykieta kończy się dwukropkiem albo stoi sama w linii ("Bad", "Better example").
_TAIL = r"(?:\s+(?:example|practice|code|test))?\s*(?::|$)"

PATTERNS: list[LabelPattern] = [
    # -------------------------------------------------------------------------
    # bad — "Bad:", "Not recommended:", "Worse:"
    # -------------------------------------------------------------------------
    LabelPattern(
        regex=_p(r"^(?:bad|worse|not\s+recommended|incorrect|wrong)" + _TAIL),
        label=ExampleLabel.BAD,
    ),

    # -------------------------------------------------------------------------
    # better — "Better:", "Good:", "Recommended:"
    # -------------------------------------------------------------------------
    LabelPattern(
        regex=_p(r"^(?:better|good|recommended|correct|preferred)" + _TAIL),
        label=ExampleLabel.BETTER,
    ),
]


def match_label(line: str) -> ExampleLabel | None:
    """Zwraca etykietę dla linii prozy albo None, gdy linia nie jest etykietą."""
    text = strip_markup(line)
    if not text:
        return None
    for pattern in PATTERNS:
        if pattern.regex.match(text):
            return pattern.label
    return None
