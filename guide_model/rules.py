"""
guide_model/rules.py — reguła heurystyczna sprawdzana na przykładach kodu.

Reguła jest definiowana raz przy starcie procesu (katalog w evaluator/catalog.py)
i nie zmienia się. O tym, czy reguła dotyczy przykładu, decydują dwa pola:
  applies_to — etykieta przykładu (bad / better / any / all)
  topics     — fragmenty tytułów sekcji (małe litery); pusta krotka = wszędzie
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Callable, TypeAlias

from .documents import CodeExample, ExampleLabel

# Wzorzec: ^[a-z][a-z0-9\-]*$  np. "arrange-act-assert"
RuleId: TypeAlias = str

# Predykat reguły: (przykład) -> (czy spełniony, opcjonalny komunikat).
# Może zgłosić RuleEvaluationWarning, gdy nie da się ustalić stosowalności.
RuleCheck: TypeAlias = Callable[[CodeExample], tuple[bool, str | None]]


class Applicability(StrEnum):
    """Do jakich przykładów stosuje się reguła."""

    BAD    = "bad"
    BETTER = "better"
    ANY    = "any"   # dowolny przykład z etykietą (bad lub better)
    ALL    = "all"   # również przykłady neutral

    def accepts(self, label: ExampleLabel) -> bool:
        match self:
            case Applicability.ALL:
                return True
            case Applicability.ANY:
                return label is not ExampleLabel.NEUTRAL
            case _:
                return label.value == self.value


@dataclass(frozen=True, slots=True)
class Rule:
    """
    Nazwana heurystyka strukturalna.

    - id:          identyfikator, np. "test-name-three-parts"
    - applies_to:  Applicability
    - description: opis predykatu (do wyświetlania)
    - check:       funkcja predykatu (nie bierze udziału w porównaniach)
    - topics:      fragmenty tytułów sekcji, w których reguła obowiązuje
    """

    id: RuleId
    applies_to: Applicability
    description: str
    check: RuleCheck = field(compare=False, repr=False)
    topics: tuple[str, ...] = ()

    def matches(self, example: CodeExample) -> bool:
        """Czy reguła dotyczy danego przykładu (etykieta + temat sekcji)."""
        if not self.applies_to.accepts(example.label):
            return False
        if not self.topics:
            return True
        title = example.section_title.lower()
        return any(topic in title for topic in self.topics)
