"""
evaluator/types.py — identyfikatory reguł i typy błędów ewaluatora.

RuleCode              — stałe identyfikatory reguł wbudowanych
RuleEvaluationWarning — reguła nie potrafi ustalić stosowalności (SKIP)
ManifestIssue         — pojedynczy błąd manifestu reguł (ścieżka + komunikat)
ManifestError         — manifest reguł jest niepoprawny (lista ManifestIssue)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class RuleCode(StrEnum):
    """Identyfikatory reguł wbudowanych (kebab-case)."""

    TEST_NAME_THREE_PARTS = "test-name-three-parts"
    ARRANGE_ACT_ASSERT    = "arrange-act-assert"
    NO_MAGIC_STRINGS      = "no-magic-strings"
    NO_LOGIC_IN_TESTS     = "no-logic-in-tests"
    SINGLE_ACT            = "single-act"
    PREFER_HELPER_METHODS = "prefer-helper-methods"
    NO_BARE_ASSERT        = "no-bare-assert"
    MOCK_NAMING           = "mock-naming"
    NO_STATIC_REFERENCES  = "no-static-references"


class RuleEvaluationWarning(UserWarning):
    """
    Reguła nie może ustalić, czy dotyczy fragmentu (np. brak metody testowej).

    Zgłaszana przez predykat reguły; RuleEvaluator zamienia ją na Finding
    ze statusem SKIP. Nigdy nie przerywa przebiegu.
    """


@dataclass(slots=True)
class ManifestIssue:
    """
    Pojedynczy błąd manifestu.

    - path:    JSON Pointer do miejsca błędu, np. "/rules/0/applies_to"
    - message: czytelny opis błędu
    """

    path: str
    message: str


class ManifestError(ValueError):
    def __init__(self, issues: list[ManifestIssue]) -> None:
        self.issues = issues
        summary = "; ".join(f"{i.path}: {i.message}" for i in issues[:3])
        more = f" (+{len(issues) - 3})" if len(issues) > 3 else ""
        super().__init__(f"Niepoprawny manifest reguł: {summary}{more}")
