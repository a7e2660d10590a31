"""
guide_model/findings.py — wynik zastosowania jednej reguły do jednego przykładu.

Finding powstaje na nowo przy każdym uruchomieniu i nigdy nie jest utrwalany.
Pominięty Finding (skipped=True) oznacza, że reguła nie mogła ustalić swojej
stosowalności; zawsze ma outcome=False i nie liczy się jako porażka.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .documents import CodeExample
from .rules import RuleId


class FindingStatus(StrEnum):
    PASS = "PASS"
    FAIL = "FAIL"
    SKIP = "SKIP"


@dataclass(frozen=True, slots=True)
class Finding:
    rule_id: RuleId
    example: CodeExample
    outcome: bool
    message: str | None = None
    skipped: bool = False

    @property
    def status(self) -> FindingStatus:
        if self.skipped:
            return FindingStatus.SKIP
        return FindingStatus.PASS if self.outcome else FindingStatus.FAIL

    @property
    def sort_key(self) -> tuple[int, int, str]:
        """Klucz porządku raportu: (sekcja, przykład, id reguły)."""
        return (self.example.section_index, self.example.index, self.rule_id)
