"""
reporter/summary.py — agregacja wyników w raport.

build_report(findings, mode) -> Report
  - findings posortowane wg (sekcja, przykład, id reguły) — niezależnie
    od kolejności, w jakiej zostały wyprodukowane
  - podsumowanie per reguła (RuleSummary), posortowane wg id
  - exit_code wg trybu:
      strict      — 0 gdy żaden wynik nie jest FAIL (SKIP się nie liczy)
      consistency — przykład bad powinien dawać FAIL, better/neutral PASS;
                    0 gdy brak niespójności
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable

from guide_model import ExampleLabel, Finding, FindingStatus

EXIT_OK       = 0
EXIT_FINDINGS = 1


class ReportMode(StrEnum):
    STRICT      = "strict"
    CONSISTENCY = "consistency"


@dataclass(frozen=True, slots=True)
class RuleSummary:
    rule_id: str
    passed: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.skipped


def is_inconsistent(finding: Finding) -> bool:
    """Czy wynik przeczy etykiecie przykładu (bad powinien łamać regułę)."""
    if finding.skipped:
        return False
    if finding.example.label is ExampleLabel.BAD:
        return finding.outcome
    return not finding.outcome


@dataclass(frozen=True, slots=True)
class Report:
    findings: tuple[Finding, ...]
    rules: tuple[RuleSummary, ...]
    mode: ReportMode = ReportMode.STRICT

    def count(self, status: FindingStatus) -> int:
        return sum(1 for f in self.findings if f.status is status)

    @property
    def passed(self) -> int:
        return self.count(FindingStatus.PASS)

    @property
    def failed(self) -> int:
        return self.count(FindingStatus.FAIL)

    @property
    def skipped(self) -> int:
        return self.count(FindingStatus.SKIP)

    @property
    def inconsistencies(self) -> list[Finding]:
        return [f for f in self.findings if is_inconsistent(f)]

    @property
    def exit_code(self) -> int:
        if self.mode is ReportMode.CONSISTENCY:
            return EXIT_FINDINGS if self.inconsistencies else EXIT_OK
        return EXIT_FINDINGS if self.failed else EXIT_OK


def build_report(
    findings: Iterable[Finding],
    mode: ReportMode | str = ReportMode.STRICT,
) -> Report:
    ordered = tuple(sorted(findings, key=lambda f: f.sort_key))

    counts: dict[str, dict[FindingStatus, int]] = {}
    for f in ordered:
        per_rule = counts.setdefault(str(f.rule_id), {s: 0 for s in FindingStatus})
        per_rule[f.status] += 1

    rules = tuple(
        RuleSummary(
            rule_id=rule_id,
            passed=c[FindingStatus.PASS],
            failed=c[FindingStatus.FAIL],
            skipped=c[FindingStatus.SKIP],
        )
        for rule_id, c in sorted(counts.items())
    )
    return Report(findings=ordered, rules=rules, mode=ReportMode(mode))
