"""
evaluator/rule_evaluator.py — stosowanie reguł do przykładów kodu.

evaluate(rule, example) -> Finding
    Czysta funkcja: deterministyczna, idempotentna, bez efektów ubocznych
    (poza logiem). RuleEvaluationWarning z predykatu → Finding ze statusem SKIP.

RuleEvaluator(rules).evaluate_document(document) -> list[Finding]
    Każda reguła × każdy przykład, którego etykieta i temat sekcji pasują.
    Reguły są niezależne — kolejność ich stosowania nie ma znaczenia.
"""

from __future__ import annotations

import logging
from typing import Iterable

from guide_model import CodeExample, Document, Finding, Rule

from .catalog import DEFAULT_RULES
from .types import RuleEvaluationWarning

logger = logging.getLogger(__name__)


def evaluate(rule: Rule, example: CodeExample) -> Finding:
    try:
        outcome, message = rule.check(example)
    except RuleEvaluationWarning as warning:
        logger.warning(
            "%s [%s] %s: pominięto — %s",
            example.section_title or "-", example.ref, rule.id, warning,
        )
        return Finding(
            rule_id=rule.id,
            example=example,
            outcome=False,
            message=str(warning),
            skipped=True,
        )
    return Finding(rule_id=rule.id, example=example, outcome=bool(outcome), message=message)


class RuleEvaluator:
    """
    Ewaluator zestawu reguł.

    Użycie:
        evaluator = RuleEvaluator(resolve_rules("manifest.json"))
        findings  = evaluator.evaluate_document(document)
    """

    def __init__(self, rules: Iterable[Rule] = DEFAULT_RULES) -> None:
        self._rules = tuple(rules)
        ids = [r.id for r in self._rules]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Zduplikowane id reguł: {', '.join(duplicates)}")

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def applicable(self, example: CodeExample) -> list[Rule]:
        """Reguły dotyczące przykładu (etykieta + temat sekcji)."""
        return [rule for rule in self._rules if rule.matches(example)]

    def evaluate_example(self, example: CodeExample) -> list[Finding]:
        return [evaluate(rule, example) for rule in self.applicable(example)]

    def evaluate_examples(self, examples: Iterable[CodeExample]) -> list[Finding]:
        findings: list[Finding] = []
        for example in examples:
            findings.extend(self.evaluate_example(example))
        return findings

    def evaluate_document(self, document: Document) -> list[Finding]:
        findings = self.evaluate_examples(document.examples)
        logger.debug(
            "%s: %d reguł, %d wyników", document.source, len(self._rules), len(findings)
        )
        return findings
