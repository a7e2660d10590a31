"""
evaluator — ewaluacja przykładów kodu względem reguł przewodnika.

Interfejs publiczny:
    RuleEvaluator          — stosuje zestaw reguł do dokumentu
    evaluate               — (Rule, CodeExample) -> Finding
    DEFAULT_RULES          — wbudowany katalog reguł
    resolve_rules          — katalog + manifest + filtr id
    validate_manifest      — walidacja manifestu (jsonschema + referencje)
    RuleCode, RuleEvaluationWarning, ManifestError, ManifestIssue — typy

Typowe użycie:
    from evaluator import RuleEvaluator, resolve_rules

    evaluator = RuleEvaluator(resolve_rules(manifest_path=None))
    findings  = evaluator.evaluate_document(document)
"""

from .types import ManifestError, ManifestIssue, RuleCode, RuleEvaluationWarning
from .catalog import DEFAULT_RULES, rules_by_id
from .manifest import (
    MANIFEST_SCHEMA,
    apply_manifest,
    load_manifest,
    resolve_rules,
    validate_manifest,
)
from .rule_evaluator import RuleEvaluator, evaluate

__all__ = [
    "ManifestError",
    "ManifestIssue",
    "RuleCode",
    "RuleEvaluationWarning",
    "DEFAULT_RULES",
    "rules_by_id",
    "MANIFEST_SCHEMA",
    "apply_manifest",
    "load_manifest",
    "resolve_rules",
    "validate_manifest",
    "RuleEvaluator",
    "evaluate",
]
