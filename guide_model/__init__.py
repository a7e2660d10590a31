"""
guide_model — struktury danych guidelint.

Użycie:
  from guide_model import Document, Section, CodeExample, Rule, Finding, ...

Moduły:
  documents — ExampleLabel, CodeExample, Section, Document
  rules     — Applicability, Rule, RuleId, RuleCheck
  findings  — FindingStatus, Finding

Przepływ danych:
  tekst przewodnika → Document (sekcje + przykłady kodu)
  Rule × CodeExample → Finding
"""

from .documents import (
    ExampleLabel,
    CodeExample,
    Section,
    Document,
)
from .rules import (
    RuleId,
    RuleCheck,
    Applicability,
    Rule,
)
from .findings import (
    FindingStatus,
    Finding,
)

__all__ = [
    # documents
    "ExampleLabel",
    "CodeExample",
    "Section",
    "Document",
    # rules
    "RuleId",
    "RuleCheck",
    "Applicability",
    "Rule",
    # findings
    "FindingStatus",
    "Finding",
]
