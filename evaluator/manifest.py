"""
evaluator/manifest.py — manifest reguł: włączanie/wyłączanie i nadpisania.

Format (JSON)::

    {
        "version": 1,
        "rules": [
            {"id": "no-bare-assert", "enabled": false},
            {"id": "arrange-act-assert", "applies_to": "better",
             "topics": ["arranging", "aaa"]}
        ]
    }

Walidacja:
  A — JSON Schema (jsonschema, Draft 2020-12)
  B — referencje: nieznane i zduplikowane id reguł
"""

from __future__ import annotations

import dataclasses
import json
import logging
import pathlib
from typing import Any, Iterable

import jsonschema

from guide_model import Applicability, Rule

from .catalog import DEFAULT_RULES
from .types import ManifestError, ManifestIssue

logger = logging.getLogger(__name__)

MANIFEST_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "guidelint rules manifest",
    "type": "object",
    "additionalProperties": False,
    "required": ["rules"],
    "properties": {
        "version": {"type": "integer", "enum": [1]},
        "rules": {
            "type": "array",
            "items": {
                "type": "object",
                "additionalProperties": False,
                "required": ["id"],
                "properties": {
                    "id": {"type": "string", "pattern": "^[a-z][a-z0-9-]*$"},
                    "enabled": {"type": "boolean"},
                    "applies_to": {"enum": [a.value for a in Applicability]},
                    "topics": {
                        "type": "array",
                        "items": {"type": "string", "minLength": 1},
                    },
                },
            },
        },
    },
}


def _pointer(parts: Iterable[Any]) -> str:
    parts = list(parts)
    return "/" + "/".join(str(p) for p in parts) if parts else "/"


def validate_manifest(
    manifest: Any,
    known_ids: Iterable[str] | None = None,
) -> list[ManifestIssue]:
    """Zwraca listę błędów manifestu (pusta = poprawny)."""
    validator = jsonschema.Draft202012Validator(MANIFEST_SCHEMA)
    issues = [
        ManifestIssue(path=_pointer(e.absolute_path), message=e.message)
        for e in sorted(validator.iter_errors(manifest), key=lambda e: list(map(str, e.absolute_path)))
    ]
    if issues:
        return issues

    known = set(known_ids) if known_ids is not None else {r.id for r in DEFAULT_RULES}
    seen: set[str] = set()
    for i, entry in enumerate(manifest["rules"]):
        rule_id = entry["id"]
        if rule_id not in known:
            issues.append(ManifestIssue(
                path=f"/rules/{i}/id",
                message=f"Nieznana reguła '{rule_id}'.",
            ))
        elif rule_id in seen:
            issues.append(ManifestIssue(
                path=f"/rules/{i}/id",
                message=f"Reguła '{rule_id}' występuje w manifeście więcej niż raz.",
            ))
        seen.add(rule_id)
    return issues


def load_manifest(path: str | pathlib.Path) -> dict[str, Any]:
    """
    Wczytuje manifest z pliku JSON (bez walidacji).

    Raises:
        OSError:       brak pliku.
        ManifestError: plik nie jest poprawnym JSON.
    """
    text = pathlib.Path(path).read_text(encoding="utf-8")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError([ManifestIssue(path="/", message=f"Błąd parsowania JSON: {exc}")]) from exc


def apply_manifest(
    rules: Iterable[Rule],
    manifest: dict[str, Any],
) -> list[Rule]:
    """
    Zwraca reguły po zastosowaniu manifestu (kolejność katalogu zachowana).

    Raises:
        ManifestError: manifest nie przechodzi walidacji.
    """
    rules = list(rules)
    issues = validate_manifest(manifest, [r.id for r in rules])
    if issues:
        raise ManifestError(issues)

    overrides = {entry["id"]: entry for entry in manifest["rules"]}
    result: list[Rule] = []
    for rule in rules:
        entry = overrides.get(rule.id)
        if entry is None:
            result.append(rule)
            continue
        if not entry.get("enabled", True):
            logger.debug("Reguła %s wyłączona w manifeście", rule.id)
            continue
        changes: dict[str, Any] = {}
        if "applies_to" in entry:
            changes["applies_to"] = Applicability(entry["applies_to"])
        if "topics" in entry:
            changes["topics"] = tuple(t.lower() for t in entry["topics"])
        result.append(dataclasses.replace(rule, **changes) if changes else rule)
    return result


def resolve_rules(
    manifest_path: str | pathlib.Path | None = None,
    only: Iterable[str] | None = None,
) -> list[Rule]:
    """
    Efektywny zestaw reguł: katalog → manifest (opcjonalnie) → filtr --rule.

    Raises:
        ManifestError: niepoprawny manifest lub nieznane id w `only`.
    """
    rules = list(DEFAULT_RULES)
    if manifest_path is not None:
        rules = apply_manifest(rules, load_manifest(manifest_path))

    if only:
        wanted = list(dict.fromkeys(only))
        available = {r.id for r in rules}
        unknown = [rid for rid in wanted if rid not in available]
        if unknown:
            raise ManifestError([
                ManifestIssue(path="--rule", message=f"Nieznana lub wyłączona reguła '{rid}'.")
                for rid in unknown
            ])
        rules = [r for r in rules if r.id in set(wanted)]
    return rules
