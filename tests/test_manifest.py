"""
Testy manifestu reguł: walidacja (jsonschema + referencje) i nadpisania.
"""

import json

import pytest

from evaluator import (
    DEFAULT_RULES,
    ManifestError,
    RuleCode,
    apply_manifest,
    load_manifest,
    resolve_rules,
    validate_manifest,
)
from guide_model import Applicability


def write_manifest(tmp_path, data) -> str:
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestValidateManifest:
    """Walidacja: schemat, potem referencje do katalogu."""

    def test_validate_when_valid_then_no_issues(self):
        manifest = {
            "version": 1,
            "rules": [
                {"id": "no-bare-assert", "enabled": False},
                {"id": "arrange-act-assert", "applies_to": "better", "topics": ["Arranging"]},
            ],
        }
        assert validate_manifest(manifest) == []

    def test_validate_when_rules_missing_then_schema_issue(self):
        issues = validate_manifest({"version": 1})
        assert len(issues) == 1
        assert issues[0].path == "/"

    def test_validate_when_bad_applies_to_then_issue_path(self):
        issues = validate_manifest({"rules": [{"id": "single-act", "applies_to": "sometimes"}]})
        assert [i.path for i in issues] == ["/rules/0/applies_to"]

    def test_validate_when_extra_property_then_issue(self):
        issues = validate_manifest({"rules": [{"id": "single-act", "severity": "high"}]})
        assert issues and issues[0].path == "/rules/0"

    def test_validate_when_unknown_version_then_issue(self):
        issues = validate_manifest({"version": 2, "rules": []})
        assert [i.path for i in issues] == ["/version"]

    def test_validate_when_unknown_rule_then_reference_issue(self):
        issues = validate_manifest({"rules": [{"id": "no-such-rule"}]})
        assert [i.path for i in issues] == ["/rules/0/id"]
        assert "no-such-rule" in issues[0].message

    def test_validate_when_duplicate_rule_then_reference_issue(self):
        issues = validate_manifest({"rules": [{"id": "single-act"}, {"id": "single-act"}]})
        assert [i.path for i in issues] == ["/rules/1/id"]

    def test_validate_when_known_ids_given_then_used_instead_of_catalog(self):
        assert validate_manifest({"rules": [{"id": "custom-rule"}]}, known_ids=["custom-rule"]) == []


class TestApplyManifest:
    """Wyłączanie i nadpisywanie reguł."""

    def test_apply_when_rule_disabled_then_removed_and_order_kept(self):
        rules = apply_manifest(DEFAULT_RULES, {"rules": [{"id": "no-bare-assert", "enabled": False}]})
        ids = [r.id for r in rules]
        assert RuleCode.NO_BARE_ASSERT not in ids
        assert ids == [r.id for r in DEFAULT_RULES if r.id != RuleCode.NO_BARE_ASSERT]

    def test_apply_when_override_then_new_rule_with_lowercase_topics(self):
        manifest = {"rules": [{"id": "arrange-act-assert", "applies_to": "all", "topics": ["AAA Pattern"]}]}
        rules = {r.id: r for r in apply_manifest(DEFAULT_RULES, manifest)}
        rule = rules[RuleCode.ARRANGE_ACT_ASSERT]
        assert rule.applies_to is Applicability.ALL
        assert rule.topics == ("aaa pattern",)
        assert rule.check is next(r for r in DEFAULT_RULES if r.id == rule.id).check

    def test_apply_when_empty_topics_then_rule_applies_everywhere(self):
        rules = apply_manifest(DEFAULT_RULES, {"rules": [{"id": "single-act", "topics": []}]})
        assert next(r for r in rules if r.id == RuleCode.SINGLE_ACT).topics == ()

    def test_apply_when_invalid_then_manifest_error(self):
        with pytest.raises(ManifestError) as exc_info:
            apply_manifest(DEFAULT_RULES, {"rules": [{"id": "nope"}]})
        assert exc_info.value.issues[0].path == "/rules/0/id"


class TestResolveRules:
    """Katalog → manifest z pliku → filtr --rule."""

    def test_resolve_when_no_manifest_then_full_catalog(self):
        assert resolve_rules() == list(DEFAULT_RULES)

    def test_resolve_when_manifest_file_then_applied(self, tmp_path):
        path = write_manifest(tmp_path, {"version": 1, "rules": [{"id": "mock-naming", "enabled": False}]})
        assert RuleCode.MOCK_NAMING not in [r.id for r in resolve_rules(path)]

    def test_resolve_when_only_then_filtered_in_catalog_order(self):
        rules = resolve_rules(only=["single-act", "arrange-act-assert"])
        assert [r.id for r in rules] == [RuleCode.ARRANGE_ACT_ASSERT, RuleCode.SINGLE_ACT]

    def test_resolve_when_only_unknown_then_manifest_error(self):
        with pytest.raises(ManifestError) as exc_info:
            resolve_rules(only=["no-such-rule"])
        assert exc_info.value.issues[0].path == "--rule"

    def test_resolve_when_only_names_disabled_rule_then_manifest_error(self, tmp_path):
        path = write_manifest(tmp_path, {"rules": [{"id": "single-act", "enabled": False}]})
        with pytest.raises(ManifestError):
            resolve_rules(path, only=["single-act"])

    def test_load_when_invalid_json_then_manifest_error(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ManifestError):
            load_manifest(path)

    def test_load_when_missing_then_oserror(self, tmp_path):
        with pytest.raises(OSError):
            load_manifest(tmp_path / "missing.json")
