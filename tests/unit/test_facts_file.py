"""Tests for loading dependency facts from JSON files."""

import json

import pytest

from modulegraph.sources import FactsFileSource, fact_from_dict


class TestFactFromDict:
    """Test single entry conversion."""

    def test_configuration_key(self):
        fact = fact_from_dict({"from": ":app", "to": ":libs:core", "configuration": "api"})
        assert fact.source == ("app",)
        assert fact.target == ("libs", "core")
        assert fact.label == "api"

    def test_label_key_and_missing_label(self):
        assert fact_from_dict({"from": "a", "to": "b", "label": "x"}).label == "x"
        assert fact_from_dict({"from": "a", "to": "b"}).label is None

    def test_missing_endpoint(self):
        with pytest.raises(ValueError, match="Invalid dependency entry"):
            fact_from_dict({"from": ":app"})

    @pytest.mark.parametrize("entry", [
        {"from": 5, "to": ":core"},
        {"from": ":app", "to": None},
        {"from": [":app", 3], "to": ":core"},
        {"from": ":app", "to": ":core", "configuration": 5},
        {"from": ":app", "to": ":core", "label": ["api"]},
    ])
    def test_wrong_field_types(self, entry):
        with pytest.raises(ValueError, match="Invalid dependency entry"):
            fact_from_dict(entry)

    def test_empty_path(self):
        with pytest.raises(ValueError, match="at least one segment"):
            fact_from_dict({"from": "", "to": ":core"})

    def test_label_whitespace_trimmed(self):
        assert fact_from_dict({"from": "a", "to": "b", "configuration": " api "}).label == "api"


class TestFactsFileSource:
    """Test JSON and JSON Lines documents."""

    def test_dependencies_document(self, tmp_path):
        facts_file = tmp_path / "deps.json"
        facts_file.write_text(json.dumps({"dependencies": [
            {"from": ":example", "to": ":groupFolder:example2", "configuration": "implementation"},
            {"from": ":example", "to": ":groupFolder:example3", "configuration": "runtimeOnly"},
        ]}))

        facts = FactsFileSource(facts_file).collect()

        assert [fact.label for fact in facts] == ["implementation", "runtimeOnly"]

    def test_bare_list_document(self, tmp_path):
        facts_file = tmp_path / "deps.json"
        facts_file.write_text(json.dumps([{"from": "a", "to": "b"}]))

        assert len(FactsFileSource(facts_file).collect()) == 1

    def test_json_lines(self, tmp_path):
        facts_file = tmp_path / "deps.jsonl"
        facts_file.write_text('{"from": "a", "to": "b"}\n\n{"from": "b", "to": "c"}\n')

        facts = FactsFileSource(facts_file).collect()

        assert [fact.target for fact in facts] == [("b",), ("c",)]

    def test_invalid_json(self, tmp_path):
        facts_file = tmp_path / "deps.json"
        facts_file.write_text("{not json")

        with pytest.raises(ValueError, match="Invalid JSON"):
            FactsFileSource(facts_file).collect()

    def test_missing_dependencies_key(self, tmp_path):
        facts_file = tmp_path / "deps.json"
        facts_file.write_text('{"modules": []}')

        with pytest.raises(ValueError, match="'dependencies' list"):
            FactsFileSource(facts_file).collect()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FactsFileSource(tmp_path / "absent.json").collect()

    def test_wrong_type_reported_as_value_error(self, tmp_path):
        facts_file = tmp_path / "deps.json"
        facts_file.write_text(json.dumps({"dependencies": [
            {"from": ":app", "to": ":core", "configuration": "api"},
            {"from": 5, "to": ":core"},
        ]}))

        with pytest.raises(ValueError, match="Invalid dependency in .*deps.json"):
            FactsFileSource(facts_file).collect()
