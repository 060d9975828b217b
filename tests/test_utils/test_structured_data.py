"""
Tests for the JSON / YAML fixture file readers.
"""
import pytest

from esfixtures.utils.structured_data import (
    StructuredDataError,
    read_json_object,
    read_yaml_mappings,
)


class TestReadJsonObject:

    def test_missing_file_is_none(self, tmp_path):
        assert read_json_object(tmp_path / "_mapping.json") is None

    def test_object(self, tmp_path):
        path = tmp_path / "_settings.json"
        path.write_text('{"number_of_shards": 1}')

        assert read_json_object(path) == {"number_of_shards": 1}

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "_mapping.json"
        path.write_text("{'single': 'quotes'}")

        with pytest.raises(StructuredDataError, match="invalid JSON") as exc_info:
            read_json_object(path)

        assert exc_info.value.path == path

    def test_empty_file_is_invalid(self, tmp_path):
        path = tmp_path / "_mapping.json"
        path.write_text("")

        with pytest.raises(StructuredDataError):
            read_json_object(path)

    def test_scalar_is_invalid(self, tmp_path):
        path = tmp_path / "_mapping.json"
        path.write_text('"just a string"')

        with pytest.raises(StructuredDataError, match="expected a JSON object, got str"):
            read_json_object(path)


class TestReadYamlMappings:

    def test_sequence_of_mappings(self, tmp_path):
        path = tmp_path / "users.yml"
        path.write_text("- name: Alice\n  tags: [a, b]\n- name: Bob\n")

        assert read_yaml_mappings(path) == [
            {"name": "Alice", "tags": ["a", "b"]},
            {"name": "Bob"},
        ]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "users.yml"
        path.write_text("")

        assert read_yaml_mappings(path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(StructuredDataError, match="reading file"):
            read_yaml_mappings(tmp_path / "gone.yml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "users.yml"
        path.write_text("- name: 'unterminated\n")

        with pytest.raises(StructuredDataError, match="invalid YAML"):
            read_yaml_mappings(path)

    def test_unsafe_tags_rejected(self, tmp_path):
        """safe_load refuses arbitrary Python object tags."""
        path = tmp_path / "users.yml"
        path.write_text("- !!python/object/apply:os.system ['echo hi']\n")

        with pytest.raises(StructuredDataError, match="invalid YAML"):
            read_yaml_mappings(path)
