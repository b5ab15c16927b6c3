"""Tests for document loading, saved results and the command line."""

import json

import pytest
from treediff import (
    DiffEngine,
    DiffCategory,
    DocumentFormat,
    DocumentParseError,
    DocumentReadError,
    NonObjectRootError,
    ResultStoreError,
    ValueType,
    WorkingContext,
    load_document,
    load_results,
    parse_document,
    parse_json,
    parse_yaml,
    save_results,
)
from treediff.cli import main
from treediff.loader import detect_format


class TestLoader:
    """Test parsing JSON and YAML into document trees."""

    def test_parse_json(self):
        """Test a simple JSON document."""
        node = parse_json('{"name": "x", "items": [1, 2.5, null, true]}')
        assert node.type == ValueType.OBJECT
        items = node.as_object()["items"].as_array()
        assert [i.canonical() for i in items] == ["1", "2.5", "null", "true"]

    def test_parse_yaml(self):
        """Test a simple YAML document."""
        node = parse_yaml("name: x\nitems:\n  - 1\n  - two\n")
        obj = node.as_object()
        assert obj["name"].canonical() == "x"
        assert [i.canonical() for i in obj["items"].as_array()] == ["1", "two"]

    def test_json_and_yaml_compare_equal(self):
        """Test that formatting differences between formats are not reported."""
        doc_json = parse_json('{"a": 1, "b": [true, null], "c": {"d": "text", "e": 0.5}}')
        doc_yaml = parse_yaml("a: 1\nb: [true, ~]\nc:\n  d: text\n  e: 0.5\n")
        context = WorkingContext("doc.json", "doc.yaml")
        result = DiffEngine().compare(doc_json, doc_yaml, context)
        assert result.is_match is True

    def test_yaml_timestamps_become_strings(self):
        """Test that YAML dates are compared as ISO strings."""
        node = parse_yaml("released: 2024-01-02\n")
        released = node.as_object()["released"]
        assert released.type == ValueType.STRING
        assert released.canonical() == "2024-01-02"

    def test_yaml_non_string_keys(self):
        """Test that YAML int keys become strings."""
        node = parse_yaml("1: one\n2: two\n")
        assert list(node.as_object()) == ["1", "2"]

    def test_malformed_json(self):
        """Test that malformed JSON reports a location."""
        with pytest.raises(DocumentParseError) as exc_info:
            parse_json('{"a": }', source="broken.json")
        assert exc_info.value.source == "broken.json"
        assert exc_info.value.line == 1
        assert exc_info.value.column is not None
        assert "broken.json:1:" in str(exc_info.value)

    def test_duplicate_json_keys(self):
        """Test that duplicate JSON keys are rejected."""
        with pytest.raises(DocumentParseError):
            parse_json('{"a": 1, "a": 2}')

    def test_malformed_yaml(self):
        """Test that malformed YAML reports a location."""
        with pytest.raises(DocumentParseError) as exc_info:
            parse_yaml("a: [1, 2\n")
        assert exc_info.value.line is not None

    def test_non_object_roots(self):
        """Test that arrays, scalars and empty documents are rejected."""
        with pytest.raises(NonObjectRootError):
            parse_json("[1, 2]")
        with pytest.raises(NonObjectRootError):
            parse_yaml("just a string")
        with pytest.raises(NonObjectRootError) as exc_info:
            parse_yaml("")
        assert exc_info.value.type_name == "null"

    def test_parse_document_dispatch(self):
        """Test that parse_document picks the parser by format."""
        node = parse_document("a: 1", DocumentFormat.YAML)
        assert node.as_object()["a"].canonical() == "1"
        with pytest.raises(DocumentParseError):
            parse_document("a: 1", DocumentFormat.JSON)

    def test_detect_format(self):
        """Test format detection from file suffixes."""
        assert detect_format("a.json") == DocumentFormat.JSON
        assert detect_format("a.YAML") == DocumentFormat.YAML
        assert detect_format("dir/a.yml") == DocumentFormat.YAML
        with pytest.raises(DocumentParseError):
            detect_format("a.txt")

    def test_load_document(self, tmp_path):
        """Test loading a document from disk."""
        path = tmp_path / "doc.yaml"
        path.write_text("key: value\n")
        node = load_document(path)
        assert node.as_object()["key"].canonical() == "value"

    def test_load_missing_document(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_document(tmp_path / "missing.json")

    def test_load_invalid_utf8(self, tmp_path):
        """Test that undecodable bytes raise DocumentParseError."""
        path = tmp_path / "doc.json"
        path.write_bytes(b'{"x": "\xff"}')
        with pytest.raises(DocumentParseError) as exc_info:
            load_document(path)
        assert exc_info.value.source == str(path)
        assert "UTF-8" in str(exc_info.value)

    def test_load_directory(self, tmp_path):
        """Test that an unreadable path raises DocumentReadError."""
        path = tmp_path / "dir.json"
        path.mkdir()
        with pytest.raises(DocumentReadError) as exc_info:
            load_document(path)
        assert exc_info.value.source == str(path)

    @pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_json_constants(self, token):
        """Test that NaN and Infinity are rejected as malformed JSON."""
        with pytest.raises(DocumentParseError) as exc_info:
            parse_json('{"x": %s}' % token)
        assert token in str(exc_info.value)


class TestResultStore:
    """Test saving and loading comparison results."""

    def setup_method(self):
        self.context = WorkingContext(
            side_a_label="a.json",
            side_b_label="b.json",
            array_same_order=True,
            enabled_categories=frozenset({DiffCategory.KEY, DiffCategory.VALUE, DiffCategory.ARRAY}),
        )
        self.collection = DiffEngine().compare(
            {"x": "1", "nested": {"array": [1, 2, 3]}, "l": [1]},
            {"x": "2", "nested": {"array": [1, 2, 4]}, "l": [1, 2]},
            self.context,
        )

    def test_round_trip(self, tmp_path):
        """Test that saved results load back unchanged."""
        path = tmp_path / "result.json"
        save_results(self.collection, self.context, path)
        collection, context = load_results(path)

        assert context == self.context
        assert collection == self.collection
        assert collection.type_diffs is None

    def test_saved_paths_are_literal(self, tmp_path):
        """Test that paths are stored exactly as built."""
        path = tmp_path / "result.json"
        save_results(self.collection, self.context, path)
        data = json.loads(path.read_text())

        assert data["config"]["file_a"] == "a.json"
        assert data["type_diff"] is None
        assert [d["path"] for d in data["value_diff"]] == ["x", "nested.array[2]"]
        assert data["array_diff"][0] == {"path": "l", "side_tag": "AMisses", "value": "2"}

    def test_corrupt_file(self, tmp_path):
        """Test that invalid JSON raises ResultStoreError."""
        path = tmp_path / "result.json"
        path.write_text("{not json")
        with pytest.raises(ResultStoreError):
            load_results(path)

    def test_unreadable_file(self, tmp_path):
        """Test that invalid UTF-8 or a directory raises ResultStoreError."""
        path = tmp_path / "result.json"
        path.write_bytes(b'{"config": "\xff"}')
        with pytest.raises(ResultStoreError):
            load_results(path)

        directory = tmp_path / "results"
        directory.mkdir()
        with pytest.raises(ResultStoreError):
            load_results(directory)

    def test_missing_config(self, tmp_path):
        """Test that a file without config raises ResultStoreError."""
        path = tmp_path / "result.json"
        path.write_text('{"key_diff": []}')
        with pytest.raises(ResultStoreError):
            load_results(path)

    def test_bad_record(self, tmp_path):
        """Test that malformed records raise ResultStoreError."""
        path = tmp_path / "result.json"
        data = {"config": self.context.to_dict(), "type_diff": [{"path": "a", "type_a": "int",
                                                                 "type_b": "string"}]}
        path.write_text(json.dumps(data))
        with pytest.raises(ResultStoreError):
            load_results(path)


class TestCommandLine:
    """Test the treediff command."""

    def _write(self, tmp_path, name, content):
        path = tmp_path / name
        path.write_text(content)
        return str(path)

    def test_differences_exit_code(self, tmp_path, capsys):
        """Test that differences give exit code 1 and a summary."""
        a = self._write(tmp_path, "a.json", '{"x": "1", "nested": {"y": true}}')
        b = self._write(tmp_path, "b.yaml", 'x: "2"\n')

        assert main([a, b]) == 1
        out = capsys.readouterr().out
        assert "Key differences: 1" in out
        assert "Value differences: 1" in out

    def test_match_exit_code(self, tmp_path, capsys):
        """Test that identical documents give exit code 0."""
        a = self._write(tmp_path, "a.json", '{"a": [1, 2]}')
        b = self._write(tmp_path, "b.yml", "a: [2, 1]\n")

        assert main([a, b]) == 0
        assert "no differences" in capsys.readouterr().out

    def test_selected_categories(self, tmp_path, capsys):
        """Test that category flags limit the report."""
        a = self._write(tmp_path, "a.json", '{"a": 1, "b": 1}')
        b = self._write(tmp_path, "b.json", '{"a": 2}')

        assert main(["-v", a, b]) == 1
        out = capsys.readouterr().out
        assert "Value differences: 1" in out
        assert "Key differences" not in out

    def test_write_and_read(self, tmp_path, capsys):
        """Test saving results and showing them again."""
        a = self._write(tmp_path, "a.json", '{"l": [1, 2]}')
        b = self._write(tmp_path, "b.json", '{"l": [2, 3]}')
        saved = str(tmp_path / "saved.json")

        assert main(["-q", "-w", saved, a, b]) == 1
        assert capsys.readouterr().out == ""

        assert main(["-r", saved]) == 1
        out = capsys.readouterr().out
        assert "Array differences: 4" in out

    def test_invalid_input(self, tmp_path, capsys):
        """Test that parse errors give exit code 2."""
        a = self._write(tmp_path, "a.json", '[1, 2]')
        b = self._write(tmp_path, "b.json", '{}')

        assert main([a, b]) == 2
        assert "must be an object" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        """Test that a missing file gives exit code 2."""
        b = self._write(tmp_path, "b.json", '{}')
        assert main([str(tmp_path / "nope.json"), b]) == 2
        assert "not found" in capsys.readouterr().err

    def test_unreadable_file(self, tmp_path, capsys):
        """Test that a directory or non UTF-8 file gives exit code 2."""
        directory = tmp_path / "dir.json"
        directory.mkdir()
        b = self._write(tmp_path, "b.json", '{}')
        assert main([str(directory), b]) == 2
        assert "Could not read" in capsys.readouterr().err

        binary = tmp_path / "binary.json"
        binary.write_bytes(b'{"x": "\xff"}')
        assert main([str(binary), b]) == 2
        assert "UTF-8" in capsys.readouterr().err

    def test_documents_required(self):
        """Test that two documents are required without --read."""
        with pytest.raises(SystemExit):
            main(["only_one.json"])
