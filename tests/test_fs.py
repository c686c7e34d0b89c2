"""Tests for the upward file probe and the manifest readers."""

from pathlib import Path

import pytest

from wami.errors import ManifestParseError
from wami.fs import dig, find_all_files_upwards, find_file_upwards, read_json_file, read_toml_file


def _write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestFindFileUpwards:
    def test_finds_file_in_start_directory(self, tmp_path):
        _write(tmp_path / "package.json", "{}")
        assert find_file_upwards(tmp_path, "package.json") == tmp_path.resolve()

    def test_finds_nearest_ancestor(self, tmp_path):
        _write(tmp_path / "package.json", "{}")
        _write(tmp_path / "a" / "package.json", "{}")
        deep = tmp_path / "a" / "b" / "c"
        deep.mkdir(parents=True)
        assert find_file_upwards(deep, "package.json") == (tmp_path / "a").resolve()

    def test_missing_file_returns_none(self, tmp_path):
        assert find_file_upwards(tmp_path, "wami-does-not-exist.marker") is None

    def test_directory_with_marker_name_is_not_a_match(self, tmp_path):
        (tmp_path / "sub" / "go.mod").mkdir(parents=True)
        assert find_file_upwards(tmp_path / "sub", "go.mod") != (tmp_path / "sub").resolve()

    def test_find_all_is_nearest_first(self, tmp_path):
        _write(tmp_path / "package.json", "{}")
        _write(tmp_path / "pkg" / "package.json", "{}")
        found = find_all_files_upwards(tmp_path / "pkg", "package.json")
        assert found[:2] == [(tmp_path / "pkg").resolve(), tmp_path.resolve()]


class TestReaders:
    def test_read_json(self, tmp_path):
        path = _write(tmp_path / "package.json", '{"name": "x"}')
        assert read_json_file(path) == {"name": "x"}

    def test_invalid_json_raises_parse_error(self, tmp_path):
        path = _write(tmp_path / "package.json", "{ not json")
        with pytest.raises(ManifestParseError) as exc_info:
            read_json_file(path)
        assert exc_info.value.path == path

    def test_missing_json_raises_parse_error(self, tmp_path):
        with pytest.raises(ManifestParseError):
            read_json_file(tmp_path / "missing.json")

    def test_read_toml(self, tmp_path):
        path = _write(tmp_path / "pyproject.toml", '[project]\nname = "demo"\n')
        assert read_toml_file(path) == {"project": {"name": "demo"}}

    def test_invalid_toml_raises_parse_error(self, tmp_path):
        path = _write(tmp_path / "pyproject.toml", "[project\nname=")
        with pytest.raises(ManifestParseError):
            read_toml_file(path)


class TestDig:
    def test_nested_lookup(self):
        assert dig({"tool": {"poetry": {"name": "x"}}}, "tool", "poetry", "name") == "x"

    def test_missing_level_returns_default(self):
        assert dig({"tool": {}}, "tool", "poetry", "name", default="d") == "d"

    def test_non_mapping_level_returns_default(self):
        assert dig({"tool": "oops"}, "tool", "poetry") is None
