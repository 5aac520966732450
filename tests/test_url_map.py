"""Tests for url map loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pageindex.errors import ConfigError
from pageindex.ingestion.url_map import load_url_map


class TestLoadUrlMap:
    """Test load_url_map function."""

    def test_load_valid_map(self, tmp_path: Path) -> None:
        """Should load a flat string mapping."""
        path = tmp_path / "urls.json"
        path.write_text(json.dumps({"pages/a.html": "http://example.com/a"}))

        url_map = load_url_map(path)

        assert url_map["pages/a.html"] == "http://example.com/a"
        assert url_map.get("pages/b.html") is None

    def test_map_is_read_only(self, tmp_path: Path) -> None:
        """Should not allow mutation after load."""
        path = tmp_path / "urls.json"
        path.write_text("{}")

        url_map = load_url_map(path)

        with pytest.raises(TypeError):
            url_map["x"] = "y"  # type: ignore[index]

    def test_missing_file(self, tmp_path: Path) -> None:
        """Should raise ConfigError when the file cannot be read."""
        with pytest.raises(ConfigError, match="Could not read"):
            load_url_map(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Should raise ConfigError for malformed JSON."""
        path = tmp_path / "urls.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="not valid JSON"):
            load_url_map(path)

    def test_not_an_object(self, tmp_path: Path) -> None:
        """Should reject JSON that is not an object."""
        path = tmp_path / "urls.json"
        path.write_text('["a", "b"]')

        with pytest.raises(ConfigError, match="JSON object"):
            load_url_map(path)

    def test_non_string_value(self, tmp_path: Path) -> None:
        """Should reject values that are not strings."""
        path = tmp_path / "urls.json"
        path.write_text('{"pages/a.html": 3}')

        with pytest.raises(ConfigError, match="not a string"):
            load_url_map(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        """Should raise ConfigError for bytes that are not UTF-8."""
        path = tmp_path / "urls.json"
        path.write_bytes(b'{"pages/a.html": "http://x/\xff"}')

        with pytest.raises(ConfigError, match="Could not read"):
            load_url_map(path)
