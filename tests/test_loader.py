"""Tests for loading JSON/YAML documents from files, URLs and stdin."""

from __future__ import annotations

import io
import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import httpx
import pytest

from chefctl.exceptions import JsonConfigError
from chefctl.loader import is_url, load_document, parse_content


class TestIsUrl:
    @pytest.mark.parametrize("source", ["http://x/config.json", "https://x/c.json"])
    def test_urls(self, source: str) -> None:
        assert is_url(source) is True

    @pytest.mark.parametrize("source", ["/etc/chef/config.json", "ftp://x/c", "-"])
    def test_not_urls(self, source: str) -> None:
        assert is_url(source) is False


class TestParseContent:
    def test_json_object(self) -> None:
        assert parse_content('{"a": 1}') == {"a": 1}

    def test_yaml_fallback(self) -> None:
        assert parse_content("a: 1\nb: [x, y]\n") == {"a": 1, "b": ["x", "y"]}

    def test_empty_document(self) -> None:
        assert parse_content("   \n") == {}

    def test_null_document(self) -> None:
        assert parse_content("null") == {}

    def test_json_hint_is_strict(self) -> None:
        with pytest.raises(JsonConfigError, match="Invalid JSON in cfg"):
            parse_content("a: 1", hint="json", origin="cfg")

    def test_non_object_rejected(self) -> None:
        with pytest.raises(JsonConfigError, match="must contain an object"):
            parse_content("[1, 2]")

    def test_unparseable(self) -> None:
        with pytest.raises(JsonConfigError, match="as JSON or YAML"):
            parse_content("a: [1, 2")


class TestLoadFromFile:
    def test_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"fb": {"tier": "web"}}))
        assert load_document(str(path)) == {"fb": {"tier": "web"}}

    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("splay: 10\n")
        assert load_document(str(path)) == {"splay": 10}

    def test_json_suffix_is_strict(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("splay: 10\n")
        with pytest.raises(JsonConfigError, match="Invalid JSON"):
            load_document(str(path))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(JsonConfigError, match="not found"):
            load_document(str(tmp_path / "nope.json"))

    def test_undecodable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_bytes(b"\xff\xfe{}")
        with pytest.raises(JsonConfigError, match="Failed to read"):
            load_document(str(path))


class TestLoadFromStdin:
    def test_reads_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO('{"a": 1}'))
        assert load_document("-") == {"a": 1}

    def test_empty_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        with pytest.raises(JsonConfigError, match="No input"):
            load_document("-")


class TestLoadFromUrl:
    def _response(self, text: str, content_type: str = "application/json") -> MagicMock:
        response = MagicMock()
        response.text = text
        response.headers = {"content-type": content_type}
        response.raise_for_status.return_value = None
        return response

    def test_fetches_json(self) -> None:
        with patch("chefctl.loader.httpx.get", return_value=self._response('{"a": 1}')) as get:
            assert load_document("https://cfg.example/config.json", timeout=5) == {"a": 1}
        get.assert_called_once_with(
            "https://cfg.example/config.json", timeout=5, follow_redirects=True
        )

    def test_yaml_content_type(self) -> None:
        response = self._response("a: 1\n", content_type="application/x-yaml")
        with patch("chefctl.loader.httpx.get", return_value=response):
            assert load_document("https://cfg.example/settings") == {"a": 1}

    def test_http_error(self) -> None:
        request = httpx.Request("GET", "https://cfg.example/config.json")
        error_response = httpx.Response(404, request=request)
        response = self._response("")
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "not found", request=request, response=error_response
        )
        with patch("chefctl.loader.httpx.get", return_value=response):
            with pytest.raises(JsonConfigError, match="HTTP 404"):
                load_document("https://cfg.example/config.json")

    def test_connection_error(self) -> None:
        request = httpx.Request("GET", "https://cfg.example/config.json")
        with patch(
            "chefctl.loader.httpx.get",
            side_effect=httpx.ConnectError("refused", request=request),
        ):
            with pytest.raises(JsonConfigError, match="Failed to fetch"):
                load_document("https://cfg.example/config.json")
