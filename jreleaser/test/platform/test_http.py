"""Tests for platform/http.py - HTTP client abstraction."""

from __future__ import annotations

from pathlib import Path

import pytest

from jreleaser.core.result import Err, Ok
from jreleaser.platform.http import (
    HttpClient,
    HttpError,
    MockHttpClient,
    RealHttpClient,
)


class TestHttpError:
    def test_str_with_status(self) -> None:
        error = HttpError(url="https://example.com/api", status=500, message="Internal Error")
        assert str(error) == "HTTP 500: Internal Error (https://example.com/api)"

    def test_str_without_status(self) -> None:
        error = HttpError(url="https://example.com", status=0, message="Timeout")
        assert str(error) == "Timeout (https://example.com)"

    def test_is_frozen(self) -> None:
        error = HttpError(url="https://example.com", status=404, message="Not Found")
        with pytest.raises(AttributeError):
            error.status = 500  # type: ignore[misc]


class TestMockHttpClient:
    def test_records_uploads(self, tmp_path: Path) -> None:
        path = tmp_path / "app.zip"
        path.write_bytes(b"zip")
        client = MockHttpClient()

        result = client.upload("https://up.example.com/app.zip", path, headers={"X": "1"})

        assert result == Ok(200)
        [request] = client.requests
        assert request.method == "PUT"
        assert request.file == path
        assert request.headers == {"X": "1"}

    def test_records_json_posts(self) -> None:
        client = MockHttpClient()
        client.post_json("https://hooks.example.com", {"text": "hi"})
        assert client.requests[0].payload == {"text": "hi"}
        assert client.urls == ["https://hooks.example.com"]

    def test_configured_failure(self) -> None:
        client = MockHttpClient()
        error = HttpError(url="https://hooks.example.com", status=403, message="Forbidden")
        client.fail("https://hooks.example.com", error)

        assert client.post_json("https://hooks.example.com", {}) == Err(error)

    def test_implements_protocol(self) -> None:
        assert isinstance(MockHttpClient(), HttpClient)


class TestRealHttpClient:
    def test_implements_protocol(self) -> None:
        assert isinstance(RealHttpClient(), HttpClient)

    def test_upload_unreadable_file(self, tmp_path: Path) -> None:
        client = RealHttpClient()
        result = client.upload("https://example.com/x", tmp_path / "missing.zip")
        assert isinstance(result, Err)
        assert result.error.status == 0
        assert "missing.zip" in result.error.message

    def test_invalid_url(self) -> None:
        result = RealHttpClient().post_json("not a url", {"text": "hi"})
        assert isinstance(result, Err)
        assert result.error.status == 0
