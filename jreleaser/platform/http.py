"""HTTP client abstraction for uploaders and announcers.

This module provides:
- HttpClient: Protocol for the two operations steps need (injectable)
- RealHttpClient: Implementation using urllib
- MockHttpClient: Records requests and replays canned failures in tests
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from jreleaser import __version__
from jreleaser.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpRequest",
    "MockHttpClient",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    def upload(
        self,
        url: str,
        path: Path,
        *,
        method: str = "PUT",
        headers: Mapping[str, str] | None = None,
    ) -> Result[int, HttpError]:
        """Send a file as the request body. Returns the HTTP status."""
        ...

    def post_json(
        self,
        url: str,
        payload: Mapping[str, object],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Result[int, HttpError]:
        """POST a JSON document. Returns the HTTP status."""
        ...


class RealHttpClient:
    """HTTP client using urllib with system certificates."""

    def __init__(self, timeout: float = 60.0, user_agent: str = f"jreleaser/{__version__}") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _send(
        self,
        url: str,
        *,
        method: str,
        body: bytes,
        headers: Mapping[str, str],
    ) -> Result[int, HttpError]:
        try:
            req = urllib.request.Request(
                url,
                data=body,
                method=method,
                headers={"User-Agent": self.user_agent, **headers},
            )
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(int(response.status))
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def upload(
        self,
        url: str,
        path: Path,
        *,
        method: str = "PUT",
        headers: Mapping[str, str] | None = None,
    ) -> Result[int, HttpError]:
        try:
            body = path.read_bytes()
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=f"cannot read {path.name}: {e}"))
        merged = {"Content-Type": "application/octet-stream", **(headers or {})}
        return self._send(url, method=method, body=body, headers=merged)

    def post_json(
        self,
        url: str,
        payload: Mapping[str, object],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Result[int, HttpError]:
        body = json.dumps(dict(payload)).encode("utf-8")
        merged = {"Content-Type": "application/json", **(headers or {})}
        return self._send(url, method="POST", body=body, headers=merged)


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """A request captured by MockHttpClient."""

    method: str
    url: str
    headers: Mapping[str, str]
    file: Path | None = None
    payload: Mapping[str, object] | None = None


def _empty_requests() -> list[HttpRequest]:
    return []


@dataclass
class MockHttpClient:
    """Mock HTTP client for testing.

    Every request is recorded. URLs registered with ``fail`` answer with
    the given error; all others succeed with status 200.

    Usage:
        client = MockHttpClient()
        client.fail("https://example.com/up/app.zip", HttpError(..., status=403, ...))
    """

    requests: list[HttpRequest] = field(default_factory=_empty_requests)
    _failures: dict[str, HttpError] = field(default_factory=dict)

    def fail(self, url: str, error: HttpError) -> None:
        self._failures[url] = error

    def _reply(self, url: str) -> Result[int, HttpError]:
        error = self._failures.get(url)
        if error is not None:
            return Err(error)
        return Ok(200)

    def upload(
        self,
        url: str,
        path: Path,
        *,
        method: str = "PUT",
        headers: Mapping[str, str] | None = None,
    ) -> Result[int, HttpError]:
        self.requests.append(HttpRequest(method, url, dict(headers or {}), file=path))
        return self._reply(url)

    def post_json(
        self,
        url: str,
        payload: Mapping[str, object],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Result[int, HttpError]:
        self.requests.append(HttpRequest("POST", url, dict(headers or {}), payload=payload))
        return self._reply(url)

    @property
    def urls(self) -> list[str]:
        return [r.url for r in self.requests]
