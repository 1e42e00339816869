"""Shared test doubles for the Redis client and the HTTP session."""
from __future__ import annotations

import io
import json
import sys
from pathlib import Path
from typing import Any

import pytest
import redis
import requests

# Allow running tests without installing the project
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


class FakeRedis:
    """In-memory stand-in for redis.Redis (bytes in, bytes out)."""

    def __init__(self) -> None:
        self.store: dict[str, bytes] = {}
        self.ttls: dict[str, int | None] = {}
        self.fail_with: Exception | None = None
        self.get_calls = 0
        self.set_calls = 0

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def ping(self) -> bool:
        self._maybe_fail()
        return True

    def get(self, key: str) -> bytes | None:
        self.get_calls += 1
        self._maybe_fail()
        return self.store.get(key)

    def set(self, key: str, value: str | bytes, ex: int | None = None) -> bool:
        self.set_calls += 1
        self._maybe_fail()
        self.store[key] = value.encode("utf-8") if isinstance(value, str) else value
        self.ttls[key] = ex
        return True


class FakeResponse:
    """Body is already decoded, as requests hands it over after get()."""

    def __init__(self, body: bytes = b"", status_code: int = 200, headers: dict[str, str] | None = None,
                 reason: str = "OK") -> None:
        self.status_code = status_code
        self.reason = reason
        self.headers = headers or {}
        self.content = body

    def json(self) -> Any:
        return json.loads(self.content)


class FakeSession:
    """Records GET calls and replays queued responses or exceptions."""

    def __init__(self, *responses: FakeResponse | Exception) -> None:
        self.headers: dict[str, str] = {}
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def queue(self, response: FakeResponse | Exception) -> None:
        self.responses.append(response)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if not self.responses:
            raise requests.exceptions.ConnectionError("no response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


GOOGLE_PAYLOAD: dict[str, Any] = {
    "ip": "8.8.8.8",
    "isp": "Google LLC",
    "org": "Google LLC",
    "hostname": "dns.google",
    "latitude": 37.751,
    "longitude": -97.822,
    "postal_code": "",
    "city": "Mountain View",
    "country_code": "US",
    "country_name": "United States",
    "continent_code": "NA",
    "region": "California",
    "timezone_name": "America/Chicago",
    "asn": "AS15169",
    "asn_org": "GOOGLE",
    "currency_code": "USD",
    "success": True,
    "premium": False,
}


def json_response(payload: dict[str, Any], *, status_code: int = 200) -> FakeResponse:
    body = json.dumps(payload).encode("utf-8")
    return FakeResponse(body, status_code=status_code, headers={"Content-Type": "application/json"})


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def redis_timeout() -> Exception:
    return redis.exceptions.TimeoutError("Timeout reading from socket")


@pytest.fixture
def stdin_lines() -> io.StringIO:
    return io.StringIO("8.8.8.8\n\n1.1.1\n")
