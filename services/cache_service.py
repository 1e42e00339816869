"""Redis-backed cache for geolocation records.

Entries are keyed by the normalized IP string and hold the JSON form of a
LookupResult. Every failure is logged and absorbed: a failed read is a miss,
a failed write is simply not cached.
"""
from __future__ import annotations

import logging
from typing import Final, Optional

import redis

from core.lookup_types import Classification, LookupResult
from infrastructure.metrics import CACHE_REQUESTS_TOTAL


DEFAULT_TTL_MINUTES: Final[int] = 129600  # 90 days
DEFAULT_SOCKET_TIMEOUT: Final[float] = 2.0


class CacheUnavailableError(RuntimeError):
    """The cache backend could not be reached at startup."""


def _parse_addr(addr: str) -> tuple[str, int]:
    host, _, port = addr.strip().rpartition(":")
    if not host:
        return port or "localhost", 6379
    return host, int(port)


class GeoCache:
    """Cache-aside store for LookupResult records.

    The underlying redis client is thread-safe (connection pool), so one
    instance can be shared by concurrent lookups.
    """

    def __init__(self, client: redis.Redis, ttl_minutes: int = DEFAULT_TTL_MINUTES) -> None:
        self._client = client
        self._ttl_minutes = ttl_minutes

    @classmethod
    def connect(
        cls,
        addr: str,
        *,
        password: Optional[str] = None,
        db: int = 0,
        socket_timeout: float = DEFAULT_SOCKET_TIMEOUT,
        ttl_minutes: int = DEFAULT_TTL_MINUTES,
    ) -> GeoCache:
        """Create a client for ``addr`` (host:port) and verify it answers PING.

        Raises:
            CacheUnavailableError: the backend is unreachable or misconfigured.
        """
        try:
            host, port = _parse_addr(addr)
        except ValueError as exc:
            raise CacheUnavailableError(f"Invalid cache address {addr!r}: {exc}") from exc

        client = redis.Redis(
            host=host,
            port=port,
            db=db,
            password=password,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        try:
            client.ping()
        except redis.exceptions.RedisError as exc:
            raise CacheUnavailableError(f"Cannot reach cache at {addr}: {exc}") from exc

        logging.info(f"Connected to cache at {host}:{port} db={db}")
        return cls(client, ttl_minutes=ttl_minutes)

    @property
    def ttl_minutes(self) -> int:
        return self._ttl_minutes

    def get(self, key: str) -> tuple[Optional[LookupResult], bool]:
        """Fetch the record cached under ``key``.

        Returns:
            (record, True) on a usable hit, (None, False) otherwise. Backend
            errors, undecodable entries and entries that were never resolved
            are all reported as a miss.
        """
        try:
            raw = self._client.get(key)
        except redis.exceptions.RedisError as exc:
            CACHE_REQUESTS_TOTAL.labels(operation="get", status="error").inc()
            logging.warning(f"Cache read failed for {key}: {exc}")
            return None, False

        if raw is None:
            CACHE_REQUESTS_TOTAL.labels(operation="get", status="miss").inc()
            logging.debug(f"Cache miss for {key}")
            return None, False

        try:
            record = LookupResult.from_json(raw)
        except (ValueError, TypeError) as exc:
            CACHE_REQUESTS_TOTAL.labels(operation="get", status="decode_error").inc()
            logging.error(f"Error decoding cached value for {key}: {exc}")
            return None, False

        if not record.is_usable():
            CACHE_REQUESTS_TOTAL.labels(operation="get", status="unusable").inc()
            logging.info(f"Cached record for {key} has no country code, ignoring it")
            return None, False

        CACHE_REQUESTS_TOTAL.labels(operation="get", status="hit").inc()
        return record.with_changes(address=key, classification=Classification.CACHE_HIT), True

    def set(self, record: LookupResult, ttl_minutes: Optional[int] = None) -> bool:
        """Store ``record`` under its address. Never raises.

        The stored snapshot is tagged as resolved; a later read re-tags it as
        a cache hit.
        """
        minutes = ttl_minutes if ttl_minutes is not None else self._ttl_minutes
        snapshot = record.with_changes(classification=Classification.RESOLVED)
        try:
            payload = snapshot.to_json()
        except (TypeError, ValueError) as exc:
            CACHE_REQUESTS_TOTAL.labels(operation="set", status="encode_error").inc()
            logging.error(f"Error encoding record for {record.address}: {exc}")
            return False

        try:
            self._client.set(record.address, payload, ex=minutes * 60)
        except redis.exceptions.RedisError as exc:
            CACHE_REQUESTS_TOTAL.labels(operation="set", status="error").inc()
            logging.error(f"Error adding {record.address} to cache: {exc}")
            return False

        CACHE_REQUESTS_TOTAL.labels(operation="set", status="ok").inc()
        logging.debug(f"Cached {record.address} for {minutes} minutes")
        return True
