"""Lookup pipeline: classify, then cache, then the remote API.

States, each reached at most once per call::

    start -> local                                              (terminal)
    start -> non-routable                                       (terminal)
    start -> cache checked -> cache hit                         (terminal)
    start -> cache checked -> cache miss -> resolved -> cached  (terminal)

There is no retry and no per-key locking: two concurrent lookups of the same
cold address both go to the API, and the later cache write wins.
"""

from __future__ import annotations

import logging
import time
from typing import Optional, TYPE_CHECKING

from core.classifier import (
    DEFAULT_COMPLETION_OCTET,
    DEFAULT_LOCAL_PREFIX,
    classify,
    is_terminal,
    normalize_address,
)
from core.lookup_types import Classification, LookupResult
from infrastructure.metrics import LOOKUPS_TOTAL
from services.cache_service import DEFAULT_TTL_MINUTES, GeoCache
from services.geo_service import GeoResolver

if TYPE_CHECKING:
    from ui_protocols.protocols import LookupReporter


class GeoLocator:
    """Public entry point for IP geolocation.

    Components are passed in once and shared by every call; each call works
    on its own LookupResult. ``lookup`` never raises for lookup failures:
    callers inspect ``success``, ``error`` and ``classification``.
    """

    def __init__(
        self,
        resolver: GeoResolver,
        cache: Optional[GeoCache] = None,
        reporter: Optional[LookupReporter] = None,
        *,
        local_prefix: str = DEFAULT_LOCAL_PREFIX,
        completion_octet: str = DEFAULT_COMPLETION_OCTET,
        cache_ttl_minutes: int = DEFAULT_TTL_MINUTES,
    ) -> None:
        self.resolver = resolver
        self.cache = cache
        self.reporter = reporter
        self.local_prefix = local_prefix
        self.completion_octet = completion_octet
        self.cache_ttl_minutes = cache_ttl_minutes

    @classmethod
    def from_settings(
        cls,
        reporter: Optional[LookupReporter] = None,
        *,
        use_cache: bool = True,
    ) -> GeoLocator:
        """Build a locator from the environment configuration.

        The cache is enabled when REDIS_CONF is set. An unreachable cache
        raises CacheUnavailableError here rather than on first use.
        """
        from config import (
            CACHE_TTL_MINUTES,
            COMPLETION_OCTET,
            GEO_API_TIMEOUT,
            GEO_API_URL,
            LOCAL_PREFIX,
            REDIS_CONF,
            REDIS_DB,
            REDIS_PASSWORD,
            REDIS_SOCKET_TIMEOUT,
        )

        cache = None
        if use_cache and REDIS_CONF:
            cache = GeoCache.connect(
                REDIS_CONF,
                password=REDIS_PASSWORD,
                db=REDIS_DB,
                socket_timeout=REDIS_SOCKET_TIMEOUT,
                ttl_minutes=CACHE_TTL_MINUTES,
            )
        elif use_cache:
            logging.info("REDIS_CONF not set, running without a cache")

        return cls(
            GeoResolver(api_url=GEO_API_URL, timeout=GEO_API_TIMEOUT),
            cache,
            reporter,
            local_prefix=LOCAL_PREFIX,
            completion_octet=COMPLETION_OCTET,
            cache_ttl_minutes=CACHE_TTL_MINUTES,
        )

    def lookup(self, address: str, timeout: Optional[float] = None) -> LookupResult:
        """Geolocate ``address``.

        Args:
            address: IPv4 address; three-octet input is completed first
            timeout: Deadline for the whole call in seconds. The remote
                request gets whatever is left after the cache read. The
                cache read itself is bounded by REDIS_SOCKET_TIMEOUT, not by
                this deadline, so a slow cache can overrun it; in that case
                the remote call is skipped and the record carries a
                deadline error.

        Returns:
            The best record assembled; its address is the normalized form.
        """
        deadline = time.monotonic() + timeout if timeout is not None else None

        record = normalize_address(LookupResult.fresh(address), self.completion_octet)
        record = classify(record, self.local_prefix)
        if not is_terminal(record):
            record = self._resolve_routable(record, deadline)

        self._report(record)
        return record

    def _resolve_routable(self, record: LookupResult, deadline: Optional[float]) -> LookupResult:
        key = record.address

        if self.cache is not None:
            cached, found = self.cache.get(key)
            if found and cached is not None:
                return cached

        remaining = None
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logging.warning(f"Lookup deadline exceeded for IP {key} before remote call")
                return record.with_changes(error=f"Lookup deadline exceeded for IP: {key}")

        resolved, error = self.resolver.resolve(key, timeout=remaining)
        if self.cache is None:
            # Only a successful answer counts as resolved
            tag = Classification.RESOLVED if error is None else Classification.CACHE_MISS
            return resolved.with_changes(classification=tag)

        resolved = resolved.with_changes(classification=Classification.CACHE_MISS)
        if error is None and resolved.is_usable():
            self.cache.set(resolved, self.cache_ttl_minutes)
        elif error is None:
            logging.info(f"Not caching {key}: API answer has no country code")
        return resolved

    def _report(self, record: LookupResult) -> None:
        LOOKUPS_TOTAL.labels(classification=record.classification.value).inc()
        if self.reporter is None:
            return
        try:
            self.reporter.report(record)
        except Exception as exc:
            logging.error(f"Reporter failed for {record.address}: {exc}")

    def close(self) -> None:
        self.resolver.close()
