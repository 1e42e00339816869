"""Geolocation service for IP addresses.

Resolves a single address against the geoiplookup.io JSON API
(free tier: roughly 500 requests/hour, which is why results are cached).
"""
from __future__ import annotations

import logging
import time
from typing import Final, Optional

import requests

from config import VERSION
from core.lookup_types import LookupResult
from infrastructure.metrics import GEO_API_LATENCY_MS, GEO_API_REQUESTS_TOTAL


DEFAULT_API_URL: Final[str] = "https://json.geoiplookup.io/{ip}"
DEFAULT_TIMEOUT: Final[float] = 10.0
USER_AGENT: Final[str] = f"geolocate/{VERSION}"


class GeoResolver:
    """Looks up one address per call against the remote geolocation API."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            api_url: URL template with an ``{ip}`` placeholder
            timeout: Default request timeout in seconds
            session: Shared HTTP session, created if not given
        """
        self._api_url = api_url
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": USER_AGENT})

    def close(self) -> None:
        self._session.close()

    def resolve(self, address: str, timeout: Optional[float] = None) -> tuple[LookupResult, Optional[str]]:
        """Fetch geolocation data for ``address``.

        Args:
            address: Normalized IP address
            timeout: Per-call timeout in seconds, overrides the default

        Returns:
            (record, error). On any failure ``error`` is set and the record
            holds sentinel values plus the same error text.
        """
        record = LookupResult.fresh(address)
        url = self._api_url.format(ip=address)
        start_time = time.perf_counter()

        # Not streamed: requests reads (and gunzips) the whole body inside
        # get(), so a truncated or stalled body surfaces as a RequestException
        try:
            response = self._session.get(
                url,
                headers={"Accept": "application/json", "Accept-Encoding": "gzip"},
                timeout=timeout if timeout is not None else self._timeout,
            )
        except requests.exceptions.Timeout:
            GEO_API_REQUESTS_TOTAL.labels(status="timeout").inc()
            error = f"Geolocation request for IP {address} timed out"
            logging.warning(error)
            return record.with_changes(error=error), error
        except requests.exceptions.RequestException as exc:
            GEO_API_REQUESTS_TOTAL.labels(status="network_error").inc()
            error = f"Geolocation request for IP {address} failed: {exc}"
            logging.warning(error)
            return record.with_changes(error=error), error
        finally:
            GEO_API_LATENCY_MS.observe((time.perf_counter() - start_time) * 1000)

        if response.status_code != 200:
            GEO_API_REQUESTS_TOTAL.labels(status=f"error_{response.status_code}").inc()
            error = (
                f"GetGeoData received invalid response for IP: {address} - "
                f"{response.status_code} {response.reason or ''}".rstrip()
            )
            logging.warning(error)
            return record.with_changes(error=error), error

        try:
            data = response.json()
            resolved = record.merge_api_payload(data)
        except ValueError as exc:
            GEO_API_REQUESTS_TOTAL.labels(status="parse_error").inc()
            error = f"Could not parse geolocation answer for IP {address}: {exc}"
            logging.error(error)
            return record.with_changes(error=error), error

        GEO_API_REQUESTS_TOTAL.labels(status="success").inc()
        resolved = resolved.with_changes(located=True)
        logging.debug(f"Parsed geo answer for IP {address}: {resolved}")
        return resolved, None
