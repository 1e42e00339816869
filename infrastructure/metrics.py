from __future__ import annotations

"""Prometheus metrics for the lookup pipeline."""

import logging

from prometheus_client import Counter, Histogram, start_http_server


# Pipeline outcomes
LOOKUPS_TOTAL = Counter(
    "geolocate_lookups_total", "Completed lookups by classification", ["classification"]
)

# Cache backend
CACHE_REQUESTS_TOTAL = Counter(
    "geolocate_cache_requests_total", "Cache operations by outcome", ["operation", "status"]
)

# Remote geolocation API
GEO_API_REQUESTS_TOTAL = Counter(
    "geolocate_api_requests_total", "Geolocation API requests by outcome", ["status"]
)
GEO_API_LATENCY_MS = Histogram(
    "geolocate_api_latency_ms",
    "Geolocation API latency ms",
    buckets=(25, 50, 100, 250, 500, 1000, 2500, 5000, 10000),
)


def start_metrics_server(addr: str = "127.0.0.1", port: int = 8000) -> bool:
    """Expose /metrics over HTTP in a daemon thread.

    Binding to anything but localhost is allowed but logged, since the
    endpoint has no authentication.

    Returns:
        True if the server is listening, False otherwise.
    """
    if addr not in ("127.0.0.1", "localhost"):
        logging.warning(f"METRICS_ADDR={addr}: metrics endpoint is reachable without authentication")

    try:
        start_http_server(port, addr=addr)
    except OSError as exc:
        logging.error(f"Failed to start metrics server on {addr}:{port}: {exc}")
        return False

    logging.info(f"Metrics server started on http://{addr}:{port}/metrics")
    return True
