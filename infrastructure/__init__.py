from __future__ import annotations

"""Infrastructure layer for metrics."""

from .metrics import (
    CACHE_REQUESTS_TOTAL,
    GEO_API_LATENCY_MS,
    GEO_API_REQUESTS_TOTAL,
    LOOKUPS_TOTAL,
    start_metrics_server,
)

__all__ = [
    "LOOKUPS_TOTAL",
    "CACHE_REQUESTS_TOTAL",
    "GEO_API_REQUESTS_TOTAL",
    "GEO_API_LATENCY_MS",
    "start_metrics_server",
]
