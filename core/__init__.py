"""
Core lookup pipeline.

- lookup_types: Classification tag and the LookupResult record
- classifier: address normalization and local/non-routable checks
- lookup_orchestrator: GeoLocator, the cache-aside entry point

GeoLocator is imported from core.lookup_orchestrator directly; it depends on
the services package, which in turn depends on lookup_types.
"""

from .lookup_types import Classification, LookupResult, UNKNOWN, UNKNOWN_CODE
from .classifier import (
    LOCAL_NETWORK_RECORD,
    NON_ROUTABLE_PREFIXES,
    classify,
    match_local,
    match_non_routable,
    normalize_address,
)

__all__ = [
    "Classification",
    "LookupResult",
    "UNKNOWN",
    "UNKNOWN_CODE",
    "LOCAL_NETWORK_RECORD",
    "NON_ROUTABLE_PREFIXES",
    "classify",
    "match_local",
    "match_non_routable",
    "normalize_address",
]
