"""
Lookup data models.

Defines the classification tag and the result record that flows through the
geolocation pipeline. Records are immutable; each pipeline stage returns an
updated copy.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Optional


UNKNOWN = "-----"
UNKNOWN_CODE = "--"


class Classification(Enum):
    """Where a lookup ended up."""

    LOCAL = "local"
    NON_ROUTABLE = "non-routable"
    CACHE_HIT = "cache-hit"
    CACHE_MISS = "cache-miss"
    RESOLVED = "resolved"

    def __str__(self) -> str:
        return self.value


# Python attribute name -> JSON key, where they differ
_JSON_KEYS: Dict[str, str] = {
    "address": "ip",
    "classification": "ip_class",
}

# Descriptive fields that the geolocation API fills in (JSON key -> attribute)
_API_STRING_FIELDS: Dict[str, str] = {
    "isp": "isp",
    "org": "org",
    "hostname": "hostname",
    "city": "city",
    "country_code": "country_code",
    "country_name": "country_name",
    "region": "region",
    "postal_code": "postal_code",
    "timezone_name": "timezone_name",
    "continent_code": "continent_code",
    "asn": "asn",
    "asn_org": "asn_org",
    "currency_code": "currency_code",
}
_API_FLOAT_FIELDS: Dict[str, str] = {
    "latitude": "latitude",
    "longitude": "longitude",
}


@dataclass(frozen=True)
class LookupResult:
    """
    Geolocation record for a single IP address.

    Attributes:
        address: Normalized IP string; doubles as the cache key
        isp, org, hostname: Network owner information
        city, region, postal_code, country_code, country_name: Location
        timezone_name, continent_code, currency_code: Extended location data
        asn, asn_org: Autonomous system number and owner
        latitude, longitude: Coordinates, None until resolved
        success: Whether the record represents a confirmed resolution
        error: Human-readable failure reason, empty when none
        located: Set once a location payload was parsed
        classification: Single tag describing where the lookup ended up
    """

    address: str
    isp: str = UNKNOWN
    org: str = UNKNOWN
    hostname: str = UNKNOWN
    city: str = UNKNOWN
    country_code: str = UNKNOWN_CODE
    country_name: str = UNKNOWN
    region: str = UNKNOWN
    postal_code: str = UNKNOWN
    timezone_name: str = UNKNOWN
    continent_code: str = UNKNOWN_CODE
    asn: str = UNKNOWN
    asn_org: str = UNKNOWN
    currency_code: str = UNKNOWN_CODE
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    success: bool = False
    error: str = ""
    located: bool = False
    # A routable record that has not been served from the cache is a miss
    classification: Classification = Classification.CACHE_MISS

    @classmethod
    def fresh(cls, address: str) -> LookupResult:
        """Create a record with sentinel defaults for ``address``."""
        return cls(address=address)

    def with_changes(self, **changes: Any) -> LookupResult:
        return replace(self, **changes)

    def is_usable(self) -> bool:
        """A record whose country code is still the sentinel was never resolved."""
        return self.country_code != UNKNOWN_CODE

    def descriptive_fields(self) -> Dict[str, Any]:
        """Everything except the pipeline bookkeeping (classification)."""
        data = asdict(self)
        data.pop("classification")
        return data

    # ── serialization ───────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Classification):
                value = value.value
            data[_JSON_KEYS.get(f.name, f.name)] = value
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LookupResult:
        """Build a record from its JSON form.

        Unknown keys are ignored. Raises ValueError when the address is missing
        or the classification tag is not recognised.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            key = _JSON_KEYS.get(f.name, f.name)
            if key in data:
                kwargs[f.name] = data[key]

        if not kwargs.get("address"):
            raise ValueError("Record has no 'ip' field")
        if "classification" in kwargs:
            kwargs["classification"] = Classification(kwargs["classification"])
        return cls(**kwargs)

    @classmethod
    def from_json(cls, raw: str | bytes) -> LookupResult:
        return cls.from_dict(json.loads(raw))

    def merge_api_payload(self, payload: Dict[str, Any]) -> LookupResult:
        """Map a geolocation API response onto the descriptive fields.

        The address is never rewritten: it is the cache key and must stay the
        normalized form.
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")

        changes: Dict[str, Any] = {}
        for key, attr in _API_STRING_FIELDS.items():
            value = payload.get(key)
            if value not in (None, ""):
                changes[attr] = str(value)
        for key, attr in _API_FLOAT_FIELDS.items():
            value = payload.get(key)
            if value not in (None, ""):
                try:
                    changes[attr] = float(value)
                except (TypeError, ValueError):
                    pass
        if "success" in payload:
            changes["success"] = bool(payload["success"])
        if payload.get("error"):
            changes["error"] = str(payload["error"])
        return replace(self, **changes)
