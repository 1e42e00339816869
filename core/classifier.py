"""Address normalization and local/non-routable classification.

Every function here is pure: it takes a LookupResult and returns a new one
(or None when the check does not apply).
"""

from __future__ import annotations

from typing import Final, Optional

from core.lookup_types import Classification, LookupResult


DEFAULT_COMPLETION_OCTET: Final[str] = "112"
DEFAULT_LOCAL_PREFIX: Final[str] = "192.168.106."

# RFC1918: 10.0.0.0/8, 172.16.0.0/12 (as sixteen /16 prefixes), 192.168.0.0/16
NON_ROUTABLE_PREFIXES: Final[tuple[str, ...]] = (
    "192.168.",
    "10.",
    *(f"172.{second}." for second in range(16, 32)),
)

# "Home" record for the deployment's own network
LOCAL_NETWORK_RECORD: Final[dict[str, str]] = {
    "isp": "LaughingJ",
    "city": "Lewisville",
    "country_code": "US",
    "country_name": "United States",
}

NON_ROUTABLE_ERROR: Final[str] = "Invalid public IPv4 or IPv6 address {ip}"


def normalize_address(record: LookupResult, octet: str = DEFAULT_COMPLETION_OCTET) -> LookupResult:
    """Complete a three-octet address with a fixed fourth octet.

    ``a.b.c`` becomes ``a.b.c.<octet>`` so that the same logical host always
    yields the same class and cache key.
    """
    address = record.address.strip()
    octets = address.split(".")
    if len(octets) == 3:
        address = f"{address}.{octet}"
    if address == record.address:
        return record
    return record.with_changes(address=address)


def _under_local_prefix(address: str, local_prefix: str) -> bool:
    return bool(local_prefix) and address.startswith(local_prefix)


def match_local(record: LookupResult, local_prefix: str = DEFAULT_LOCAL_PREFIX) -> Optional[LookupResult]:
    """Return the local-network record if ``record`` is on our own network."""
    if not _under_local_prefix(record.address, local_prefix):
        return None
    return record.with_changes(
        **LOCAL_NETWORK_RECORD,
        success=True,
        located=True,
        error="",
        classification=Classification.LOCAL,
    )


def match_non_routable(record: LookupResult, local_prefix: str = DEFAULT_LOCAL_PREFIX) -> Optional[LookupResult]:
    """Return a failed record if ``record`` sits in a private range.

    Addresses under the local prefix are never reported as non-routable.
    """
    address = record.address
    if _under_local_prefix(address, local_prefix):
        return None
    if not address.startswith(NON_ROUTABLE_PREFIXES):
        return None
    return record.with_changes(
        success=False,
        located=False,
        error=NON_ROUTABLE_ERROR.format(ip=address),
        classification=Classification.NON_ROUTABLE,
    )


def classify(record: LookupResult, local_prefix: str = DEFAULT_LOCAL_PREFIX) -> LookupResult:
    """Apply the local check, then the non-routable check; first match wins.

    A routable address comes back unchanged and is eligible for cache/remote
    resolution.
    """
    local = match_local(record, local_prefix)
    if local is not None:
        return local
    non_routable = match_non_routable(record, local_prefix)
    if non_routable is not None:
        return non_routable
    return record


def is_terminal(record: LookupResult) -> bool:
    """True when classification alone settles the lookup."""
    return record.classification in (Classification.LOCAL, Classification.NON_ROUTABLE)
