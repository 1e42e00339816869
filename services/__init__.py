"""Geolocation backends: the Redis cache and the remote API."""

from .cache_service import CacheUnavailableError, GeoCache
from .geo_service import GeoResolver

__all__ = [
    "CacheUnavailableError",
    "GeoCache",
    "GeoResolver",
]
