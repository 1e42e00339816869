"""
Application configuration.

All values come from a single ``Settings`` instance and can be overridden via
environment variables or a ``.env`` file in the working directory.
"""

from .settings_model import Settings
from .ui_theme import THEMES, Theme, get_theme

_settings = Settings()

VERSION = _settings.VERSION

# Cache backend
REDIS_CONF = _settings.REDIS_CONF
REDIS_PASSWORD = _settings.REDIS_PASSWORD or None
REDIS_DB = _settings.REDIS_DB
REDIS_SOCKET_TIMEOUT = _settings.REDIS_SOCKET_TIMEOUT
CACHE_TTL_MINUTES = _settings.CACHE_TTL_MINUTES

# Geolocation API
GEO_API_URL = _settings.GEO_API_URL
GEO_API_TIMEOUT = _settings.GEO_API_TIMEOUT

# Address classification
LOCAL_PREFIX = _settings.LOCAL_PREFIX
COMPLETION_OCTET = _settings.COMPLETION_OCTET

# Console
UI_THEME = _settings.UI_THEME

# Metrics
ENABLE_METRICS = _settings.ENABLE_METRICS
METRICS_ADDR = _settings.METRICS_ADDR
METRICS_PORT = _settings.METRICS_PORT

# Logging
LOG_DIR = _settings.LOG_DIR
LOG_FILE = _settings.LOG_FILE
LOG_LEVEL = _settings.LOG_LEVEL
LOG_TRUNCATE_ON_START = _settings.LOG_TRUNCATE_ON_START

__all__ = [
    "Settings",
    "Theme",
    "THEMES",
    "get_theme",
    "VERSION",
    "REDIS_CONF",
    "REDIS_PASSWORD",
    "REDIS_DB",
    "REDIS_SOCKET_TIMEOUT",
    "CACHE_TTL_MINUTES",
    "GEO_API_URL",
    "GEO_API_TIMEOUT",
    "LOCAL_PREFIX",
    "COMPLETION_OCTET",
    "UI_THEME",
    "ENABLE_METRICS",
    "METRICS_ADDR",
    "METRICS_PORT",
    "LOG_DIR",
    "LOG_FILE",
    "LOG_LEVEL",
    "LOG_TRUNCATE_ON_START",
]
