#!/usr/bin/env python3
"""
Standalone health check script for Docker/Kubernetes.
Verifies that the Redis cache configured in REDIS_CONF answers PING.
The password is taken from REDIS_PASSWORD or a Docker secret file (REDIS_PASSWORD_FILE).
"""

import os
import sys
import time
from pathlib import Path

# Allow running this file directly: `python scripts/healthcheck.py`
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from services.cache_service import CacheUnavailableError, GeoCache


def read_secret(name: str) -> str | None:
    """Read secret from file (via _FILE env var) or direct env var."""
    # Try _FILE variant first (Docker Secrets)
    file_path = os.environ.get(f"{name}_FILE")
    if file_path and os.path.exists(file_path):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return f.read().strip()
        except OSError as e:
            print(f"Cannot read {name}_FILE: {e}")

    # Fallback to direct env var
    return os.environ.get(name) or None


def main() -> int:
    addr = os.environ.get("REDIS_CONF", "")
    if not addr:
        print("Health check skipped: REDIS_CONF not set (cache disabled)")
        return 0

    start_time = time.time()
    try:
        GeoCache.connect(
            addr,
            password=read_secret("REDIS_PASSWORD"),
            db=int(os.environ.get("REDIS_DB", "0")),
            socket_timeout=float(os.environ.get("REDIS_SOCKET_TIMEOUT", "2")),
        )
    except ValueError as e:
        print(f"Health check failed: bad configuration {e}")
        return 1
    except CacheUnavailableError as e:
        print(f"Health check failed: {e}")
        return 1

    print(f"Health check passed in {time.time() - start_time:.3f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
