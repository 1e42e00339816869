"""
Command-line entry point for IP geolocation lookups.
"""

import sys
import os


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for the geolocate application."""
    import argparse
    import logging

    # Parse CLI args BEFORE config is imported so env var overrides take effect
    parser = argparse.ArgumentParser(
        description="Geolocate IP addresses through a Redis cache and geoiplookup.io",
        prog="geolocate"
    )
    parser.add_argument(
        "addresses",
        nargs="*",
        metavar="ADDRESS",
        help="IPv4 address to look up; three-octet input is completed; '-' reads stdin",
    )
    parser.add_argument(
        "--timeout",
        "-t",
        type=float,
        help="Deadline per lookup in seconds (default: API client timeout)",
    )
    parser.add_argument(
        "--workers",
        "-w",
        type=int,
        default=1,
        help="Number of lookups to run in parallel (default: 1)",
    )
    parser.add_argument("--json", action="store_true", help="Print one JSON record per line")
    parser.add_argument("--details", action="store_true", help="Print a table of all fields")
    parser.add_argument("--no-cache", action="store_true", help="Skip the Redis cache")
    parser.add_argument("--metrics", action="store_true", help="Serve Prometheus metrics while running")
    parser.add_argument("--redis", type=str, help="Redis address host:port (overrides REDIS_CONF)")
    parser.add_argument("--local-prefix", type=str, help="Prefix of the local network (overrides LOCAL_PREFIX)")
    args = parser.parse_args(argv)

    # Set env vars BEFORE config module is imported by other modules
    if args.redis:
        os.environ["REDIS_CONF"] = args.redis
    if args.local_prefix is not None:
        os.environ["LOCAL_PREFIX"] = args.local_prefix

    from config import (
        ENABLE_METRICS,
        LOG_DIR,
        LOG_FILE,
        LOG_LEVEL,
        LOG_TRUNCATE_ON_START,
    )

    # Create log directory if it doesn't exist
    os.makedirs(LOG_DIR, exist_ok=True)

    logging.basicConfig(
        filename=LOG_FILE,
        filemode='w' if LOG_TRUNCATE_ON_START else 'a',
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(threadName)s %(message)s",
        encoding="utf-8",
    )

    from main import GeolocateApp, read_addresses

    app = GeolocateApp(
        json_output=args.json,
        details=args.details,
        timeout=args.timeout,
        workers=args.workers,
        use_cache=not args.no_cache,
        metrics=args.metrics or ENABLE_METRICS,
    )
    return app.run(read_addresses(args.addresses))


if __name__ == "__main__":
    sys.exit(main())
