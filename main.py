from __future__ import annotations

import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, TYPE_CHECKING

from rich.console import Console

from config import ENABLE_METRICS, METRICS_ADDR, METRICS_PORT
from core.lookup_orchestrator import GeoLocator
from core.lookup_types import Classification
from infrastructure.metrics import start_metrics_server
from services.cache_service import CacheUnavailableError
from ui import ConsoleReporter, render_details

if TYPE_CHECKING:
    from core.lookup_types import LookupResult


EXIT_OK = 0
EXIT_LOOKUP_ERROR = 1
EXIT_STARTUP_ERROR = 2


def read_addresses(args: Iterable[str], stdin: Iterable[str] = sys.stdin) -> list[str]:
    """Expand ``-`` into one address per non-blank stdin line."""
    addresses: list[str] = []
    for arg in args:
        if arg == "-":
            addresses.extend(line.strip() for line in stdin if line.strip())
        else:
            addresses.append(arg)
    return addresses


class GeolocateApp:
    def __init__(
        self,
        console: Console | None = None,
        *,
        json_output: bool = False,
        details: bool = False,
        timeout: float | None = None,
        workers: int = 1,
        use_cache: bool = True,
        metrics: bool = ENABLE_METRICS,
    ) -> None:
        self.console = console or Console(highlight=False)
        self.json_output = json_output
        self.details = details
        self.timeout = timeout
        self.workers = max(1, workers)
        self.use_cache = use_cache
        self.metrics = metrics
        self.locator: GeoLocator | None = None

    def _build_locator(self) -> GeoLocator:
        # JSON mode keeps stdout machine-readable: no coloured lines
        reporter = None if self.json_output else ConsoleReporter(self.console)
        return GeoLocator.from_settings(reporter, use_cache=self.use_cache)

    def start(self) -> bool:
        if self.metrics:
            start_metrics_server(METRICS_ADDR, METRICS_PORT)
        try:
            self.locator = self._build_locator()
        except CacheUnavailableError as exc:
            logging.error(f"Startup failed: {exc}")
            self.console.print(f"[bold red]Startup failed:[/bold red] {exc}")
            return False
        return True

    def lookup_all(self, addresses: list[str]) -> list[LookupResult]:
        """Run lookups, in parallel when more than one worker is configured.

        Results come back in input order.
        """
        if self.locator is None:
            raise RuntimeError("GeolocateApp.start() must be called before lookups")
        locator = self.locator
        if self.workers == 1 or len(addresses) < 2:
            return [locator.lookup(addr, timeout=self.timeout) for addr in addresses]

        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="lookup") as executor:
            return list(executor.map(lambda addr: locator.lookup(addr, timeout=self.timeout), addresses))

    def run(self, addresses: list[str]) -> int:
        if not addresses:
            self.console.print("[yellow]No addresses given[/yellow]")
            return EXIT_LOOKUP_ERROR

        if not self.start():
            return EXIT_STARTUP_ERROR

        try:
            results = self.lookup_all(addresses)
        finally:
            self.shutdown()

        if self.json_output:
            for result in results:
                print(result.to_json())
        elif self.details:
            self.console.print(render_details(results))

        # Non-routable answers carry an error string but are expected outcomes
        failed = [r for r in results if r.error and r.classification is not Classification.NON_ROUTABLE]
        return EXIT_LOOKUP_ERROR if failed else EXIT_OK

    def shutdown(self) -> None:
        if self.locator is not None:
            self.locator.close()
            self.locator = None


__all__ = ["GeolocateApp", "read_addresses", "EXIT_OK", "EXIT_LOOKUP_ERROR", "EXIT_STARTUP_ERROR"]
