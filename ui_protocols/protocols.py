"""
Lookup reporting protocol.

The orchestrator hands every finished record to a reporter and never depends
on how (or whether) it is rendered.
"""

from __future__ import annotations

from typing import Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from core.lookup_types import LookupResult


@runtime_checkable
class LookupReporter(Protocol):
    """
    Anything that consumes finished lookups:
    - ConsoleReporter (coloured terminal line + JSON log line)
    - a recording fake in tests
    """

    def report(self, result: LookupResult) -> None:
        """Publish one finished lookup. Must not mutate ``result``."""
        ...
