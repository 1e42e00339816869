"""
Reporting interfaces.

- protocols: LookupReporter, the observability seam used by GeoLocator

ConsoleReporter lives in ui.py.
"""

from .protocols import LookupReporter

__all__ = [
    "LookupReporter",
]
