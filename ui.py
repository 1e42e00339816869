from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from config import UI_THEME
from config.ui_theme import Theme, get_theme
from core.lookup_types import Classification, UNKNOWN, UNKNOWN_CODE

if TYPE_CHECKING:
    from core.lookup_types import LookupResult


def color_for(result: LookupResult, theme: Theme) -> str:
    """Pick the console colour for a finished lookup."""
    classification = result.classification
    if classification is Classification.LOCAL:
        return theme.local
    if classification is Classification.NON_ROUTABLE:
        return theme.non_routable
    if classification is Classification.CACHE_HIT:
        return theme.cache_hit
    return theme.remote


class ConsoleReporter:
    """Prints one coloured line per lookup and logs the full record as JSON."""

    def __init__(self, console: Console | None = None, theme: Theme | None = None) -> None:
        self.console = console or Console(highlight=False)
        self.theme = theme or get_theme(UI_THEME)

    def report(self, result: LookupResult) -> None:
        color = color_for(result, self.theme)
        hit = result.classification is Classification.CACHE_HIT
        line = (
            f"{{IP:[{color}]{escape(result.address)}[/{color}], "
            f"CC:{escape(result.country_code)}, Hit:{str(hit).lower()}, "
            f"Class:{result.classification}}}"
        )
        if result.error and result.classification is not Classification.NON_ROUTABLE:
            line += f" [{self.theme.error}]{escape(result.error)}[/{self.theme.error}]"
        self.console.print(line)

        logging.info(result.to_json())


def _cell(value: object) -> str:
    if value is None or value in (UNKNOWN, UNKNOWN_CODE):
        return "[dim]-[/dim]"
    return escape(str(value))


def render_details(results: list[LookupResult], theme: Theme | None = None) -> Table:
    """Tabular view of the descriptive fields, one row per lookup."""
    theme = theme or get_theme(UI_THEME)
    tbl = Table(show_header=True, header_style="bold", box=None, padding=(0, 1))
    for column in ("IP", "Class", "ISP", "Org", "City", "Region", "Country", "ASN", "Coordinates"):
        tbl.add_column(column)

    for result in results:
        color = color_for(result, theme)
        coords = "-"
        if result.latitude is not None and result.longitude is not None:
            coords = f"{result.latitude:.4f}, {result.longitude:.4f}"
        country = result.country_name
        if result.country_code != UNKNOWN_CODE:
            country = f"{result.country_name} ({result.country_code})"
        tbl.add_row(
            f"[{color}]{escape(result.address)}[/{color}]",
            str(result.classification),
            _cell(result.isp),
            _cell(result.org),
            _cell(result.city),
            _cell(result.region),
            _cell(country),
            _cell(result.asn),
            coords,
        )
    return tbl
