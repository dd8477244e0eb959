"""Plain-text rendering of the hotspot report."""

from __future__ import annotations

from typing import Iterable

from tabulate import tabulate

from .models import ReportRow

HEADERS = ("FILE", "LINE", "FUNCTION", "FREQUENCY")


def render_table(rows: Iterable[ReportRow], *, tablefmt: str = "simple") -> str:
    """Return the report as a table. The header is present even with no rows."""
    body = [row.as_tuple() for row in rows]
    return tabulate(
        body,
        headers=HEADERS,
        tablefmt=tablefmt,
        colalign=("left", "right", "left", "right"),
        disable_numparse=True,
    )


__all__ = ["HEADERS", "render_table"]
