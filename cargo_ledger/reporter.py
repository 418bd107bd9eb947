from __future__ import annotations

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from cargo_ledger.domain.models import LedgerRecord


def _format_cell(value: object) -> str:
    # Full precision: a tiny positive value must not render as zero.
    if isinstance(value, float):
        return f"{value:,}"
    return str(value)


def build_records_table(records: Sequence[LedgerRecord], title: str) -> Table:
    """
    Build a rich table for ships or containers.

    Columns follow the model fields in declaration order (id first); numbers
    are right-aligned and floats keep their full precision.
    """
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    headers = tuple(type(records[0]).model_fields) if records else ("id",)
    sample = records[0].model_dump() if records else {}

    for header in headers:
        numeric = isinstance(sample.get(header), (int, float)) or header == "id"
        table.add_column(header, justify="right" if numeric else "left")

    for record in records:
        values = record.model_dump()
        table.add_row(*(_format_cell(values[header]) for header in headers))
    return table


def print_records(
    records: Sequence[LedgerRecord], title: str, console: Optional[Console] = None
) -> None:
    """Render records to the terminal (stdout by default)."""
    console = console or Console()
    if not records:
        console.print(f"No {title.lower()} stored.")
        return
    console.print(build_records_table(records, title))
    console.print(f"{len(records)} record(s)")


__all__ = ["build_records_table", "print_records"]
