"""Rich table printing."""

from typing import Any

from rich.console import Console
from rich.table import Table


def build_table(
    rows: list[dict[str, Any]],
    columns: list[str] | None = None,
    title: str | None = None,
) -> Table:
    """Build a Rich table from row dictionaries.

    Args:
        rows: One dict per row. Missing keys render as empty cells.
        columns: Column order. Inferred from the first row if None.
        title: Optional table title.
    """
    if columns is None:
        columns = list(rows[0].keys()) if rows else []

    table = Table(title=title)
    for col in columns:
        table.add_column(col, style="cyan" if col == columns[0] else None)
    for row in rows:
        table.add_row(*[str(row.get(col, "")) for col in columns])
    return table


def print_table(
    rows: list[dict[str, Any]],
    columns: list[str] | None = None,
    title: str | None = None,
    console: Console | None = None,
) -> None:
    """Print rows as a table; prints nothing for an empty list."""
    if not rows:
        return
    (console or Console()).print(build_table(rows, columns, title))
