"""
Console rendering for tables, query results and SQL.
"""

import polars as pl
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

console = Console()


def print_section_header(title: str):
    """Print a formatted section header."""
    console.print(f"\n[bold cyan]{title}[/bold cyan]")


def print_sql(sql: str):
    console.print(Syntax(sql, "sql", theme="ansi_dark", background_color="default"))


def frame_to_table(df: pl.DataFrame, title: str | None = None, max_rows: int = 20) -> Table:
    """
    Render a DataFrame as a rich Table, truncated to `max_rows` rows.
    """
    table = Table(title=title)
    for column in df.columns:
        table.add_column(column, style="cyan")

    for row in df.head(max_rows).iter_rows():
        table.add_row(*[str(v) for v in row])

    if len(df) > max_rows:
        table.caption = f"{max_rows} of {len(df):,} rows"

    return table


def print_frame(df: pl.DataFrame, title: str | None = None, max_rows: int = 20):
    console.print(frame_to_table(df, title, max_rows))
