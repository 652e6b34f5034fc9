"""
Compare technique output with the reference evaluation.
"""

import polars as pl

from .schema import ResultMismatch


def results_match(result: pl.DataFrame, expected: pl.DataFrame) -> bool:
    """True when both frames hold the same rows (as bags) with the same columns."""
    if result.columns != expected.columns or len(result) != len(expected):
        return False
    columns = result.columns
    return result.sort(columns).equals(expected.sort(columns))


def check_result(
    result: pl.DataFrame, expected: pl.DataFrame, technique: str, query: str
) -> None:
    """
    Raise ResultMismatch if `result` differs from `expected`.

    The message names the technique, the query and the row counts.
    """
    if not results_match(result, expected):
        raise ResultMismatch(
            f"{technique} returned {len(result)} rows for {query}, "
            f"reference returned {len(expected)}"
        )
