"""
Sailors / Boats / Reserves schema, table container and constraint checks.

Sailors  (tid, sid, sname, age)  unique on (tid, sid)
Boats    (bid, bname, color)     unique on (bid)
Reserves (tid, sid, bid, day)    (tid, sid) -> Sailors, bid -> Boats
"""

from typing import NamedTuple

import polars as pl
import structlog

logger = structlog.get_logger()

SAILORS_SCHEMA = {
    "tid": pl.Int64,
    "sid": pl.Int64,
    "sname": pl.Utf8,
    "age": pl.Int64,
}
BOATS_SCHEMA = {
    "bid": pl.Int64,
    "bname": pl.Utf8,
    "color": pl.Utf8,
}
RESERVES_SCHEMA = {
    "tid": pl.Int64,
    "sid": pl.Int64,
    "bid": pl.Int64,
    "day": pl.Date,
}

SAILOR_KEY = ["tid", "sid"]
BOAT_KEY = ["bid"]
RESERVATION_KEY = ["tid", "sid", "bid"]


class QueryLabError(Exception):
    """Base error for the query lab."""


class SchemaError(QueryLabError):
    """A table is missing required columns."""


class ConstraintViolation(QueryLabError):
    """A uniqueness or foreign key constraint does not hold."""


class ResultMismatch(QueryLabError):
    """A technique returned different rows than the reference evaluation."""


class Tables(NamedTuple):
    sailors: pl.DataFrame
    boats: pl.DataFrame
    reserves: pl.DataFrame

    def row_counts(self) -> dict[str, int]:
        return {name: len(df) for name, df in self._asdict().items()}


def build_tables(sailors: list[dict], boats: list[dict], reserves: list[dict]) -> Tables:
    """Build typed DataFrames from lists of row dicts."""
    return Tables(
        sailors=pl.DataFrame(sailors, schema=SAILORS_SCHEMA),
        boats=pl.DataFrame(boats, schema=BOATS_SCHEMA),
        reserves=pl.DataFrame(reserves, schema=RESERVES_SCHEMA),
    )


def _check_columns(name: str, df: pl.DataFrame, schema: dict) -> None:
    missing = set(schema) - set(df.columns)
    if missing:
        raise SchemaError(f"Table {name} missing required columns: {sorted(missing)}")


def _check_unique(name: str, df: pl.DataFrame, key: list[str]) -> None:
    dupes = df.filter(df.select(key).is_duplicated())
    if len(dupes) > 0:
        first = dupes.select(key).row(0, named=True)
        raise ConstraintViolation(
            f"Table {name} is not unique on {tuple(key)}: "
            f"{len(dupes)} rows share a key, e.g. {first}"
        )


def _check_reference(
    child: str, child_df: pl.DataFrame, parent: str, parent_df: pl.DataFrame, key: list[str]
) -> None:
    orphans = child_df.join(parent_df.select(key).unique(), on=key, how="anti")
    if len(orphans) > 0:
        first = orphans.select(key).row(0, named=True)
        raise ConstraintViolation(
            f"{len(orphans)} {child} rows reference missing {parent} {tuple(key)}, e.g. {first}"
        )


def validate_tables(tables: Tables, check_foreign_keys: bool = True) -> None:
    """
    Check required columns, uniqueness and (optionally) foreign keys.

    Raises:
        SchemaError: a table lacks required columns
        ConstraintViolation: a key constraint does not hold
    """
    _check_columns("Sailors", tables.sailors, SAILORS_SCHEMA)
    _check_columns("Boats", tables.boats, BOATS_SCHEMA)
    _check_columns("Reserves", tables.reserves, RESERVES_SCHEMA)

    _check_unique("Sailors", tables.sailors, SAILOR_KEY)
    _check_unique("Boats", tables.boats, BOAT_KEY)

    if check_foreign_keys:
        _check_reference("Reserves", tables.reserves, "Sailors", tables.sailors, SAILOR_KEY)
        _check_reference("Reserves", tables.reserves, "Boats", tables.boats, BOAT_KEY)

    logger.debug("tables_validated", **tables.row_counts())
