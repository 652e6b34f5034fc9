"""
The three Sailors/Boats/Reserves queries: SQL text, parameters and result shape.

Q1  join                 names of sailors who reserved boat <bid>
Q2  join then filter     colors of boats reserved by sailors named <sname>
Q3  division / anti-join (bid, sname) pairs with no matching reservation
"""

from dataclasses import dataclass
from typing import Literal

import polars as pl

from .config_loader import QueriesConfig

QueryName = Literal["q1", "q2", "q3"]


@dataclass(frozen=True)
class QueryParams:
    """Parameters shared by every technique"""

    bid: int = 103
    sname: str = "a"
    q2_join_column: Literal["bid", "sid"] = "bid"
    distinct: bool = True

    @classmethod
    def from_config(cls, config: QueriesConfig) -> "QueryParams":
        return cls(
            bid=config.q1.bid,
            sname=config.q2.sname,
            q2_join_column=config.q2.join_column,
            distinct=config.distinct,
        )


RESULT_SCHEMAS: dict[str, dict[str, pl.DataType]] = {
    "q1": {"sname": pl.Utf8},
    "q2": {"color": pl.Utf8},
    "q3": {"bid": pl.Int64, "sname": pl.Utf8},
}


def sql_text(query: QueryName, params: QueryParams) -> str:
    """Return the SQL a query stands for, with parameters filled in."""
    if query == "q1":
        return (
            "SELECT S.sname\n"
            "FROM Sailors S, Reserves R\n"
            f"WHERE S.tid = R.tid AND S.sid = R.sid AND R.bid = {params.bid}"
        )
    if query == "q2":
        return (
            "SELECT B.color\n"
            "FROM Sailors S, Reserves R, Boats B\n"
            "WHERE S.tid = R.tid AND S.sid = R.sid\n"
            f"  AND B.bid = R.{params.q2_join_column} AND S.sname = '{params.sname}'"
        )
    if query == "q3":
        return (
            "SELECT B.bid, S.sname\n"
            "FROM Sailors S, Boats B\n"
            "WHERE NOT EXISTS (\n"
            "  SELECT * FROM Reserves R\n"
            "  WHERE R.tid = S.tid AND R.sid = S.sid AND R.bid = B.bid)"
        )
    raise ValueError(f"Unknown query: {query}")


def finalize(df: pl.DataFrame, query: QueryName, params: QueryParams) -> pl.DataFrame:
    """
    Cast to the query's result schema, optionally drop duplicates, and sort
    by every output column so results from different techniques compare equal.
    """
    schema = RESULT_SCHEMAS[query]
    columns = list(schema)

    result = df.select([pl.col(c).cast(t) for c, t in schema.items()])
    if params.distinct:
        result = result.unique()

    return result.sort(columns)
