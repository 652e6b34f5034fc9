"""
Join technique: let Polars match rows on multi-column keys.

Q1  inner join Reserves -> Sailors on (tid, sid)
Q2  filter Sailors, inner join Reserves on (tid, sid), inner join Boats
Q3  cross join Sailors x Boats, anti join Reserves on (tid, sid, bid)
"""

import polars as pl

from ..queries import QueryParams
from ..schema import RESERVATION_KEY, SAILOR_KEY, Tables
from .base import Technique, register_technique


@register_technique("join")
class JoinTechnique(Technique):
    """Answer the queries with library joins, lazily planned."""

    @property
    def name(self) -> str:
        return "join"

    def q1(self, tables: Tables, params: QueryParams) -> pl.DataFrame:
        return (
            tables.reserves.lazy()
            .filter(pl.col("bid") == params.bid)
            .join(tables.sailors.lazy(), on=SAILOR_KEY, how="inner")
            .select("sname")
            .collect()
        )

    def q2(self, tables: Tables, params: QueryParams) -> pl.DataFrame:
        reservations = (
            tables.sailors.lazy()
            .filter(pl.col("sname") == params.sname)
            .select(SAILOR_KEY)
            .join(tables.reserves.lazy(), on=SAILOR_KEY, how="inner")
        )
        return (
            reservations.select(pl.col(params.q2_join_column).alias("_boat"))
            .join(tables.boats.lazy(), left_on="_boat", right_on="bid", how="inner")
            .select("color")
            .collect()
        )

    def q3(self, tables: Tables, params: QueryParams) -> pl.DataFrame:
        return (
            tables.sailors.lazy()
            .select(*SAILOR_KEY, "sname")
            .join(tables.boats.lazy().select("bid"), how="cross")
            .join(tables.reserves.lazy().select(RESERVATION_KEY), on=RESERVATION_KEY, how="anti")
            .select("bid", "sname")
            .collect()
        )
