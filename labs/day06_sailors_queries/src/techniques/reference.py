"""
Reference evaluation: the SQL read literally, as nested loops over row dicts.

Slow, but obviously correct on small inputs. Used to check the other
techniques.
"""

import polars as pl

from ..queries import QueryParams
from ..schema import Tables
from .base import Technique, register_technique


@register_technique("reference")
class ReferenceTechnique(Technique):
    """Tuple-at-a-time relational algebra over Python rows."""

    @property
    def name(self) -> str:
        return "reference"

    def q1(self, tables: Tables, params: QueryParams) -> pl.DataFrame:
        snames = [
            s["sname"]
            for s in tables.sailors.iter_rows(named=True)
            for r in tables.reserves.iter_rows(named=True)
            if s["tid"] == r["tid"] and s["sid"] == r["sid"] and r["bid"] == params.bid
        ]
        return pl.DataFrame({"sname": snames}, schema={"sname": pl.Utf8})

    def q2(self, tables: Tables, params: QueryParams) -> pl.DataFrame:
        colors = [
            b["color"]
            for s in tables.sailors.iter_rows(named=True)
            for r in tables.reserves.iter_rows(named=True)
            for b in tables.boats.iter_rows(named=True)
            if s["tid"] == r["tid"]
            and s["sid"] == r["sid"]
            and b["bid"] == r[params.q2_join_column]
            and s["sname"] == params.sname
        ]
        return pl.DataFrame({"color": colors}, schema={"color": pl.Utf8})

    def q3(self, tables: Tables, params: QueryParams) -> pl.DataFrame:
        reserved = {(r["tid"], r["sid"], r["bid"]) for r in tables.reserves.iter_rows(named=True)}
        pairs = [
            (b["bid"], s["sname"])
            for s in tables.sailors.iter_rows(named=True)
            for b in tables.boats.iter_rows(named=True)
            if (s["tid"], s["sid"], b["bid"]) not in reserved
        ]
        return pl.DataFrame(
            pairs, schema={"bid": pl.Int64, "sname": pl.Utf8}, orient="row"
        )
