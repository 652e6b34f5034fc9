"""
Composite-key technique: concatenate key columns into a single string and use
that string as the row identifier.

Sailors are only unique on (tid, sid), so neither tid nor sid alone can name
a row. "1_2" can. Once every table carries such a key, the queries reduce to
dictionary lookups and key membership tests, with no join at all.

The separator matters: without it (1, 12) and (11, 2) both become "112".
"""

import polars as pl

from ..queries import QueryParams
from ..schema import BOAT_KEY, RESERVATION_KEY, SAILOR_KEY, Tables
from .base import Technique, register_technique

KEY = "key"


def make_composite_key(
    df: pl.DataFrame, columns: list[str], separator: str = "_", alias: str = KEY
) -> pl.DataFrame:
    """Add a string column joining `columns` with `separator`."""
    return df.with_columns(
        pl.concat_str([pl.col(c).cast(pl.Utf8) for c in columns], separator=separator).alias(
            alias
        )
    )


def key_index(df: pl.DataFrame, value: str) -> dict[str, object]:
    """Map each row's key to one of its values: a row-by-key lookup table."""
    return dict(zip(df[KEY].to_list(), df[value].to_list()))


@register_technique("composite_key")
class CompositeKeyTechnique(Technique):
    """
    Answer the queries by building string keys and looking rows up by key.
    """

    @property
    def name(self) -> str:
        return "composite_key"

    @property
    def separator(self) -> str:
        return self.config.get("key_separator", "_")

    def _keyed(self, df: pl.DataFrame, columns: list[str]) -> pl.DataFrame:
        return make_composite_key(df, columns, self.separator)

    @staticmethod
    def _lookup(keyed: pl.DataFrame, index: dict[str, object], alias: str) -> pl.DataFrame:
        """
        Replace each key with its indexed value. Keys missing from the index
        drop the row; a null value found in the index is kept.
        """
        if not index:
            return pl.DataFrame(schema={alias: pl.Utf8})

        return keyed.filter(pl.col(KEY).is_in(list(index))).select(
            pl.col(KEY).replace_strict(index, return_dtype=pl.Utf8).alias(alias)
        )

    def q1(self, tables: Tables, params: QueryParams) -> pl.DataFrame:
        """Look up the sailor behind every reservation of boat `bid`."""
        sname_by_key = key_index(self._keyed(tables.sailors, SAILOR_KEY), "sname")

        reserved = self._keyed(tables.reserves.filter(pl.col("bid") == params.bid), SAILOR_KEY)

        return self._lookup(reserved, sname_by_key, "sname")

    def q2(self, tables: Tables, params: QueryParams) -> pl.DataFrame:
        """Keys of sailors named `sname` select reservations; boats are looked up by key."""
        named = self._keyed(tables.sailors.filter(pl.col("sname") == params.sname), SAILOR_KEY)
        color_by_key = key_index(self._keyed(tables.boats, BOAT_KEY), "color")

        reservations = self._keyed(tables.reserves, SAILOR_KEY).filter(
            pl.col(KEY).is_in(named[KEY].to_list())
        )

        # Boats are keyed on bid alone, so the lookup key is one column wide
        boat_keys = self._keyed(reservations.drop(KEY), [params.q2_join_column])

        return self._lookup(boat_keys, color_by_key, "color")

    def q3(self, tables: Tables, params: QueryParams) -> pl.DataFrame:
        """Enumerate every (sailor, boat) key and keep the ones never reserved."""
        if len(tables.boats) == 0 or len(tables.sailors) == 0:
            return pl.DataFrame(schema={"bid": pl.Int64, "sname": pl.Utf8})

        reserved_keys = self._keyed(tables.reserves, RESERVATION_KEY)[KEY].unique()

        candidates = pl.concat(
            [
                tables.sailors.with_columns(pl.lit(bid, dtype=pl.Int64).alias("bid"))
                for bid in tables.boats["bid"].to_list()
            ]
        )
        candidates = self._keyed(candidates, RESERVATION_KEY)

        return candidates.filter(~pl.col(KEY).is_in(reserved_keys.to_list())).select(
            "bid", "sname"
        )
