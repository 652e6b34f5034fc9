"""
Seeded synthetic Sailors/Boats/Reserves generation.

Keys are assigned deterministically so the uniqueness constraints always
hold; only names, ages, colors and reservations are random.
"""

from datetime import date, timedelta
from typing import Any

import numpy as np
import polars as pl

from ..schema import BOATS_SCHEMA, RESERVES_SCHEMA, SAILORS_SCHEMA, Tables
from .base import TableSource, register_source

EPOCH = date(2024, 1, 1)
DAYS_IN_SEASON = 366


@register_source("synthetic")
class SyntheticSource(TableSource):
    """
    Random tables at a configurable scale.

    Sailor i gets tid = i % teams + 1 and sid = i // teams + 1, which makes
    (tid, sid) unique while sid alone repeats across teams.
    """

    def load(self) -> Tables:
        n_sailors = self.config["scale"]
        seed = self.config["seed"]
        synthetic = self.config["synthetic"]

        rng = np.random.default_rng(seed)

        self.logger.info("generating_synthetic_tables", sailors=n_sailors, seed=seed)

        sailors = self._generate_sailors(rng, n_sailors, synthetic)
        boats = self._generate_boats(rng, synthetic)
        reserves = self._generate_reserves(rng, sailors, boats, synthetic)

        tables = Tables(sailors=sailors, boats=boats, reserves=reserves)
        self.logger.info("synthetic_tables_generated", **tables.row_counts())
        return tables

    def _generate_sailors(
        self, rng: np.random.Generator, n_sailors: int, synthetic: dict[str, Any]
    ) -> pl.DataFrame:
        teams = synthetic["teams"]
        idx = np.arange(n_sailors)

        return pl.DataFrame(
            {
                "tid": idx % teams + 1,
                "sid": idx // teams + 1,
                "sname": rng.choice(synthetic["names"], n_sailors).tolist(),
                "age": rng.integers(18, 70, n_sailors),
            },
            schema=SAILORS_SCHEMA,
        )

    def _generate_boats(self, rng: np.random.Generator, synthetic: dict[str, Any]) -> pl.DataFrame:
        n_boats = synthetic["boats"]
        bids = np.arange(n_boats) + synthetic["first_bid"]

        return pl.DataFrame(
            {
                "bid": bids,
                "bname": [f"boat-{b}" for b in bids],
                "color": rng.choice(synthetic["colors"], n_boats).tolist(),
            },
            schema=BOATS_SCHEMA,
        )

    def _generate_reserves(
        self,
        rng: np.random.Generator,
        sailors: pl.DataFrame,
        boats: pl.DataFrame,
        synthetic: dict[str, Any],
    ) -> pl.DataFrame:
        n_reserves = len(sailors) * synthetic["reservations_per_sailor"]

        if n_reserves == 0 or len(sailors) == 0:
            return pl.DataFrame(schema=RESERVES_SCHEMA)

        # Pick existing rows so foreign keys are always valid
        sailor_rows = rng.integers(0, len(sailors), n_reserves)
        boat_rows = rng.integers(0, len(boats), n_reserves)
        offsets = rng.integers(0, DAYS_IN_SEASON, n_reserves)

        return pl.DataFrame(
            {
                "tid": sailors["tid"].gather(pl.Series(sailor_rows)),
                "sid": sailors["sid"].gather(pl.Series(sailor_rows)),
                "bid": boats["bid"].gather(pl.Series(boat_rows)),
                "day": [EPOCH + timedelta(days=int(o)) for o in offsets],
            },
            schema=RESERVES_SCHEMA,
        )
