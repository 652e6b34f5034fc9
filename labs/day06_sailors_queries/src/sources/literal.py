"""
The small hand-written fixture used throughout the write-up.
"""

from datetime import date

from ..schema import Tables, build_tables
from .base import TableSource, register_source

# Two sailors are named "a", and sid values repeat across teams, so only
# (tid, sid) identifies a sailor.
SAILORS = [
    {"tid": 1, "sid": 1, "sname": "a", "age": 25},
    {"tid": 1, "sid": 2, "sname": "b", "age": 31},
    {"tid": 2, "sid": 1, "sname": "c", "age": 45},
    {"tid": 2, "sid": 2, "sname": "a", "age": 19},
    {"tid": 3, "sid": 1, "sname": "d", "age": 52},
]

BOATS = [
    {"bid": 101, "bname": "Interlake", "color": "blue"},
    {"bid": 102, "bname": "Interlake", "color": "red"},
    {"bid": 103, "bname": "Clipper", "color": "green"},
    {"bid": 104, "bname": "Marine", "color": "red"},
]

RESERVES = [
    {"tid": 1, "sid": 1, "bid": 101, "day": date(2024, 10, 10)},
    {"tid": 1, "sid": 1, "bid": 103, "day": date(2024, 10, 11)},
    {"tid": 2, "sid": 1, "bid": 103, "day": date(2024, 10, 12)},
    {"tid": 2, "sid": 2, "bid": 102, "day": date(2024, 11, 1)},
    {"tid": 3, "sid": 1, "bid": 104, "day": date(2024, 11, 2)},
    {"tid": 1, "sid": 2, "bid": 103, "day": date(2024, 11, 3)},
    # same sailor, same boat, another day
    {"tid": 2, "sid": 2, "bid": 102, "day": date(2024, 11, 15)},
]


def literal_tables() -> Tables:
    """Return fresh DataFrames for the literal fixture."""
    return build_tables(SAILORS, BOATS, RESERVES)


@register_source("literal")
class LiteralSource(TableSource):
    """Serve the literal fixture. Scale and seed are ignored."""

    def load(self) -> Tables:
        tables = literal_tables()
        self.logger.info("literal_tables_loaded", **tables.row_counts())
        return tables
