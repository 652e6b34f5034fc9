"""
Tests for table constraint checks.
"""

from datetime import date

import polars as pl
import pytest
from day06_sailors_queries.src.schema import (
    ConstraintViolation,
    QueryLabError,
    SchemaError,
    Tables,
    validate_tables,
)


class TestValidateTables:
    """Test uniqueness and foreign key checks"""

    def test_literal_tables_are_valid(self, tables):
        validate_tables(tables)

    def test_row_counts(self, tables):
        assert tables.row_counts() == {"sailors": 5, "boats": 4, "reserves": 7}

    def test_duplicate_sailor_key(self, tables):
        """(tid, sid) must be unique even when names differ"""
        sailors = pl.concat(
            [
                tables.sailors,
                pl.DataFrame(
                    {"tid": [1], "sid": [2], "sname": ["z"], "age": [60]},
                    schema=tables.sailors.schema,
                ),
            ]
        )

        with pytest.raises(ConstraintViolation, match="Sailors"):
            validate_tables(tables._replace(sailors=sailors))

    def test_same_sid_different_tid_is_fine(self, tables):
        """sid alone is not a key"""
        assert tables.sailors.filter(pl.col("sid") == 1).height == 3
        validate_tables(tables)

    def test_duplicate_boat(self, tables):
        boats = pl.concat([tables.boats, tables.boats.head(1)])

        with pytest.raises(ConstraintViolation, match="Boats"):
            validate_tables(tables._replace(boats=boats))

    def test_orphan_sailor_reference(self, tables):
        orphan = pl.DataFrame(
            {"tid": [9], "sid": [9], "bid": [101], "day": [date(2024, 12, 1)]},
            schema=tables.reserves.schema,
        )
        reserves = pl.concat([tables.reserves, orphan])

        with pytest.raises(ConstraintViolation, match="Sailors"):
            validate_tables(tables._replace(reserves=reserves))

    def test_orphan_boat_reference(self, tables):
        orphan = pl.DataFrame(
            {"tid": [1], "sid": [1], "bid": [999], "day": [date(2024, 12, 1)]},
            schema=tables.reserves.schema,
        )
        reserves = pl.concat([tables.reserves, orphan])

        with pytest.raises(ConstraintViolation, match="Boats"):
            validate_tables(tables._replace(reserves=reserves))

        # Foreign keys can be switched off
        validate_tables(tables._replace(reserves=reserves), check_foreign_keys=False)

    def test_missing_column(self, tables):
        with pytest.raises(SchemaError, match="color"):
            validate_tables(Tables(tables.sailors, tables.boats.drop("color"), tables.reserves))

    def test_error_hierarchy(self):
        assert issubclass(SchemaError, QueryLabError)
        assert issubclass(ConstraintViolation, QueryLabError)
