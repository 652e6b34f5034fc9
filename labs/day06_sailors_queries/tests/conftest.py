"""
Shared fixtures: the literal tables and default parameters.
"""

from datetime import date

import pytest
from day06_sailors_queries.src.config_loader import Config
from day06_sailors_queries.src.queries import QueryParams
from day06_sailors_queries.src.schema import build_tables
from day06_sailors_queries.src.sources import literal_tables
from prefect.testing.utilities import prefect_test_harness


@pytest.fixture
def tables():
    return literal_tables()


@pytest.fixture
def params():
    return QueryParams()


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def small_bid_tables():
    """Boat ids 1..3 overlap sailor ids, so joining Boats.bid on Reserves.sid finds rows"""
    return build_tables(
        sailors=[
            {"tid": 1, "sid": 1, "sname": "a", "age": 30},
            {"tid": 1, "sid": 2, "sname": "a", "age": 40},
            {"tid": 2, "sid": 1, "sname": "b", "age": 50},
        ],
        boats=[
            {"bid": 1, "bname": "One", "color": "red"},
            {"bid": 2, "bname": "Two", "color": "blue"},
            {"bid": 3, "bname": "Three", "color": "green"},
        ],
        reserves=[
            {"tid": 1, "sid": 1, "bid": 3, "day": date(2024, 5, 1)},
            {"tid": 1, "sid": 2, "bid": 3, "day": date(2024, 5, 2)},
            {"tid": 2, "sid": 1, "bid": 1, "day": date(2024, 5, 3)},
        ],
    )


@pytest.fixture(scope="session")
def prefect_harness():
    """Run flows against a temporary Prefect backend"""
    with prefect_test_harness():
        yield
