"""
Table loading Prefect tasks.
"""

import polars as pl
from day06_sailors_queries.src.config_loader import Config
from day06_sailors_queries.src.runner import load_tables, reference_results
from day06_sailors_queries.src.schema import Tables
from day06_sailors_queries.src.utils.logging_config import get_logger
from prefect import task
from prefect.cache_policies import NONE

logger = get_logger(__name__)


@task(
    name="load_tables",
    description="Build Sailors/Boats/Reserves from the configured source and validate them",
    cache_policy=NONE,
)
def load_tables_task(config: Config) -> Tables:
    """
    Load and validate the tables.

    Args:
        config: Lab configuration

    Returns:
        Tables(sailors, boats, reserves)
    """
    logger.info(
        "loading_tables",
        source=config.dataset.source,
        scale=config.dataset.scale,
        seed=config.dataset.seed,
    )
    return load_tables(config)


@task(
    name="reference_results",
    description="Evaluate the enabled queries with the nested-loop reference",
    cache_policy=NONE,
)
def reference_results_task(config: Config, tables: Tables) -> dict[str, pl.DataFrame] | None:
    return reference_results(config, tables)
