"""
Technique execution Prefect task.
"""

from typing import Any

import polars as pl
from day06_sailors_queries.src.config_loader import Config
from day06_sailors_queries.src.runner import run_technique
from day06_sailors_queries.src.schema import Tables
from day06_sailors_queries.src.utils.logging_config import get_logger
from prefect import task
from prefect.cache_policies import NONE

logger = get_logger(__name__)


@task(
    task_run_name="{technique_name}",
    cache_policy=NONE,
)
def run_technique_task(
    technique_name: str,
    tables: Tables,
    config: Config,
    expected: dict[str, pl.DataFrame] | None = None,
) -> dict[str, dict[str, Any]]:
    """
    Answer every enabled query with one technique.

    Args:
        technique_name: Name of technique to execute
        tables: Sailors/Boats/Reserves
        config: Lab configuration
        expected: Reference results keyed by query

    Returns:
        Per-query outcome dicts (result frame, row count, reference check, performance)
    """
    logger.info(
        "running_technique",
        technique=technique_name,
        queries=config.queries.enabled,
    )
    return run_technique(technique_name, tables, config, expected)
