"""
Load tables and run techniques against them.

Plain functions; the Prefect tasks in flows/tasks wrap these.
"""

from typing import Any

import polars as pl

from .config_loader import Config
from .monitoring import format_metrics_dict, monitor_performance
from .queries import QueryParams
from .schema import QueryLabError, Tables, validate_tables
from .sources import get_source
from .techniques import Technique, get_technique
from .utils.logging_config import get_logger, log_context
from .validation import check_result

logger = get_logger(__name__)


def load_tables(config: Config) -> Tables:
    """
    Build the tables from the configured source and check their constraints.

    Raises:
        ValueError: unknown source
        SchemaError, ConstraintViolation: the tables are malformed
    """
    source = get_source(config.dataset.source, config.dataset.model_dump())
    tables = source.load()

    validate_tables(tables, check_foreign_keys=config.dataset.check_foreign_keys)

    logger.info("tables_loaded", source=config.dataset.source, **tables.row_counts())
    return tables


def reference_results(config: Config, tables: Tables) -> dict[str, pl.DataFrame] | None:
    """
    Evaluate every enabled query with the reference technique.

    Returns None when validation is disabled or the tables are larger than
    `techniques.reference_max_sailors`.
    """
    if not config.techniques.validate_results:
        return None

    limit = config.techniques.reference_max_sailors
    if len(tables.sailors) > limit:
        logger.warning(
            "reference_skipped",
            sailors=len(tables.sailors),
            limit=limit,
        )
        return None

    params = QueryParams.from_config(config.queries)
    reference = get_technique("reference", config.techniques.model_dump())

    return {query: reference.run(query, tables, params) for query in config.queries.enabled}


def run_technique(
    technique_name: str,
    tables: Tables,
    config: Config,
    expected: dict[str, pl.DataFrame] | None = None,
) -> dict[str, dict[str, Any]]:
    """
    Run every enabled query with one technique.

    Args:
        technique_name: Registered technique name
        tables: Sailors/Boats/Reserves
        config: Lab configuration
        expected: Reference results keyed by query (skip comparison if None)

    Returns:
        {query: {"result", "rows", "matches_reference", "error", "performance"}}
    """
    technique = get_technique(technique_name, config.techniques.model_dump())
    params = QueryParams.from_config(config.queries)

    outcomes: dict[str, dict[str, Any]] = {}
    with log_context(technique=technique_name):
        for query in config.queries.enabled:
            with log_context(query=query):
                outcomes[query] = _run_query(technique, query, tables, params, expected)

        logger.info(
            "technique_completed",
            queries=list(outcomes),
            rows={q: o["rows"] for q, o in outcomes.items()},
        )
    return outcomes


def _run_query(
    technique: Technique,
    query: str,
    tables: Tables,
    params: QueryParams,
    expected: dict[str, pl.DataFrame] | None,
) -> dict[str, Any]:
    input_rows = sum(tables.row_counts().values())

    with monitor_performance(technique.name, query, input_rows) as perf:
        result = technique.run(query, tables, params)
        perf.output_rows = len(result)

    matches, error = None, None
    if expected is not None and query in expected:
        try:
            check_result(result, expected[query], technique.name, query)
            matches = True
        except QueryLabError as e:
            matches, error = False, str(e)
            logger.error("result_mismatch", error=error)

    return {
        "result": result,
        "rows": len(result),
        "matches_reference": matches,
        "error": error,
        "performance": format_metrics_dict(perf),
    }


def all_match(results: dict[str, dict[str, dict[str, Any]]]) -> bool:
    """False if any technique disagreed with the reference on any query."""
    return not any(
        outcome["matches_reference"] is False
        for outcomes in results.values()
        for outcome in outcomes.values()
    )
