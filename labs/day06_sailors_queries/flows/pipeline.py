"""
Main Prefect flow: load tables, run every technique, check against the reference.
"""

from typing import Any

from day06_sailors_queries.src.config_loader import Config, load_config
from day06_sailors_queries.src.monitoring import PerformanceMetrics, print_performance_table
from day06_sailors_queries.src.runner import all_match
from day06_sailors_queries.src.utils.logging_config import setup_logging
from prefect import flow, get_run_logger

from .tasks.load import load_tables_task, reference_results_task
from .tasks.run import run_technique_task


@flow(
    name="sailors-queries",
    description="Sailors/Boats/Reserves queries with composite keys and joins",
    log_prints=True,
)
def run_queries_flow(
    config_path: str | None = None,
    config: Config | None = None,
) -> dict[str, Any]:
    """
    Execute every enabled query with every enabled technique.

    Args:
        config_path: Path to queries.yaml (uses $QUERIES_CONFIG if None)
        config: Already-loaded config; takes precedence over config_path

    Returns:
        Summary with table sizes and per-technique, per-query outcomes
    """
    logger = get_run_logger()

    if config is None:
        config = load_config(config_path)

    setup_logging(
        config.prefect.logging.get("level"),
        structured=config.prefect.logging.get("structured", False),
    )

    logger.info(f"Starting: {config.pipeline.name} v{config.pipeline.version}")
    logger.info(
        f"Source: {config.dataset.source}, Queries: {config.queries.enabled}, "
        f"Techniques: {config.techniques.enabled}"
    )

    logger.info("Step 1: Loading tables...")
    tables = load_tables_task(config)

    logger.info("Step 2: Computing reference results...")
    expected = reference_results_task(config, tables)
    if expected is None:
        logger.info("Reference check disabled for this run")

    logger.info(f"Step 3: Running {len(config.techniques.enabled)} techniques...")
    # Sequential: each timing and RSS reading covers a single technique
    results = {}
    for technique_name in config.techniques.enabled:
        logger.info(f"  → Running technique: {technique_name}")
        results[technique_name] = run_technique_task(technique_name, tables, config, expected)

    logger.info("Step 4: Aggregating results...")
    summary = {
        "pipeline": config.pipeline.name,
        "source": config.dataset.source,
        "tables": tables.row_counts(),
        "results": results,
        "all_match": all_match(results),
    }

    if len(results) > 1:
        perf_metrics = [
            PerformanceMetrics(
                technique=technique_name,
                query=query,
                execution_time_s=outcome["performance"]["execution_time_s"],
                rss_mb=outcome["performance"]["rss_mb"],
                rss_delta_mb=outcome["performance"]["rss_delta_mb"],
                input_rows=outcome["performance"]["input_rows"],
                output_rows=outcome["rows"],
            )
            for technique_name, outcomes in results.items()
            for query, outcome in outcomes.items()
        ]
        print_performance_table(perf_metrics)

    if summary["all_match"]:
        logger.info("Run completed, all techniques agree")
    else:
        logger.warning("Run completed with result mismatches")

    return summary


if __name__ == "__main__":
    run_queries_flow()
