"""
Performance monitoring for comparing techniques.
Tracks execution time, resident memory and throughput per technique and query.
RSS is read before and after each run, not sampled, so short-lived peaks
between the two reads are not seen.
"""

import time
from contextlib import contextmanager
from dataclasses import dataclass

import psutil
import structlog
from rich.console import Console
from rich.table import Table

logger = structlog.get_logger()


@dataclass
class PerformanceMetrics:
    """Performance metrics captured while a technique answers a query"""

    technique: str
    query: str
    execution_time_s: float
    rss_mb: float | None
    input_rows: int
    output_rows: int = 0
    rss_delta_mb: float | None = None

    @property
    def throughput_rows_per_sec(self) -> float:
        if self.execution_time_s <= 0:
            return 0.0
        return self.input_rows / self.execution_time_s


@contextmanager
def monitor_performance(technique: str, query: str, input_rows: int):
    """
    Context manager to monitor a single technique/query execution.

    Usage:
        with monitor_performance("join", "q1", 10_000) as metrics:
            result = technique.run("q1", tables, params)
            metrics.output_rows = len(result)
        # metrics.execution_time_s is now populated
    """
    process = psutil.Process()
    start_memory = process.memory_info().rss / 1024 / 1024
    start_time = time.perf_counter()

    metrics = PerformanceMetrics(
        technique=technique,
        query=query,
        execution_time_s=0.0,
        rss_mb=start_memory,
        input_rows=input_rows,
    )

    try:
        yield metrics
    finally:
        metrics.execution_time_s = time.perf_counter() - start_time

        end_memory = process.memory_info().rss / 1024 / 1024
        metrics.rss_mb = end_memory
        metrics.rss_delta_mb = end_memory - start_memory

        logger.info(
            "performance_metrics",
            technique=technique,
            query=query,
            time_s=round(metrics.execution_time_s, 4),
            output_rows=metrics.output_rows,
            rss_delta_mb=round(metrics.rss_delta_mb, 2),
            throughput_rps=int(metrics.throughput_rows_per_sec),
        )


def format_metrics_dict(metrics: PerformanceMetrics) -> dict:
    """Format metrics as dict for structured output"""
    return {
        "technique": metrics.technique,
        "query": metrics.query,
        "execution_time_s": round(metrics.execution_time_s, 4),
        "rss_mb": round(metrics.rss_mb, 1) if metrics.rss_mb is not None else None,
        "rss_delta_mb": (
            round(metrics.rss_delta_mb, 2) if metrics.rss_delta_mb is not None else None
        ),
        "throughput_rows_per_sec": int(metrics.throughput_rows_per_sec),
        "input_rows": metrics.input_rows,
        "output_rows": metrics.output_rows,
    }


def print_performance_table(
    all_metrics: list[PerformanceMetrics], console: Console | None = None
) -> None:
    """Print a technique comparison table"""
    if not all_metrics:
        return

    console = console or Console()

    table = Table(title="Technique comparison")
    table.add_column("Technique", style="cyan")
    table.add_column("Query", style="magenta")
    table.add_column("Rows out", justify="right")
    table.add_column("Time", justify="right", style="green")
    table.add_column("RSS after", justify="right")
    table.add_column("RSS change", justify="right")
    table.add_column("Throughput", justify="right")

    for m in all_metrics:
        rss_str = f"{m.rss_mb:.1f}MB" if m.rss_mb is not None else "N/A"
        delta_str = f"{m.rss_delta_mb:+.2f}MB" if m.rss_delta_mb is not None else "N/A"
        table.add_row(
            m.technique,
            m.query,
            f"{m.output_rows:,}",
            f"{m.execution_time_s * 1000:.2f}ms",
            rss_str,
            delta_str,
            f"{m.throughput_rows_per_sec:,.0f} rows/s",
        )

    console.print(table)
