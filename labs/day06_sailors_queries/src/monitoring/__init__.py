"""
Performance monitoring utilities.
"""

from .performance import (
    PerformanceMetrics,
    format_metrics_dict,
    monitor_performance,
    print_performance_table,
)

__all__ = [
    "PerformanceMetrics",
    "monitor_performance",
    "format_metrics_dict",
    "print_performance_table",
]
