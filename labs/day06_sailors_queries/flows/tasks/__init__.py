"""
Prefect tasks for the query lab.
"""

from .load import load_tables_task, reference_results_task
from .run import run_technique_task

__all__ = ["load_tables_task", "reference_results_task", "run_technique_task"]
