"""
Table sources.
All sources are auto-registered via decorators.
"""

from .base import SOURCE_REGISTRY, TableSource, get_source, register_source

# Import all sources to trigger registration
from .literal import LiteralSource, literal_tables
from .synthetic import SyntheticSource

__all__ = [
    "TableSource",
    "get_source",
    "register_source",
    "SOURCE_REGISTRY",
    "LiteralSource",
    "SyntheticSource",
    "literal_tables",
]
