"""
Base interface for pluggable table sources.
"""

from abc import ABC, abstractmethod
from typing import Any

import structlog

from ..schema import Tables

logger = structlog.get_logger()


class TableSource(ABC):
    """
    Abstract base class for all table sources.

    Sources build the Sailors, Boats and Reserves tables in memory.
    Tables are read-only once returned.
    """

    def __init__(self, config: dict[str, Any]):
        """
        Initialize source with configuration.

        Args:
            config: Dataset configuration dict (DatasetConfig.model_dump())
        """
        self.config = config
        self.logger = logger.bind(source=self.__class__.__name__)

    @abstractmethod
    def load(self) -> Tables:
        """
        Build the three tables.

        Returns:
            Tables(sailors, boats, reserves)
        """
        pass


# Source registry for dynamic loading
SOURCE_REGISTRY: dict[str, type[TableSource]] = {}


def register_source(name: str):
    """
    Decorator to register a source implementation.

    Usage:
        @register_source("literal")
        class LiteralSource(TableSource):
            ...
    """

    def decorator(cls):
        SOURCE_REGISTRY[name] = cls
        return cls

    return decorator


def get_source(source_type: str, config: dict[str, Any]) -> TableSource:
    """
    Factory function to instantiate a source by type.

    Args:
        source_type: Type of source (literal, synthetic)
        config: Dataset configuration

    Returns:
        Initialized TableSource instance
    """
    if source_type not in SOURCE_REGISTRY:
        available = ", ".join(SOURCE_REGISTRY.keys())
        raise ValueError(f"Unknown source type: {source_type}. Available: {available}")

    source_class = SOURCE_REGISTRY[source_type]
    return source_class(config)
