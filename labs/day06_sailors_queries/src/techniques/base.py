"""
Base interface for query techniques.
"""

from abc import ABC, abstractmethod
from typing import Any

import polars as pl
import structlog

from ..queries import QueryName, QueryParams, finalize
from ..schema import Tables

logger = structlog.get_logger()


class Technique(ABC):
    """
    Abstract base class for all query techniques.

    A technique answers Q1, Q2 and Q3 against the same Tables. Each q*
    method returns raw rows; run() normalizes them to the result schema.
    """

    def __init__(self, config: dict[str, Any] | None = None):
        """
        Initialize technique with configuration.

        Args:
            config: Technique configuration (TechniquesConfig.model_dump())
        """
        self.config = config or {}
        self.logger = logger.bind(technique=self.__class__.__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry name of this technique"""
        pass

    @abstractmethod
    def q1(self, tables: Tables, params: QueryParams) -> pl.DataFrame:
        pass

    @abstractmethod
    def q2(self, tables: Tables, params: QueryParams) -> pl.DataFrame:
        pass

    @abstractmethod
    def q3(self, tables: Tables, params: QueryParams) -> pl.DataFrame:
        pass

    def run(self, query: QueryName, tables: Tables, params: QueryParams) -> pl.DataFrame:
        """
        Execute one query and return its sorted result.

        Args:
            query: q1, q2 or q3
            tables: Sailors/Boats/Reserves
            params: Query parameters

        Returns:
            Result DataFrame in the query's result schema
        """
        handlers = {"q1": self.q1, "q2": self.q2, "q3": self.q3}
        if query not in handlers:
            raise ValueError(f"Unknown query: {query}. Valid: {list(handlers)}")

        result = finalize(handlers[query](tables, params), query, params)

        self.logger.debug("query_completed", query=query, rows=len(result))
        return result


# Technique registry for dynamic loading
TECHNIQUE_REGISTRY: dict[str, type[Technique]] = {}


def register_technique(name: str):
    """
    Decorator to register a technique implementation.

    Usage:
        @register_technique("join")
        class JoinTechnique(Technique):
            ...
    """

    def decorator(cls):
        TECHNIQUE_REGISTRY[name] = cls
        return cls

    return decorator


def get_technique(technique_type: str, config: dict[str, Any] | None = None) -> Technique:
    """
    Factory function to instantiate a technique by type.

    Args:
        technique_type: Type of technique (composite_key, join, reference)
        config: Technique configuration

    Returns:
        Initialized Technique instance
    """
    if technique_type not in TECHNIQUE_REGISTRY:
        available = ", ".join(TECHNIQUE_REGISTRY.keys())
        raise ValueError(f"Unknown technique type: {technique_type}. Available: {available}")

    technique_class = TECHNIQUE_REGISTRY[technique_type]
    return technique_class(config)
