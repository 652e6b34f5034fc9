"""
Config loader with Pydantic validation and environment variable interpolation.
"""

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

VALID_QUERIES = ("q1", "q2", "q3")
VALID_TECHNIQUES = ("composite_key", "join", "reference")


class SyntheticConfig(BaseModel):
    """Shape of the randomly generated Sailors/Boats/Reserves tables"""

    teams: int = Field(default=4, ge=1, description="Number of distinct tid values")
    boats: int = Field(default=20, ge=1, description="Number of rows in Boats")
    first_bid: int = Field(default=101, description="bid of the first boat")
    reservations_per_sailor: int = Field(
        default=3, ge=0, description="Average number of Reserves rows per sailor"
    )
    names: list[str] = Field(
        default=["a", "b", "c", "d", "e"], min_length=1, description="Pool of sname values"
    )
    colors: list[str] = Field(
        default=["red", "green", "blue"], min_length=1, description="Pool of boat colors"
    )


class DatasetConfig(BaseModel):
    """Where the three tables come from"""

    source: Literal["literal", "synthetic"] = Field(
        default="literal", description="literal=blog fixture, synthetic=seeded random tables"
    )
    scale: int | Literal["small", "medium", "large"] = Field(
        default="small",
        validate_default=True,
        description="Sailor count: small=10, medium=1k, large=100k, or custom int",
    )
    seed: int | None = Field(
        default=42, description="Random seed for reproducibility (null for random)"
    )
    check_foreign_keys: bool = Field(
        default=True, description="Reject Reserves rows pointing at unknown sailors or boats"
    )
    synthetic: SyntheticConfig = Field(default_factory=SyntheticConfig)

    @field_validator("scale")
    @classmethod
    def resolve_scale(cls, v):
        """Convert preset names to integers"""
        presets = {
            "small": 10,
            "medium": 1_000,
            "large": 100_000,
        }
        return presets.get(v, v) if isinstance(v, str) else v


class Q1Config(BaseModel):
    """Q1: names of sailors who reserved a given boat"""

    bid: int = Field(default=103, description="Boat id to look for in Reserves")


class Q2Config(BaseModel):
    """Q2: colors of boats reserved by sailors with a given name"""

    sname: str = Field(default="a", description="Sailor name to filter on")
    join_column: Literal["bid", "sid"] = Field(
        default="bid",
        description="Reserves column matched against Boats.bid (sid reproduces the original text)",
    )


class QueriesConfig(BaseModel):
    """Query selection and parameters"""

    enabled: list[str] = Field(default=list(VALID_QUERIES), description="Queries to execute")
    distinct: bool = Field(
        default=True, description="Relational set semantics; false keeps duplicate rows (SQL bag)"
    )
    q1: Q1Config = Field(default_factory=Q1Config)
    q2: Q2Config = Field(default_factory=Q2Config)


class TechniquesConfig(BaseModel):
    """Technique selection"""

    enabled: list[str] = Field(
        default=["composite_key", "join"], description="Techniques to execute"
    )
    key_separator: str = Field(
        default="_", min_length=1, description="Separator between composite key parts"
    )
    validate_results: bool = Field(
        default=True, description="Compare every technique against the reference evaluation"
    )
    reference_max_sailors: int = Field(
        default=2_000, ge=0, description="Skip the nested-loop reference above this many sailors"
    )


class PrefectConfig(BaseModel):
    """Prefect orchestration configuration"""

    flow_name: str = "sailors-queries"

    logging: dict[str, Any] = Field(
        default={
            "level": "${LOG_LEVEL}",
            "structured": False,
        }
    )


class PipelineConfig(BaseModel):
    """Root pipeline configuration"""

    name: str = "sailors-queries"
    version: str = "1.0"


class Config(BaseModel):
    """Complete configuration schema"""

    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    queries: QueriesConfig = Field(default_factory=QueriesConfig)
    techniques: TechniquesConfig = Field(default_factory=TechniquesConfig)
    prefect: PrefectConfig = Field(default_factory=PrefectConfig)

    @model_validator(mode="after")
    def validate_names(self):
        """Ensure enabled queries and techniques exist"""
        for name in self.queries.enabled:
            if name not in VALID_QUERIES:
                raise ValueError(f"Unknown query: {name}. Valid: {set(VALID_QUERIES)}")
        for name in self.techniques.enabled:
            if name not in VALID_TECHNIQUES:
                raise ValueError(f"Unknown technique: {name}. Valid: {set(VALID_TECHNIQUES)}")
        return self


def interpolate_env_vars(data: Any) -> Any:
    """
    Recursively interpolate environment variables in config.
    Supports ${VAR_NAME} syntax.
    """
    if isinstance(data, dict):
        return {k: interpolate_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [interpolate_env_vars(item) for item in data]
    elif isinstance(data, str) and data.startswith("${") and data.endswith("}"):
        var_name = data[2:-1]
        return os.environ.get(var_name, data)
    return data


def load_config(config_path: str | None = None) -> Config:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Path to queries.yaml (uses $QUERIES_CONFIG if None)

    Returns:
        Validated Config object
    """
    if config_path is None:
        config_path = os.environ.get("QUERIES_CONFIG")

        if config_path is None:
            # Works when running from anywhere inside the repo
            current_file = Path(__file__).resolve()
            config_path = str(current_file.parent.parent / "config" / "queries.yaml")

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            f"Try setting QUERIES_CONFIG environment variable or pass --config"
        )

    with open(path) as f:
        raw_config = yaml.safe_load(f) or {}

    interpolated = interpolate_env_vars(raw_config)

    return Config(**interpolated)
