"""
Lean tests for configuration validation.
Tests the Pydantic models and config loading logic.
"""

from pathlib import Path

import pytest
from day06_sailors_queries.src.config_loader import (
    Config,
    DatasetConfig,
    Q2Config,
    QueriesConfig,
    SyntheticConfig,
    TechniquesConfig,
    interpolate_env_vars,
    load_config,
)
from day06_sailors_queries.src.runner import load_tables
from pydantic import ValidationError

DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "config" / "queries.yaml"


class TestDatasetConfig:
    """Test dataset configuration"""

    def test_scale_presets(self):
        """Test scale preset resolution"""
        assert DatasetConfig(scale="small").scale == 10
        assert DatasetConfig(scale="medium").scale == 1_000
        assert DatasetConfig(scale="large").scale == 100_000

    def test_custom_scale(self):
        """Test custom integer scale"""
        assert DatasetConfig(scale=250).scale == 250

    def test_default_scale_is_resolved(self):
        """The default preset is converted like an explicit one"""
        assert DatasetConfig().scale == 10
        assert Config().dataset.scale == 10

    def test_empty_name_pool_rejected(self):
        with pytest.raises(ValidationError):
            SyntheticConfig(names=[])

    def test_empty_color_pool_rejected(self):
        with pytest.raises(ValidationError):
            SyntheticConfig(colors=[])

    def test_invalid_source(self):
        """Test invalid source raises error"""
        with pytest.raises(ValueError):
            DatasetConfig(source="parquet")


class TestQueriesConfig:
    """Test query parameters"""

    def test_defaults(self):
        """Test defaults match the write-up"""
        config = QueriesConfig()
        assert config.enabled == ["q1", "q2", "q3"]
        assert config.q1.bid == 103
        assert config.q2.sname == "a"
        assert config.q2.join_column == "bid"
        assert config.distinct is True

    def test_invalid_join_column(self):
        """Test Q2 join column is restricted to bid or sid"""
        with pytest.raises(ValueError):
            Q2Config(join_column="day")


class TestTechniquesConfig:
    """Test technique configuration"""

    def test_defaults(self):
        config = TechniquesConfig()
        assert config.enabled == ["composite_key", "join"]
        assert config.key_separator == "_"
        assert config.validate_results is True

    def test_empty_separator_rejected(self):
        """Test an empty key separator is rejected"""
        with pytest.raises(ValueError):
            TechniquesConfig(key_separator="")


class TestConfig:
    """Test complete configuration"""

    def test_valid_config(self):
        config = Config()
        assert config.pipeline.name == "sailors-queries"
        assert config.dataset.source == "literal"

    def test_invalid_query_name(self):
        with pytest.raises(ValueError):
            Config(queries=QueriesConfig(enabled=["q4"]))

    def test_invalid_technique_name(self):
        with pytest.raises(ValueError):
            Config(techniques=TechniquesConfig(enabled=["hash_join"]))


class TestEnvInterpolation:
    """Test environment variable interpolation"""

    def test_interpolate_simple_string(self, monkeypatch):
        monkeypatch.setenv("TEST_VAR", "synthetic")

        assert interpolate_env_vars("${TEST_VAR}") == "synthetic"

    def test_interpolate_nested(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        data = {"prefect": {"logging": {"level": "${LOG_LEVEL}"}}, "names": ["${LOG_LEVEL}", "x"]}

        result = interpolate_env_vars(data)
        assert result["prefect"]["logging"]["level"] == "DEBUG"
        assert result["names"] == ["DEBUG", "x"]

    def test_missing_env_var(self):
        """Test missing env var returns original string"""
        assert interpolate_env_vars("${NONEXISTENT_VAR}") == "${NONEXISTENT_VAR}"


class TestConfigLoader:
    """Test config loading from file"""

    def test_load_default_config(self):
        config = load_config(str(DEFAULT_CONFIG))
        assert isinstance(config, Config)
        assert config.queries.q1.bid == 103
        assert config.techniques.enabled == ["composite_key", "join"]

    def test_load_from_env(self, monkeypatch, tmp_path):
        """Test $QUERIES_CONFIG is used when no path is given"""
        path = tmp_path / "custom.yaml"
        path.write_text("dataset:\n  source: synthetic\n  scale: medium\nqueries:\n  enabled: [q3]\n")
        monkeypatch.setenv("QUERIES_CONFIG", str(path))

        config = load_config()
        assert config.dataset.source == "synthetic"
        assert config.dataset.scale == 1_000
        assert config.queries.enabled == ["q3"]

    def test_synthetic_without_scale(self, tmp_path):
        """A synthetic dataset with no scale gets the small preset"""
        path = tmp_path / "synthetic.yaml"
        path.write_text("dataset:\n  source: synthetic\n")

        config = load_config(str(path))

        assert config.dataset.scale == 10
        assert len(load_tables(config).sailors) == 10

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(str(path)) == Config()

    def test_load_nonexistent_config(self):
        with pytest.raises(FileNotFoundError):
            load_config("/nonexistent/config.yaml")
