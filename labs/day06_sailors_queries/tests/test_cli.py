"""
Tests for CLI argument handling.
"""

import pytest
from day06_sailors_queries.run_queries import apply_overrides, build_parser
from day06_sailors_queries.src.config_loader import Config
from day06_sailors_queries.src.report import frame_to_table
from pydantic import ValidationError


def _parse(*argv):
    return build_parser().parse_args(list(argv))


class TestOverrides:
    """Test CLI overrides on top of the YAML config"""

    def test_no_overrides(self):
        assert apply_overrides(Config(), _parse()) == Config()

    def test_dataset_overrides(self):
        config = apply_overrides(Config(), _parse("--source", "synthetic", "--scale", "500"))

        assert config.dataset.source == "synthetic"
        assert config.dataset.scale == 500

    def test_query_overrides(self):
        args = _parse("--bid", "101", "--sname", "b", "--q2-join-column", "sid", "--bag")
        config = apply_overrides(Config(), args)

        assert config.queries.q1.bid == 101
        assert config.queries.q2.sname == "b"
        assert config.queries.q2.join_column == "sid"
        assert config.queries.distinct is False

    def test_comma_separated_lists(self):
        args = _parse("--techniques", "join, reference", "--queries", "q3")
        config = apply_overrides(Config(), args)

        assert config.techniques.enabled == ["join", "reference"]
        assert config.queries.enabled == ["q3"]

    def test_no_validate(self):
        assert apply_overrides(Config(), _parse("--no-validate")).techniques.validate_results is False

    def test_unknown_technique_rejected(self):
        with pytest.raises(ValidationError):
            apply_overrides(Config(), _parse("--techniques", "hash_join"))

    def test_does_not_mutate_input(self):
        config = Config()
        apply_overrides(config, _parse("--bid", "104"))

        assert config.queries.q1.bid == 103


class TestReport:
    """Test result rendering"""

    def test_frame_to_table_truncates(self, tables):
        table = frame_to_table(tables.reserves, title="Reserves", max_rows=3)

        assert table.row_count == 3
        assert [c.header for c in table.columns] == ["tid", "sid", "bid", "day"]
        assert table.caption == "3 of 7 rows"

    def test_frame_to_table_small(self, tables):
        table = frame_to_table(tables.boats)

        assert table.row_count == 4
        assert table.caption is None
