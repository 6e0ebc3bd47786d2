"""
Test configuration models for the TPC-C population generator.

These tests validate configuration loading, validation, and constraints.
"""

import json
from pathlib import Path

import pytest

_hyp = pytest.importorskip("hypothesis")
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from tpcc_datagen.config.models import PerformanceConfig, ScaleConfig, TpccConfig
from tpcc_datagen.config.settings import create_default_config, load_config
from tpcc_datagen.shared.exceptions import ConfigurationError


class TestScaleConfig:
    """Test scale configuration validation."""

    def test_defaults_follow_benchmark(self):
        """Test that only warehouses is required and defaults are the standard sizes."""
        scale = ScaleConfig(warehouses=1)
        assert scale.number_of_items == 100000
        assert scale.districts_per_warehouse == 10
        assert scale.customers_per_district == 3000
        assert scale.history_rows_per_customer == 1
        assert scale.order_rows_per_district == 3000
        assert scale.stock_per_warehouse == 100000

    def test_warehouses_required(self):
        """Test that the warehouse count has no default."""
        with pytest.raises(ValidationError):
            ScaleConfig()

    @pytest.mark.parametrize(
        "field",
        [
            "warehouses",
            "number_of_items",
            "districts_per_warehouse",
            "customers_per_district",
            "history_rows_per_customer",
        ],
    )
    def test_zero_counts_rejected(self, field: str):
        """Test that every count must be positive."""
        data = {"warehouses": 1, field: 0}
        with pytest.raises(ValidationError):
            ScaleConfig(**data)

    def test_orders_must_match_customers(self):
        """Test that a customers/orders mismatch is rejected."""
        with pytest.raises(ValidationError, match="must equal"):
            ScaleConfig(
                warehouses=1, customers_per_district=100, order_rows_per_district=99
            )

    @given(
        warehouses=st.integers(min_value=1, max_value=1000),
        customers=st.integers(min_value=1, max_value=5000),
    )
    def test_scale_config_property_based(self, warehouses: int, customers: int):
        """Property-based test for matching customers and orders."""
        scale = ScaleConfig(
            warehouses=warehouses,
            customers_per_district=customers,
            order_rows_per_district=customers,
        )
        assert scale.warehouses == warehouses
        assert scale.order_rows_per_district == scale.customers_per_district


class TestPerformanceConfig:
    """Test worker sizing."""

    def test_explicit_max_workers(self):
        """Test that an explicit override wins."""
        assert PerformanceConfig(max_workers=3).get_max_workers() == 3

    def test_cpu_percent_floor(self):
        """Test that a tiny CPU share still yields one worker."""
        assert PerformanceConfig(max_cpu_percent=0.1).get_max_workers() >= 1

    def test_invalid_cpu_percent(self):
        """Test CPU percentage bounds."""
        with pytest.raises(ValidationError):
            PerformanceConfig(max_cpu_percent=0)
        with pytest.raises(ValidationError):
            PerformanceConfig(max_cpu_percent=150)


class TestTpccConfig:
    """Test main configuration."""

    def test_seed_optional(self):
        """Test that the seed may be omitted."""
        config = TpccConfig(scale={"warehouses": 1})
        assert config.seed is None

    def test_negative_seed_rejected(self):
        """Test seed lower bound."""
        with pytest.raises(ValidationError):
            TpccConfig(seed=-1, scale={"warehouses": 1})

    @given(seed=st.integers(min_value=0, max_value=2**32 - 1))
    def test_config_seed_property_based(self, seed: int):
        """Property-based test for config seed validation."""
        config = TpccConfig(seed=seed, scale={"warehouses": 1})
        assert config.seed == seed

    def test_assignment_validated(self, small_config):
        """Test that mutating a loaded config goes through the same validators."""
        with pytest.raises(ValidationError):
            small_config.scale.warehouses = 0
        with pytest.raises(ValidationError):
            small_config.performance.max_cpu_percent = 150.0
        with pytest.raises(ValidationError):
            small_config.seed = -1
        with pytest.raises(ValidationError, match="must equal"):
            small_config.scale.order_rows_per_district = 29

        assert small_config.scale.warehouses == 2

    def test_file_round_trip(self, small_config, tmp_path: Path):
        """Test that to_file and from_file preserve the configuration."""
        path = tmp_path / "nested" / "config.json"
        small_config.to_file(path)
        assert TpccConfig.from_file(path) == small_config

    def test_from_file_missing(self, tmp_path: Path):
        """Test loading a non-existent file."""
        with pytest.raises(FileNotFoundError):
            TpccConfig.from_file(tmp_path / "missing.json")


class TestLoadConfig:
    """Test configuration loading helpers."""

    def test_load_explicit_path(self, temp_config_file):
        """Test loading from an explicit file path."""
        config = load_config(temp_config_file)
        assert config.seed == 42
        assert config.scale.warehouses == 2

    def test_load_from_directory(self, small_config_data, tmp_path: Path):
        """Test that a directory resolves to the named config file inside it."""
        (tmp_path / "config.json").write_text(json.dumps(small_config_data))
        assert load_config(tmp_path).scale.number_of_items == 50

    def test_search_paths(self, small_config_data, tmp_path: Path, monkeypatch):
        """Test that cwd/config is searched when no path is given."""
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.json").write_text(json.dumps(small_config_data))
        monkeypatch.chdir(tmp_path)
        assert load_config().seed == 42

    def test_not_found(self, tmp_path: Path, monkeypatch):
        """Test that a missing config is reported."""
        monkeypatch.chdir(tmp_path)
        with pytest.raises(FileNotFoundError):
            load_config()

    def test_invalid_values_wrapped(self, tmp_path: Path):
        """Test that validation errors become ConfigurationError."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"scale": {"warehouses": 0}}))
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert exc_info.value.validation_errors

    def test_invalid_json_wrapped(self, tmp_path: Path):
        """Test that malformed JSON becomes ConfigurationError."""
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_config(path)

    def test_create_default_config(self, tmp_path: Path):
        """Test the default config file contents."""
        path = tmp_path / "config.json"
        config = create_default_config(path)
        assert path.exists()
        assert config.seed == 42
        assert config.scale.warehouses == 1
        assert load_config(path) == config
