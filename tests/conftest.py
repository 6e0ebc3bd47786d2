"""
Pytest configuration and fixtures for TPC-C population generator tests.

Provides small-scale configurations, a fixed clock and seeded random sources.
"""

import json
import tempfile
from datetime import UTC, datetime
from pathlib import Path

import pytest

from tpcc_datagen.config.models import TpccConfig
from tpcc_datagen.generators.population_generators import PopulationGenerator
from tpcc_datagen.generators.utils import RandomValueGenerator

FIXED_TIME = datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def fixed_clock():
    """Clock that always returns the same instant."""
    return lambda: FIXED_TIME


@pytest.fixture
def small_config_data() -> dict:
    """Configuration small enough to generate in well under a second."""
    return {
        "seed": 42,
        "scale": {
            "warehouses": 2,
            "number_of_items": 50,
            "districts_per_warehouse": 2,
            "customers_per_district": 30,
            "history_rows_per_customer": 1,
            "order_rows_per_district": 30,
        },
        "performance": {"max_workers": 2},
    }


@pytest.fixture
def small_config(small_config_data) -> TpccConfig:
    return TpccConfig(**small_config_data)


@pytest.fixture
def random_values() -> RandomValueGenerator:
    """Seeded random source for deterministic builder tests."""
    return RandomValueGenerator(seed=1234)


@pytest.fixture
def generator(small_config, fixed_clock) -> PopulationGenerator:
    return PopulationGenerator(small_config, clock=fixed_clock)


@pytest.fixture
def temp_config_file(small_config_data) -> str:
    """Create a temporary config file for testing."""
    with tempfile.NamedTemporaryFile(
        mode="w", suffix=".json", delete=False
    ) as temp_file:
        json.dump(small_config_data, temp_file)
        temp_path = temp_file.name

    yield temp_path

    # Cleanup
    Path(temp_path).unlink(missing_ok=True)
