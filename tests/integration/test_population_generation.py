"""
Integration tests for end-to-end population generation.

Runs the orchestrator on small configurations and checks cardinalities,
referential integrity, reproducibility, cancellation and failure handling.
"""

from collections import Counter
from datetime import UTC, datetime

import pytest

from tpcc_datagen.config.models import TpccConfig
from tpcc_datagen.generators.population_generators import (
    PopulationGenerator,
    PopulationResult,
)
from tpcc_datagen.generators.progress_tracker import TableProgressTracker
from tpcc_datagen.shared.constants import ALL_TABLES
from tpcc_datagen.shared.exceptions import (
    ConfigurationError,
    GenerationCancelledError,
    InvariantViolationError,
    WarehouseGenerationError,
)


def test_small_population_cardinalities(generator):
    """Test row counts for 2 warehouses x 2 districts x 30 customers."""
    result = generator.generate_population()

    assert isinstance(result, PopulationResult)
    assert not result.cancelled
    counts = result.row_counts()
    assert counts["item"] == 50
    assert counts["warehouse"] == 2
    assert counts["stock"] == 100
    assert counts["district"] == 4
    assert counts["customer"] == 120
    assert counts["history"] == 120
    assert counts["orders"] == 120
    assert counts["new_order"] == 0
    assert counts["order_line"] == sum(o.o_ol_cnt for o in result.records("orders"))
    assert 5 * 120 <= counts["order_line"] <= 15 * 120


def test_warehouses_ordered_and_consistent(generator):
    """Test warehouse order and that child rows refer to existing parents."""
    result = generator.generate_population()

    assert [population.warehouse_id for population in result.warehouses] == [1, 2]

    item_ids = {item.i_id for item in result.items}
    for population in result.warehouses:
        w_id = population.warehouse_id
        assert {row.s_i_id for row in population.stock} == item_ids
        assert all(row.s_w_id == w_id for row in population.stock)
        assert all(customer.c_w_id == w_id for customer in population.customers)

        orders = {(o.o_d_id, o.o_id): o for o in population.orders}
        for line in population.order_lines:
            assert line.ol_w_id == w_id
            assert line.ol_i_id in item_ids
            assert (line.ol_d_id, line.ol_o_id) in orders

        per_district = Counter((o.o_d_id, o.o_c_id) for o in population.orders)
        assert set(per_district.values()) == {1}


def test_same_seed_same_population(small_config, fixed_clock):
    """Test that a seed reproduces the population regardless of scheduling."""
    first = PopulationGenerator(small_config, clock=fixed_clock).generate_population()
    serial_config = small_config.model_copy(
        update={"performance": small_config.performance.model_copy(update={"max_workers": 1})}
    )
    second = PopulationGenerator(serial_config, clock=fixed_clock).generate_population()

    assert first == second


def test_rerun_on_same_instance(small_config, fixed_clock):
    """Test that a second run repeats the first and reports only its own rows."""
    generator = PopulationGenerator(small_config, clock=fixed_clock)
    first = generator.generate_population()
    second = generator.generate_population()

    fresh = PopulationGenerator(small_config, clock=fixed_clock).generate_population()
    assert first.items == second.items == fresh.items
    assert first.warehouses == second.warehouses == fresh.warehouses
    assert first.load_constants == second.load_constants == fresh.load_constants

    summary = generator.get_generation_summary()
    assert summary["rows"] == second.row_counts()
    assert summary["load_constants"] == second.load_constants.model_dump()


def test_streaming_twice_counts_one_pass(generator, random_values):
    """Test that warehouse row totals restart with each streaming pass."""
    items = generator.generate_items(random_values)
    list(generator.iter_warehouse_populations(items))
    streamed = list(generator.iter_warehouse_populations(items))

    rows = generator.progress_tracker.get_all_rows()
    assert rows["stock"] == sum(len(population.stock) for population in streamed)
    assert rows["orders"] == sum(len(population.orders) for population in streamed)


def test_different_seeds_differ(small_config_data, fixed_clock):
    """Test that changing the seed changes the data."""
    first = PopulationGenerator(small_config_data, clock=fixed_clock).generate_population()
    small_config_data["seed"] = 43
    second = PopulationGenerator(small_config_data, clock=fixed_clock).generate_population()

    assert first.items != second.items


def test_streaming_warehouses(generator, random_values):
    """Test that warehouses can be consumed one batch at a time."""
    items = generator.generate_items(random_values)

    streamed = list(generator.iter_warehouse_populations(items))
    assert sorted(population.warehouse_id for population in streamed) == [1, 2]

    first = next(iter(generator.iter_warehouse_populations(items)))
    assert first.warehouse_id in (1, 2)
    assert len(first.stock) == len(items)


def test_invalid_config_rejected_before_generation(small_config_data):
    """Test that raw invalid configs raise ConfigurationError."""
    small_config_data["scale"]["order_rows_per_district"] = 29
    with pytest.raises(ConfigurationError) as exc_info:
        PopulationGenerator(small_config_data)
    assert exc_info.value.validation_errors


def test_unvalidated_config_instance_rejected(small_config):
    """Test that a TpccConfig built without validation is checked again."""
    scale = small_config.scale.model_copy(update={"warehouses": 0})
    config = TpccConfig.model_construct(
        seed=small_config.seed, scale=scale, performance=small_config.performance
    )

    with pytest.raises(ConfigurationError) as exc_info:
        PopulationGenerator(config)
    assert exc_info.value.validation_errors


def test_config_instance_detached_from_caller(small_config):
    """Test that the generator keeps its own validated copy of the config."""
    generator = PopulationGenerator(small_config)
    small_config.scale.warehouses = 5

    assert generator.config.scale.warehouses == 2
    assert generator.config is not small_config


def test_warehouse_id_out_of_range(generator):
    """Test that per-warehouse random sources only exist for configured warehouses."""
    with pytest.raises(ConfigurationError):
        generator.random_values_for_warehouse(3)


class TestCancellation:
    """Test cooperative cancellation."""

    def test_cancel_before_start(self, generator):
        """Test that a cancelled run returns no warehouses and flags cancellation."""
        generator.cancel()
        result = generator.generate_population()

        assert result.cancelled
        assert result.warehouses == []
        assert len(result.items) == 50
        assert generator.progress_tracker.get_tables_by_state(
            TableProgressTracker.STATE_COMPLETED
        ) == []

    def test_cancel_during_first_warehouse(
        self, small_config_data, fixed_clock, monkeypatch
    ):
        """Test that the in-flight warehouse finishes and later ones are skipped."""
        small_config_data["scale"]["warehouses"] = 3
        small_config_data["performance"]["max_workers"] = 1
        generator = PopulationGenerator(small_config_data, clock=fixed_clock)
        original = generator.generate_warehouse

        def cancelling(w_id, random_values):
            generator.cancel()
            return original(w_id, random_values)

        monkeypatch.setattr(generator, "generate_warehouse", cancelling)
        result = generator.generate_population()

        assert result.cancelled
        assert [population.warehouse_id for population in result.warehouses] == [1]

    def test_cancelled_single_warehouse(self, generator):
        """Test that a direct call after cancel raises GenerationCancelledError."""
        generator.cancel()
        with pytest.raises(GenerationCancelledError):
            generator.generate_warehouse_population(1, [])


class TestFailures:
    """Test warehouse failure propagation."""

    def test_failure_wrapped_with_warehouse_id(self, generator, monkeypatch):
        """Test that a builder failure surfaces as WarehouseGenerationError."""
        original = generator.generate_districts_for_warehouse

        def failing(warehouse, random_values):
            if warehouse.w_id == 2:
                raise RuntimeError("disk on fire")
            return original(warehouse, random_values)

        monkeypatch.setattr(generator, "generate_districts_for_warehouse", failing)

        with pytest.raises(WarehouseGenerationError) as exc_info:
            generator.generate_population()
        assert exc_info.value.warehouse_id == 2
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_invariant_check_detects_missing_rows(self, generator, random_values):
        """Test that a sub-tree with dropped rows fails validation."""
        items = generator.generate_items(random_values)
        population = generator.generate_warehouse_population(1, items)
        with pytest.raises(InvariantViolationError, match="stock"):
            generator.validate_warehouse_population(population, len(items) + 1)


class TestProgressAndSummary:
    """Test progress reporting and the generation summary."""

    def test_tracker_and_callback(self, generator):
        """Test that every table completes and callbacks see each table."""
        seen = []
        generator.set_progress_callback(
            lambda table_name, progress, message: seen.append((table_name, progress))
        )
        result = generator.generate_population()

        tracker = generator.progress_tracker
        assert tracker.get_tables_by_state(TableProgressTracker.STATE_COMPLETED) == ALL_TABLES
        assert tracker.get_all_rows() == result.row_counts()
        assert {table_name for table_name, _ in seen} == set(ALL_TABLES)
        assert all(0.0 <= progress <= 1.0 for _, progress in seen)

    def test_failing_callback_ignored(self, generator):
        """Test that a broken callback does not abort generation."""

        def broken(table_name, progress, message):
            raise RuntimeError("ui gone")

        generator.set_progress_callback(broken)
        assert not generator.generate_population().cancelled

    def test_summary(self, generator):
        """Test summary contents after a run."""
        result = generator.generate_population()
        summary = generator.get_generation_summary()

        assert summary["rows"] == result.row_counts()
        assert summary["cancelled"] is False
        assert summary["config"]["warehouses"] == 2
        assert summary["config"]["max_workers"] == 2
        assert summary["load_constants"] == result.load_constants.model_dump()


@pytest.mark.slow
def test_full_scale_district(fixed_clock):
    """Test one warehouse with standard district, customer and order counts."""
    config = TpccConfig(
        seed=2024,
        scale={"warehouses": 1, "number_of_items": 200},
    )
    result = PopulationGenerator(config, clock=fixed_clock).generate_population()

    counts = result.row_counts()
    assert counts["district"] == 10
    assert counts["customer"] == 30000
    assert counts["history"] == 30000
    assert counts["orders"] == 30000
    assert counts["new_order"] == 9000
    assert 150000 <= counts["order_line"] <= 450000

    population = result.warehouses[0]
    for d_id in range(1, 11):
        district_customers = [c for c in population.customers if c.c_d_id == d_id]
        surnames = Counter(c.c_last for c in district_customers[:1000])
        assert len(surnames) == 1000

        open_ids = sorted(n.no_o_id for n in population.new_orders if n.no_d_id == d_id)
        assert open_ids == list(range(2101, 3001))

    delivered = [o for o in population.orders if o.o_id < 2101]
    assert all(o.o_carrier_id is not None for o in delivered)
    assert all(o.o_carrier_id is None for o in population.orders if o.o_id >= 2101)


@pytest.mark.slow
def test_full_item_catalogue(fixed_clock):
    """Test that the default item count yields ids 1..100000."""
    config = TpccConfig(seed=1, scale={"warehouses": 1})
    generator = PopulationGenerator(config, clock=fixed_clock)
    items = generator.generate_items(generator.random_values_for_warehouse(1))

    assert [item.i_id for item in items] == list(range(1, 100001))


def test_clock_is_injected(small_config):
    """Test that timestamps come from the injected clock."""
    instant = datetime(2000, 1, 1, tzinfo=UTC)
    result = PopulationGenerator(small_config, clock=lambda: instant).generate_population()

    assert {o.o_entry_d for o in result.records("orders")} == {instant}
    assert {c.c_since for c in result.records("customer")} == {instant}
