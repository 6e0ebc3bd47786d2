"""
Population generation orchestrator.

Coordinates all TPC-C table generation using modular mixins. Items are built
once; every warehouse sub-tree is then built on its own worker thread with
its own random source.
"""

import logging
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Iterator

from tpcc_datagen.shared.constants import (
    ALL_TABLES,
    TABLENAME_CUSTOMER,
    TABLENAME_DISTRICT,
    TABLENAME_HISTORY,
    TABLENAME_ITEM,
    TABLENAME_NEW_ORDER,
    TABLENAME_ORDER_LINE,
    TABLENAME_ORDERS,
    TABLENAME_STOCK,
)
from tpcc_datagen.shared.exceptions import (
    GenerationCancelledError,
    InvariantViolationError,
    WarehouseGenerationError,
)
from tpcc_datagen.shared.models import Item

from ..utils import RandomValueGenerator
from .base_generator import BaseGenerator
from .base_types import PopulationResult, WarehousePopulation
from .customer_generator import CustomerGeneratorMixin
from .district_generator import DistrictGeneratorMixin
from .item_generator import ItemGeneratorMixin
from .order_generator import OrderGeneratorMixin
from .warehouse_generator import WarehouseGeneratorMixin

logger = logging.getLogger(__name__)

WAREHOUSE_TABLES = [table for table in ALL_TABLES if table != TABLENAME_ITEM]


class PopulationGenerator(
    BaseGenerator,
    ItemGeneratorMixin,
    WarehouseGeneratorMixin,
    DistrictGeneratorMixin,
    CustomerGeneratorMixin,
    OrderGeneratorMixin,
):
    """
    Main TPC-C population engine.

    Generates every table of the initial database population:
    - item (global)
    - warehouse, stock, district (per warehouse)
    - customer, history, orders, order_line, new_order (per district)
    """

    # -------------------------------------------------------------------------
    # Single warehouse
    # -------------------------------------------------------------------------

    def generate_warehouse_population(
        self,
        warehouse_id: int,
        items: list[Item],
        random_values: RandomValueGenerator | None = None,
    ) -> WarehousePopulation:
        """
        Build the complete sub-tree of one warehouse.

        Args:
            warehouse_id: Warehouse to build (1..warehouses)
            items: The run's global item set
            random_values: Random source; defaults to the warehouse's
                seed-derived source

        Raises:
            GenerationCancelledError: If the run was cancelled before start
            InvariantViolationError: If the sub-tree breaks a population rule
        """
        if self.is_cancelled:
            raise GenerationCancelledError(warehouse_id)

        if random_values is None:
            random_values = self.random_values_for_warehouse(warehouse_id)

        start = time.perf_counter()
        logger.info(f"Generating warehouse {warehouse_id}")

        warehouse = self.generate_warehouse(warehouse_id, random_values)
        stock = self.generate_stock_for_warehouse(warehouse, items, random_values)
        districts = self.generate_districts_for_warehouse(warehouse, random_values)

        c_since = self._clock()
        customers = []
        history = []
        orders = []
        order_lines = []
        new_orders = []

        for district in districts:
            district_customers = self.generate_customers_for_district(
                district, c_since, random_values
            )
            customers.extend(district_customers)
            for customer in district_customers:
                history.extend(self.generate_history_for_customer(customer, random_values))

            district_orders = self.generate_orders_for_district(district, random_values)
            orders.extend(district_orders)
            for order in district_orders:
                order_lines.extend(
                    self.generate_order_lines_for_order(order, random_values)
                )

            new_orders.extend(self.generate_new_orders_for_district(district))

        population = WarehousePopulation(
            warehouse=warehouse,
            stock=stock,
            districts=districts,
            customers=customers,
            history=history,
            orders=orders,
            order_lines=order_lines,
            new_orders=new_orders,
        )
        self.validate_warehouse_population(population, len(items))

        logger.info(
            f"Finished warehouse {warehouse_id}: {len(order_lines):,} order lines. "
            f"Elapsed time: {time.perf_counter() - start:.2f}s"
        )
        return population

    def validate_warehouse_population(
        self, population: WarehousePopulation, item_count: int
    ) -> None:
        """
        Check cardinalities and the customer/order bijection of a sub-tree.

        Raises:
            InvariantViolationError: On the first broken rule
        """
        scale = self.config.scale
        w_id = population.warehouse_id
        districts = scale.districts_per_warehouse
        customers = districts * scale.customers_per_district
        open_orders = len(self.new_order_ids())

        expected = {
            TABLENAME_STOCK: item_count,
            TABLENAME_DISTRICT: districts,
            TABLENAME_CUSTOMER: customers,
            TABLENAME_HISTORY: customers * scale.history_rows_per_customer,
            TABLENAME_ORDERS: districts * scale.order_rows_per_district,
            TABLENAME_ORDER_LINE: sum(order.o_ol_cnt for order in population.orders),
            TABLENAME_NEW_ORDER: districts * open_orders,
        }
        actual = population.row_counts()
        for table_name, expected_count in expected.items():
            if actual[table_name] != expected_count:
                raise InvariantViolationError(
                    f"Unexpected {table_name} row count",
                    {
                        "warehouse": w_id,
                        "expected": expected_count,
                        "actual": actual[table_name],
                    },
                )

        assigned: dict[int, Counter] = {}
        for order in population.orders:
            assigned.setdefault(order.o_d_id, Counter())[order.o_c_id] += 1

        customer_ids = set(range(1, scale.customers_per_district + 1))
        for d_id, counts in assigned.items():
            if set(counts) != customer_ids or max(counts.values()) != 1:
                raise InvariantViolationError(
                    "Orders do not cover every customer exactly once",
                    {"warehouse": w_id, "district": d_id},
                )

    # -------------------------------------------------------------------------
    # Whole population
    # -------------------------------------------------------------------------

    def _max_workers(self) -> int:
        return max(
            1,
            min(
                self.config.performance.get_max_workers(),
                self.config.scale.warehouses,
            ),
        )

    def iter_warehouse_populations(
        self, items: list[Item]
    ) -> Iterator[WarehousePopulation]:
        """
        Yield each warehouse sub-tree as soon as it completes.

        Completion order depends on scheduling; contents do not. Warehouses
        skipped because of cancellation are not yielded.

        Raises:
            WarehouseGenerationError: If any warehouse fails; pending
                warehouses are cancelled first
        """
        warehouse_count = self.config.scale.warehouses
        max_workers = self._max_workers()
        logger.info(
            f"Generating {warehouse_count} warehouse(s) with {max_workers} worker(s)"
        )
        # Row totals describe this pass only
        self._progress_tracker.reset(WAREHOUSE_TABLES)
        for table_name in WAREHOUSE_TABLES:
            self._progress_tracker.mark_table_started(table_name)

        completed = 0
        with ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="tpcc-warehouse"
        ) as executor:
            future_to_warehouse = {
                executor.submit(self.generate_warehouse_population, w_id, items): w_id
                for w_id in range(1, warehouse_count + 1)
            }
            try:
                for future in as_completed(future_to_warehouse):
                    w_id = future_to_warehouse[future]
                    try:
                        population = future.result()
                    except GenerationCancelledError:
                        logger.info(f"Skipped warehouse {w_id} (cancelled)")
                        continue
                    except Exception as e:
                        logger.error(
                            f"Warehouse {w_id} failed, discarding its batch: {e}",
                            exc_info=True,
                        )
                        raise WarehouseGenerationError(w_id, e) from e

                    completed += 1
                    for table_name, count in population.row_counts().items():
                        self._progress_tracker.add_rows(table_name, count)
                        self._emit_progress(
                            table_name,
                            completed / warehouse_count,
                            f"Warehouse {w_id} complete ({completed}/{warehouse_count})",
                        )
                    yield population
            finally:
                # Consumer stopped early or a warehouse failed
                for future in future_to_warehouse:
                    future.cancel()

    def generate_population(self) -> PopulationResult:
        """
        Generate the complete initial population.

        Returns:
            PopulationResult with warehouses ordered by id. ``cancelled`` is set
            when cancel() stopped the run early.

        Raises:
            WarehouseGenerationError: If any warehouse fails
        """
        scale = self.config.scale
        logger.info(
            f"Starting population: {scale.warehouses} warehouse(s), "
            f"{scale.number_of_items:,} items, seed={self.config.seed}"
        )
        start = time.perf_counter()
        self._reset_run_state()

        self._progress_tracker.mark_table_started(TABLENAME_ITEM)
        items = self.generate_items(self._root_values)
        self._progress_tracker.add_rows(TABLENAME_ITEM, len(items))
        self._emit_progress(TABLENAME_ITEM, 1.0, "Items complete")

        populations = sorted(
            self.iter_warehouse_populations(items),
            key=lambda population: population.warehouse_id,
        )

        cancelled = len(populations) < scale.warehouses
        if cancelled:
            logger.warning(
                f"Population cancelled after {len(populations)}/{scale.warehouses} "
                "warehouse(s)"
            )
        else:
            self._progress_tracker.mark_generation_complete()

        elapsed = time.perf_counter() - start
        logger.info(f"Population generation finished in {elapsed:.2f}s")

        return PopulationResult(
            items=items,
            warehouses=populations,
            load_constants=self.load_constants,
            cancelled=cancelled,
            elapsed_seconds=elapsed,
        )

    def get_generation_summary(self) -> dict[str, Any]:
        """Get summary of generated rows and run settings."""
        return {
            "rows": self._progress_tracker.get_all_rows(),
            "states": self._progress_tracker.get_all_states(),
            "load_constants": self.load_constants.model_dump(),
            "cancelled": self.is_cancelled,
            "config": {
                "seed": self.config.seed,
                "warehouses": self.config.scale.warehouses,
                "number_of_items": self.config.scale.number_of_items,
                "max_workers": self._max_workers(),
            },
        }
