"""
Warehouse and stock generation (clause 4.3.3.1).
"""

import logging
import time
from decimal import Decimal

from tpcc_datagen.shared.constants import (
    DIST,
    INITIAL_W_YTD,
    MAX_CITY,
    MAX_I_DATA,
    MAX_NAME,
    MAX_QUANTITY,
    MAX_STREET,
    MAX_TAX,
    MIN_CITY,
    MIN_I_DATA,
    MIN_NAME,
    MIN_QUANTITY,
    MIN_STREET,
    MIN_TAX,
    RATE_DIVISOR,
    STATE,
    STOCK_DIST_FIELDS,
)
from tpcc_datagen.shared.models import Item, Stock, Warehouse

from ..utils import RandomValueGenerator

logger = logging.getLogger(__name__)


class WarehouseGeneratorMixin:
    """Mixin for WAREHOUSE and STOCK generation."""

    def generate_warehouse(
        self, w_id: int, random_values: RandomValueGenerator
    ) -> Warehouse:
        """Generate one warehouse with the given W_ID."""
        return Warehouse(
            w_id=w_id,
            w_name=random_values.a_string(MIN_NAME, MAX_NAME),
            w_street_1=random_values.a_string(MIN_STREET, MAX_STREET),
            w_street_2=random_values.a_string(MIN_STREET, MAX_STREET),
            w_city=random_values.a_string(MIN_CITY, MAX_CITY),
            w_state=random_values.a_string(STATE, STATE),
            w_zip=random_values.zip_code(),
            w_tax=Decimal(random_values.uniform(MIN_TAX, MAX_TAX)) / RATE_DIVISOR,
            w_ytd=INITIAL_W_YTD,
        )

    def generate_warehouses(
        self, count: int, random_values: RandomValueGenerator
    ) -> list[Warehouse]:
        """Generate warehouses with ids 1..count from a single random source."""
        return [self.generate_warehouse(w_id, random_values) for w_id in range(1, count + 1)]

    def generate_stock(
        self, warehouse: Warehouse, s_i_id: int, random_values: RandomValueGenerator
    ) -> Stock:
        """
        Generate one stock row for an item in a warehouse.

        Args:
            warehouse: Owning warehouse
            s_i_id: Item the stock row refers to
            random_values: Random source
        """
        dist_fields = {
            f"s_dist_{n:02d}": random_values.a_string(DIST, DIST)
            for n in range(1, STOCK_DIST_FIELDS + 1)
        }
        return Stock(
            s_i_id=s_i_id,
            s_w_id=warehouse.w_id,
            s_quantity=random_values.uniform(MIN_QUANTITY, MAX_QUANTITY),
            s_ytd=0,
            s_order_cnt=0,
            s_remote_cnt=0,
            s_data=random_values.original_a_string(
                MIN_I_DATA, MAX_I_DATA, random_values.one_in(10)
            ),
            **dist_fields,
        )

    def generate_stock_for_warehouse(
        self,
        warehouse: Warehouse,
        items: list[Item],
        random_values: RandomValueGenerator,
    ) -> list[Stock]:
        """Generate one stock row per item for a warehouse."""
        logger.debug(f"Generating stock for warehouse {warehouse.w_id}")
        start = time.perf_counter()
        stock = [self.generate_stock(warehouse, item.i_id, random_values) for item in items]
        logger.debug(
            f"Finished stock for warehouse {warehouse.w_id}. "
            f"Elapsed time: {time.perf_counter() - start:.2f}s"
        )
        return stock
