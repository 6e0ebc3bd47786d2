"""
Batch containers handed from the population generator to its consumers.

A WarehousePopulation is the unit of handoff: it is only built once every
table of the warehouse sub-tree is complete, so consumers never see a partial
warehouse.
"""

from dataclasses import dataclass, field

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
    TABLENAME_WAREHOUSE,
)
from tpcc_datagen.shared.models import (
    Customer,
    District,
    History,
    Item,
    NewOrder,
    Order,
    OrderLine,
    Stock,
    TpccRecord,
    Warehouse,
)

from ..utils import LoadConstants


@dataclass(frozen=True)
class WarehousePopulation:
    """All rows belonging to one warehouse, in generation order."""

    warehouse: Warehouse
    stock: list[Stock]
    districts: list[District]
    customers: list[Customer]
    history: list[History]
    orders: list[Order]
    order_lines: list[OrderLine]
    new_orders: list[NewOrder]

    @property
    def warehouse_id(self) -> int:
        return self.warehouse.w_id

    def tables(self) -> dict[str, list[TpccRecord]]:
        """Rows keyed by TPC-C table name."""
        return {
            TABLENAME_WAREHOUSE: [self.warehouse],
            TABLENAME_STOCK: self.stock,
            TABLENAME_DISTRICT: self.districts,
            TABLENAME_CUSTOMER: self.customers,
            TABLENAME_HISTORY: self.history,
            TABLENAME_ORDERS: self.orders,
            TABLENAME_ORDER_LINE: self.order_lines,
            TABLENAME_NEW_ORDER: self.new_orders,
        }

    def row_counts(self) -> dict[str, int]:
        return {name: len(rows) for name, rows in self.tables().items()}


@dataclass(frozen=True)
class PopulationResult:
    """Complete output of a population run.

    ``cancelled`` is True when the run was stopped before every warehouse was
    built; ``warehouses`` then holds only the warehouses that completed.
    """

    items: list[Item]
    warehouses: list[WarehousePopulation]
    load_constants: LoadConstants
    cancelled: bool = False
    elapsed_seconds: float = field(default=0.0, compare=False)

    def records(self, table_name: str) -> list[TpccRecord]:
        """All rows of one table across every warehouse."""
        if table_name not in ALL_TABLES:
            raise KeyError(f"Unknown table '{table_name}'")
        if table_name == TABLENAME_ITEM:
            return list(self.items)

        rows: list[TpccRecord] = []
        for population in self.warehouses:
            rows.extend(population.tables()[table_name])
        return rows

    def row_counts(self) -> dict[str, int]:
        counts = {TABLENAME_ITEM: len(self.items)}
        for population in self.warehouses:
            for name, count in population.row_counts().items():
                counts[name] = counts.get(name, 0) + count
        return counts
