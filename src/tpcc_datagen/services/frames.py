"""
pandas handoff for generated populations.

Converts frozen records into one DataFrame per TPC-C table so loaders can
bulk-insert them. Decimal columns become float64; identifiers stay integer.
"""

import logging
from collections.abc import Iterable
from decimal import Decimal

import pandas as pd

from tpcc_datagen.generators.population_generators.base_types import PopulationResult
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

logger = logging.getLogger(__name__)

TABLE_MODELS: dict[str, type[TpccRecord]] = {
    TABLENAME_ITEM: Item,
    TABLENAME_WAREHOUSE: Warehouse,
    TABLENAME_STOCK: Stock,
    TABLENAME_DISTRICT: District,
    TABLENAME_CUSTOMER: Customer,
    TABLENAME_HISTORY: History,
    TABLENAME_ORDERS: Order,
    TABLENAME_ORDER_LINE: OrderLine,
    TABLENAME_NEW_ORDER: NewOrder,
}

# Column order per table, as declared on the record models
TABLE_COLUMNS: dict[str, list[str]] = {
    table_name: list(model.model_fields) for table_name, model in TABLE_MODELS.items()
}


def _to_row(record: TpccRecord) -> dict:
    row = record.model_dump()
    for key, value in row.items():
        if isinstance(value, Decimal):
            row[key] = float(value)
    return row


def records_to_frame(records: Iterable[TpccRecord], table_name: str) -> pd.DataFrame:
    """
    Build a DataFrame for one table.

    Args:
        records: Records of the table's model
        table_name: One of the TPC-C table names

    Returns:
        DataFrame with exactly TABLE_COLUMNS[table_name], in order. An empty
        input still yields the full column set.

    Raises:
        ValueError: If the table is unknown or a record has the wrong type
    """
    if table_name not in TABLE_MODELS:
        raise ValueError(f"Unknown table: {table_name}")

    model = TABLE_MODELS[table_name]
    rows = []
    for record in records:
        if not isinstance(record, model):
            raise ValueError(
                f"Expected {model.__name__} for table {table_name}, "
                f"got {type(record).__name__}"
            )
        rows.append(_to_row(record))

    return pd.DataFrame.from_records(rows, columns=TABLE_COLUMNS[table_name])


def population_to_frames(result: PopulationResult) -> dict[str, pd.DataFrame]:
    """Convert a whole population into DataFrames keyed by table name."""
    frames = {
        table_name: records_to_frame(result.records(table_name), table_name)
        for table_name in ALL_TABLES
    }
    logger.debug(
        "Built frames: "
        + ", ".join(f"{name}={len(frame):,}" for name, frame in frames.items())
    )
    return frames
