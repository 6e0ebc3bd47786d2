"""
Configuration models for the TPC-C population generator.

A config.json holds the run seed, the population cardinalities and the worker
limits. Every cardinality except the warehouse count defaults to the size the
benchmark prescribes, so ``{"scale": {"warehouses": 4}}`` is a complete,
standard-conforming configuration.
"""

import json
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tpcc_datagen.shared.constants import (
    CUSTOMERS_PER_DISTRICT,
    DISTRICTS_PER_WAREHOUSE,
    HISTORY_ROWS_PER_CUSTOMER,
    NUM_ITEMS,
    ORDER_ROWS_PER_DISTRICT,
)


class ScaleConfig(BaseModel):
    """Row counts of the population."""

    model_config = ConfigDict(validate_assignment=True)

    warehouses: int = Field(..., gt=0, description="Number of warehouses to generate")
    number_of_items: int = Field(
        NUM_ITEMS, gt=0, description="Number of items (and stock rows per warehouse)"
    )
    districts_per_warehouse: int = Field(
        DISTRICTS_PER_WAREHOUSE, gt=0, description="Districts per warehouse"
    )
    customers_per_district: int = Field(
        CUSTOMERS_PER_DISTRICT, gt=0, description="Customers per district"
    )
    history_rows_per_customer: int = Field(
        HISTORY_ROWS_PER_CUSTOMER, gt=0, description="History rows per customer"
    )
    order_rows_per_district: int = Field(
        ORDER_ROWS_PER_DISTRICT, gt=0, description="Orders per district"
    )

    @model_validator(mode="after")
    def validate_order_customer_bijection(self) -> "ScaleConfig":
        """Every customer is assigned exactly one initial order."""
        if self.order_rows_per_district != self.customers_per_district:
            raise ValueError(
                f"order_rows_per_district ({self.order_rows_per_district}) must equal "
                f"customers_per_district ({self.customers_per_district})"
            )
        return self

    @property
    def stock_per_warehouse(self) -> int:
        return self.number_of_items


class PerformanceConfig(BaseModel):
    """Limits on the warehouse worker pool."""

    model_config = ConfigDict(validate_assignment=True)

    max_cpu_percent: float = Field(
        100.0,
        gt=0.0,
        le=100.0,
        description="Share of CPU cores (percent) to use for warehouse workers",
    )
    max_workers: int | None = Field(
        None,
        gt=0,
        description="Fixed worker count; takes precedence over max_cpu_percent",
    )

    def get_max_workers(self) -> int:
        """Worker count: the fixed value if set, else the CPU share (at least 1)."""
        if self.max_workers is not None:
            return self.max_workers

        cores = os.cpu_count() or 1
        return max(1, int(cores * self.max_cpu_percent / 100.0))


class TpccConfig(BaseModel):
    """Top-level configuration of a population run."""

    model_config = ConfigDict(validate_assignment=True)

    seed: int | None = Field(
        None,
        ge=0,
        le=2**32 - 1,
        description="Random seed for reproducible populations; None draws from OS entropy",
    )
    scale: ScaleConfig = Field(..., description="Population cardinalities")
    performance: PerformanceConfig = Field(
        default_factory=PerformanceConfig,
        description="Worker pool limits",
    )

    @classmethod
    def from_file(cls, file_path: str | Path) -> "TpccConfig":
        """
        Read and validate a JSON configuration file.

        Raises:
            FileNotFoundError: If ``file_path`` does not exist
            ValueError: If the file is not JSON; pydantic's ValidationError
                (also a ValueError) if it does not match the models
        """
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"No configuration file at {path}")

        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

        return cls.model_validate(data)

    def to_file(self, file_path: str | Path) -> None:
        """Write this configuration as indented JSON, creating parent directories."""
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2))
