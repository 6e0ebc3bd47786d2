"""
Core data models for the TPC-C population generator.

One frozen model per TPC-C table. Field names follow the benchmark's column
names; child records carry copies of their parents' identifiers rather than
references, so records can be produced in any order and shared across threads.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import (
    BAD_CREDIT,
    DELIVERED_ORDER_THRESHOLD,
    GOOD_CREDIT,
    STOCK_DIST_FIELDS,
)


class TpccRecord(BaseModel):
    """Base for all generated rows: immutable once constructed."""

    model_config = ConfigDict(frozen=True)


# ================================
# GLOBAL TABLES
# ================================


class Item(TpccRecord):
    """ITEM row (clause 4.3.3.1)."""

    i_id: int = Field(..., gt=0, description="Item identifier, unique globally")
    i_im_id: int = Field(..., ge=1, le=10000, description="Image identifier")
    i_name: str = Field(..., min_length=14, max_length=24, description="Item name")
    i_price: Decimal = Field(
        ..., ge=Decimal("1.01"), le=Decimal("100.00"), description="Unit price"
    )
    i_data: str = Field(..., min_length=26, max_length=50, description="Brand data")


# ================================
# WAREHOUSE SUB-TREE
# ================================


class Warehouse(TpccRecord):
    """WAREHOUSE row."""

    w_id: int = Field(..., gt=0, description="Warehouse identifier")
    w_name: str = Field(..., min_length=6, max_length=10)
    w_street_1: str = Field(..., min_length=10, max_length=20)
    w_street_2: str = Field(..., min_length=10, max_length=20)
    w_city: str = Field(..., min_length=10, max_length=20)
    w_state: str = Field(..., min_length=2, max_length=2)
    w_zip: str = Field(..., pattern=r"^\d{4}11111$")
    w_tax: Decimal = Field(..., ge=0, le=Decimal("0.2000"), description="Sales tax")
    w_ytd: Decimal = Field(..., description="Year to date balance")


class Stock(TpccRecord):
    """STOCK row, one per (item, warehouse) pair."""

    s_i_id: int = Field(..., gt=0, description="Foreign key to Item")
    s_w_id: int = Field(..., gt=0, description="Foreign key to Warehouse")
    s_quantity: int = Field(..., ge=10, le=100)
    s_dist_01: str = Field(..., min_length=24, max_length=24)
    s_dist_02: str = Field(..., min_length=24, max_length=24)
    s_dist_03: str = Field(..., min_length=24, max_length=24)
    s_dist_04: str = Field(..., min_length=24, max_length=24)
    s_dist_05: str = Field(..., min_length=24, max_length=24)
    s_dist_06: str = Field(..., min_length=24, max_length=24)
    s_dist_07: str = Field(..., min_length=24, max_length=24)
    s_dist_08: str = Field(..., min_length=24, max_length=24)
    s_dist_09: str = Field(..., min_length=24, max_length=24)
    s_dist_10: str = Field(..., min_length=24, max_length=24)
    s_ytd: int = Field(0, ge=0)
    s_order_cnt: int = Field(0, ge=0)
    s_remote_cnt: int = Field(0, ge=0)
    s_data: str = Field(..., min_length=26, max_length=50)

    def dist_info(self, district_id: int) -> str:
        """Return the S_DIST_xx value for a district (1-10)."""
        if not 1 <= district_id <= STOCK_DIST_FIELDS:
            raise ValueError(f"district_id must be in [1, 10], got {district_id}")
        return getattr(self, f"s_dist_{district_id:02d}")


class District(TpccRecord):
    """DISTRICT row."""

    d_id: int = Field(..., gt=0, description="District identifier within warehouse")
    d_w_id: int = Field(..., gt=0, description="Foreign key to Warehouse")
    d_name: str = Field(..., min_length=6, max_length=10)
    d_street_1: str = Field(..., min_length=10, max_length=20)
    d_street_2: str = Field(..., min_length=10, max_length=20)
    d_city: str = Field(..., min_length=10, max_length=20)
    d_state: str = Field(..., min_length=2, max_length=2)
    d_zip: str = Field(..., pattern=r"^\d{4}11111$")
    d_tax: Decimal = Field(..., ge=0, le=Decimal("0.2000"))
    d_ytd: Decimal
    d_next_o_id: int = Field(..., gt=0)


class Customer(TpccRecord):
    """CUSTOMER row."""

    c_id: int = Field(..., gt=0)
    c_d_id: int = Field(..., gt=0)
    c_w_id: int = Field(..., gt=0)
    c_last: str = Field(..., min_length=1, max_length=16)
    c_middle: str = Field(..., min_length=2, max_length=2)
    c_first: str = Field(..., min_length=8, max_length=16)
    c_street_1: str = Field(..., min_length=10, max_length=20)
    c_street_2: str = Field(..., min_length=10, max_length=20)
    c_city: str = Field(..., min_length=10, max_length=20)
    c_state: str = Field(..., min_length=2, max_length=2)
    c_zip: str = Field(..., pattern=r"^\d{4}11111$")
    c_phone: str = Field(..., pattern=r"^\d{16}$")
    c_since: datetime
    c_credit: str
    c_credit_lim: Decimal
    c_discount: Decimal = Field(..., ge=0, le=Decimal("0.5000"))
    c_balance: Decimal
    c_ytd_payment: Decimal
    c_payment_cnt: int = Field(..., ge=0)
    c_delivery_cnt: int = Field(..., ge=0)
    c_data: str = Field(..., min_length=300, max_length=500)

    @field_validator("c_credit")
    @classmethod
    def validate_credit(cls, v: str) -> str:
        """Credit is either good (GC) or bad (BC)."""
        if v not in (GOOD_CREDIT, BAD_CREDIT):
            raise ValueError(f"c_credit must be '{GOOD_CREDIT}' or '{BAD_CREDIT}'")
        return v


class History(TpccRecord):
    """HISTORY row, one or more per customer."""

    h_c_id: int = Field(..., gt=0)
    h_c_d_id: int = Field(..., gt=0)
    h_c_w_id: int = Field(..., gt=0)
    h_d_id: int = Field(..., gt=0)
    h_w_id: int = Field(..., gt=0)
    h_date: datetime
    h_amount: Decimal
    h_data: str = Field(..., min_length=12, max_length=24)


class Order(TpccRecord):
    """ORDERS row."""

    o_id: int = Field(..., gt=0)
    o_c_id: int = Field(..., gt=0, description="Customer assigned by permutation")
    o_d_id: int = Field(..., gt=0)
    o_w_id: int = Field(..., gt=0)
    o_entry_d: datetime
    o_carrier_id: int | None = Field(None, ge=1, le=10)
    o_ol_cnt: int = Field(..., ge=5, le=15)
    o_all_local: int = Field(..., ge=0, le=1)

    @property
    def is_delivered(self) -> bool:
        """Orders below the delivered threshold were fulfilled at load time."""
        return self.o_id < DELIVERED_ORDER_THRESHOLD

    @model_validator(mode="after")
    def validate_carrier(self) -> "Order":
        """Carrier is present exactly for delivered orders."""
        if self.is_delivered and self.o_carrier_id is None:
            raise ValueError(f"Delivered order {self.o_id} requires o_carrier_id")
        if not self.is_delivered and self.o_carrier_id is not None:
            raise ValueError(f"Undelivered order {self.o_id} must not set o_carrier_id")
        return self


class OrderLine(TpccRecord):
    """ORDER_LINE row."""

    ol_o_id: int = Field(..., gt=0)
    ol_d_id: int = Field(..., gt=0)
    ol_w_id: int = Field(..., gt=0)
    ol_number: int = Field(..., ge=1, le=15)
    ol_i_id: int = Field(..., gt=0)
    ol_supply_w_id: int = Field(..., gt=0)
    ol_delivery_d: datetime | None = None
    ol_quantity: int = Field(..., gt=0)
    ol_amount: Decimal = Field(..., ge=0, le=Decimal("9999.99"))
    ol_dist_info: str = Field(..., min_length=24, max_length=24)


class NewOrder(TpccRecord):
    """NEW_ORDER row, only for undelivered orders."""

    no_o_id: int = Field(..., ge=DELIVERED_ORDER_THRESHOLD)
    no_d_id: int = Field(..., gt=0)
    no_w_id: int = Field(..., gt=0)
