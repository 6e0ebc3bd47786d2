"""
District generation (clause 4.3.3.1).
"""

from decimal import Decimal

from tpcc_datagen.shared.constants import (
    INITIAL_D_YTD,
    INITIAL_NEXT_O_ID,
    MAX_CITY,
    MAX_NAME,
    MAX_STREET,
    MAX_TAX,
    MIN_CITY,
    MIN_NAME,
    MIN_STREET,
    MIN_TAX,
    RATE_DIVISOR,
    STATE,
)
from tpcc_datagen.shared.models import District, Warehouse

from ..utils import RandomValueGenerator


class DistrictGeneratorMixin:
    """Mixin for DISTRICT generation."""

    def generate_district(
        self, warehouse: Warehouse, d_id: int, random_values: RandomValueGenerator
    ) -> District:
        """Generate one district of a warehouse. D_NEXT_O_ID starts at 3001."""
        return District(
            d_id=d_id,
            d_w_id=warehouse.w_id,
            d_name=random_values.a_string(MIN_NAME, MAX_NAME),
            d_street_1=random_values.a_string(MIN_STREET, MAX_STREET),
            d_street_2=random_values.a_string(MIN_STREET, MAX_STREET),
            d_city=random_values.a_string(MIN_CITY, MAX_CITY),
            d_state=random_values.a_string(STATE, STATE),
            d_zip=random_values.zip_code(),
            d_tax=Decimal(random_values.uniform(MIN_TAX, MAX_TAX)) / RATE_DIVISOR,
            d_ytd=INITIAL_D_YTD,
            d_next_o_id=INITIAL_NEXT_O_ID,
        )

    def generate_districts_for_warehouse(
        self, warehouse: Warehouse, random_values: RandomValueGenerator
    ) -> list[District]:
        district_count = self.config.scale.districts_per_warehouse
        return [
            self.generate_district(warehouse, d_id, random_values)
            for d_id in range(1, district_count + 1)
        ]
