"""
Item generation (clause 4.3.3.1). Items are global and generated once per run.
"""

import logging
import time
from decimal import Decimal

from tpcc_datagen.shared.constants import (
    MAX_I_DATA,
    MAX_I_NAME,
    MAX_IM,
    MIN_I_DATA,
    MIN_I_NAME,
    MIN_IM,
)
from tpcc_datagen.shared.models import Item

from ..utils import RandomValueGenerator

logger = logging.getLogger(__name__)


class ItemGeneratorMixin:
    """Mixin for ITEM generation."""

    def generate_item(self, i_id: int, random_values: RandomValueGenerator) -> Item:
        """
        Generate one item. I_DATA carries 'ORIGINAL' for 10% of items.

        Args:
            i_id: Unique item identifier
            random_values: Random source
        """
        i_im_id = random_values.uniform(MIN_IM, MAX_IM)
        i_name = random_values.a_string(MIN_I_NAME, MAX_I_NAME)
        i_price = Decimal(random_values.uniform(1, 99)) + Decimal(
            random_values.uniform(1, 100)
        ) / Decimal(100)
        i_data = random_values.original_a_string(
            MIN_I_DATA, MAX_I_DATA, random_values.one_in(10)
        )
        return Item(
            i_id=i_id,
            i_im_id=i_im_id,
            i_name=i_name,
            i_price=i_price.quantize(Decimal("0.01")),
            i_data=i_data,
        )

    def generate_items(self, random_values: RandomValueGenerator) -> list[Item]:
        """Generate items with ids 1..number_of_items."""
        item_count = self.config.scale.number_of_items
        logger.info(f"Generating {item_count:,} items")

        start = time.perf_counter()
        items = [self.generate_item(i_id, random_values) for i_id in range(1, item_count + 1)]
        logger.debug(
            f"Finished item generation. Elapsed time: {time.perf_counter() - start:.2f}s"
        )
        return items
