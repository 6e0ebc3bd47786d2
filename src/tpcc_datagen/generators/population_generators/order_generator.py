"""
Order, order-line and new-order generation (clause 4.3.3.1).

Orders with O_ID below 2101 are delivered at load time: they get a carrier,
their lines get a delivery date and a zero amount. Orders from 2101 on are
open, and the first 900 of them (O_ID 2101..3000) each get a NEW_ORDER row.
"""

from decimal import Decimal

from tpcc_datagen.shared.constants import (
    DELIVERED_ORDER_THRESHOLD,
    DIST,
    INITIAL_ALL_LOCAL,
    INITIAL_OL_QUANTITY,
    MAX_CARRIER_ID,
    MAX_OL_AMOUNT,
    MAX_OL_CENTS,
    MAX_OL_CNT,
    MIN_CARRIER_ID,
    MIN_OL_AMOUNT,
    MIN_OL_CENTS,
    MIN_OL_CNT,
    NEW_ORDERS_PER_DISTRICT,
)
from tpcc_datagen.shared.exceptions import InvariantViolationError
from tpcc_datagen.shared.models import District, NewOrder, Order, OrderLine

from ..utils import RandomValueGenerator

ZERO_AMOUNT = Decimal("0.00")


class OrderGeneratorMixin:
    """Mixin for ORDERS, ORDER_LINE and NEW_ORDER generation."""

    def assign_customer_permutation(
        self, customer_count: int, random_values: RandomValueGenerator
    ) -> list[int]:
        """
        Random bijection from order position to customer id.

        Element ``i`` is the customer of order ``i + 1``.

        Raises:
            InvariantViolationError: If the shuffle lost or repeated an id
        """
        permutation = random_values.permutation(customer_count)
        if sorted(permutation) != list(range(1, customer_count + 1)):
            raise InvariantViolationError(
                "Customer permutation is not a bijection",
                {
                    "customers": customer_count,
                    "distinct": len(set(permutation)),
                    "assigned": len(permutation),
                },
            )
        return permutation

    def generate_order(
        self,
        c_id: int,
        district: District,
        o_id: int,
        random_values: RandomValueGenerator,
    ) -> Order:
        """Generate one order for customer ``c_id``."""
        if o_id < DELIVERED_ORDER_THRESHOLD:
            o_carrier_id = random_values.uniform(MIN_CARRIER_ID, MAX_CARRIER_ID)
        else:
            o_carrier_id = None

        return Order(
            o_id=o_id,
            o_c_id=c_id,
            o_d_id=district.d_id,
            o_w_id=district.d_w_id,
            o_entry_d=self._clock(),
            o_carrier_id=o_carrier_id,
            o_ol_cnt=random_values.uniform(MIN_OL_CNT, MAX_OL_CNT),
            o_all_local=INITIAL_ALL_LOCAL,
        )

    def generate_orders_for_district(
        self, district: District, random_values: RandomValueGenerator
    ) -> list[Order]:
        """Generate orders 1..order_rows_per_district, one per customer.

        ScaleConfig guarantees there are as many orders as customers.
        """
        customer_ids = self.assign_customer_permutation(
            self.config.scale.customers_per_district, random_values
        )
        return [
            self.generate_order(c_id, district, o_id, random_values)
            for o_id, c_id in enumerate(customer_ids, start=1)
        ]

    def generate_order_line(
        self, order: Order, ol_number: int, random_values: RandomValueGenerator
    ) -> OrderLine:
        """
        Generate one line of an order.

        Delivery date and amount follow the parent order's delivered status.
        """
        if order.is_delivered:
            ol_delivery_d = order.o_entry_d
            ol_amount = ZERO_AMOUNT
        else:
            ol_delivery_d = None
            ol_amount = Decimal(
                random_values.uniform(MIN_OL_AMOUNT, MAX_OL_AMOUNT)
            ) + Decimal(random_values.uniform(MIN_OL_CENTS, MAX_OL_CENTS)) / Decimal(100)

        return OrderLine(
            ol_o_id=order.o_id,
            ol_d_id=order.o_d_id,
            ol_w_id=order.o_w_id,
            ol_number=ol_number,
            ol_i_id=random_values.uniform(1, self.config.scale.number_of_items),
            ol_supply_w_id=order.o_w_id,
            ol_delivery_d=ol_delivery_d,
            ol_quantity=INITIAL_OL_QUANTITY,
            ol_amount=ol_amount.quantize(Decimal("0.01")),
            ol_dist_info=random_values.a_string(DIST, DIST),
        )

    def generate_order_lines_for_order(
        self, order: Order, random_values: RandomValueGenerator
    ) -> list[OrderLine]:
        return [
            self.generate_order_line(order, ol_number, random_values)
            for ol_number in range(1, order.o_ol_cnt + 1)
        ]

    def generate_new_order(self, no_o_id: int, no_d_id: int, no_w_id: int) -> NewOrder:
        return NewOrder(no_o_id=no_o_id, no_d_id=no_d_id, no_w_id=no_w_id)

    def new_order_ids(self) -> range:
        """
        O_IDs that get a NEW_ORDER row in every district.

        The window starts at the delivered threshold and holds at most 900
        ids, so it is 2101..3000 at standard scale and at any larger order
        count. A district scaled below 2101 orders has an empty window.
        """
        order_count = self.config.scale.order_rows_per_district
        last_o_id = min(
            order_count, DELIVERED_ORDER_THRESHOLD + NEW_ORDERS_PER_DISTRICT - 1
        )
        return range(DELIVERED_ORDER_THRESHOLD, last_o_id + 1)

    def generate_new_orders_for_district(self, district: District) -> list[NewOrder]:
        """Generate the NEW_ORDER rows of a district."""
        return [
            self.generate_new_order(no_o_id, district.d_id, district.d_w_id)
            for no_o_id in self.new_order_ids()
        ]
