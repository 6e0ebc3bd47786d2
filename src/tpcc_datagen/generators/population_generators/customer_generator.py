"""
Customer and history generation with the C_LAST surname distribution.
"""

import logging
from datetime import datetime
from decimal import Decimal

from tpcc_datagen.shared.constants import (
    BAD_CREDIT,
    GOOD_CREDIT,
    INITIAL_BALANCE,
    INITIAL_CREDIT_LIM,
    INITIAL_DELIVERY_CNT,
    INITIAL_H_AMOUNT,
    INITIAL_PAYMENT_CNT,
    INITIAL_YTD_PAYMENT,
    MAX_C_DATA,
    MAX_CITY,
    MAX_DISCOUNT,
    MAX_FIRST,
    MAX_H_DATA,
    MAX_STREET,
    MIDDLE,
    MIN_C_DATA,
    MIN_CITY,
    MIN_DISCOUNT,
    MIN_FIRST,
    MIN_H_DATA,
    MIN_STREET,
    PHONE,
    RATE_DIVISOR,
    SEQUENTIAL_SURNAME_CUSTOMERS,
    STATE,
)
from tpcc_datagen.shared.models import Customer, District, History

from ..utils import RandomValueGenerator, generate_c_last

logger = logging.getLogger(__name__)


class CustomerGeneratorMixin:
    """Mixin for CUSTOMER and HISTORY generation."""

    def generate_customer(
        self,
        district: District,
        c_id: int,
        c_last: str,
        c_since: datetime,
        random_values: RandomValueGenerator,
    ) -> Customer:
        """
        Generate one customer.

        Args:
            district: District this customer belongs to
            c_id: Customer identifier within the district
            c_last: Last name, chosen by the caller (see
                generate_customers_for_district)
            c_since: Time the customer table was populated
            random_values: Random source
        """
        c_credit = BAD_CREDIT if random_values.one_in(10) else GOOD_CREDIT
        return Customer(
            c_id=c_id,
            c_d_id=district.d_id,
            c_w_id=district.d_w_id,
            c_last=c_last,
            c_middle=MIDDLE,
            c_first=random_values.a_string(MIN_FIRST, MAX_FIRST),
            c_street_1=random_values.a_string(MIN_STREET, MAX_STREET),
            c_street_2=random_values.a_string(MIN_STREET, MAX_STREET),
            c_city=random_values.a_string(MIN_CITY, MAX_CITY),
            c_state=random_values.a_string(STATE, STATE),
            c_zip=random_values.zip_code(),
            c_phone=random_values.n_string(PHONE, PHONE),
            c_since=c_since,
            c_credit=c_credit,
            c_credit_lim=INITIAL_CREDIT_LIM,
            c_discount=Decimal(random_values.uniform(MIN_DISCOUNT, MAX_DISCOUNT))
            / RATE_DIVISOR,
            c_balance=INITIAL_BALANCE,
            c_ytd_payment=INITIAL_YTD_PAYMENT,
            c_payment_cnt=INITIAL_PAYMENT_CNT,
            c_delivery_cnt=INITIAL_DELIVERY_CNT,
            c_data=random_values.a_string(MIN_C_DATA, MAX_C_DATA),
        )

    def c_last_number(
        self, position: int, load_constant: int, random_values: RandomValueGenerator
    ) -> int:
        """
        Surname number for the customer at 0-based ``position`` in a district.

        The first 1000 customers cover every surname once; the rest draw from
        the non-uniform selector.
        """
        if position < SEQUENTIAL_SURNAME_CUSTOMERS:
            return position
        if self._surname_selector is not None:
            return self._surname_selector(load_constant)
        return random_values.skewed_surname_index(load_constant)

    def generate_customers_for_district(
        self,
        district: District,
        c_since: datetime,
        random_values: RandomValueGenerator,
        load_constant: int | None = None,
    ) -> list[Customer]:
        """
        Generate customers 1..customers_per_district for a district.

        Args:
            district: District the customers belong to
            c_since: Time the customer table was populated
            random_values: Random source
            load_constant: C_LAST load constant; defaults to the run's
        """
        if load_constant is None:
            load_constant = self.load_constants.c_last

        customer_count = self.config.scale.customers_per_district
        customers = []
        for position in range(customer_count):
            number = self.c_last_number(position, load_constant, random_values)
            customers.append(
                self.generate_customer(
                    district,
                    position + 1,
                    generate_c_last(number),
                    c_since,
                    random_values,
                )
            )

        logger.debug(
            f"Generated {len(customers):,} customers for district "
            f"{district.d_id} of warehouse {district.d_w_id}"
        )
        return customers

    def generate_history(
        self, customer: Customer, random_values: RandomValueGenerator
    ) -> History:
        """Generate one history row; district and warehouse mirror the customer."""
        return History(
            h_c_id=customer.c_id,
            h_c_d_id=customer.c_d_id,
            h_c_w_id=customer.c_w_id,
            h_d_id=customer.c_d_id,
            h_w_id=customer.c_w_id,
            h_date=self._clock(),
            h_amount=INITIAL_H_AMOUNT,
            h_data=random_values.a_string(MIN_H_DATA, MAX_H_DATA),
        )

    def generate_history_for_customer(
        self, customer: Customer, random_values: RandomValueGenerator
    ) -> list[History]:
        return [
            self.generate_history(customer, random_values)
            for _ in range(self.config.scale.history_rows_per_customer)
        ]
