"""
TPC-C population constants (revision 5.11, clause 4.3).

Table names, per-field length bounds and the fixed initial values used by the
entity builders.
"""

import string
from decimal import Decimal

# ================================
# TABLE NAMES
# ================================

TABLENAME_ITEM = "item"
TABLENAME_WAREHOUSE = "warehouse"
TABLENAME_STOCK = "stock"
TABLENAME_DISTRICT = "district"
TABLENAME_CUSTOMER = "customer"
TABLENAME_HISTORY = "history"
TABLENAME_ORDERS = "orders"
TABLENAME_ORDER_LINE = "order_line"
TABLENAME_NEW_ORDER = "new_order"

ALL_TABLES = [
    TABLENAME_ITEM,
    TABLENAME_WAREHOUSE,
    TABLENAME_STOCK,
    TABLENAME_DISTRICT,
    TABLENAME_CUSTOMER,
    TABLENAME_HISTORY,
    TABLENAME_ORDERS,
    TABLENAME_ORDER_LINE,
    TABLENAME_NEW_ORDER,
]

# ================================
# CHARACTER SETS
# ================================

ALPHANUMERIC = string.ascii_letters + string.digits
NUMERIC = string.digits

ORIGINAL_STRING = "ORIGINAL"
MAX_MARKER_REPAIRS = 1000

# ================================
# DEFAULT SCALE
# ================================

NUM_ITEMS = 100000
DISTRICTS_PER_WAREHOUSE = 10
CUSTOMERS_PER_DISTRICT = 3000
HISTORY_ROWS_PER_CUSTOMER = 1
ORDER_ROWS_PER_DISTRICT = 3000

# ================================
# ITEM
# ================================

MIN_IM = 1
MAX_IM = 10000
MIN_I_NAME = 14
MAX_I_NAME = 24
MIN_I_DATA = 26
MAX_I_DATA = 50

# ================================
# WAREHOUSE / DISTRICT ADDRESSES
# ================================

MIN_NAME = 6
MAX_NAME = 10
MIN_STREET = 10
MAX_STREET = 20
MIN_CITY = 10
MAX_CITY = 20
STATE = 2
ZIP_PREFIX_LENGTH = 4
ZIP_SUFFIX = "11111"

MIN_TAX = 0
MAX_TAX = 2000
RATE_DIVISOR = Decimal("10000")

INITIAL_W_YTD = Decimal("300000.00")
INITIAL_D_YTD = Decimal("30000.00")
INITIAL_NEXT_O_ID = 3001

# ================================
# STOCK
# ================================

MIN_QUANTITY = 10
MAX_QUANTITY = 100
DIST = 24
STOCK_DIST_FIELDS = 10

# ================================
# CUSTOMER
# ================================

C_LAST_SYLLABLES = [
    "BAR",
    "OUGHT",
    "ABLE",
    "PRI",
    "PRES",
    "ESE",
    "ANTI",
    "CALLY",
    "ATION",
    "EING",
]
SEQUENTIAL_SURNAME_CUSTOMERS = 1000
MAX_C_LAST_NUMBER = 999

MIN_FIRST = 8
MAX_FIRST = 16
MIDDLE = "OE"
PHONE = 16
MIN_C_DATA = 300
MAX_C_DATA = 500
GOOD_CREDIT = "GC"
BAD_CREDIT = "BC"
INITIAL_CREDIT_LIM = Decimal("50000.00")
MIN_DISCOUNT = 0
MAX_DISCOUNT = 5000
INITIAL_BALANCE = Decimal("-10.00")
INITIAL_YTD_PAYMENT = Decimal("10.00")
INITIAL_PAYMENT_CNT = 1
INITIAL_DELIVERY_CNT = 0

# NURand(A, x, y) parameters (clause 2.1.6)
NURAND_A_C_LAST = 255
NURAND_A_C_ID = 1023
NURAND_A_OL_I_ID = 8191

# ================================
# HISTORY
# ================================

INITIAL_H_AMOUNT = Decimal("10.00")
MIN_H_DATA = 12
MAX_H_DATA = 24

# ================================
# ORDERS / ORDER LINES / NEW ORDERS
# ================================

# o_id below this value is delivered: carrier set, ol_delivery_d set, amount 0
DELIVERED_ORDER_THRESHOLD = 2101
NEW_ORDERS_PER_DISTRICT = 900

MIN_CARRIER_ID = 1
MAX_CARRIER_ID = 10
MIN_OL_CNT = 5
MAX_OL_CNT = 15
INITIAL_ALL_LOCAL = 1
INITIAL_OL_QUANTITY = 5
MIN_OL_AMOUNT = 0
MAX_OL_AMOUNT = 9999
MIN_OL_CENTS = 1
MAX_OL_CENTS = 99
