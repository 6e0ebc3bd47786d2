"""
TPC-C Population Generator

Builds the initial TPC-C database population (clause 4.3) in memory:
- Global item catalogue
- Per-warehouse stock, districts, customers, history and orders
- pandas DataFrame handoff for loaders
"""

__version__ = "1.0.0"
__author__ = "TPC-C DataGen"
