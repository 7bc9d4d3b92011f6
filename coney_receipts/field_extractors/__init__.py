"""Field extraction helpers for structured receipt data."""
from .amount import extract_total
from .brand import extract_brand
from .check_number import extract_check_number
from .date import extract_date, extract_date_simple, extract_time
from .quantity import extract_quantity, extract_quantity_strict

__all__ = [
    "extract_brand",
    "extract_check_number",
    "extract_date",
    "extract_date_simple",
    "extract_quantity",
    "extract_quantity_strict",
    "extract_time",
    "extract_total",
]
