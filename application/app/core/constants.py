"""
Core constants for the order view service

Line item types and customization field kinds shared by the order view
read models.
"""
from enum import Enum


class OrderProductType(str, Enum):
    """Kind of product an order line refers to"""

    PACK = "pack"
    PRODUCT_WITH_COMBINATIONS = "product_with_combinations"
    PRODUCT_WITHOUT_COMBINATIONS = "product_without_combinations"


class CustomizationFieldType(str, Enum):
    """Customization field kinds a customer can fill in for a product"""

    FILE = "file"
    TEXT = "text"
