"""
Shared fixtures for order view tests.
"""

import os
import tempfile
from decimal import Decimal

# Keep per-module log files out of the working tree; must run before app imports.
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="order-view-logs-"))
os.environ.setdefault("APPLICATION_ENVIRONMENT", "TEST")
os.environ.setdefault("PRICE_DISPLAY_PRECISION", "2")
os.environ.setdefault("PRICE_ROUNDING_MODE", "ROUND_HALF_UP")
os.environ.setdefault("CURRENCY_SYMBOL", "$")
os.environ.setdefault("FIREHOSE_ENABLED", "false")

import pytest

from app.core.constants import OrderProductType
from app.dto.order_products import OrderLineItem


def make_line_item(**overrides) -> OrderLineItem:
    """Build a valid simple-product line, overriding any field by its Python name."""
    fields = {
        "id": 12,
        "order_detail_id": 301,
        "name": "Hummingbird printed t-shirt - Size : S - Color : White",
        "reference": "demo_1",
        "supplier_reference": "SUP-001",
        "location": "A-12",
        "image_path": "/img/p/1/1-small_default.jpg",
        "quantity": 5,
        "available_quantity": 40,
        "unit_price": "$23.90",
        "unit_price_tax_excl_raw": Decimal("19.916667"),
        "unit_price_tax_incl_raw": Decimal("23.900000"),
        "total_price": "$119.50",
        "tax_rate": Decimal("20.000"),
        "type": OrderProductType.PRODUCT_WITH_COMBINATIONS,
        "amount_refunded": "$0.00",
        "quantity_refunded": 0,
        "amount_refundable": "$119.50",
        "amount_refundable_raw": Decimal("119.500000"),
        "order_invoice_id": 7,
        "order_invoice_number": "#IN000007",
        "available_out_of_stock": False,
    }
    fields.update(overrides)
    return OrderLineItem(**fields)


@pytest.fixture
def line_item() -> OrderLineItem:
    return make_line_item()


@pytest.fixture
def pack_item() -> OrderLineItem:
    """A pack of two children: one simple product and one combination."""
    mug = make_line_item(
        id=21,
        order_detail_id=None,
        name="Mug The best is yet to come",
        reference="demo_12",
        image_path=None,
        quantity=2,
        unit_price="$11.90",
        unit_price_tax_excl_raw=Decimal("9.916667"),
        unit_price_tax_incl_raw=Decimal("11.900000"),
        total_price="$23.80",
        type=OrderProductType.PRODUCT_WITHOUT_COMBINATIONS,
    )
    shirt = make_line_item(id=1, order_detail_id=None, quantity=2)
    return make_line_item(
        id=30,
        order_detail_id=302,
        name="Starter pack",
        reference="pack_1",
        quantity=1,
        unit_price="$35.00",
        unit_price_tax_excl_raw=Decimal("29.166667"),
        unit_price_tax_incl_raw=Decimal("35.000000"),
        total_price="$35.00",
        type=OrderProductType.PACK,
        pack_items=[mug, shirt],
        amount_refundable="$35.00",
        amount_refundable_raw=Decimal("35.000000"),
    )


@pytest.fixture
def line_item_factory():
    return make_line_item
