"""
Order view Data Transfer Objects.

Immutable read models describing the products of one order as shown in the
order view: each line carries price, tax, refund, stock, invoice and
customization facts, already computed by the order aggregation layer.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.core.constants import CustomizationFieldType, OrderProductType

from app.logging.utils import get_app_logger
logger = get_app_logger('order_products_dto')


class OrderLineItemStateError(Exception):
    """Raised when a line item is built from inconsistent refund or pack data."""


class _ReadModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel, extra="forbid")


class OrderProductCustomization(_ReadModel):
    type: CustomizationFieldType
    name: str = Field(..., description="Label of the customization field")
    value: str = Field(..., description="Entered text, or the path of the uploaded file")


class OrderProductCustomizations(_ReadModel):
    customizations: Tuple[OrderProductCustomization, ...] = ()

    @property
    def text_fields(self) -> List[OrderProductCustomization]:
        return [c for c in self.customizations if c.type == CustomizationFieldType.TEXT]

    @property
    def files(self) -> List[OrderProductCustomization]:
        return [c for c in self.customizations if c.type == CustomizationFieldType.FILE]


class OrderLineItem(_ReadModel):
    """One product line of an order, ready for display or API export.

    Formatted amounts (unit_price, total_price, amount_refunded,
    amount_refundable) are presentation-only. Arithmetic goes through the
    exact ``*_raw`` decimals and ``tax_rate``.
    """

    # exported by serialize(), in wire order
    id: int = Field(..., strict=True, description="Catalog product ID")
    order_detail_id: Optional[int] = Field(..., strict=True, description="None for pack children without their own order detail row")
    name: str
    reference: str
    supplier_reference: str
    location: str
    image_path: Optional[str] = Field(..., description="None when the product has no image")
    quantity: int = Field(..., ge=0, strict=True)
    available_quantity: int = Field(..., strict=True, description="Stock on hand, negative when oversold")
    unit_price: str
    unit_price_tax_excl_raw: Decimal
    unit_price_tax_incl_raw: Decimal
    total_price: str
    tax_rate: Decimal
    type: OrderProductType
    pack_items: Tuple["OrderLineItem", ...] = ()

    # accessors only
    amount_refunded: str
    quantity_refunded: int = Field(..., ge=0, strict=True)
    amount_refundable: str
    amount_refundable_raw: Decimal
    order_invoice_id: Optional[int] = Field(..., strict=True, description="None until the line is invoiced")
    order_invoice_number: str
    available_out_of_stock: bool = Field(..., strict=True)
    customizations: Optional[OrderProductCustomizations] = None

    @field_validator(
        "unit_price_tax_excl_raw",
        "unit_price_tax_incl_raw",
        "tax_rate",
        "amount_refundable_raw",
        mode="before",
    )
    def validate_exact_decimal(cls, v, info):
        if isinstance(v, (float, bool)):
            logger.error(f"Inexact value for {info.field_name}: {v!r}")
            raise ValueError(f"{info.field_name} must be an exact decimal (Decimal, int or str), got {type(v).__name__}")
        return v

    @model_validator(mode="after")
    def validate_refund_and_pack_state(self):
        if self.quantity_refunded > self.quantity:
            logger.error(
                f"line_item_invalid_state | product_id={self.id} order_detail_id={self.order_detail_id} "
                f"quantity={self.quantity} quantity_refunded={self.quantity_refunded}"
            )
            raise OrderLineItemStateError(
                f"Product {self.id}: refunded quantity {self.quantity_refunded} exceeds ordered quantity {self.quantity}"
            )

        if self.is_pack and not self.pack_items:
            logger.error(f"line_item_invalid_state | product_id={self.id} reason=pack_without_items")
            raise OrderLineItemStateError(f"Product {self.id} is a pack but has no pack items")
        if not self.is_pack and self.pack_items:
            logger.error(
                f"line_item_invalid_state | product_id={self.id} type={self.type.value} "
                f"pack_items={len(self.pack_items)} reason=items_on_non_pack"
            )
            raise OrderLineItemStateError(
                f"Product {self.id} of type {self.type.value} cannot carry pack items"
            )
        return self

    @property
    def quantity_refundable(self) -> int:
        """How many units of this line can still be refunded."""
        return self.quantity - self.quantity_refunded

    @property
    def is_refundable(self) -> bool:
        return self.quantity > self.quantity_refunded

    @property
    def is_pack(self) -> bool:
        return self.type == OrderProductType.PACK

    def serialize(self) -> Dict[str, Any]:
        """Export view for JSON responses.

        Refund figures, customizations, invoice linkage and backorder policy
        are deliberately left out; read them from the attributes.
        """
        data = self.model_dump(mode="json", by_alias=True, include=EXPORTED_FIELDS)
        data["packItems"] = [item.serialize() for item in self.pack_items]
        return data


EXPORTED_FIELDS = {
    "id",
    "order_detail_id",
    "name",
    "reference",
    "supplier_reference",
    "location",
    "image_path",
    "quantity",
    "available_quantity",
    "unit_price",
    "unit_price_tax_excl_raw",
    "unit_price_tax_incl_raw",
    "total_price",
    "tax_rate",
    "type",
}


class OrderProductsForViewing(_ReadModel):
    """All product lines of one order, in display order."""

    products: Tuple[OrderLineItem, ...] = ()

    @property
    def refundable_products(self) -> List[OrderLineItem]:
        return [product for product in self.products if product.is_refundable]

    def serialize(self) -> Dict[str, Any]:
        return {"products": [product.serialize() for product in self.products]}
