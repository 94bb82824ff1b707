"""
Identifier normalization

SAP document and material numbers come zero-padded from the backend
("0000004711"); the UI shows them without the padding.
"""
import re
from typing import Iterable, Optional

from pof.schemas.purchase_order_item import InboundDeliveryItem, ODataModel, PurchaseOrderItem

REGEX_LEADING_ZERO = re.compile(r"^0*")


def strip_leading_zeros(value: Optional[str]) -> Optional[str]:
    """Strip leading zeros from a non-blank value; blank values are returned as-is."""
    if value is None or not value.strip():
        return value
    return REGEX_LEADING_ZERO.sub("", value, count=1)


def _normalize_fields(entity: ODataModel) -> None:
    for field in entity.LEADING_ZERO_FIELDS:
        value = getattr(entity, field)
        stripped = strip_leading_zeros(value)
        if stripped != value:
            setattr(entity, field, stripped)


def remove_unneeded_leading_zero(item: PurchaseOrderItem) -> None:
    """Normalize a purchase order item and its nested inbound delivery items in place."""
    _normalize_fields(item)
    for inbound_delivery_item in item.inbound_delivery_items or []:
        remove_unneeded_leading_zero_inbound(inbound_delivery_item)


def remove_unneeded_leading_zero_inbound(item: InboundDeliveryItem) -> None:
    _normalize_fields(item)


def remove_unneeded_leading_zeros(items: Iterable[PurchaseOrderItem]) -> None:
    for item in items:
        remove_unneeded_leading_zero(item)
