"""
Pydantic schemas for the DTOs exchanged with the GTT core service.
"""
from pof.schemas.event import Event, ProcessEventDirectory
from pof.schemas.odata import ODataResultList
from pof.schemas.purchase_order_item import (
    InboundDeliveryItem,
    Location,
    ODataModel,
    PurchaseOrderItem,
)

__all__ = [
    "Event",
    "InboundDeliveryItem",
    "Location",
    "ODataModel",
    "ODataResultList",
    "ProcessEventDirectory",
    "PurchaseOrderItem",
]
