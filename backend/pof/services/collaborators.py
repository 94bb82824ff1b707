"""
Collaborator interfaces

The purchase order item handler does not resolve locations or compute
inbound delivery timings itself; the hosting application supplies objects
implementing these protocols.
"""
from typing import Dict, List, Protocol

from pof.schemas.purchase_order_item import InboundDeliveryItem, Location, PurchaseOrderItem


class LocationService(Protocol):
    """Resolves location keys on items into Location DTOs."""

    def get_locations_for_purchase_order_items(
        self, items: List[PurchaseOrderItem]
    ) -> Dict[str, Location]:
        """Batch lookup; returns locations keyed by location alt key."""
        ...

    def get_locations_for_inbound_delivery_items(
        self, items: List[InboundDeliveryItem]
    ) -> Dict[str, Location]:
        ...

    def set_locations_for_purchase_order_item(
        self, item: PurchaseOrderItem, locations: Dict[str, Location]
    ) -> None:
        ...

    def set_locations_for_inbound_delivery(
        self, item: InboundDeliveryItem, locations: Dict[str, Location]
    ) -> None:
        ...

    def set_receiving_location(self, item: PurchaseOrderItem) -> None:
        """Single-entity lookup of the receiving location."""
        ...

    def set_supplier_location(self, item: PurchaseOrderItem) -> None:
        ...


class InboundDeliveryItemHandler(Protocol):
    """Sibling handler owning the derived fields of inbound delivery items."""

    def update_arrival_times(self, items: List[InboundDeliveryItem]) -> None:
        ...

    def update_last_location_description(self, item: InboundDeliveryItem) -> None:
        ...

    def update_planned_arrival_at(self, item: InboundDeliveryItem) -> None:
        ...
