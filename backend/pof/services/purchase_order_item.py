"""
Purchase Order Item Read Handler

Serves entity-set and single-entity reads of purchase order items:

1. Remember which virtual sub-resources the caller asked for
2. Strip them from the URI and delegate the read to the core service
3. Resolve the virtual sub-resources locally (locations, arrival times)
4. Normalize zero-padded identifiers
5. Zero net/completion value of items whose latest event is a deletion

Backend failures are not caught here; they reach the API layer as raised.
"""
from typing import Any, Dict, List, Optional

from pof.exceptions import ServiceUnavailableError
from pof.logging_config import get_logger
from pof.odata.query import (
    is_arrival_times_requested,
    is_location_requested,
    remove_unnecessary_expands,
)
from pof.schemas.odata import ODataResultList
from pof.schemas.purchase_order_item import PurchaseOrderItem
from pof.services.collaborators import InboundDeliveryItemHandler, LocationService
from pof.services.completion_value import CompletionValueService
from pof.services.identifiers import remove_unneeded_leading_zero, remove_unneeded_leading_zeros

logger = get_logger(__name__)


class PurchaseOrderItemHandler:
    """Read handler for the PurchaseOrderItem entity set."""

    def __init__(
        self,
        client,
        *,
        location_service: Optional[LocationService] = None,
        inbound_delivery_item_handler: Optional[InboundDeliveryItemHandler] = None,
        completion_value_service: Optional[CompletionValueService] = None,
    ):
        self.client = client
        self.location_service = location_service
        self.inbound_delivery_item_handler = inbound_delivery_item_handler
        self.completion_values = completion_value_service or CompletionValueService(client)

    # ========================================================================
    # Collaborators
    # ========================================================================

    def _require_location_service(self) -> LocationService:
        if self.location_service is None:
            raise ServiceUnavailableError("Location service", "is not configured")
        return self.location_service

    def _require_inbound_delivery_item_handler(self) -> InboundDeliveryItemHandler:
        if self.inbound_delivery_item_handler is None:
            raise ServiceUnavailableError("Inbound delivery item handler", "is not configured")
        return self.inbound_delivery_item_handler

    # ========================================================================
    # Reads
    # ========================================================================

    def handle_read_entity_set(self, uri: str) -> ODataResultList[Dict[str, Any]]:
        """Read a page of purchase order items and enrich it."""
        location_requested = is_location_requested(uri)
        arrival_times_requested = is_arrival_times_requested(uri)
        uri = remove_unnecessary_expands(uri)

        entity_list = self.client.read_entity_set(uri, PurchaseOrderItem)
        items = entity_list.results
        logger.debug(
            "Read %d purchase order item(s)", len(items),
            extra={"uri": uri, "locations": location_requested, "arrival_times": arrival_times_requested},
        )

        if location_requested:
            self._set_locations(items)
        if arrival_times_requested:
            inbound_delivery_items = [idi for item in items for idi in item.inbound_delivery_items]
            if inbound_delivery_items:
                self._require_inbound_delivery_item_handler().update_arrival_times(inbound_delivery_items)
        if items:
            remove_unneeded_leading_zeros(items)
            self.completion_values.update_completion_values(items)

        return ODataResultList[Dict[str, Any]](
            results=[item.to_dict() for item in items],
            count=entity_list.count,
        )

    def handle_read_entity(self, uri: str) -> Dict[str, Any]:
        """Read one purchase order item and enrich it."""
        location_requested = is_location_requested(uri)
        arrival_times_requested = is_arrival_times_requested(uri)
        uri = remove_unnecessary_expands(uri)

        entity = self.client.read_entity(uri, PurchaseOrderItem)
        self.completion_values.update_completion_value(entity)

        if location_requested:
            location_service = self._require_location_service()
            location_service.set_receiving_location(entity)
            location_service.set_supplier_location(entity)

        self._process_expands(entity, location_requested, arrival_times_requested)
        remove_unneeded_leading_zero(entity)

        return entity.to_dict()

    # ========================================================================
    # Enrichment
    # ========================================================================

    def _process_expands(
        self,
        item: PurchaseOrderItem,
        location_requested: bool,
        arrival_times_requested: bool,
    ) -> None:
        """Derived fields of the nested inbound delivery items (only present when expanded)."""
        inbound_delivery_items = item.inbound_delivery_items
        if not inbound_delivery_items:
            return

        if location_requested:
            location_service = self._require_location_service()
            locations = location_service.get_locations_for_inbound_delivery_items(inbound_delivery_items)
            for inbound_delivery_item in inbound_delivery_items:
                location_service.set_locations_for_inbound_delivery(inbound_delivery_item, locations)

        handler = self._require_inbound_delivery_item_handler()
        if arrival_times_requested:
            handler.update_arrival_times(inbound_delivery_items)
        for inbound_delivery_item in inbound_delivery_items:
            handler.update_last_location_description(inbound_delivery_item)
            handler.update_planned_arrival_at(inbound_delivery_item)

    def _set_locations(self, items: List[PurchaseOrderItem]) -> None:
        if not items:
            return
        location_service = self._require_location_service()
        locations = location_service.get_locations_for_purchase_order_items(items)
        for item in items:
            location_service.set_locations_for_purchase_order_item(item, locations)
            for inbound_delivery_item in item.inbound_delivery_items:
                location_service.set_locations_for_inbound_delivery(inbound_delivery_item, locations)
