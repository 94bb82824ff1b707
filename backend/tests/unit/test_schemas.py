"""
Unit Tests for the backend DTOs

OData v2 navigation properties come either expanded ({"results": [...]} or
an object) or deferred ({"__deferred": {"uri": ...}}).
"""
from pof.schemas.event import ProcessEventDirectory
from pof.schemas.purchase_order_item import InboundDeliveryItem, Location, PurchaseOrderItem
from tests.factories import make_directory_entry, make_inbound_delivery_item, make_location, make_purchase_order_item

DEFERRED = {"__deferred": {"uri": "http://core.test/PurchaseOrderItem(guid'x')/inboundDeliveryItems"}}


class TestNavigationProperties:
    """Tests for expanded and deferred navigation properties"""

    def test_expanded_collection(self):
        item = PurchaseOrderItem.model_validate(
            make_purchase_order_item(inboundDeliveryItems={"results": [make_inbound_delivery_item()]})
        )

        assert len(item.inbound_delivery_items) == 1
        assert item.to_dict()["inboundDeliveryItems"][0]["inboundDeliveryNo"] == "0180000123"

    def test_expanded_empty_collection_is_rendered(self):
        item = PurchaseOrderItem.model_validate(make_purchase_order_item(inboundDeliveryItems={"results": []}))

        assert item.to_dict()["inboundDeliveryItems"] == []

    def test_deferred_collection_is_left_out(self):
        item = PurchaseOrderItem.model_validate(make_purchase_order_item(inboundDeliveryItems=DEFERRED))

        assert item.inbound_delivery_items == []
        assert "inboundDeliveryItems" not in item.to_dict()

    def test_deferred_location_is_left_out(self):
        item = InboundDeliveryItem.model_validate(make_inbound_delivery_item(plantLocation=DEFERRED))

        assert item.plant_location is None
        assert "plantLocation" not in item.to_dict()

    def test_location_set_after_read_is_rendered(self):
        item = PurchaseOrderItem.model_validate(make_purchase_order_item(receivingLocation=DEFERRED))

        item.receiving_location = Location.model_validate(make_location())

        assert item.to_dict()["receivingLocation"]["locationDescription"] == "Walldorf Plant"

    def test_undeclared_deferred_property_is_passed_through(self):
        item = PurchaseOrderItem.model_validate(make_purchase_order_item(purchaseOrder=DEFERRED))

        assert item.to_dict()["purchaseOrder"] == DEFERRED

    def test_deferred_event_of_directory_entry(self):
        entry = make_directory_entry("4b8f1a1e-0000-4000-8000-000000000001", "DeletionEvent", 1000)
        entry["event"] = DEFERRED

        assert ProcessEventDirectory.model_validate(entry).event is None
