"""
Shared test fixtures for the Purchase Order Fulfillment API tests

Provides the in-memory core service, collaborator mocks and the test client.
"""
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from pof.main import create_app
from pof.schemas.purchase_order_item import Location
from pof.services.collaborators import InboundDeliveryItemHandler, LocationService
from pof.services.completion_value import CompletionValueService
from pof.services.purchase_order_item import PurchaseOrderItemHandler
from tests.factories import NAMESPACE, FakeCoreServiceClient, make_location


@pytest.fixture
def core_client():
    """Empty in-memory core service"""
    return FakeCoreServiceClient()


@pytest.fixture
def location_service():
    """
    Location service mock that writes a fixed receiving/supplier location
    onto whatever it is asked to enrich.
    """
    service = Mock(spec=LocationService)
    receiving = Location.model_validate(make_location(locationDescription="Receiving Dock 1"))
    supplier = Location.model_validate(make_location(locationDescription="Supplier Plant"))
    locations = {"receiving": receiving, "supplier": supplier}

    def set_locations(item, location_map):
        item.receiving_location = location_map["receiving"]
        item.supplier_location = location_map["supplier"]

    def set_receiving(item):
        item.receiving_location = receiving

    def set_supplier(item):
        item.supplier_location = supplier

    service.get_locations_for_purchase_order_items.return_value = locations
    service.get_locations_for_inbound_delivery_items.return_value = locations
    service.set_locations_for_purchase_order_item.side_effect = set_locations
    service.set_locations_for_inbound_delivery.side_effect = set_locations
    service.set_receiving_location.side_effect = set_receiving
    service.set_supplier_location.side_effect = set_supplier
    return service


@pytest.fixture
def inbound_delivery_item_handler():
    """Sibling handler mock that fills the derived inbound delivery fields"""
    handler = Mock(spec=InboundDeliveryItemHandler)

    def update_arrival_times(items):
        for item in items:
            item.arrival_times = [{"arrivalTime": "/Date(1589371200000+0000)/"}]

    def update_last_location_description(item):
        item.last_location_description = "Frankfurt Hub"

    handler.update_arrival_times.side_effect = update_arrival_times
    handler.update_last_location_description.side_effect = update_last_location_description
    return handler


@pytest.fixture
def completion_value_service(core_client):
    return CompletionValueService(
        core_client, model_namespace=NAMESPACE, batch_size=2, max_workers=2
    )


@pytest.fixture
def handler(core_client, location_service, inbound_delivery_item_handler, completion_value_service):
    """Purchase order item handler wired to the fake core service and mocks"""
    return PurchaseOrderItemHandler(
        core_client,
        location_service=location_service,
        inbound_delivery_item_handler=inbound_delivery_item_handler,
        completion_value_service=completion_value_service,
    )


@pytest.fixture
def app(core_client, location_service, inbound_delivery_item_handler):
    return create_app(
        core_client,
        location_service=location_service,
        inbound_delivery_item_handler=inbound_delivery_item_handler,
    )


@pytest.fixture
def client(app):
    """Create a test client for the OData routes"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def odata_root():
    from pof.core.settings import settings
    return settings.ODATA_ROOT
