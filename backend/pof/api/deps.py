"""
API Dependencies

Request-scoped objects for the OData read routes. Collaborators are
registered on app.state by create_app(); tests override these functions
through app.dependency_overrides.
"""
from fastapi import Request

from pof.core.settings import settings
from pof.odata.uri import get_normalized_uri
from pof.services.purchase_order_item import PurchaseOrderItemHandler


def get_request_uri(request: Request) -> str:
    """
    Service-relative URI of the current request, e.g.
    "/PurchaseOrderItem?$expand=receivingLocation&$top=20"
    """
    return get_normalized_uri(request.url.path, request.url.query, settings.ODATA_ROOT)


def get_purchase_order_item_handler(request: Request) -> PurchaseOrderItemHandler:
    state = request.app.state
    return PurchaseOrderItemHandler(
        state.core_client,
        location_service=state.location_service,
        inbound_delivery_item_handler=state.inbound_delivery_item_handler,
    )
