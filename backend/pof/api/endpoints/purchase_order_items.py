"""
Purchase Order Item OData Endpoints

GET {ODATA_ROOT}/PurchaseOrderItem           entity set
GET {ODATA_ROOT}/PurchaseOrderItem({key})    single entity

Responses use the OData v2 JSON envelope ({"d": ...}).
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from pof.api.deps import get_purchase_order_item_handler, get_request_uri
from pof.logging_config import get_logger
from pof.services.purchase_order_item import PurchaseOrderItemHandler

router = APIRouter()
logger = get_logger(__name__)

ENTITY_SET = "PurchaseOrderItem"


@router.get(f"/{ENTITY_SET}")
def read_purchase_order_items(
    uri: str = Depends(get_request_uri),
    handler: PurchaseOrderItemHandler = Depends(get_purchase_order_item_handler),
) -> Dict[str, Any]:
    """
    Read purchase order items.

    Accepts the usual OData system query options ($filter, $top, $skip,
    $orderby, $inlinecount, $select, $expand). receivingLocation,
    supplierLocation, plantLocation and arrivalTimes may be expanded even
    though the core service does not know them.
    """
    logger.info("Read entity set %s", ENTITY_SET, extra={"uri": uri})
    return handler.handle_read_entity_set(uri).to_odata()


@router.get(f"/{ENTITY_SET}({{key}})")
def read_purchase_order_item(
    key: str,
    uri: str = Depends(get_request_uri),
    handler: PurchaseOrderItemHandler = Depends(get_purchase_order_item_handler),
) -> Dict[str, Any]:
    """Read one purchase order item by key, e.g. PurchaseOrderItem(guid'...')."""
    logger.info("Read entity %s(%s)", ENTITY_SET, key, extra={"uri": uri})
    return {"d": handler.handle_read_entity(uri)}
