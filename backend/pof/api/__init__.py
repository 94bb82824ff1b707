"""
OData Router - Purchase Order Fulfillment
"""
from fastapi import APIRouter

from pof.api.endpoints import purchase_order_items

router = APIRouter()

# Purchase Order Items
router.include_router(
    purchase_order_items.router,
    tags=["purchase-order-items"]
)
