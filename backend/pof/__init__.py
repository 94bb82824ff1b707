"""Purchase Order Fulfillment - purchase order item read API."""
