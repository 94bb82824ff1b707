"""
Test data factories and an in-memory core service.

Usage:
    from tests.factories import (
        FakeCoreServiceClient, make_purchase_order_item, make_directory_entry,
    )

    core = FakeCoreServiceClient()
    item = core.add_purchase_order_item(make_purchase_order_item(purchaseOrderNo="0000004711"))
    core.add_directory_entry(make_directory_entry(item["id"], "DeletionEvent", 1000))
"""
import re
import uuid
from typing import Any, Dict, List, Optional, Type
from urllib.parse import unquote

from pof.schemas.odata import ODataResultList

NAMESPACE = "com.sap.gtt.app.pof.POFModel"

_GUID = re.compile(r"guid'([0-9a-fA-F-]{36})'")


def make_location(alt_key: str = "xri://sap.com/id:LBN#10010001006:QM7CLNT910:Location:Customer:1000", **overrides) -> Dict[str, Any]:
    location = {
        "locationAltKey": alt_key,
        "locationId": alt_key.rsplit(":", 1)[-1],
        "locationTypeCode": "Customer",
        "locationDescription": "Walldorf Plant",
        "objectTypeCode": "Customer",
    }
    location.update(overrides)
    return location


def make_inbound_delivery_item(**overrides) -> Dict[str, Any]:
    item = {
        "id": str(uuid.uuid4()),
        "inboundDeliveryNo": "0180000123",
        "itemNo": "000010",
        "materialId": "000000000000001234",
        "plant": "1010",
    }
    item.update(overrides)
    return item


def make_purchase_order_item(**overrides) -> Dict[str, Any]:
    item = {
        "id": str(uuid.uuid4()),
        "purchaseOrderNo": "0045001234",
        "itemNo": "00010",
        "materialId": "000000000000004711",
        "materialDescription": "Steel bolt M8",
        "supplierId": "0000100020",
        "netValue": "1500.00",
        "completionValue": "750.00",
        "currency": "EUR",
        "orderQuantity": "100",
        "lifeCycleStatus_code": "ACTIVE",
    }
    item.update(overrides)
    return item


def make_event(event_type: str, timestamp: Optional[int], namespace: str = NAMESPACE) -> Dict[str, Any]:
    """event_type is the short name, e.g. "DeletionEvent"."""
    return {
        "id": str(uuid.uuid4()),
        "eventType": f"{namespace}.PurchaseOrderItem.{event_type}",
        "actualBusinessTimestamp": timestamp,
    }


def make_directory_entry(process_id: str, event_type: str, timestamp: Optional[int]) -> Dict[str, Any]:
    return {
        "id": str(uuid.uuid4()),
        "process_id": process_id,
        "event": make_event(event_type, timestamp),
    }


class FakeCoreServiceClient:
    """
    Stands in for GTTCoreServiceClient.

    Serves /PurchaseOrderItem and /ProcessEventDirectory from memory and
    records every URI it was asked for.
    """

    def __init__(self):
        self.base_url = "http://core.test"
        self.purchase_order_items: List[Dict[str, Any]] = []
        self.directory_entries: List[Dict[str, Any]] = []
        self.requested_uris: List[str] = []
        self.count: Optional[int] = None

    def add_purchase_order_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        self.purchase_order_items.append(item)
        return item

    def add_directory_entry(self, entry: Dict[str, Any]) -> Dict[str, Any]:
        self.directory_entries.append(entry)
        return entry

    def directory_requests(self) -> List[str]:
        return [uri for uri in self.requested_uris if uri.startswith("/ProcessEventDirectory")]

    def _rows(self, uri: str) -> List[Dict[str, Any]]:
        self.requested_uris.append(uri)
        path = uri.partition("?")[0]
        if path.startswith("/ProcessEventDirectory"):
            wanted = set(_GUID.findall(unquote(uri)))
            return [entry for entry in self.directory_entries if entry["process_id"] in wanted]
        if path.startswith("/PurchaseOrderItem"):
            return list(self.purchase_order_items)
        raise AssertionError(f"Unexpected URI {uri}")

    def read_entity(self, uri: str, model: Type) -> Any:
        rows = self._rows(uri)
        key = _GUID.search(unquote(uri.partition("?")[0]))
        if key:
            rows = [row for row in rows if row["id"] == key.group(1)]
        return model.model_validate(rows[0])

    def read_entity_set(self, uri: str, model: Type) -> ODataResultList:
        rows = self._rows(uri)
        return ODataResultList[model](
            results=[model.model_validate(row) for row in rows],
            count=self.count,
        )

    def read_entity_set_all(self, uri: str, model: Type) -> ODataResultList:
        return self.read_entity_set(uri, model)
