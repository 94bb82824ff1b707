"""
Completion Value Service

A purchase order item that was logically deleted keeps its values in the
backend. Whether it is deleted right now is decided by its latest
deletion/undeletion event: if that event is a deletion, the item's net value
and completion value are reported as zero.
"""
from decimal import Decimal
from operator import attrgetter
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from pof.core.settings import settings
from pof.logging_config import get_logger
from pof.odata.filters import generate_split_filter_expr, group_by, read_split_filters
from pof.odata.uri import build_uri
from pof.schemas.event import Event, ProcessEventDirectory
from pof.schemas.purchase_order_item import PurchaseOrderItem

logger = get_logger(__name__)

PROCESS_EVENT_DIRECTORY_URI = "/ProcessEventDirectory"
PROCESS_ID_FILTER_PART = "process_id eq guid'{}'"
DELETION_EVENT_SUFFIX = ".DeletionEvent"


def is_deletion_latest(events: Iterable[Event]) -> bool:
    """
    True when the event with the greatest actual business timestamp is a
    deletion event.

    Events without a timestamp are ignored. On an exact timestamp tie the
    first of the tied events wins; the backend gives no order among them.
    """
    timed = [event for event in events if event.actual_business_timestamp is not None]
    if not timed:
        return False
    latest = max(timed, key=attrgetter("actual_business_timestamp"))
    return (latest.event_type or "").endswith(DELETION_EVENT_SUFFIX)


def zero_values(item: PurchaseOrderItem) -> None:
    item.net_value = Decimal("0")
    item.completion_value = Decimal("0")


class CompletionValueService:
    """Zeroes values of purchase order items whose latest event is a deletion."""

    def __init__(
        self,
        client,
        *,
        model_namespace: Optional[str] = None,
        batch_size: Optional[int] = None,
        max_workers: Optional[int] = None,
    ):
        self.client = client
        self.model_namespace = model_namespace or settings.GTT_MODEL_NAMESPACE
        self.batch_size = batch_size if batch_size is not None else settings.FILTER_BATCH_SIZE
        self.max_workers = max_workers if max_workers is not None else settings.FILTER_MAX_WORKERS

    @property
    def event_type_filter(self) -> str:
        prefix = f"{self.model_namespace}.PurchaseOrderItem"
        return (
            f"(event/eventType eq '{prefix}.DeletionEvent' "
            f"or event/eventType eq '{prefix}.UndeletionEvent')"
        )

    def directory_uri(self, process_id_filter: str) -> str:
        """ProcessEventDirectory query for deletion-related events of the given processes."""
        return build_uri(
            PROCESS_EVENT_DIRECTORY_URI,
            {
                "$expand": "event",
                "$filter": f"{self.event_type_filter} and ({process_id_filter})",
            },
        )

    def update_completion_value(self, item: PurchaseOrderItem) -> None:
        """Single item: one directory lookup."""
        uri = self.directory_uri(PROCESS_ID_FILTER_PART.format(item.id))
        entries = self.client.read_entity_set_all(uri, ProcessEventDirectory).results
        events = [entry.event for entry in entries if entry.event is not None]
        if is_deletion_latest(events):
            logger.debug("Purchase order item %s is deleted, zeroing values", item.id)
            zero_values(item)

    def fetch_events(self, ids: List[UUID]) -> Dict[UUID, List[Event]]:
        """Deletion-related events per process id, read in split batches."""
        filters = generate_split_filter_expr(PROCESS_ID_FILTER_PART, "or", ids, self.batch_size)
        entries = read_split_filters(
            self.client,
            ProcessEventDirectory,
            filters,
            self.directory_uri,
            max_workers=self.max_workers,
        )
        return group_by(entries, key=attrgetter("process_id"), value=attrgetter("event"))

    def update_completion_values(self, items: List[PurchaseOrderItem]) -> None:
        """Many items: batched lookup, then the same decision per item."""
        ids = [item.id for item in items if item.id is not None]
        if not ids:
            return

        events_by_process = self.fetch_events(ids)
        for item in items:
            if is_deletion_latest(events_by_process.get(item.id, [])):
                logger.debug("Purchase order item %s is deleted, zeroing values", item.id)
                zero_values(item)
