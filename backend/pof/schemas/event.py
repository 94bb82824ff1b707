"""
Event Schemas

Process event directory entries and the events they point to.
"""
import re
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from pof.schemas.purchase_order_item import ODataModel, unwrap_navigation

# OData v2 JSON date literal, e.g. "/Date(1589371200000+0000)/"
_ODATA_DATE = re.compile(r"^/Date\((-?\d+)(?:[+-]\d{4})?\)/$")


class Event(ODataModel):
    """A tracked event; only the type and business timestamp matter here."""
    id: Optional[UUID] = None
    event_type: Optional[str] = None
    actual_business_timestamp: Optional[int] = Field(
        None, description="Epoch milliseconds"
    )

    @field_validator("actual_business_timestamp", mode="before")
    @classmethod
    def parse_timestamp(cls, v):
        if isinstance(v, str):
            match = _ODATA_DATE.match(v)
            if match:
                return int(match.group(1))
            if not v.strip().lstrip("-").isdigit():
                return int(datetime.fromisoformat(v.replace("Z", "+00:00")).timestamp() * 1000)
        return v


class ProcessEventDirectory(ODataModel):
    """Links a tracked process (purchase order item) to one of its events."""
    id: Optional[UUID] = None
    process_id: UUID = Field(..., alias="process_id")
    event: Optional[Event] = None

    @field_validator("event", mode="before")
    @classmethod
    def unwrap_event(cls, v):
        return unwrap_navigation(v)
