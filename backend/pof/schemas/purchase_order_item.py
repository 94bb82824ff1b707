"""
Purchase Order Item Schemas

Pydantic models for the DTOs read from the GTT core service. JSON keys are
the backend's camelCase names; attributes are snake_case. Fields the models
do not declare are kept as extras and serialized back unchanged.
"""
from decimal import Decimal
from typing import Any, ClassVar, Dict, List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


def is_deferred(value: Any) -> bool:
    return isinstance(value, dict) and "__deferred" in value


def unwrap_navigation(value: Any) -> Any:
    """
    Normalize an OData v2 navigation property.

    Expanded collections arrive as {"results": [...]}, unexpanded ones as
    {"__deferred": {"uri": ...}}.
    """
    if is_deferred(value):
        return None
    if isinstance(value, dict) and "results" in value:
        return value["results"]
    return value


class ODataModel(BaseModel):
    """Base for backend DTOs."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    # Identifier fields that carry SAP-style zero padding
    LEADING_ZERO_FIELDS: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def drop_deferred_navigation(cls, data: Any) -> Any:
        """
        Declared navigation properties that were not expanded stay unset, so
        to_dict() leaves them out instead of rendering an empty value.
        Undeclared ones are kept as extras and passed through unchanged.
        """
        if not isinstance(data, dict):
            return data
        declared = set(cls.model_fields) | {to_camel(name) for name in cls.model_fields}
        return {
            key: value for key, value in data.items()
            if not (key in declared and is_deferred(value))
        }

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the backend's JSON shape (only fields present or set)."""
        return self.model_dump(by_alias=True, mode="json", exclude_unset=True)


class Location(ODataModel):
    """Resolved location attached to an item (receiving, supplier or plant)."""
    location_alt_key: Optional[str] = None
    location_id: Optional[str] = None
    location_type_code: Optional[str] = None
    location_description: Optional[str] = None
    object_type_code: Optional[str] = None
    longitude: Optional[Decimal] = None
    latitude: Optional[Decimal] = None


class InboundDeliveryItem(ODataModel):
    """Inbound delivery item nested under a purchase order item."""

    LEADING_ZERO_FIELDS: ClassVar[Tuple[str, ...]] = (
        "inbound_delivery_no",
        "item_no",
        "material_id",
    )

    id: Optional[UUID] = None
    inbound_delivery_no: Optional[str] = None
    item_no: Optional[str] = None
    material_id: Optional[str] = None
    material_description: Optional[str] = None
    plant: Optional[str] = None
    supplier_id: Optional[str] = None
    receiving_location_type_code: Optional[str] = None
    supplier_location_type_code: Optional[str] = None
    receiving_location: Optional[Location] = None
    supplier_location: Optional[Location] = None
    plant_location: Optional[Location] = None
    last_location_description: Optional[str] = None
    planned_arrival_at: Optional[Any] = None
    arrival_times: Optional[List[Dict[str, Any]]] = None

    @field_validator(
        "receiving_location", "supplier_location", "plant_location", "arrival_times",
        mode="before",
    )
    @classmethod
    def unwrap_navigation_properties(cls, v):
        return unwrap_navigation(v)


class PurchaseOrderItem(ODataModel):
    """Purchase order item as returned by the core service."""

    LEADING_ZERO_FIELDS: ClassVar[Tuple[str, ...]] = (
        "purchase_order_no",
        "material_id",
        "item_no",
        "supplier_id",
    )

    id: Optional[UUID] = None
    purchase_order_no: Optional[str] = None
    item_no: Optional[str] = None
    material_id: Optional[str] = None
    material_description: Optional[str] = None
    supplier_id: Optional[str] = None
    receiving_location_type_code: Optional[str] = None
    receiving_location_id: Optional[str] = None
    supplier_location_type_code: Optional[str] = None
    net_value: Optional[Decimal] = None
    completion_value: Optional[Decimal] = None
    currency: Optional[str] = None
    receiving_location: Optional[Location] = None
    supplier_location: Optional[Location] = None
    plant_location: Optional[Location] = None
    inbound_delivery_items: List[InboundDeliveryItem] = Field(default_factory=list)

    @field_validator("receiving_location", "supplier_location", "plant_location", mode="before")
    @classmethod
    def unwrap_location(cls, v):
        return unwrap_navigation(v)

    @field_validator("inbound_delivery_items", mode="before")
    @classmethod
    def unwrap_inbound_delivery_items(cls, v):
        v = unwrap_navigation(v)
        return [] if v is None else v
