"""
Unit Tests for identifier normalization
"""
import pytest

from pof.schemas.purchase_order_item import InboundDeliveryItem, PurchaseOrderItem
from pof.services.identifiers import (
    remove_unneeded_leading_zero,
    remove_unneeded_leading_zero_inbound,
    remove_unneeded_leading_zeros,
    strip_leading_zeros,
)
from tests.factories import make_inbound_delivery_item, make_purchase_order_item


class TestStripLeadingZeros:
    """Tests for strip_leading_zeros"""

    @pytest.mark.parametrize("value,expected", [
        ("0000004711", "4711"),
        ("00010", "10"),
        ("4711", "4711"),
        ("4700", "4700"),
        ("A0010", "A0010"),
        ("0000", ""),
    ])
    def test_strips_padding(self, value, expected):
        assert strip_leading_zeros(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_values_unchanged(self, value):
        assert strip_leading_zeros(value) == value


class TestRemoveUnneededLeadingZero:
    """Tests for normalizing whole items"""

    def test_purchase_order_item_fields(self):
        item = PurchaseOrderItem.model_validate(make_purchase_order_item())

        remove_unneeded_leading_zero(item)

        assert item.purchase_order_no == "45001234"
        assert item.item_no == "10"
        assert item.material_id == "4711"
        assert item.supplier_id == "100020"

    def test_other_fields_untouched(self):
        item = PurchaseOrderItem.model_validate(
            make_purchase_order_item(receivingLocationId="0001010", currency="EUR")
        )

        remove_unneeded_leading_zero(item)

        assert item.receiving_location_id == "0001010"
        assert item.currency == "EUR"

    def test_missing_fields_stay_missing(self):
        item = PurchaseOrderItem.model_validate({"purchaseOrderNo": "00042"})

        remove_unneeded_leading_zero(item)

        assert item.to_dict() == {"purchaseOrderNo": "42"}

    def test_nested_inbound_delivery_items(self):
        item = PurchaseOrderItem.model_validate(
            make_purchase_order_item(inboundDeliveryItems={"results": [
                make_inbound_delivery_item(),
                make_inbound_delivery_item(inboundDeliveryNo="0180000999", itemNo="000020"),
            ]})
        )

        remove_unneeded_leading_zero(item)

        first, second = item.inbound_delivery_items
        assert (first.inbound_delivery_no, first.item_no, first.material_id) == ("180000123", "10", "1234")
        assert (second.inbound_delivery_no, second.item_no) == ("180000999", "20")
        assert first.plant == "1010"

    def test_inbound_delivery_item(self):
        item = InboundDeliveryItem.model_validate(make_inbound_delivery_item(materialId="   "))

        remove_unneeded_leading_zero_inbound(item)

        assert item.inbound_delivery_no == "180000123"
        assert item.material_id == "   "

    def test_list_of_items(self):
        items = [
            PurchaseOrderItem.model_validate(make_purchase_order_item(purchaseOrderNo=f"000{n}"))
            for n in range(1, 4)
        ]

        remove_unneeded_leading_zeros(items)

        assert [item.purchase_order_no for item in items] == ["1", "2", "3"]
