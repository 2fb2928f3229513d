"""
Tests for the order ledger.

WHAT: Order creation, status updates and visibility rules
WHY: createOrder must be all-or-nothing and prices fixed at creation
HOW: Seeded store; seller A lists items, buyer B orders them
"""

import pytest

from marketplace.core.identity import CallerId
from marketplace.models.entities import ItemPatch, OrderStatus
from marketplace.models.snapshot import StoreSnapshot
from marketplace.utils.exceptions import (
    NotFoundException,
    UnauthorizedException,
    ConflictException,
    ValidationException,
)


@pytest.mark.unit
class TestCreateOrder:
    """Test the reservation-backed order creation."""

    def test_buyer_orders_item(self, seeded_store, seller, buyer, draft_factory):
        seeded_store.catalog.add_item(seller, draft_factory(price=100))

        order = seeded_store.orders.create_order(buyer, [1], "123 Main St")

        assert order.id == 1
        assert order.buyer == buyer
        assert order.items == [1]
        assert order.status == OrderStatus.PENDING
        assert order.total_price == 100
        assert order.shipping_address == "123 Main St"
        assert order.created_at == order.updated_at
        assert seeded_store.catalog.get_item(1).available is False

    def test_second_order_for_same_item_conflicts(self, seeded_store, seller, buyer, draft_factory):
        seeded_store.catalog.add_item(seller, draft_factory(price=100))
        seeded_store.orders.create_order(buyer, [1], "123 Main St")

        with pytest.raises(ConflictException):
            seeded_store.orders.create_order(buyer, [1], "123 Main St")

        assert seeded_store.orders.count() == 1
        assert seeded_store.orders.next_order_id == 2

    def test_total_is_sum_of_prices(self, seeded_store, seller, buyer, draft_factory):
        for price in (100, 250, 0):
            seeded_store.catalog.add_item(seller, draft_factory(price=price))

        order = seeded_store.orders.create_order(buyer, [3, 1, 2], "1 Elm St")

        assert order.total_price == 350
        assert order.items == [3, 1, 2]
        assert all(not seeded_store.catalog.get_item(i).available for i in (1, 2, 3))

    def test_total_fixed_after_price_change(self, seeded_store, seller, buyer, draft_factory):
        seeded_store.catalog.add_item(seller, draft_factory(price=100))
        order = seeded_store.orders.create_order(buyer, [1], "1 Elm St")

        seeded_store.catalog.update_item(seller, 1, ItemPatch(price=999))

        assert seeded_store.orders.get_order(buyer, order.id).total_price == 100

    def test_failure_is_all_or_nothing(self, seeded_store, seller, buyer, draft_factory):
        seeded_store.catalog.add_item(seller, draft_factory())
        seeded_store.catalog.add_item(seller, draft_factory())
        seeded_store.catalog.update_item(seller, 2, ItemPatch(available=False))

        with pytest.raises(ConflictException):
            seeded_store.orders.create_order(buyer, [1, 2], "1 Elm St")
        with pytest.raises(NotFoundException):
            seeded_store.orders.create_order(buyer, [1, 7], "1 Elm St")

        assert seeded_store.catalog.get_item(1).available is True
        assert seeded_store.orders.count() == 0
        assert seeded_store.orders.next_order_id == 1

    def test_buyer_without_profile(self, seeded_store, seller, draft_factory):
        seeded_store.catalog.add_item(seller, draft_factory())

        with pytest.raises(NotFoundException):
            seeded_store.orders.create_order(CallerId(principal="nobody"), [1], "1 Elm St")

        assert seeded_store.catalog.get_item(1).available is True

    def test_order_ids_are_monotonic(self, seeded_store, seller, buyer, draft_factory):
        for _ in range(3):
            seeded_store.catalog.add_item(seller, draft_factory())

        ids = [seeded_store.orders.create_order(buyer, [i], "1 Elm St").id for i in (1, 2, 3)]

        assert ids == [1, 2, 3]

    def test_empty_order_rejected(self, seeded_store, buyer):
        with pytest.raises(ValidationException):
            seeded_store.orders.create_order(buyer, [], "1 Elm St")

        assert seeded_store.orders.count() == 0
        assert seeded_store.orders.next_order_id == 1

    def test_anonymous_buyer_rejected(self, seeded_store, seller, draft_factory):
        seeded_store.catalog.add_item(seller, draft_factory())

        with pytest.raises(ValidationException):
            seeded_store.orders.create_order(CallerId.anonymous(), [1], "1 Elm St")

        assert seeded_store.catalog.get_item(1).available is True
        assert seeded_store.orders.count() == 0


@pytest.mark.unit
class TestOrderAccess:
    """Test status updates and visibility."""

    @pytest.fixture
    def order(self, seeded_store, seller, buyer, draft_factory):
        seeded_store.catalog.add_item(seller, draft_factory(price=100))
        return seeded_store.orders.create_order(buyer, [1], "123 Main St")

    def test_buyer_updates_status(self, seeded_store, buyer, order):
        updated = seeded_store.orders.update_order_status(buyer, order.id, OrderStatus.PAID)

        assert updated.status == OrderStatus.PAID
        assert updated.updated_at >= order.updated_at
        assert updated.created_at == order.created_at

    def test_participating_seller_updates_status(self, seeded_store, seller, order):
        updated = seeded_store.orders.update_order_status(seller, order.id, OrderStatus.SHIPPED)
        assert updated.status == OrderStatus.SHIPPED

    def test_outsider_unauthorized(self, seeded_store, stranger, order):
        with pytest.raises(UnauthorizedException):
            seeded_store.orders.update_order_status(stranger, order.id, OrderStatus.CANCELLED)
        with pytest.raises(UnauthorizedException):
            seeded_store.orders.get_order(stranger, order.id)

        assert seeded_store.orders.get_order(order.buyer, order.id).status == OrderStatus.PENDING

    def test_unknown_order(self, seeded_store, buyer):
        with pytest.raises(NotFoundException):
            seeded_store.orders.update_order_status(buyer, 42, OrderStatus.PAID)
        with pytest.raises(NotFoundException):
            seeded_store.orders.get_order(buyer, 42)

    def test_any_transition_is_accepted(self, seeded_store, buyer, order):
        # Known looseness: no transition table, delivered -> pending is accepted
        seeded_store.orders.update_order_status(buyer, order.id, OrderStatus.DELIVERED)
        reverted = seeded_store.orders.update_order_status(buyer, order.id, OrderStatus.PENDING)

        assert reverted.status == OrderStatus.PENDING

    def test_status_given_as_string(self, seeded_store, buyer, order):
        updated = seeded_store.orders.update_order_status(buyer, order.id, "paid")

        assert updated.status == OrderStatus.PAID

    def test_unknown_status_rejected(self, seeded_store, buyer, order):
        with pytest.raises(ValidationException):
            seeded_store.orders.update_order_status(buyer, order.id, "refunded")

        assert seeded_store.orders.get_order(buyer, order.id).status == OrderStatus.PENDING
        # Store must still snapshot and restore cleanly
        seeded_store.restore(StoreSnapshot.model_validate_json(seeded_store.snapshot().model_dump_json()))
        assert seeded_store.orders.get_order(buyer, order.id).status == OrderStatus.PENDING

    def test_anonymous_status_update_rejected(self, seeded_store, order):
        with pytest.raises(ValidationException):
            seeded_store.orders.update_order_status(CallerId.anonymous(), order.id, OrderStatus.PAID)

        assert seeded_store.orders.get_order(order.buyer, order.id).status == OrderStatus.PENDING

    def test_cancel_does_not_release_items(self, seeded_store, buyer, order):
        seeded_store.orders.update_order_status(buyer, order.id, OrderStatus.CANCELLED)

        assert seeded_store.catalog.get_item(1).available is False

    def test_returned_order_is_a_copy(self, seeded_store, buyer, order):
        fetched = seeded_store.orders.get_order(buyer, order.id)
        fetched.items.append(99)

        assert seeded_store.orders.get_order(buyer, order.id).items == [1]


@pytest.mark.unit
class TestOrderListings:
    """Test buyer and seller order lists."""

    def test_my_orders(self, seeded_store, seller, buyer, stranger, draft_factory):
        for _ in range(3):
            seeded_store.catalog.add_item(seller, draft_factory())
        seeded_store.orders.create_order(buyer, [1], "1 Elm St")
        seeded_store.orders.create_order(stranger, [2], "2 Elm St")
        seeded_store.orders.create_order(buyer, [3], "1 Elm St")

        assert [o.id for o in seeded_store.orders.get_my_orders(buyer)] == [1, 3]
        assert [o.id for o in seeded_store.orders.get_my_orders(stranger)] == [2]
        assert seeded_store.orders.get_my_orders(seller) == []

    def test_orders_for_seller(self, seeded_store, seller, buyer, draft_factory):
        other_seller = CallerId(principal="seller-d")
        seeded_store.identities.upsert_profile(other_seller, name="Dan", is_seller=True)
        seeded_store.catalog.add_item(seller, draft_factory())
        seeded_store.catalog.add_item(other_seller, draft_factory())
        seeded_store.catalog.add_item(other_seller, draft_factory())

        seeded_store.orders.create_order(buyer, [1, 2], "1 Elm St")
        seeded_store.orders.create_order(buyer, [3], "1 Elm St")

        assert [o.id for o in seeded_store.orders.get_orders_for_seller(seller)] == [1]
        assert [o.id for o in seeded_store.orders.get_orders_for_seller(other_seller)] == [1, 2]
        assert seeded_store.orders.get_orders_for_seller(buyer) == []

    def test_mixed_order_visible_to_each_seller(self, seeded_store, seller, buyer, draft_factory):
        other_seller = CallerId(principal="seller-d")
        seeded_store.identities.upsert_profile(other_seller, name="Dan", is_seller=True)
        seeded_store.catalog.add_item(seller, draft_factory())
        seeded_store.catalog.add_item(other_seller, draft_factory())
        order = seeded_store.orders.create_order(buyer, [1, 2], "1 Elm St")

        assert seeded_store.orders.get_order(seller, order.id).id == order.id
        assert seeded_store.orders.get_order(other_seller, order.id).id == order.id
