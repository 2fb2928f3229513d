"""
Order ledger.

WHAT: Purchase orders keyed by id
WHY: Orders tie a buyer to a reserved, fixed-price set of items
HOW: Dict of id -> Order; reservation is delegated to the Catalog
"""

from typing import Dict, List, Optional, Tuple

from ..core.identity import CallerId, require_authenticated
from ..models.entities import Order, OrderStatus, utc_now
from ..utils.exceptions import NotFoundException, UnauthorizedException, ValidationException
from ..utils.logger import get_logger
from .catalog import Catalog
from .identity_store import IdentityStore

logger = get_logger(__name__)


class OrderLedger:
    """Owns every Order and the next order id."""

    def __init__(self, identities: IdentityStore, catalog: Catalog):
        self._identities = identities
        self._catalog = catalog
        self._orders: Dict[int, Order] = {}
        self.next_order_id = 1

    def create_order(self, caller: CallerId, item_ids: List[int], shipping_address: str) -> Order:
        """
        Create a pending order for a set of items.

        WHAT: Reserve the items and record an order at their current prices
        WHY: Entry point for buyers
        HOW: Profile check, Catalog.reserve (all or nothing), then allocate id

        Args:
            caller: Buyer identity
            item_ids: Items to buy, in order
            shipping_address: Delivery address

        Returns:
            The stored order

        Raises:
            ValidationException: If caller is anonymous or item_ids is empty
            NotFoundException: If caller has no profile or an item is unknown
            ConflictException: If an item is unavailable
        """
        require_authenticated(caller, "create orders")
        if not item_ids:
            raise ValidationException("An order needs at least one item", field="item_ids")
        if not self._identities.has_profile(caller):
            raise NotFoundException("profile", caller)

        reserved = self._catalog.reserve(item_ids)
        total_price = sum(item.price for item in reserved)

        now = utc_now()
        order = Order(
            id=self.next_order_id,
            buyer=caller,
            items=list(item_ids),
            total_price=total_price,
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
            shipping_address=shipping_address
        )
        self._orders[order.id] = order
        self.next_order_id += 1

        logger.info(f"Buyer {caller} created order {order.id} for items {item_ids} (total={total_price})")
        return order.model_copy(deep=True)

    def update_order_status(self, caller: CallerId, order_id: int, new_status: OrderStatus) -> Order:
        """
        Overwrite an order's status.

        Any status may replace any other; only the caller's relationship
        to the order is checked.

        Raises:
            NotFoundException: If order_id is unknown
            ValidationException: If caller is anonymous or new_status is not an OrderStatus
            UnauthorizedException: If caller is neither buyer nor a participating seller
        """
        require_authenticated(caller, "update orders")
        try:
            new_status = OrderStatus(new_status)
        except ValueError:
            raise ValidationException(f"Unknown order status: {new_status}", field="status")

        order = self._require_visible(caller, order_id)

        previous = order.status
        order.status = new_status
        order.updated_at = utc_now()

        logger.info(f"Order {order_id} status {previous.value} -> {new_status.value} by {caller}")
        return order.model_copy(deep=True)

    def get_order(self, caller: CallerId, order_id: int) -> Order:
        return self._require_visible(caller, order_id).model_copy(deep=True)

    def get_my_orders(self, caller: CallerId) -> List[Order]:
        return [
            order.model_copy(deep=True)
            for order in self._orders.values()
            if order.buyer == caller
        ]

    def get_orders_for_seller(self, caller: CallerId) -> List[Order]:
        """Orders containing at least one item sold by the caller."""
        seller_items = set(self._catalog.seller_item_ids(caller))
        if not seller_items:
            return []
        return [
            order.model_copy(deep=True)
            for order in self._orders.values()
            if seller_items.intersection(order.items)
        ]

    def count(self) -> int:
        return len(self._orders)

    def _is_participant(self, caller: CallerId, order: Order) -> bool:
        if order.buyer == caller:
            return True
        return any(self._catalog.seller_of(item_id) == caller for item_id in order.items)

    def _require_visible(self, caller: CallerId, order_id: int) -> Order:
        order = self._orders.get(order_id)
        if order is None:
            raise NotFoundException("order", order_id)
        if not self._is_participant(caller, order):
            raise UnauthorizedException(
                f"Caller is not a participant in order {order_id}",
                caller=caller
            )
        return order

    # ---------- Snapshot support ----------

    def entries(self) -> List[Tuple[int, Order]]:
        return [(order_id, order.model_copy(deep=True)) for order_id, order in self._orders.items()]

    def load(self, entries: List[Tuple[int, Order]], next_order_id: int):
        self._orders = {order_id: order.model_copy(deep=True) for order_id, order in entries}
        self.next_order_id = next_order_id
