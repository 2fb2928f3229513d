"""
Persistence manager.

WHAT: Snapshot and restore of all four stores
WHY: The store must survive a restart without losing or duplicating entities
HOW: Dump every store's (key, entity) pairs plus id counters into a
     StoreSnapshot; rebuild the maps from it on startup
"""

from typing import Optional

from ..models.snapshot import StoreSnapshot
from ..utils.logger import get_logger
from .catalog import Catalog
from .identity_store import IdentityStore
from .order_ledger import OrderLedger
from .review_book import ReviewBook

logger = get_logger(__name__)


class PersistenceManager:
    """
    Snapshot/restore boundary for the in-memory stores.

    WHAT: Owns the transient snapshot buffer between shutdown and startup
    WHY: Keeps serialization out of the individual stores' public API
    HOW: Reads and replaces store contents through entries()/load()
    """

    def __init__(
        self,
        identities: IdentityStore,
        catalog: Catalog,
        orders: OrderLedger,
        reviews: ReviewBook
    ):
        self._identities = identities
        self._catalog = catalog
        self._orders = orders
        self._reviews = reviews
        self.pending: Optional[StoreSnapshot] = None

    def snapshot(self) -> StoreSnapshot:
        """
        Capture the complete store state.

        Returns:
            StoreSnapshot holding every entity and both id counters
        """
        data = StoreSnapshot(
            profiles=self._identities.entries(),
            items=self._catalog.entries(),
            orders=self._orders.entries(),
            reviews=self._reviews.entries(),
            next_item_id=self._catalog.next_item_id,
            next_order_id=self._orders.next_order_id
        )
        self.pending = data

        logger.info(
            f"Snapshot taken: {len(data.profiles)} profiles, {len(data.items)} items, "
            f"{len(data.orders)} orders, {len(data.reviews)} reviewed items "
            f"(next_item_id={data.next_item_id}, next_order_id={data.next_order_id})"
        )
        return data

    def restore(self, data: StoreSnapshot):
        """
        Rebuild every store from a snapshot and drop the transient buffer.

        Existing contents are replaced, so restoring the same snapshot twice
        gives the same state.

        Args:
            data: Snapshot produced by snapshot() or loaded from durable storage
        """
        self._identities.load(data.profiles)
        self._catalog.load(data.items, data.next_item_id)
        self._orders.load(data.orders, data.next_order_id)
        self._reviews.load(data.reviews)
        self.pending = None

        logger.info(
            f"Store restored: {len(data.profiles)} profiles, {len(data.items)} items, "
            f"{len(data.orders)} orders (next_item_id={data.next_item_id}, "
            f"next_order_id={data.next_order_id})"
        )
