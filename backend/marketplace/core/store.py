"""
Marketplace store.

WHAT: Service object wiring identities, catalog, orders and reviews together
WHY: One explicit owner of all entity maps; no module-level state
HOW: Builds the components in dependency order; snapshot()/restore() are
     the only persistence boundary
"""

from ..models.snapshot import StoreSnapshot
from ..services.catalog import Catalog
from ..services.identity_store import IdentityStore
from ..services.order_ledger import OrderLedger
from ..services.persistence import PersistenceManager
from ..services.review_book import ReviewBook


class MarketplaceStore:
    """All marketplace state for a single logical instance."""

    def __init__(self):
        self.identities = IdentityStore()
        self.catalog = Catalog(self.identities)
        self.reviews = ReviewBook(self.catalog)
        self.orders = OrderLedger(self.identities, self.catalog)
        self.persistence = PersistenceManager(
            self.identities, self.catalog, self.orders, self.reviews
        )

    def snapshot(self) -> StoreSnapshot:
        return self.persistence.snapshot()

    def restore(self, data: StoreSnapshot):
        self.persistence.restore(data)

    def stats(self) -> dict:
        """Entity counts and id counters, for health reporting."""
        return {
            "profiles": self.identities.count(),
            "items": self.catalog.count(),
            "orders": self.orders.count(),
            "reviews": self.reviews.count(),
            "next_item_id": self.catalog.next_item_id,
            "next_order_id": self.orders.next_order_id
        }
