"""
Durable snapshot storage.

WHAT: Save/load a StoreSnapshot to the SQLite database
WHY: The in-memory store is rebuilt from here after a restart
HOW: Replace all snapshot rows in one transaction; read them back by position
"""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import sessionmaker

from .database import get_db
from .identity import CallerId
from .models import SnapshotEntry, SnapshotCounter
from ..models.entities import UserProfile, Item, Order, Review
from ..models.snapshot import StoreSnapshot
from ..utils.logger import get_logger

logger = get_logger(__name__)

PROFILES = "profiles"
ITEMS = "items"
ORDERS = "orders"
REVIEWS = "reviews"

NEXT_ITEM_ID = "next_item_id"
NEXT_ORDER_ID = "next_order_id"


class SnapshotRepository:
    """Reads and writes the single durable snapshot."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory

    def save(self, snapshot: StoreSnapshot):
        """
        Replace the stored snapshot.

        WHAT: Write every entry and both counters
        WHY: The previous snapshot must never be half-overwritten
        HOW: Delete + insert inside one get_db() transaction
        """
        rows = []
        for position, (key, profile) in enumerate(snapshot.profiles):
            rows.append(self._entry(PROFILES, position, key.principal, profile.model_dump(mode="json")))
        for position, (key, item) in enumerate(snapshot.items):
            rows.append(self._entry(ITEMS, position, str(key), item.model_dump(mode="json")))
        for position, (key, order) in enumerate(snapshot.orders):
            rows.append(self._entry(ORDERS, position, str(key), order.model_dump(mode="json")))
        for position, (key, reviews) in enumerate(snapshot.reviews):
            payload = [review.model_dump(mode="json") for review in reviews]
            rows.append(self._entry(REVIEWS, position, str(key), payload))

        with get_db(self._session_factory) as db:
            db.execute(delete(SnapshotEntry))
            db.execute(delete(SnapshotCounter))
            db.add_all(rows)
            db.add(SnapshotCounter(name=NEXT_ITEM_ID, value=snapshot.next_item_id))
            db.add(SnapshotCounter(name=NEXT_ORDER_ID, value=snapshot.next_order_id))

        logger.info(f"Saved snapshot with {len(rows)} entries")

    def load(self) -> Optional[StoreSnapshot]:
        """
        Read the stored snapshot.

        Returns:
            StoreSnapshot, or None if no snapshot has been saved yet
        """
        with get_db(self._session_factory) as db:
            counters = {
                counter.name: counter.value
                for counter in db.scalars(select(SnapshotCounter)).all()
            }
            if not counters:
                logger.info("No stored snapshot found")
                return None

            entries = db.scalars(
                select(SnapshotEntry).order_by(SnapshotEntry.store, SnapshotEntry.position)
            ).all()

        snapshot = StoreSnapshot(
            next_item_id=counters[NEXT_ITEM_ID],
            next_order_id=counters[NEXT_ORDER_ID]
        )
        for entry in entries:
            if entry.store == PROFILES:
                snapshot.profiles.append(
                    (CallerId(principal=entry.entry_key), UserProfile.model_validate(entry.payload))
                )
            elif entry.store == ITEMS:
                snapshot.items.append((int(entry.entry_key), Item.model_validate(entry.payload)))
            elif entry.store == ORDERS:
                snapshot.orders.append((int(entry.entry_key), Order.model_validate(entry.payload)))
            elif entry.store == REVIEWS:
                snapshot.reviews.append(
                    (int(entry.entry_key), [Review.model_validate(r) for r in entry.payload])
                )
            else:
                raise ValueError(f"Unknown snapshot store: {entry.store}")

        logger.info(f"Loaded snapshot with {len(entries)} entries")
        return snapshot

    @staticmethod
    def _entry(store: str, position: int, key: str, payload) -> SnapshotEntry:
        return SnapshotEntry(store=store, position=position, entry_key=key, payload=payload)
