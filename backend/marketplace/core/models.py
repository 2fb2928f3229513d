"""
ORM models for durable snapshots.

WHAT: SQLAlchemy tables holding the last store snapshot
WHY: Keep (key, entity) order and id counters across restarts
HOW: One row per snapshot entry, one row per counter
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, String, DateTime, JSON, UniqueConstraint, Index, CheckConstraint
)

from .database import Base


class SnapshotEntry(Base):
    """
    Single (key, entity) pair of a snapshotted store.

    WHAT: Entity payload as JSON plus its key and position in the store
    WHY: Restore rebuilds each store map in its original order
    HOW: Unique (store, position); payload is the pydantic JSON dump
    """
    __tablename__ = "snapshot_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    store = Column(String(32), nullable=False)
    position = Column(Integer, nullable=False)
    entry_key = Column(String(255), nullable=False)
    payload = Column(JSON, nullable=False)
    taken_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("store", "position", name="uq_snapshot_store_position"),
        CheckConstraint("position >= 0", name="check_position_non_negative"),
        Index("idx_snapshot_store", "store"),
    )

    def __repr__(self):
        return f"<SnapshotEntry(store={self.store}, position={self.position}, key={self.entry_key})>"


class SnapshotCounter(Base):
    """Monotonic id counter captured with the snapshot."""
    __tablename__ = "snapshot_counters"

    name = Column(String(32), primary_key=True)
    value = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("value >= 1", name="check_counter_positive"),
    )

    def __repr__(self):
        return f"<SnapshotCounter(name={self.name}, value={self.value})>"
