"""
Snapshot format for the marketplace store.

WHAT: Ordered (key, entity) pairs per store plus the id counters
WHY: Single durable shape shared by the in-memory and SQLite persistence paths
HOW: Pydantic model so every entity round-trips through model_dump/model_validate
"""

from pydantic import BaseModel, Field

from ..core.identity import CallerId
from .entities import UserProfile, Item, Order, Review


class StoreSnapshot(BaseModel):
    """Complete contents of the store at snapshot time."""

    profiles: list[tuple[CallerId, UserProfile]] = Field(default_factory=list)
    items: list[tuple[int, Item]] = Field(default_factory=list)
    orders: list[tuple[int, Order]] = Field(default_factory=list)
    reviews: list[tuple[int, list[Review]]] = Field(default_factory=list)
    next_item_id: int = Field(default=1, ge=1)
    next_order_id: int = Field(default=1, ge=1)
