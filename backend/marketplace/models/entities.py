"""
Marketplace domain entities.

WHAT: Profiles, items, orders and reviews held by the store
WHY: Consistent typing across services, persistence and API schemas
HOW: Pydantic v2 models; item updates go through an explicit patch model
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from ..core.identity import CallerId


def utc_now() -> datetime:
    """Current time in UTC (timezone-aware)."""
    return datetime.now(timezone.utc)


class OrderStatus(str, Enum):
    """Order status values."""
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class UserProfile(BaseModel):
    """Profile owned by a single caller identity."""

    id: CallerId
    name: str
    email: Optional[str] = None
    bio: Optional[str] = None
    is_seller: bool = False
    created_at: datetime = Field(default_factory=utc_now)


class ItemDraft(BaseModel):
    """Fields a seller supplies when listing a new item."""

    name: str = Field(min_length=1)
    description: str = ""
    price: int = Field(ge=0, description="Price in the smallest currency unit")
    images: list[str] = Field(default_factory=list)
    category: str
    condition: str
    dimensions: Optional[str] = None
    weight: Optional[str] = None
    era: Optional[str] = None


class Item(ItemDraft):
    """Listed item. id, seller and created_at never change after creation."""

    id: int
    seller: CallerId
    created_at: datetime = Field(default_factory=utc_now)
    available: bool = True


class ItemPatch(BaseModel):
    """
    Merge-patch for an item.

    Every field is optional; None means "leave the stored value unchanged".
    """

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[int] = Field(default=None, ge=0)
    images: Optional[list[str]] = None
    category: Optional[str] = None
    condition: Optional[str] = None
    dimensions: Optional[str] = None
    weight: Optional[str] = None
    era: Optional[str] = None
    available: Optional[bool] = None


def apply_item_patch(item: Item, patch: ItemPatch) -> Item:
    """
    Merge a patch into an item without touching the original.

    Args:
        item: Current stored item
        patch: Fields to replace

    Returns:
        New Item with the present patch fields applied
    """
    changes = patch.model_dump(exclude_none=True)
    return item.model_copy(update=changes, deep=True)


class Order(BaseModel):
    """Purchase order. items and total_price are fixed at creation."""

    id: int
    buyer: CallerId
    items: list[int]
    total_price: int = Field(ge=0)
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    shipping_address: str


class Review(BaseModel):
    """Single append-only review of an item."""

    reviewer: CallerId
    item_id: int
    rating: int
    comment: str = ""
    created_at: datetime = Field(default_factory=utc_now)
