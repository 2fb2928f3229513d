"""
Pydantic API schemas for the HTTP host.

WHAT: Request and response models for FastAPI
WHY: Type-safe decoding of arguments before they reach the store
HOW: Pydantic v2 models; entities are rendered with plain-string identities
"""

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field

from ..models.entities import (
    ItemDraft, ItemPatch, OrderStatus, UserProfile, Item, Order, Review
)


# ========== Requests ==========

class ProfileRequest(BaseModel):
    """Create or replace the caller's profile."""
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: Optional[str] = Field(default=None, max_length=254)
    bio: Optional[str] = Field(default=None, max_length=2000)
    is_seller: bool = Field(default=False, description="Whether the caller lists items")


class AddItemRequest(ItemDraft):
    """New item listing."""


class UpdateItemRequest(ItemPatch):
    """Merge-patch for an existing item."""


class CreateOrderRequest(BaseModel):
    """Order for one or more items."""
    item_ids: List[int] = Field(..., min_length=1, description="Items to buy, in order")
    shipping_address: str = Field(..., min_length=1, max_length=500)


class UpdateOrderStatusRequest(BaseModel):
    """New status for an order."""
    status: OrderStatus


class AddReviewRequest(BaseModel):
    """Review of an item. Rating range is checked by the store."""
    rating: int
    comment: str = Field(default="", max_length=2000)


# ========== Responses ==========

class ProfileResponse(BaseModel):
    id: str
    name: str
    email: Optional[str]
    bio: Optional[str]
    is_seller: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, profile: UserProfile) -> "ProfileResponse":
        return cls(**profile.model_dump(exclude={"id"}), id=profile.id.principal)


class ItemResponse(ItemDraft):
    id: int
    seller: str
    created_at: datetime
    available: bool

    @classmethod
    def from_entity(cls, item: Item) -> "ItemResponse":
        return cls(**item.model_dump(exclude={"seller"}), seller=item.seller.principal)


class OrderResponse(BaseModel):
    id: int
    buyer: str
    items: List[int]
    total_price: int
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
    shipping_address: str

    @classmethod
    def from_entity(cls, order: Order) -> "OrderResponse":
        return cls(**order.model_dump(exclude={"buyer"}), buyer=order.buyer.principal)


class ReviewResponse(BaseModel):
    reviewer: str
    item_id: int
    rating: int
    comment: str
    created_at: datetime

    @classmethod
    def from_entity(cls, review: Review) -> "ReviewResponse":
        return cls(**review.model_dump(exclude={"reviewer"}), reviewer=review.reviewer.principal)
