"""
Review endpoints.

WHAT: Add and read item reviews
HOW: FastAPI endpoints wrapping ReviewBook
"""

from typing import List

from fastapi import APIRouter, Depends, status

from ...deps import get_caller, get_store
from ....core.identity import CallerId
from ....core.store import MarketplaceStore
from ....models.api_schemas import AddReviewRequest, ReviewResponse

router = APIRouter()


@router.post("/items/{item_id}/reviews", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def add_review(
    item_id: int,
    request: AddReviewRequest,
    caller: CallerId = Depends(get_caller),
    store: MarketplaceStore = Depends(get_store)
):
    review = store.reviews.add_review(caller, item_id, request.rating, request.comment)
    return ReviewResponse.from_entity(review)


@router.get("/items/{item_id}/reviews", response_model=List[ReviewResponse])
async def get_reviews(item_id: int, store: MarketplaceStore = Depends(get_store)):
    """Reviews for an item; empty list when there are none."""
    return [ReviewResponse.from_entity(review) for review in store.reviews.get_reviews(item_id)]
