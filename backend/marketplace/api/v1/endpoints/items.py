"""
Item endpoints.

WHAT: List, update, browse and search catalog items
WHY: Sellers manage listings; anyone can browse
HOW: FastAPI endpoints wrapping Catalog
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...deps import get_caller, get_store
from ....core.identity import CallerId
from ....core.store import MarketplaceStore
from ....models.api_schemas import AddItemRequest, UpdateItemRequest, ItemResponse
from ....utils.exceptions import NotFoundException

router = APIRouter()


@router.post("/items", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def add_item(
    request: AddItemRequest,
    caller: CallerId = Depends(get_caller),
    store: MarketplaceStore = Depends(get_store)
):
    """
    List a new item.

    Raises:
        NotFoundException: If the caller has no profile
        UnauthorizedException: If the caller is not a seller
    """
    item = store.catalog.add_item(caller, request)
    return ItemResponse.from_entity(item)


@router.patch("/items/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: int,
    request: UpdateItemRequest,
    caller: CallerId = Depends(get_caller),
    store: MarketplaceStore = Depends(get_store)
):
    """Merge-patch an item owned by the caller."""
    item = store.catalog.update_item(caller, item_id, request)
    return ItemResponse.from_entity(item)


@router.get("/items", response_model=List[ItemResponse])
async def list_items(
    category: Optional[str] = Query(default=None, min_length=1),
    seller: Optional[str] = Query(default=None, min_length=1),
    store: MarketplaceStore = Depends(get_store)
):
    """
    List items, optionally filtered.

    category takes precedence over seller when both are given.
    """
    if category is not None:
        items = store.catalog.list_by_category(category)
    elif seller is not None:
        items = store.catalog.list_by_seller(CallerId(principal=seller))
    else:
        items = store.catalog.list_items()
    return [ItemResponse.from_entity(item) for item in items]


@router.get("/items/search", response_model=List[ItemResponse])
async def search_items(q: str = Query(..., min_length=1), store: MarketplaceStore = Depends(get_store)):
    """Case-insensitive search over item name and description."""
    return [ItemResponse.from_entity(item) for item in store.catalog.search(q)]


@router.get("/items/{item_id}", response_model=ItemResponse)
async def get_item(item_id: int, store: MarketplaceStore = Depends(get_store)):
    item = store.catalog.get_item(item_id)
    if item is None:
        raise NotFoundException("item", item_id)
    return ItemResponse.from_entity(item)
