"""
Order endpoints.

WHAT: Create orders, change their status, and list them per buyer/seller
WHY: Buyers purchase items; buyers and sellers track fulfilment
HOW: FastAPI endpoints wrapping OrderLedger
"""

from typing import List

from fastapi import APIRouter, Depends, status

from ...deps import get_caller, get_store
from ....core.identity import CallerId
from ....core.store import MarketplaceStore
from ....models.api_schemas import CreateOrderRequest, UpdateOrderStatusRequest, OrderResponse

router = APIRouter()


@router.post("/orders", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    request: CreateOrderRequest,
    caller: CallerId = Depends(get_caller),
    store: MarketplaceStore = Depends(get_store)
):
    """
    Reserve items and create a pending order.

    Raises:
        NotFoundException: If the caller has no profile or an item is unknown
        ConflictException: If an item is already unavailable
    """
    order = store.orders.create_order(caller, request.item_ids, request.shipping_address)
    return OrderResponse.from_entity(order)


@router.get("/orders/mine", response_model=List[OrderResponse])
async def get_my_orders(caller: CallerId = Depends(get_caller), store: MarketplaceStore = Depends(get_store)):
    """Orders placed by the caller."""
    return [OrderResponse.from_entity(order) for order in store.orders.get_my_orders(caller)]


@router.get("/orders/selling", response_model=List[OrderResponse])
async def get_orders_for_seller(
    caller: CallerId = Depends(get_caller),
    store: MarketplaceStore = Depends(get_store)
):
    """Orders containing at least one of the caller's items."""
    return [OrderResponse.from_entity(order) for order in store.orders.get_orders_for_seller(caller)]


@router.get("/orders/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    caller: CallerId = Depends(get_caller),
    store: MarketplaceStore = Depends(get_store)
):
    """Get an order visible to the caller."""
    return OrderResponse.from_entity(store.orders.get_order(caller, order_id))


@router.put("/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    request: UpdateOrderStatusRequest,
    caller: CallerId = Depends(get_caller),
    store: MarketplaceStore = Depends(get_store)
):
    """Set an order's status (buyer or participating seller only)."""
    order = store.orders.update_order_status(caller, order_id, request.status)
    return OrderResponse.from_entity(order)
