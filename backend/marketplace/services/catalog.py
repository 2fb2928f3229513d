"""
Item catalog.

WHAT: Item listings keyed by id, plus the reservation step of order creation
WHY: Only sellers list items, only the owning seller edits them, and an item
     is never reserved by two orders
HOW: Dict of id -> Item with a monotonic id counter and a seller -> ids index
"""

from typing import Dict, List, Optional, Tuple

from ..core.identity import CallerId, require_authenticated
from ..models.entities import Item, ItemDraft, ItemPatch, apply_item_patch
from ..utils.exceptions import (
    NotFoundException,
    UnauthorizedException,
    ConflictException,
)
from ..utils.logger import get_logger
from .identity_store import IdentityStore

logger = get_logger(__name__)


class Catalog:
    """Owns every Item and the next item id."""

    def __init__(self, identities: IdentityStore):
        self._identities = identities
        self._items: Dict[int, Item] = {}
        self._seller_index: Dict[CallerId, List[int]] = {}
        self.next_item_id = 1

    # ---------- Mutations ----------

    def add_item(self, caller: CallerId, draft: ItemDraft) -> Item:
        """
        List a new item for sale.

        WHAT: Store a new available item owned by the caller
        WHY: Entry point for sellers
        HOW: Check profile and seller flag, then allocate the next id

        Raises:
            ValidationException: If caller is anonymous
            NotFoundException: If caller has no profile
            UnauthorizedException: If caller's profile is not a seller
        """
        require_authenticated(caller, "list items")
        if not self._identities.has_profile(caller):
            raise NotFoundException("profile", caller)
        if not self._identities.is_seller(caller):
            raise UnauthorizedException("Only sellers can list items", caller=caller)

        item_id = self.next_item_id
        item = Item(id=item_id, seller=caller, available=True, **draft.model_dump())
        self._items[item_id] = item
        self._seller_index.setdefault(caller, []).append(item_id)
        self.next_item_id += 1

        logger.info(f"Seller {caller} listed item {item_id} ({item.name}, price={item.price})")
        return item.model_copy(deep=True)

    def update_item(self, caller: CallerId, item_id: int, patch: ItemPatch) -> Item:
        """
        Apply a merge-patch to an item owned by the caller.

        Raises:
            ValidationException: If caller is anonymous
            NotFoundException: If item_id is unknown
            UnauthorizedException: If caller is not the item's seller
        """
        require_authenticated(caller, "update items")
        current = self._items.get(item_id)
        if current is None:
            raise NotFoundException("item", item_id)
        if current.seller != caller:
            raise UnauthorizedException(f"Only the seller can update item {item_id}", caller=caller)

        updated = apply_item_patch(current, patch)
        self._items[item_id] = updated

        logger.info(f"Seller {caller} updated item {item_id}")
        return updated.model_copy(deep=True)

    def reserve(self, item_ids: List[int]) -> List[Item]:
        """
        Reserve a set of items for one order, all or nothing.

        WHAT: Mark every requested item unavailable
        WHY: Two orders must never hold the same item, and a failed order
             must leave every item untouched
        HOW: Validate all ids first; mutate only after every id has passed

        Args:
            item_ids: Requested ids in order

        Returns:
            Snapshots of the reserved items, in request order

        Raises:
            NotFoundException: If any id is unknown
            ConflictException: If any item is unavailable or requested twice
        """
        seen = set()
        for item_id in item_ids:
            item = self._items.get(item_id)
            if item is None:
                raise NotFoundException("item", item_id)
            if not item.available or item_id in seen:
                raise ConflictException(
                    f"Item {item_id} is not available",
                    details={"item_id": item_id}
                )
            seen.add(item_id)

        reserved = []
        for item_id in item_ids:
            item = self._items[item_id]
            item.available = False
            reserved.append(item.model_copy(deep=True))

        logger.info(f"Reserved items {item_ids}")
        return reserved

    # ---------- Reads ----------

    def get_item(self, item_id: int) -> Optional[Item]:
        item = self._items.get(item_id)
        return item.model_copy(deep=True) if item else None

    def list_items(self) -> List[Item]:
        return [item.model_copy(deep=True) for item in self._items.values()]

    def list_by_category(self, category: str) -> List[Item]:
        return [
            item.model_copy(deep=True)
            for item in self._items.values()
            if item.category == category
        ]

    def list_by_seller(self, seller: CallerId) -> List[Item]:
        return [self._items[item_id].model_copy(deep=True) for item_id in self.seller_item_ids(seller)]

    def seller_item_ids(self, seller: CallerId) -> List[int]:
        return list(self._seller_index.get(seller, []))

    def seller_of(self, item_id: int) -> Optional[CallerId]:
        item = self._items.get(item_id)
        return item.seller if item else None

    def search(self, text: str) -> List[Item]:
        """Case-insensitive substring match on name or description."""
        needle = text.lower()
        return [
            item.model_copy(deep=True)
            for item in self._items.values()
            if needle in item.name.lower() or needle in item.description.lower()
        ]

    def count(self) -> int:
        return len(self._items)

    # ---------- Snapshot support ----------

    def entries(self) -> List[Tuple[int, Item]]:
        return [(item_id, item.model_copy(deep=True)) for item_id, item in self._items.items()]

    def load(self, entries: List[Tuple[int, Item]], next_item_id: int):
        """Replace all items and the id counter; rebuild the seller index."""
        self._items = {}
        self._seller_index = {}
        for item_id, item in entries:
            self._items[item_id] = item.model_copy(deep=True)
            self._seller_index.setdefault(item.seller, []).append(item_id)
        self.next_item_id = next_item_id
