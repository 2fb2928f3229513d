"""
Review book.

WHAT: Append-only item reviews, one per reviewer per item
WHY: Buyers rate items; the rating range and uniqueness are enforced here
HOW: Dict of item id -> ordered list of Review
"""

from typing import Dict, List, Tuple

from ..core.identity import CallerId, require_authenticated
from ..models.entities import Review
from ..utils.exceptions import NotFoundException, ValidationException, ConflictException
from ..utils.logger import get_logger
from .catalog import Catalog

logger = get_logger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class ReviewBook:
    """Owns every Review."""

    def __init__(self, catalog: Catalog):
        self._catalog = catalog
        self._reviews: Dict[int, List[Review]] = {}

    def add_review(self, caller: CallerId, item_id: int, rating: int, comment: str) -> Review:
        """
        Append a review to an item.

        Raises:
            ValidationException: If caller is anonymous or rating is outside [1, 5]
            NotFoundException: If the item does not exist
            ConflictException: If caller already reviewed the item
        """
        require_authenticated(caller, "review items")
        if self._catalog.get_item(item_id) is None:
            raise NotFoundException("item", item_id)
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationException(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}",
                field="rating"
            )

        existing = self._reviews.get(item_id, [])
        if any(review.reviewer == caller for review in existing):
            raise ConflictException(
                f"{caller} has already reviewed item {item_id}",
                details={"item_id": item_id, "reviewer": str(caller)}
            )

        review = Review(reviewer=caller, item_id=item_id, rating=rating, comment=comment)
        self._reviews.setdefault(item_id, []).append(review)

        logger.info(f"{caller} reviewed item {item_id} (rating={rating})")
        return review.model_copy(deep=True)

    def get_reviews(self, item_id: int) -> List[Review]:
        return [review.model_copy(deep=True) for review in self._reviews.get(item_id, [])]

    def count(self) -> int:
        return sum(len(reviews) for reviews in self._reviews.values())

    def entries(self) -> List[Tuple[int, List[Review]]]:
        return [
            (item_id, [review.model_copy(deep=True) for review in reviews])
            for item_id, reviews in self._reviews.items()
        ]

    def load(self, entries: List[Tuple[int, List[Review]]]):
        self._reviews = {
            item_id: [review.model_copy(deep=True) for review in reviews]
            for item_id, reviews in entries
        }
