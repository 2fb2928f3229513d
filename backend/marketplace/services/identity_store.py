"""
Identity store.

WHAT: User profiles keyed by caller identity
WHY: Catalog and OrderLedger check seller/buyer eligibility here
HOW: Dict of CallerId -> UserProfile, upsert keeps the original created_at
"""

from typing import Dict, List, Optional, Tuple

from ..core.identity import CallerId, require_authenticated
from ..models.entities import UserProfile, utc_now
from ..utils.logger import get_logger

logger = get_logger(__name__)


class IdentityStore:
    """Owns every UserProfile."""

    def __init__(self):
        self._profiles: Dict[CallerId, UserProfile] = {}

    def upsert_profile(
        self,
        caller: CallerId,
        name: str,
        email: Optional[str] = None,
        bio: Optional[str] = None,
        is_seller: bool = False
    ) -> UserProfile:
        """
        Create or replace the caller's own profile.

        Args:
            caller: Identity that owns the profile
            name: Display name
            email: Optional contact email
            bio: Optional free-text bio
            is_seller: Whether the caller may list items

        Returns:
            The stored profile

        Raises:
            ValidationException: If caller is anonymous
        """
        require_authenticated(caller, "create a profile")

        existing = self._profiles.get(caller)
        created_at = existing.created_at if existing else utc_now()

        profile = UserProfile(
            id=caller,
            name=name,
            email=email,
            bio=bio,
            is_seller=is_seller,
            created_at=created_at
        )
        self._profiles[caller] = profile

        logger.info(f"{'Updated' if existing else 'Created'} profile for {caller} (seller={is_seller})")
        return profile.model_copy(deep=True)

    def get_profile(self, profile_id: CallerId) -> Optional[UserProfile]:
        profile = self._profiles.get(profile_id)
        return profile.model_copy(deep=True) if profile else None

    def get_own_profile(self, caller: CallerId) -> Optional[UserProfile]:
        return self.get_profile(caller)

    def has_profile(self, profile_id: CallerId) -> bool:
        return profile_id in self._profiles

    def is_seller(self, profile_id: CallerId) -> bool:
        profile = self._profiles.get(profile_id)
        return bool(profile and profile.is_seller)

    def count(self) -> int:
        return len(self._profiles)

    def entries(self) -> List[Tuple[CallerId, UserProfile]]:
        """Ordered (key, profile) pairs for snapshotting."""
        return [(key, profile.model_copy(deep=True)) for key, profile in self._profiles.items()]

    def load(self, entries: List[Tuple[CallerId, UserProfile]]):
        """Replace all profiles with the given pairs."""
        self._profiles = {key: profile.model_copy(deep=True) for key, profile in entries}
