"""
Profile endpoints.

WHAT: Create/update and read user profiles
WHY: Every buyer and seller needs a profile before trading
HOW: FastAPI endpoints wrapping IdentityStore
"""

from fastapi import APIRouter, Depends

from ...deps import get_caller, get_store
from ....core.identity import CallerId
from ....core.store import MarketplaceStore
from ....models.api_schemas import ProfileRequest, ProfileResponse
from ....utils.exceptions import NotFoundException

router = APIRouter()


@router.put("/profiles/me", response_model=ProfileResponse)
async def upsert_profile(
    request: ProfileRequest,
    caller: CallerId = Depends(get_caller),
    store: MarketplaceStore = Depends(get_store)
):
    """
    Create or replace the caller's profile.

    Raises:
        ValidationException: If the caller is anonymous
    """
    profile = store.identities.upsert_profile(
        caller,
        name=request.name,
        email=request.email,
        bio=request.bio,
        is_seller=request.is_seller
    )
    return ProfileResponse.from_entity(profile)


@router.get("/profiles/me", response_model=ProfileResponse)
async def get_own_profile(
    caller: CallerId = Depends(get_caller),
    store: MarketplaceStore = Depends(get_store)
):
    """Get the caller's own profile."""
    profile = store.identities.get_own_profile(caller)
    if profile is None:
        raise NotFoundException("profile", caller)
    return ProfileResponse.from_entity(profile)


@router.get("/profiles/{principal}", response_model=ProfileResponse)
async def get_profile(principal: str, store: MarketplaceStore = Depends(get_store)):
    """Get any profile by principal (public read)."""
    profile = store.identities.get_profile(CallerId(principal=principal))
    if profile is None:
        raise NotFoundException("profile", principal)
    return ProfileResponse.from_entity(profile)
