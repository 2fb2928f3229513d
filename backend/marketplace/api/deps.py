"""
Request dependencies.

WHAT: Resolve the store instance and the caller identity per request
WHY: Endpoints stay thin and tests can swap in a fresh store
HOW: FastAPI Depends() callables reading app.state and request headers
"""

from fastapi import Request

from ..core.config import settings
from ..core.identity import CallerId
from ..core.store import MarketplaceStore


def get_store(request: Request) -> MarketplaceStore:
    """Store created by the application lifespan."""
    return request.app.state.store


def get_caller(request: Request) -> CallerId:
    """Caller identity from the transport header; missing means anonymous."""
    return CallerId.from_header(request.headers.get(settings.CALLER_HEADER))
