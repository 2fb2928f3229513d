"""
Status and health check endpoints.

WHAT: Health monitoring for the store and the snapshot database
WHY: Quick diagnostics for ops
HOW: Store entity counts plus database ping
"""

from fastapi import APIRouter, Depends

from ...deps import get_store
from ....core.config import settings
from ....core.database import ping_database
from ....core.store import MarketplaceStore

router = APIRouter()


@router.get("/health")
async def health_check(store: MarketplaceStore = Depends(get_store)):
    """
    Overall application health check.

    Returns:
        JSON with overall status, store counts and database status
    """
    db_status = ping_database()

    return {
        "status": "healthy" if db_status["available"] else "degraded",
        "version": settings.APP_VERSION,
        "app_name": settings.APP_NAME,
        "components": {
            "store": store.stats(),
            "database": db_status
        }
    }
