"""Public pricing routes — tier list for the landing page."""

from fastapi import APIRouter, Depends

from entitlements.api.deps import get_tier_service
from entitlements.schemas.tiers import TierResponse
from entitlements.services.tier_service import TierService

router = APIRouter()


@router.get("/pricing/tiers", response_model=list[TierResponse])
async def pricing_tiers(service: TierService = Depends(get_tier_service)):
    """List tiers for the public pricing table."""
    return await service.list_tiers()
