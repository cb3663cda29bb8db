"""Admin API routes — tier management and tier assignment.

Authentication and the admin guard are attached by the host application
as router dependencies.
"""

from fastapi import APIRouter, Depends, Response

from entitlements.api.deps import get_tier_service
from entitlements.schemas.tiers import (
    AssignTierRequest,
    PropertyQuotaResponse,
    TierCreate,
    TierResponse,
    TierUpdate,
)
from entitlements.services.tier_service import TierService

router = APIRouter(prefix="/admin", tags=["admin"])


# ---------- Tiers ----------


@router.get("/tiers", response_model=list[TierResponse])
async def list_tiers(service: TierService = Depends(get_tier_service)):
    """List all tiers in display order."""
    return await service.list_tiers()


@router.get("/tiers/{tier_id}", response_model=TierResponse)
async def get_tier(tier_id: int, service: TierService = Depends(get_tier_service)):
    return await service.get_tier(tier_id)


@router.post("/tiers", response_model=TierResponse, status_code=201)
async def create_tier(body: TierCreate, service: TierService = Depends(get_tier_service)):
    """Create a tier. Marking it default unsets the previous default."""
    return await service.create_tier(body)


@router.put("/tiers/{tier_id}", response_model=TierResponse)
async def update_tier(
    tier_id: int,
    body: TierUpdate,
    service: TierService = Depends(get_tier_service),
):
    """Update a tier's name, price, quota, order or default flag."""
    return await service.update_tier(tier_id, body)


@router.delete("/tiers/{tier_id}")
async def delete_tier(tier_id: int, service: TierService = Depends(get_tier_service)):
    """Delete a tier. Refused with 400 while users are assigned to it."""
    await service.delete_tier(tier_id)
    return Response(status_code=200)


# ---------- Users ----------


@router.put("/users/{user_id}/tier")
async def assign_tier(
    user_id: int,
    body: AssignTierRequest,
    service: TierService = Depends(get_tier_service),
):
    """Assign a tier to a user."""
    await service.assign_tier_to_user(user_id, body.tier_id)
    return Response(status_code=200)


@router.get("/users/{user_id}/can-create-property", response_model=PropertyQuotaResponse)
async def can_create_property(user_id: int, service: TierService = Depends(get_tier_service)):
    allowed = await service.can_create_property(user_id)
    return PropertyQuotaResponse(user_id=user_id, allowed=allowed)
