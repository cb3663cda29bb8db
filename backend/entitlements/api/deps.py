"""FastAPI dependencies shared by the route modules."""

from collections.abc import AsyncIterator

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from entitlements.db.base import get_session_factory
from entitlements.db.repositories import SqlTierRepository, SqlUserDirectory
from entitlements.schemas.properties import PropertyCreate
from entitlements.services.tier_service import TierService


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a request-scoped session from the global factory."""
    factory = get_session_factory()
    async with factory() as session:
        yield session


def get_tier_service(session: AsyncSession = Depends(get_session)) -> TierService:
    """Build a TierService whose repositories share the request session."""
    return TierService(SqlTierRepository(session), SqlUserDirectory(session))


async def require_property_quota(
    body: PropertyCreate,
    service: TierService = Depends(get_tier_service),
) -> PropertyCreate:
    """Reject property creation for an unknown owner (404) or a used-up quota (403)."""
    await service.get_user(body.owner_id)
    if not await service.can_create_property(body.owner_id):
        raise HTTPException(status_code=403, detail="Property limit reached for your current tier")
    return body
