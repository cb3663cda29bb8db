"""Property routes — creation gated by the owner's tier quota."""

import structlog
from fastapi import APIRouter, Depends, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from entitlements.api.deps import get_session, require_property_quota
from entitlements.core.exceptions import NotFoundError
from entitlements.db.models.property import Ownership, Property
from entitlements.schemas.properties import PropertyCreate, PropertyResponse

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/", response_model=PropertyResponse, status_code=201)
async def create_property(
    body: PropertyCreate = Depends(require_property_quota),
    session: AsyncSession = Depends(get_session),
):
    """Create a property owned in full by body.owner_id."""
    prop = Property(name=body.name, size=body.size)
    prop.ownerships.append(Ownership(user_id=body.owner_id, share=100))
    session.add(prop)
    await session.commit()
    await session.refresh(prop)

    logger.info("property_created", property_id=prop.id, owner_id=body.owner_id)
    return prop


@router.delete("/{property_id}")
async def delete_property(property_id: int, session: AsyncSession = Depends(get_session)):
    """Delete a property with its ownerships, freeing a quota slot for each owner."""
    result = await session.execute(
        select(Property).where(Property.id == property_id).options(selectinload(Property.ownerships))
    )
    prop = result.scalar_one_or_none()
    if prop is None:
        raise NotFoundError("Property", property_id)

    owner_ids = [o.user_id for o in prop.ownerships]
    await session.delete(prop)
    await session.commit()

    logger.info("property_deleted", property_id=property_id, owner_ids=owner_ids)
    return Response(status_code=200)
