"""TierService — subscription tiers, the default tier, and the property quota."""

from collections.abc import Iterable, Sequence
from typing import Protocol

import structlog

from entitlements.core.exceptions import BadRequestError, NotFoundError
from entitlements.db.models.tier import Tier
from entitlements.db.models.user import User
from entitlements.domain.quota import has_property_capacity, is_unlimited
from entitlements.schemas.tiers import TierCreate, TierUpdate

logger = structlog.get_logger(__name__)

# Fields copied from a TierUpdate onto a stored tier. Anything else in the
# input is ignored.
UPDATABLE_TIER_FIELDS = ("name", "price", "max_properties", "sort_order", "is_default")


class TierRepository(Protocol):
    """Data access layer for tier records."""

    async def list_ordered(self) -> list[Tier]:
        ...

    async def get(self, tier_id: int) -> Tier | None:
        ...

    async def find_default(self) -> Tier | None:
        ...

    async def clear_default(self, exclude_id: int | None = None) -> int:
        ...

    async def add(self, tier: Tier) -> Tier:
        ...

    async def add_all(self, tiers: Iterable[Tier]) -> None:
        ...

    async def save(self, tier: Tier) -> Tier:
        ...

    async def delete(self, tier_id: int) -> None:
        ...

    async def count(self) -> int:
        ...


class UserDirectory(Protocol):
    """Lookup and update of user accounts."""

    async def find_one(self, user_id: int, relations: Sequence[str] = ()) -> User | None:
        ...

    async def search(self, **criteria) -> list[User]:
        ...

    async def update(self, user_id: int, **fields) -> None:
        ...


class TierService:
    """Service layer for tier operations.

    Owns the single-default invariant, tier CRUD, tier assignment and the
    property quota check.
    """

    def __init__(self, tiers: TierRepository, users: UserDirectory):
        """Initialize with dependency injection.

        Args:
            tiers: Tier record store
            users: User directory used for assignment and quota lookups
        """
        self.tiers = tiers
        self.users = users

    async def list_tiers(self) -> list[Tier]:
        """Return all tiers ordered by sort_order, then id."""
        return await self.tiers.list_ordered()

    async def get_tier(self, tier_id: int) -> Tier:
        """Return a tier by id.

        Raises:
            NotFoundError: No tier with that id
        """
        tier = await self.tiers.get(tier_id)
        if tier is None:
            raise NotFoundError("Tier", tier_id)
        return tier

    async def get_default_tier(self) -> Tier | None:
        """Return the default tier, or None when no tier is marked default."""
        return await self.tiers.find_default()

    async def create_tier(self, data: TierCreate) -> Tier:
        """Create a tier. A new default tier replaces any existing default."""
        if data.is_default:
            await self._clear_default_flag()

        tier = Tier(
            name=data.name,
            price=data.price,
            max_properties=data.max_properties,
            sort_order=data.sort_order if data.sort_order is not None else 0,
            is_default=bool(data.is_default),
        )
        tier = await self.tiers.add(tier)
        logger.info("tier_created", tier_id=tier.id, name=tier.name, is_default=tier.is_default)
        return tier

    async def update_tier(self, tier_id: int, data: TierUpdate) -> Tier:
        """Update the fields present in data.

        Raises:
            NotFoundError: No tier with that id
        """
        tier = await self.get_tier(tier_id)

        if data.is_default:
            await self._clear_default_flag(exclude_id=tier_id)

        provided = data.model_dump(exclude_unset=True)
        for field in UPDATABLE_TIER_FIELDS:
            value = provided.get(field)
            if value is not None:
                setattr(tier, field, value)

        tier = await self.tiers.save(tier)
        logger.info("tier_updated", tier_id=tier.id, fields=sorted(provided))
        return tier

    async def delete_tier(self, tier_id: int) -> None:
        """Delete a tier that no user is assigned to.

        Raises:
            NotFoundError: No tier with that id
            BadRequestError: At least one user is assigned to the tier
        """
        await self.get_tier(tier_id)

        assigned = await self.users.search(tier_id=tier_id)
        if assigned:
            logger.warning("tier_delete_refused", tier_id=tier_id, assigned_users=len(assigned))
            raise BadRequestError("Cannot delete tier with assigned users")

        await self.tiers.delete(tier_id)
        logger.info("tier_deleted", tier_id=tier_id)

    async def get_user(self, user_id: int) -> User:
        """Return a user by id.

        Raises:
            NotFoundError: No user with that id
        """
        user = await self.users.find_one(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def assign_tier_to_user(self, user_id: int, tier_id: int) -> None:
        """Point a user at a tier.

        The tier is checked first so an unknown tier never touches the user.

        Raises:
            NotFoundError: Unknown tier or user
        """
        await self.get_tier(tier_id)
        await self.get_user(user_id)

        await self.users.update(user_id, tier_id=tier_id)
        logger.info("tier_assigned", user_id=user_id, tier_id=tier_id)

    async def can_create_property(self, user_id: int) -> bool:
        """Decide whether the user may create one more property.

        Users without a tier are evaluated against the default tier. With no
        default tier either, the check allows. Never raises.
        """
        user = await self.users.find_one(user_id, relations=("tier",))

        if user is None or user.tier is None:
            default_tier = await self.get_default_tier()
            if default_tier is None:
                logger.info("property_quota_evaluated", user_id=user_id, source="none", allowed=True)
                return True
            return await self._check_property_limit(user_id, default_tier.max_properties, source="default")

        return await self._check_property_limit(user_id, user.tier.max_properties, source="assigned")

    async def _check_property_limit(self, user_id: int, max_properties: int, source: str) -> bool:
        if is_unlimited(max_properties):
            logger.info("property_quota_evaluated", user_id=user_id, source=source, unlimited=True, allowed=True)
            return True

        user = await self.users.find_one(user_id, relations=("ownerships",))
        if user is None:
            logger.info("property_quota_evaluated", user_id=user_id, source=source, allowed=False, reason="user_not_found")
            return False

        owned = len(user.ownerships or [])
        allowed = has_property_capacity(max_properties, owned)
        logger.info(
            "property_quota_evaluated",
            user_id=user_id,
            source=source,
            owned=owned,
            max_properties=max_properties,
            allowed=allowed,
        )
        return allowed

    async def _clear_default_flag(self, exclude_id: int | None = None) -> None:
        cleared = await self.tiers.clear_default(exclude_id=exclude_id)
        if cleared:
            logger.info("tier_default_cleared", cleared=cleared, kept_tier_id=exclude_id)
