"""SQLAlchemy-backed repositories for tiers and users.

Repositories share the caller's AsyncSession. Statements that do not commit
(clear_default) join the session's open transaction and are committed together
with the next add()/save() call.
"""

from collections.abc import Iterable, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from entitlements.core.exceptions import ConflictError
from entitlements.db.models.tier import Tier
from entitlements.db.models.user import User


class SqlTierRepository:
    """Tier record store over an AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_ordered(self) -> list[Tier]:
        result = await self.session.execute(select(Tier).order_by(Tier.sort_order, Tier.id))
        return list(result.scalars().all())

    async def get(self, tier_id: int) -> Tier | None:
        result = await self.session.execute(select(Tier).where(Tier.id == tier_id))
        return result.scalar_one_or_none()

    async def find_default(self) -> Tier | None:
        result = await self.session.execute(
            select(Tier).where(Tier.is_default.is_(True)).order_by(Tier.id).limit(1)
        )
        return result.scalars().first()

    async def clear_default(self, exclude_id: int | None = None) -> int:
        """Unset is_default on every default tier except exclude_id.

        Single UPDATE statement, not committed here.

        Returns:
            Number of rows changed
        """
        stmt = update(Tier).where(Tier.is_default.is_(True))
        if exclude_id is not None:
            stmt = stmt.where(Tier.id != exclude_id)
        result = await self.session.execute(stmt.values(is_default=False))
        return result.rowcount or 0

    async def add(self, tier: Tier) -> Tier:
        self.session.add(tier)
        await self._commit(tier)
        await self.session.refresh(tier)
        return tier

    async def add_all(self, tiers: Iterable[Tier]) -> None:
        self.session.add_all(list(tiers))
        await self.session.commit()

    async def save(self, tier: Tier) -> Tier:
        self.session.add(tier)
        await self._commit(tier)
        await self.session.refresh(tier)
        return tier

    async def delete(self, tier_id: int) -> None:
        await self.session.execute(delete(Tier).where(Tier.id == tier_id))
        await self.session.commit()

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(Tier.id)))
        return result.scalar() or 0

    async def _commit(self, tier: Tier) -> None:
        """Commit, reporting a second default row as ConflictError.

        A default row rejected by uq_tiers_single_default means another default
        was committed after this session's clear_default().
        """
        is_default = bool(tier.is_default)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            if is_default:
                raise ConflictError("Another tier was made the default concurrently, retry the request")
            raise


class SqlUserDirectory:
    """User lookup and update over an AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_one(self, user_id: int, relations: Sequence[str] = ()) -> User | None:
        """Load a user, eagerly loading the named relationships ("tier", "ownerships")."""
        stmt = (
            select(User)
            .where(User.id == user_id)
            .options(*(selectinload(getattr(User, name)) for name in relations))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def search(self, **criteria) -> list[User]:
        result = await self.session.execute(select(User).filter_by(**criteria).order_by(User.id))
        return list(result.scalars().all())

    async def update(self, user_id: int, **fields) -> None:
        await self.session.execute(update(User).where(User.id == user_id).values(**fields))
        await self.session.commit()
