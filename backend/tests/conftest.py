"""Shared test fixtures for all test groups.

In-memory stand-ins for the tier record store and the user directory, used by
the unit tests of TierService and the seeder.
"""

import pytest

from entitlements.db.models.property import Ownership
from entitlements.db.models.tier import Tier
from entitlements.db.models.user import User


class FakeTierRepository:
    """Dict-backed TierRepository."""

    def __init__(self):
        self.rows: dict[int, Tier] = {}
        self.deleted: list[int] = []
        self.saves = 0
        self._next_id = 1

    async def list_ordered(self) -> list[Tier]:
        return sorted(self.rows.values(), key=lambda t: (t.sort_order, t.id))

    async def get(self, tier_id: int) -> Tier | None:
        return self.rows.get(tier_id)

    async def find_default(self) -> Tier | None:
        defaults = [t for t in self.rows.values() if t.is_default]
        return min(defaults, key=lambda t: t.id) if defaults else None

    async def clear_default(self, exclude_id: int | None = None) -> int:
        cleared = 0
        for tier in self.rows.values():
            if tier.is_default and tier.id != exclude_id:
                tier.is_default = False
                cleared += 1
        return cleared

    async def add(self, tier: Tier) -> Tier:
        tier.id = self._next_id
        self._next_id += 1
        self.rows[tier.id] = tier
        self.saves += 1
        return tier

    async def add_all(self, tiers) -> None:
        for tier in tiers:
            await self.add(tier)

    async def save(self, tier: Tier) -> Tier:
        self.rows[tier.id] = tier
        self.saves += 1
        return tier

    async def delete(self, tier_id: int) -> None:
        self.deleted.append(tier_id)
        self.rows.pop(tier_id, None)

    async def count(self) -> int:
        return len(self.rows)

    def put(self, name: str, max_properties: int, *, is_default: bool = False, sort_order: int = 0) -> Tier:
        """Store a tier directly, bypassing the service."""
        tier = Tier(
            id=self._next_id,
            name=name,
            price=0,
            max_properties=max_properties,
            sort_order=sort_order,
            is_default=is_default,
        )
        self._next_id += 1
        self.rows[tier.id] = tier
        return tier


class FakeUserDirectory:
    """Dict-backed UserDirectory that resolves the tier relation from a FakeTierRepository."""

    def __init__(self, tiers: FakeTierRepository):
        self.tiers = tiers
        self.rows: dict[int, User] = {}
        self.lookups: list[tuple[int, tuple[str, ...]]] = []
        self.updates: list[tuple[int, dict]] = []

    async def find_one(self, user_id: int, relations=()) -> User | None:
        self.lookups.append((user_id, tuple(relations)))
        user = self.rows.get(user_id)
        if user is not None and "tier" in relations:
            user.tier = self.tiers.rows.get(user.tier_id) if user.tier_id is not None else None
        return user

    async def search(self, **criteria) -> list[User]:
        return [
            user
            for user in self.rows.values()
            if all(getattr(user, key) == value for key, value in criteria.items())
        ]

    async def update(self, user_id: int, **fields) -> None:
        self.updates.append((user_id, fields))
        user = self.rows[user_id]
        for key, value in fields.items():
            setattr(user, key, value)

    def put(self, user_id: int, *, tier_id: int | None = None, owned: int = 0) -> User:
        """Store a user owning `owned` properties."""
        user = User(id=user_id, email=f"user{user_id}@example.com", tier_id=tier_id)
        user.ownerships = [Ownership(user_id=user_id, property_id=n + 1, share=100) for n in range(owned)]
        self.rows[user_id] = user
        return user


@pytest.fixture
def fake_tiers() -> FakeTierRepository:
    return FakeTierRepository()


@pytest.fixture
def fake_users(fake_tiers) -> FakeUserDirectory:
    return FakeUserDirectory(fake_tiers)


@pytest.fixture
def tier_service(fake_tiers, fake_users):
    """TierService wired to the in-memory fakes."""
    from entitlements.services.tier_service import TierService

    return TierService(fake_tiers, fake_users)
