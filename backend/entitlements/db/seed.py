"""Insert-if-empty seed data for subscription tiers."""

from decimal import Decimal

import structlog

from entitlements.db.base import get_session_factory
from entitlements.db.models.tier import Tier
from entitlements.db.repositories import SqlTierRepository
from entitlements.services.tier_service import TierRepository

logger = structlog.get_logger(__name__)

BASELINE_TIERS = [
    {
        "name": "Free",
        "price": Decimal("0"),
        "max_properties": 1,
        "sort_order": 0,
        "is_default": True,
    },
    {
        "name": "Basic",
        "price": Decimal("4.99"),
        "max_properties": 5,
        "sort_order": 1,
        "is_default": False,
    },
    {
        "name": "Professional",
        "price": Decimal("14.99"),
        "max_properties": 20,
        "sort_order": 2,
        "is_default": False,
    },
    {
        "name": "Enterprise",
        "price": Decimal("29.99"),
        "max_properties": 0,  # unlimited
        "sort_order": 3,
        "is_default": False,
    },
]


async def seed_baseline_tiers(tiers: TierRepository) -> list[Tier]:
    """Insert the baseline tiers when the store holds no tiers at all.

    Existing tiers are never merged or updated.

    Returns:
        The inserted tiers, empty when the store already had data
    """
    existing = await tiers.count()
    if existing > 0:
        logger.info("tiers_seed_skipped", existing=existing)
        return []

    rows = [Tier(**tier_data) for tier_data in BASELINE_TIERS]
    await tiers.add_all(rows)
    logger.info("tiers_seeded", count=len(rows))
    return rows


async def seed_tiers() -> None:
    """Seed the baseline tiers using the global session factory."""
    factory = get_session_factory()

    async with factory() as session:
        await seed_baseline_tiers(SqlTierRepository(session))
