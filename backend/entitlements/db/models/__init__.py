"""Re-export all models so Base.metadata sees them."""

from entitlements.db.models.property import Ownership, Property
from entitlements.db.models.tier import Tier
from entitlements.db.models.user import User

__all__ = [
    "Ownership",
    "Property",
    "Tier",
    "User",
]
