"""Property quota decision logic.

Pure domain functions for tier quotas.
No DB access, fully deterministic.
"""

UNLIMITED_PROPERTIES = 0


def is_unlimited(max_properties: int) -> bool:
    """Return True when the quota value is the unlimited sentinel."""
    return max_properties == UNLIMITED_PROPERTIES


def has_property_capacity(max_properties: int, owned_count: int) -> bool:
    """Decide whether one more property fits within the quota.

    Args:
        max_properties: Tier quota, 0 meaning unlimited
        owned_count: Number of properties the user owns right now

    Returns:
        True if the user may create another property. A user holding exactly
        max_properties is at the limit and gets False.
    """
    if is_unlimited(max_properties):
        return True
    return owned_count < max_properties
