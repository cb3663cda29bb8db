"""User model — account holder, optionally assigned to a tier."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from entitlements.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)

    # Plan (nullable = evaluated against the default tier)
    tier_id = Column(Integer, ForeignKey("tiers.id"), nullable=True, index=True)
    tier = relationship("Tier", back_populates="users")

    ownerships = relationship("Ownership", back_populates="user")

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
