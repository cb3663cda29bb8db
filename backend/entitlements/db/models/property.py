"""Property and Ownership models — a user's stake in a rental property."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from entitlements.db.base import Base


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    size = Column(Numeric(10, 2), nullable=False, default=0)

    ownerships = relationship("Ownership", back_populates="property", cascade="all, delete-orphan")

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))


class Ownership(Base):
    __tablename__ = "ownerships"
    __table_args__ = (UniqueConstraint("user_id", "property_id", name="uq_ownership_user_property"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)

    # Percentage of the property held by the user
    share = Column(Integer, nullable=False, default=100)

    user = relationship("User", back_populates="ownerships")
    property = relationship("Property", back_populates="ownerships")
