"""Tier model — subscription tier definitions."""

from sqlalchemy import Boolean, Column, Index, Integer, Numeric, String, text
from sqlalchemy.orm import relationship

from entitlements.db.base import Base


class Tier(Base):
    __tablename__ = "tiers"
    __table_args__ = (
        # At most one default row, enforced by the database as well
        Index(
            "uq_tiers_single_default",
            "is_default",
            unique=True,
            postgresql_where=text("is_default"),
            sqlite_where=text("is_default = 1"),
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False, default=0)

    # 0 = unlimited
    max_properties = Column(Integer, nullable=False, default=0)

    sort_order = Column(Integer, nullable=False, default=0)
    is_default = Column(Boolean, nullable=False, default=False)

    users = relationship("User", back_populates="tier")

    def __repr__(self) -> str:
        return f"<Tier id={self.id} name={self.name!r} default={self.is_default}>"
