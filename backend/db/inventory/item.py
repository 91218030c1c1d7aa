import uuid
from datetime import datetime, timezone
from typing import Literal

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, String, Text, Uuid, func, select
from sqlalchemy.orm import relationship

from ..database import Base

ItemStatus = Literal["ACTIVE", "DELETED"]

ACTIVE: ItemStatus = "ACTIVE"
DELETED: ItemStatus = "DELETED"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Item(Base):
    __tablename__ = "items"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)

    # Cache of the inventory_history fold, kept in step by adjust_stock
    current_units = Column(Integer, nullable=False, default=0)
    restock_point = Column(Integer, nullable=False, default=10)

    # 'ACTIVE' | 'DELETED'
    status = Column(Text, nullable=False, default=ACTIVE, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    events = relationship("InventoryEvent", back_populates="item", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("current_units >= 0", name="ck_items_current_units_non_negative"),
        CheckConstraint("restock_point >= 0", name="ck_items_restock_point_non_negative"),
        CheckConstraint("status IN ('ACTIVE', 'DELETED')", name="ck_items_status"),
    )

    @property
    def deleted(self) -> bool:
        return self.status == DELETED

    @classmethod
    def active(cls):
        """Select statement over items that have not been soft-deleted."""
        return select(cls).where(cls.status == ACTIVE)


# Names are unique regardless of case
Index("ux_items_name_lower", func.lower(Item.name), unique=True)
