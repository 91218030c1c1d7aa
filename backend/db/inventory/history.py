from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import relationship

from ..database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InventoryEvent(Base):
    __tablename__ = "inventory_history"

    # Increasing id doubles as the insertion-order tie-breaker for equal timestamps
    id = Column(Integer, primary_key=True, autoincrement=True)

    item_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    units = Column(Integer, nullable=False)
    type = Column(Text, nullable=False)  # 'add' | 'remove'

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    item = relationship("Item", back_populates="events")

    __table_args__ = (
        CheckConstraint("units > 0", name="ck_inventory_history_units_positive"),
        CheckConstraint("type IN ('add', 'remove')", name="ck_inventory_history_type"),
        Index("ix_inventory_history_item_created", "item_id", "created_at", "id"),
    )
