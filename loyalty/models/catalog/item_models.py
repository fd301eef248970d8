from sqlalchemy import Column, Integer, String, Boolean, Numeric, CheckConstraint, Index
from sqlalchemy.orm import relationship
from loyalty.core.db import Base
from loyalty.models.base.mixins import TimestampMixin


class Item(Base, TimestampMixin):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(500), nullable=False, default="", server_default="")
    points_value = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    ledger_entries = relationship(
        "CustomerItemPoints",
        back_populates="item",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )
    # ON DELETE RESTRICT: an item with transactions cannot be deleted
    transactions = relationship(
        "PointTransaction",
        back_populates="item",
        passive_deletes="all",
        lazy="raise",
    )

    __table_args__ = (
        CheckConstraint("points_value >= 1", name="ck_items_points_value_positive"),
        CheckConstraint("price >= 0", name="ck_items_price_non_negative"),
        Index("ix_items_active_name", "is_active", "name"),
    )

    def __repr__(self):
        return f"<Item id={self.id} name={self.name} points={self.points_value} active={self.is_active}>"
