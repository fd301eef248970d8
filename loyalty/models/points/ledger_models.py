from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from loyalty.core.db import Base
from loyalty.models.base.mixins import TimestampMixin


class CustomerItemPoints(Base, TimestampMixin):
    """Points a customer has collected toward the next reward on one item."""

    __tablename__ = "customer_item_points"

    customer_id = Column(String(32), ForeignKey("customers.id", ondelete="CASCADE"), primary_key=True)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), primary_key=True, index=True)
    points = Column(Integer, nullable=False, default=0, server_default="0")

    customer = relationship("Customer", back_populates="item_points", lazy="raise")
    item = relationship("Item", back_populates="ledger_entries", lazy="raise")

    __table_args__ = (
        CheckConstraint("points >= 0", name="ck_customer_item_points_non_negative"),
    )

    def __repr__(self):
        return f"<CustomerItemPoints customer_id={self.customer_id} item_id={self.item_id} points={self.points}>"
