from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from loyalty.core.db import Base
from loyalty.models.base.mixins import CreatedAtMixin


class PointTransaction(Base, CreatedAtMixin):
    """Append-only accrual log. Removed only by customer cascade."""

    __tablename__ = "point_transactions"

    id = Column(Integer, primary_key=True)
    customer_id = Column(String(32), ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="RESTRICT"), nullable=False, index=True)
    points_added = Column(Integer, nullable=False)
    reward_earned = Column(Boolean, nullable=False, default=False)

    customer = relationship("Customer", back_populates="transactions", lazy="raise")
    item = relationship("Item", back_populates="transactions", lazy="raise")

    __table_args__ = (
        CheckConstraint("points_added > 0", name="ck_point_transactions_points_positive"),
        Index("ix_point_transactions_created", "created_at"),
        Index("ix_point_transactions_reward_created", "reward_earned", "created_at"),
    )

    def __repr__(self):
        return (
            f"<PointTransaction id={self.id} customer_id={self.customer_id} "
            f"item_id={self.item_id} points_added={self.points_added} reward={self.reward_earned}>"
        )
