from sqlalchemy import Column, Integer, String, CheckConstraint
from sqlalchemy.orm import relationship
from loyalty.core.db import Base
from loyalty.models.base.mixins import TimestampMixin


class Customer(Base, TimestampMixin):
    __tablename__ = "customers"

    # Opaque token; this is also what the QR code encodes
    id = Column(String(32), primary_key=True)

    name = Column(String(255), nullable=False, index=True)
    pin = Column(String(4), nullable=False)
    reward_count = Column(Integer, nullable=False, default=0, server_default="0")

    item_points = relationship(
        "CustomerItemPoints",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )
    transactions = relationship(
        "PointTransaction",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )

    __table_args__ = (
        CheckConstraint("reward_count >= 0", name="ck_customers_reward_count_non_negative"),
    )

    def __repr__(self):
        return f"<Customer id={self.id} name={self.name} rewards={self.reward_count}>"
