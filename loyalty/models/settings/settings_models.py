from sqlalchemy import Column, Integer, CheckConstraint
from loyalty.core.db import Base
from loyalty.models.base.mixins import TimestampMixin


class Settings(Base, TimestampMixin):
    """Single-row table holding program-wide settings."""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    points_for_reward = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("points_for_reward >= 1", name="ck_settings_points_for_reward_positive"),
    )

    def __repr__(self):
        return f"<Settings id={self.id} points_for_reward={self.points_for_reward}>"
