# loyalty/schemas/analytics/analytics_schemas.py

from datetime import date, datetime
from typing import List

from pydantic import BaseModel


class StatsOut(BaseModel):
    total_customers: int
    total_rewards: int
    total_points: int


class TopItem(BaseModel):
    name: str
    count: int


class RecentTransaction(BaseModel):
    id: int
    customer_name: str
    item_name: str
    points_added: int
    reward_earned: bool
    created_at: datetime


class DailyCount(BaseModel):
    date: date
    count: int


class AnalyticsOut(BaseModel):
    total_customers: int
    total_rewards: int
    total_transactions: int
    average_points_per_customer: float
    top_items: List[TopItem]
    recent_transactions: List[RecentTransaction]
    customer_growth: List[DailyCount]
    reward_trends: List[DailyCount]
