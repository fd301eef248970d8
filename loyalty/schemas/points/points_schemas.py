# loyalty/schemas/points/points_schemas.py

from pydantic import BaseModel, Field, field_validator


class PurchaseRequest(BaseModel):
    customer_id: str = Field(min_length=1, max_length=32)
    item_id: int = Field(ge=1)

    @field_validator("customer_id")
    @classmethod
    def strip_customer_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Customer ID is required")
        return value


class PurchaseResult(BaseModel):
    customer_id: str
    item_id: int
    item_name: str
    points_added: int
    total_item_points: int
    reward_earned: bool
    message: str
