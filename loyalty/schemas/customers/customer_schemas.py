# loyalty/schemas/customers/customer_schemas.py

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, Dict, List
from datetime import datetime


class CustomerRegister(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    pin: str = Field(pattern=r"^\d{4}$")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be blank")
        return value


class CustomerRegistered(BaseModel):
    customer_id: str
    name: str
    qr_code: str


class CustomerOut(BaseModel):
    id: str
    name: str
    reward_count: int
    created_at: datetime

    model_config = {"from_attributes": True}


class CustomerPointsOut(BaseModel):
    customer_name: str
    total_rewards: int
    item_points: Dict[int, int]


class CustomerListData(BaseModel):
    total: int
    items: List[CustomerOut]


class CustomerBulkDelete(BaseModel):
    customer_ids: Optional[List[str]] = None
    delete_all: bool = False

    @model_validator(mode="after")
    def require_target(self):
        if not self.delete_all and not self.customer_ids:
            raise ValueError("Provide customer_ids or set delete_all")
        return self


class CustomerBulkDeleteResult(BaseModel):
    deleted: int
