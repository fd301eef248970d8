# loyalty/schemas/catalog/item_schemas.py

from decimal import Decimal
from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator


class ItemBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field("", max_length=500)
    points_value: int = Field(ge=1)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be blank")
        return value


class ItemCreate(ItemBase):
    pass


class ItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=500)
    points_value: Optional[int] = Field(None, ge=1)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Name must not be blank")
        return value


class ItemOut(ItemBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ItemListData(BaseModel):
    total: int
    items: List[ItemOut]
