"""Coupon request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel


class CouponCreate(BaseModel):
    name: str = Field(max_length=255)
    percent: StrictInt


class CouponUpdate(BaseModel):
    id: StrictInt
    name: str = Field(max_length=255)
    percent: StrictInt


class CouponResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    name: str
    percent: StrictInt
    active: bool
    created: datetime
    last_updated: datetime
