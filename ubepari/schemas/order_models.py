"""Order related pydantic models.

- Product and customer are snapshots copied into the order at placement.
- Status is not accepted on creation; new orders always start as pending.
"""
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductSnapshot(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    brand: Optional[str] = None
    price: Optional[float] = None
    qty: Optional[Annotated[int, Field(ge=1)]] = 1


class CustomerSnapshot(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    region: Optional[str] = None
    address: Optional[str] = None
    date: Optional[str] = None


class OrderCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: str = Field(..., alias="orderId", min_length=1)
    product: ProductSnapshot = Field(default_factory=ProductSnapshot)
    customer: CustomerSnapshot = Field(default_factory=CustomerSnapshot)
    notes: Optional[str] = None
    payment_method: Optional[str] = Field(None, alias="paymentMethod")


class StatusUpdate(BaseModel):
    status: str
