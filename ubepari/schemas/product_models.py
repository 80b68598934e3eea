"""Pydantic models for catalog and gallery requests.

Field aliases keep the camelCase wire format used by the storefront client.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    caption: Optional[str] = None
    brand: str = Field(..., min_length=1)
    price: float = 0
    cost_price: float = Field(0, alias="costPrice")
    stock: int = 0
    image_url: Optional[str] = Field(None, alias="imageUrl")


class RestockRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    add_qty: Optional[int] = Field(None, alias="addQty")
    cost_price: Optional[float] = Field(None, alias="costPrice")


class GalleryCreate(BaseModel):
    url: Optional[str] = None
    caption: Optional[str] = None
