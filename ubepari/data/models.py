import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Float, Integer, DateTime
from sqlalchemy.orm import validates

from .database import Base


def new_key() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value):
    return value.isoformat() if value is not None else None


class OrderStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    delivered = "delivered"
    cancelled = "cancelled"


class Product(Base):
    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=new_key)
    name = Column(String, nullable=False)
    caption = Column(String)
    brand = Column(String, nullable=False)
    price = Column(Float, nullable=False, default=0)
    cost_price = Column(Float, nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)
    image_url = Column(String)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    @validates("brand")
    def _lowercase_brand(self, key, value):
        return value.lower() if value else value

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "caption": self.caption,
            "brand": self.brand,
            "price": self.price,
            "costPrice": self.cost_price,
            "stock": self.stock,
            "imageUrl": self.image_url,
            "createdAt": _iso(self.created_at),
        }


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(32), primary_key=True, default=new_key)
    order_id = Column(String, unique=True, index=True, nullable=False)

    # Point-in-time copy of the product; product_id only targets the stock decrement
    product_id = Column(String)
    product_name = Column(String)
    product_brand = Column(String)
    product_price = Column(Float)
    product_qty = Column(Integer, nullable=False, default=1)

    customer_name = Column(String)
    customer_phone = Column(String)
    customer_region = Column(String)
    customer_address = Column(String)
    customer_date = Column(String)

    notes = Column(String)
    payment_method = Column(String, nullable=False, default="After Delivery")
    status = Column(String, nullable=False, default=OrderStatus.pending.value)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "orderId": self.order_id,
            "product": {
                "id": self.product_id,
                "name": self.product_name,
                "brand": self.product_brand,
                "price": self.product_price,
                "qty": self.product_qty,
            },
            "customer": {
                "name": self.customer_name,
                "phone": self.customer_phone,
                "region": self.customer_region,
                "address": self.customer_address,
                "date": self.customer_date,
            },
            "notes": self.notes,
            "paymentMethod": self.payment_method,
            "status": self.status,
            "createdAt": _iso(self.created_at),
        }


class GalleryPhoto(Base):
    __tablename__ = "gallery"

    id = Column(String(32), primary_key=True, default=new_key)
    url = Column(String)
    caption = Column(String)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "url": self.url,
            "caption": self.caption,
            "createdAt": _iso(self.created_at),
        }
