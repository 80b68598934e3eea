"""Catalog operations: list, create, fetch and hard-delete products."""
from typing import List

from sqlalchemy.orm import Session

from ..data.models import Product
from ..schemas.product_models import ProductCreate
from ..utils.errors import NotFoundError
from ..utils.logger import get_logger

logger = get_logger()


def list_products(db: Session) -> List[Product]:
    return db.query(Product).order_by(Product.created_at.desc()).all()


def get_product(db: Session, product_id: str) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product


def create_product(db: Session, data: ProductCreate) -> Product:
    product = Product(**data.model_dump())
    db.add(product)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(product)
    logger.info(f"[CATALOG] Created product {product.id} '{product.name}' ({product.brand}) stock={product.stock}")
    return product


def delete_product(db: Session, product_id: str) -> None:
    # Deleting an unknown key is a no-op, same as an empty delete-by-key.
    deleted = db.query(Product).filter(Product.id == product_id).delete()
    db.commit()
    logger.info(f"[CATALOG] Delete product {product_id}: {deleted} row(s)")
