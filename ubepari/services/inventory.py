"""
Stock adjustment: the only place a product's stock or cost price changes.

Stock is applied as an in-place increment (``stock = stock + delta``) so two
adjustments never overwrite each other. No lower bound is applied: an order
may drive stock negative, which is logged as a warning.
"""
from typing import Optional

from sqlalchemy.orm import Session

from ..data.models import Product
from ..utils.errors import NotFoundError
from ..utils.logger import get_logger
from .catalog import get_product

logger = get_logger()


def adjust_stock(db: Session, product_id: str, delta_qty: int,
                 new_cost_price: Optional[float] = None) -> Product:
    """
    Apply a signed quantity delta to a product's stock.

    Args:
        db: Database session
        product_id: Key of the product to adjust
        delta_qty: Positive for restock, negative for consumption
        new_cost_price: Replaces the cost price when truthy

    Returns:
        The updated product

    Raises:
        NotFoundError: if no product has this key
    """
    delta_qty = int(delta_qty)
    values = {Product.stock: Product.stock + delta_qty}
    if new_cost_price:
        values[Product.cost_price] = new_cost_price

    try:
        matched = (
            db.query(Product)
            .filter(Product.id == product_id)
            .update(values, synchronize_session=False)
        )
        if not matched:
            db.rollback()
            raise NotFoundError("Product not found")
        db.commit()
    except NotFoundError:
        raise
    except Exception:
        db.rollback()
        raise

    product = get_product(db, product_id)
    db.refresh(product)
    logger.info(f"[STOCK] {product_id} delta={delta_qty:+d} -> stock={product.stock}"
                + (f" costPrice={product.cost_price}" if new_cost_price else ""))
    if product.stock < 0:
        logger.warning(f"[STOCK] {product_id} '{product.name}' is oversold (stock={product.stock})")
    return product


def restock(db: Session, product_id: str, add_qty: Optional[int] = None,
            cost_price: Optional[float] = None) -> Product:
    return adjust_stock(db, product_id, add_qty or 0, cost_price)
