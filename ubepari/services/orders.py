"""
Order lifecycle: placement, tracking, listing and status changes.

Placing an order is two independent store operations: the order insert,
then the stock decrement for the referenced product. They are not wrapped
in one transaction, so a failed decrement leaves the order recorded and the
stock untouched, and concurrent orders can oversell a product.

Status changes are permissive unless ``Config.ORDER_STATUS_STRICT`` is set:
the requested value is written verbatim, including moves out of
delivered/cancelled. Strict mode checks ``ORDER_TRANSITIONS``.
"""
from typing import Dict, FrozenSet, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..app.config import Config
from ..data.models import Order, OrderStatus
from ..schemas.order_models import CustomerSnapshot, ProductSnapshot
from ..utils.errors import DuplicateKeyError, InvalidTransitionError, NotFoundError
from ..utils.logger import get_logger
from ..utils.security import mask_pii
from .inventory import adjust_stock

logger = get_logger()

ORDER_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    OrderStatus.pending.value: frozenset({OrderStatus.confirmed.value, OrderStatus.cancelled.value}),
    OrderStatus.confirmed.value: frozenset({OrderStatus.delivered.value, OrderStatus.cancelled.value}),
    OrderStatus.delivered.value: frozenset(),
    OrderStatus.cancelled.value: frozenset(),
}


def can_transition(current: str, new: str) -> bool:
    """True if the state machine allows ``current -> new``."""
    return new in ORDER_TRANSITIONS.get(current, frozenset())


def place_order(db: Session, order_id: str, product: ProductSnapshot, customer: CustomerSnapshot,
                notes: Optional[str] = None, payment_method: Optional[str] = None) -> Order:
    """
    Record an order and consume stock for the product it references.

    Raises:
        DuplicateKeyError: if ``order_id`` is already used; stock is not touched
    """
    qty = product.qty or 1
    order = Order(
        order_id=order_id,
        product_id=product.id,
        product_name=product.name,
        product_brand=product.brand,
        product_price=product.price,
        product_qty=qty,
        customer_name=customer.name,
        customer_phone=customer.phone,
        customer_region=customer.region,
        customer_address=customer.address,
        customer_date=customer.date,
        notes=notes,
        payment_method=payment_method or Config.DEFAULT_PAYMENT_METHOD,
        status=OrderStatus.pending.value,
    )
    db.add(order)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"[ORDER] Rejected duplicate order id {order_id}")
        raise DuplicateKeyError(f"Order id '{order_id}' already exists") from e
    db.refresh(order)
    logger.info(f"[ORDER] Placed {order_id}: {qty} x '{product.name}' for "
                f"{customer.name} ({mask_pii(customer.phone or '')})")

    if product.id:
        try:
            adjust_stock(db, product.id, -qty)
        except NotFoundError:
            # The snapshot is kept even if the live product was deleted.
            logger.warning(f"[ORDER] {order_id} references missing product {product.id}; stock not adjusted")
        db.refresh(order)
    return order


def get_order_by_order_id(db: Session, order_id: str) -> Order:
    order = db.query(Order).filter(Order.order_id == order_id).first()
    if order is None:
        raise NotFoundError("Order not found")
    return order


def list_orders(db: Session) -> List[Order]:
    return db.query(Order).order_by(Order.created_at.desc()).all()


def set_status(db: Session, order_key: str, new_status: str, strict: Optional[bool] = None) -> Order:
    """
    Change an order's status.

    Args:
        db: Database session
        order_key: Internal key of the order (not the customer-facing order id)
        new_status: Requested status
        strict: Validate against ``ORDER_TRANSITIONS``; defaults to config

    Returns:
        The updated order
    """
    if strict is None:
        strict = Config.ORDER_STATUS_STRICT

    order = db.get(Order, order_key)
    if order is None:
        raise NotFoundError("Order not found")

    previous = order.status
    if strict and not can_transition(previous, new_status):
        raise InvalidTransitionError(previous, new_status)

    order.status = new_status
    db.commit()
    db.refresh(order)
    logger.info(f"[ORDER] {order.order_id} status {previous} -> {new_status}")
    return order
