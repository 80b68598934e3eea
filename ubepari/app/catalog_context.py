"""
Catalog context for the assistant.

Projects the live product list into two text listings, in stock and out of
stock, which are embedded in the system prompt. This is a pure function of
the products passed in and is rebuilt on every chat call.
"""

from typing import Iterable, NamedTuple

from .config import Config

NO_IN_STOCK = "No products currently in stock."
NO_OUT_OF_STOCK = "None."


class CatalogContext(NamedTuple):
    in_stock: str
    out_of_stock: str


def format_price(value) -> str:
    """Format a price with thousands separators and the store currency."""
    amount = float(value or 0)
    if amount.is_integer():
        return f"{Config.CURRENCY} {amount:,.0f}"
    return f"{Config.CURRENCY} {amount:,.2f}"


def _in_stock_line(product) -> str:
    parts = [
        product.name,
        (product.brand or "").upper(),
        format_price(product.price),
        f"Stock: {product.stock}",
    ]
    if product.caption:
        parts.append(product.caption)
    return "- " + " | ".join(parts)


def _out_of_stock_line(product) -> str:
    parts = [product.name, (product.brand or "").upper()]
    if product.price:
        parts.append(format_price(product.price))
    return "- " + " | ".join(parts)


def build_catalog_context(products: Iterable) -> CatalogContext:
    """
    Partition products on ``stock > 0`` and render each group.

    Args:
        products: Product rows (anything with name/brand/price/stock/caption)

    Returns:
        CatalogContext with the two listings; an empty group renders its
        sentinel string instead of an empty listing.
    """
    in_stock, out_of_stock = [], []
    for product in products:
        if (product.stock or 0) > 0:
            in_stock.append(_in_stock_line(product))
        else:
            out_of_stock.append(_out_of_stock_line(product))

    return CatalogContext(
        in_stock="\n".join(in_stock) if in_stock else NO_IN_STOCK,
        out_of_stock="\n".join(out_of_stock) if out_of_stock else NO_OUT_OF_STOCK,
    )
