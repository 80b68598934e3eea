"""
UBEPARI PC BACKEND — System Documentation
=========================================

This module-style README documents the architecture, data flows and
operational practices of the Ubepari PC store backend. Run
`python README.py` to print it.

Table of Contents
-----------------
1. System Overview
2. Backend Components
3. Data & Persistence
4. Orders & Stock
5. Assistant Pipeline
6. Configuration & Environment
7. Testing Strategy
8. Known Gaps

"""

from __future__ import annotations

import textwrap


def section(title: str, body: str) -> str:
    return f"\n{title}\n{'-' * len(title)}\n{body.strip()}\n"


SYSTEM_OVERVIEW = section(
    "1. System Overview",
    """
    A small store-operations backend for a computer shop in Dar es Salaam:
    a product catalog with stock levels, public order placement and tracking,
    an admin order/stock console, a photo gallery, and a chat assistant whose
    answers are grounded in the live catalog (English or Swahili).
    """,
)


BACKEND_COMPONENTS = section(
    "2. Backend Components",
    """
    ubepari/app/
      - main.py: FastAPI app, routes, CORS, error body shape.
      - auth.py: Admin login and bearer JWT checks.
      - controller.py: Chat orchestration; always returns a reply.
      - catalog_context.py: In-stock / out-of-stock listings for the prompt.
      - prompt_builder.py: Store policy prompt + last 6 conversation turns.
      - generate.py: Chat-completions client (Groq, OpenAI-compatible).
      - postprocess.py: Keyword-triggered product image suggestions.
      - keepalive.py: Optional background self-ping.
      - config.py: Env-driven configuration with fallback defaults.

    ubepari/services/
      - catalog.py, inventory.py, orders.py, gallery.py: store operations.

    ubepari/data/
      - database.py/models.py: SQLAlchemy engine, sessions and models.
      - populate_db.py: Seed a sample catalog.
    """,
)


DATA_AND_PERSISTENCE = section(
    "3. Data & Persistence",
    """
    - DB: any SQLAlchemy URL via DATABASE_URL (SQLite by default).
    - Entities: Product, Order (with product/customer snapshot), GalleryPhoto.
    - Keys are opaque hex strings; orders also carry a unique, human-readable orderId.
    """,
)


ORDERS_AND_STOCK = section(
    "4. Orders & Stock",
    """
    - Placing an order inserts it, then decrements the referenced product's stock
      by qty (default 1). Duplicate orderIds are rejected before any stock change.
    - Restock adds addQty and optionally replaces costPrice.
    - Status: pending -> confirmed|cancelled, confirmed -> delivered|cancelled.
      Only enforced when ORDER_STATUS_STRICT=true; otherwise written as sent.
    """,
)


ASSISTANT_PIPELINE = section(
    "5. Assistant Pipeline",
    """
    - Catalog context is rebuilt on every /api/chat call.
    - Prompt: store policy + listings + strict language mirroring + terseness.
    - Generation: Groq chat completions; any failure -> fixed fallback reply, HTTP 200.
    - Images: photo/picha/nionyeshe... keywords attach up to 3 product images.
    """,
)


CONFIG_ENV = section(
    "6. Configuration & Environment",
    """
    - `.env` compatible; keys: DATABASE_URL, JWT_SECRET, ADMIN_USER, ADMIN_PASS,
      PORT, GROQ_API_KEY, GROQ_LLM_MODEL, ORDER_STATUS_STRICT, KEEPALIVE_URL, LOG_LEVEL.
    - Defaults are defined in `config.py`; override the secrets in production.
    """,
)


TESTING = section(
    "7. Testing Strategy",
    """
    - unittest test cases in `/tests`, run with `pytest`.
    - Each case gets a throwaway SQLite file; the completion service is mocked.
    """,
)


KNOWN_GAPS = section(
    "8. Known Gaps",
    """
    - Order insert and stock decrement are separate commits: no rollback if the
      decrement fails, and concurrent orders can oversell (stock may go negative).
    - Order quantity is not checked against available stock.
    """,
)


def as_text() -> str:
    return "\n".join(
        [
            SYSTEM_OVERVIEW,
            BACKEND_COMPONENTS,
            DATA_AND_PERSISTENCE,
            ORDERS_AND_STOCK,
            ASSISTANT_PIPELINE,
            CONFIG_ENV,
            TESTING,
            KNOWN_GAPS,
        ]
    )


def main() -> None:
    print(textwrap.dedent(as_text()))


if __name__ == "__main__":
    main()
