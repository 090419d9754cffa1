# model/orders.py
"""
Order issuance.

An order is written exactly once: customer fields are checked first, then
the order number is minted and rendered into a QR code, and only then is the
row persisted. A failure at any step leaves nothing behind in storage.
"""

from __future__ import annotations
from typing import Any, Dict, List

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import InvalidInput, DependencyFailure, StorageFailure
from ..helpers import new_order_number
from ..qr import QRRenderer
from .db import Order, ORDER_FIELDS


CUSTOMER_FIELDS = ("customer_email", "customer_name", "customer_phone")


async def create_order(
    db: AsyncSession, qr: QRRenderer, fields: Dict[str, Any]
) -> Dict[str, Any]:
    # only customer contact data is required; quantity, prices and the
    # concert reference are stored as given
    if not all(fields.get(k) for k in CUSTOMER_FIELDS):
        raise InvalidInput()

    order_number = new_order_number()

    try:
        qr_code = await qr.to_data_url(order_number)
    except Exception as e:
        print("QR code generation error:", e)
        raise DependencyFailure() from e

    try:
        async with db.begin():
            order = Order(
                **{k: fields.get(k) for k in ORDER_FIELDS},
                order_number=order_number,
                qr_code=qr_code,
                status="pending",
            )
            db.add(order)
            await db.flush()
            order_id = order.id
    except (SQLAlchemyError, OverflowError) as e:
        # the rendered QR code is dropped with the failed insert; sqlite3
        # rejects integers beyond 64 bits with a bare OverflowError
        print("Database error:", e)
        raise StorageFailure() from e

    return {
        "id": order_id,
        "order_number": order_number,
        "qr_code": qr_code,
        "message": "Order created successfully",
    }


async def list_orders(db: AsyncSession) -> List[Dict[str, Any]]:
    result = await db.execute(
        text("SELECT * FROM orders ORDER BY order_date DESC, id DESC")
    )
    return [dict(r) for r in result.mappings().all()]
