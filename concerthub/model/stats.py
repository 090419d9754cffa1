from __future__ import annotations
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession


async def get_stats(db: AsyncSession) -> Dict[str, Any]:
    concerts = await db.execute(text("SELECT COUNT(*) FROM concerts"))
    total_concerts = concerts.scalar_one()

    result = await db.execute(text("""
        SELECT COUNT(*) AS count, SUM(total_price) AS revenue
        FROM orders
    """))
    row = result.mappings().first()

    return {
        "totalConcerts": total_concerts,
        "totalOrders": row["count"] if row else 0,
        # SUM over zero rows is NULL
        "totalRevenue": (row["revenue"] or 0) if row else 0,
    }
