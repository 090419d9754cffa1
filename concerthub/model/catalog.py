# model/catalog.py
"""
Concert catalog: plain CRUD over the concerts table.

Reads go through raw SQL and come back as plain dicts ready for JSON;
inserts go through the ORM so the id is assigned on flush. Field values are
stored as given; the NOT NULL constraints are the only validation.
"""

from __future__ import annotations
from typing import Any, Dict, List

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import ConcertNotFound, StorageFailure
from .db import Concert, CONCERT_FIELDS


SQLITE_MIN_INT = -2 ** 63
SQLITE_MAX_INT = 2 ** 63 - 1


DEFAULT_CONCERTS = [
    {
        "title": "The Rolling Stones",
        "genre": "Rock",
        "date": "2026-03-15",
        "time": "20:00",
        "venue": "Olympic Stadium, Moscow",
        "price": 5000,
        "image": "https://images.unsplash.com/"
                 "photo-1501281668745-f7f57925c3b4?w=500",
        "description": "The legendary British rock band on their new world "
                       "tour!",
    },
    {
        "title": "Billie Eilish",
        "genre": "Pop",
        "date": "2026-04-20",
        "time": "19:00",
        "venue": "Luzhniki Arena, Moscow",
        "price": 4500,
        "image": "https://images.unsplash.com/"
                 "photo-1514320291840-2e0a9bf2a9ae?w=500",
        "description": "A dazzling show from the pop star, built around her "
                       "latest album.",
    },
]


def _pick(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: fields.get(k) for k in CONCERT_FIELDS}


def parse_concert_id(concert_id: Any) -> int:
    # ids come straight from the URL; anything that cannot be a row id
    # simply matches no row
    try:
        value = int(concert_id)
    except (TypeError, ValueError):
        raise ConcertNotFound() from None
    if not SQLITE_MIN_INT <= value <= SQLITE_MAX_INT:
        raise ConcertNotFound()
    return value


async def list_concerts(db: AsyncSession) -> List[Dict[str, Any]]:
    result = await db.execute(
        text("SELECT * FROM concerts ORDER BY date ASC, id ASC")
    )
    return [dict(r) for r in result.mappings().all()]


async def get_concert(db: AsyncSession, concert_id: Any) -> Dict[str, Any]:
    result = await db.execute(
        text("SELECT * FROM concerts WHERE id = :id"),
        {"id": parse_concert_id(concert_id)},
    )
    row = result.mappings().first()
    if not row:
        raise ConcertNotFound()
    return dict(row)


async def create_concert(
    db: AsyncSession, fields: Dict[str, Any]
) -> Dict[str, Any]:
    try:
        async with db.begin():
            concert = Concert(**_pick(fields))
            db.add(concert)
            await db.flush()
            concert_id = concert.id
    except OverflowError as e:
        # sqlite3 refuses integers beyond 64 bits before SQLAlchemy sees it
        print("Database error:", e)
        raise StorageFailure() from e
    return await get_concert(db, concert_id)


async def update_concert(
    db: AsyncSession, concert_id: Any, fields: Dict[str, Any]
) -> Dict[str, Any]:
    concert_id = parse_concert_id(concert_id)
    # full overwrite: fields missing from the payload are written as NULL
    try:
        async with db.begin():
            result = await db.execute(
                text("""
                    UPDATE concerts
                    SET title = :title, genre = :genre, date = :date,
                        time = :time, venue = :venue, price = :price,
                        image = :image, description = :description
                    WHERE id = :id
                """),
                {**_pick(fields), "id": concert_id},
            )
    except OverflowError as e:
        print("Database error:", e)
        raise StorageFailure() from e
    if result.rowcount == 0:
        raise ConcertNotFound()
    return {"message": "Concert updated", "id": concert_id}


async def delete_concert(db: AsyncSession, concert_id: Any) -> Dict[str, Any]:
    concert_id = parse_concert_id(concert_id)
    # orders keep their concert_id and concert_title snapshot
    async with db.begin():
        result = await db.execute(
            text("DELETE FROM concerts WHERE id = :id"),
            {"id": concert_id},
        )
    if result.rowcount == 0:
        raise ConcertNotFound()
    return {"message": "Concert deleted"}


async def seed_concerts(db: AsyncSession) -> bool:
    """Insert the default concerts if the table is empty."""
    async with db.begin():
        result = await db.execute(text("SELECT COUNT(*) FROM concerts"))
        if result.scalar_one() > 0:
            return False
        db.add_all([Concert(**c) for c in DEFAULT_CONCERTS])
    print('✅ Default concerts added')
    return True
