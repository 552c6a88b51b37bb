"""
Seed shows used by development startup, the reset endpoint and tests.

Run with: python -m showbook.scripts.seed_data
(seeds the database configured by DATABASE_URL, dropping existing data)
"""
import asyncio
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from showbook.models import utcnow
from showbook.models.show import ShowType
from showbook.schemas.show import ShowResponse
from showbook.storage.base import Storage


logger = logging.getLogger(__name__)


SAMPLE_SHOWS = [
    {"id": "s1", "name": "Sample Show 1", "hours_ahead": 1, "total_seats": 30, "type": ShowType.SHOW, "price": 199},
    {"id": "s2", "name": "City Trip", "hours_ahead": 2, "total_seats": 20, "type": ShowType.TRIP, "price": 299},
    {"id": "s3", "name": "Doctor Appointment", "hours_ahead": 3, "total_seats": None, "type": ShowType.APPOINTMENT, "price": None},
]


def seed_shows(now: Optional[datetime] = None) -> List[ShowResponse]:
    now = now or utcnow()
    return [
        ShowResponse(
            id=sample["id"],
            name=sample["name"],
            start_time=now + timedelta(hours=sample["hours_ahead"]),
            total_seats=sample["total_seats"],
            type=sample["type"],
            price=sample["price"],
            # one microsecond apart so created_at alone gives the seed order
            created_at=now + timedelta(microseconds=position),
        )
        for position, sample in enumerate(SAMPLE_SHOWS)
    ]


async def seed_if_empty(storage: Storage) -> bool:
    if await storage.list_shows():
        return False
    await storage.reset(seed_shows())
    logger.info("seeded %d shows", len(SAMPLE_SHOWS))
    return True


async def main():
    from showbook.db.session import async_session, engine, init_db
    from showbook.storage.database import DatabaseStorage

    await init_db()
    storage = DatabaseStorage(async_session, engine=engine)
    try:
        await storage.reset(seed_shows())
        print("Test data seeded successfully!")
    finally:
        await storage.close()


if __name__ == "__main__":
    asyncio.run(main())
