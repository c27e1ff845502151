"""
Seed the standard benefit categories into the Benefit Designer database.
Run: python -m scripts.seed_categories  (from backend/, SERVICE_NAME=benefit_designer)
"""

import asyncio

from apogee.db.session import async_session
from apogee.services.categories import seed_standard_categories


async def seed():
    """Insert missing standard categories."""
    async with async_session() as session:
        results = await seed_standard_categories(session)
        await session.commit()
    for row in results:
        print(f"  {row['name']}: {row['status']}")
    created = sum(1 for row in results if row["status"] == "created")
    print(f"Seeded {created} of {len(results)} categories.")


if __name__ == "__main__":
    asyncio.run(seed())
