#!/usr/bin/env python3
"""
Standalone script to load the sample transactions into the configured database
Usage: python seed_db.py
"""

import asyncio
import platform
import sys
from app.core.config import settings
from app.core.database import AsyncSessionLocal, create_db_and_tables, engine
from app.crud.transaction import seed_sample_transactions

async def seed():
    print("🌱 Starting database seeding...")

    await create_db_and_tables()
    async with AsyncSessionLocal() as session:
        try:
            created = await seed_sample_transactions(settings.DEFAULT_OWNER_ID, session)
            if created:
                print(f"✅ Created {len(created)} sample transactions")
            else:
                print(f"ℹ️  Owner {settings.DEFAULT_OWNER_ID} already has transactions, nothing to do")
            print("🎉 Seeding completed successfully!")
        finally:
            await session.close()
            await engine.dispose()

def main():
    if platform.system() == 'Windows':
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())

    try:
        asyncio.run(seed())
    except Exception as e:
        print(f"❌ Error during seeding: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
