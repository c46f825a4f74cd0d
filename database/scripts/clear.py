#!/usr/bin/env python3

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from dotenv import load_dotenv

load_dotenv()

from motor.motor_asyncio import AsyncIOMotorClient

from app.core.config import config
from app.db.mongodb import NOTIFICATIONS, ORDERS, PRODUCTS, USERS

COLLECTIONS = (PRODUCTS, USERS, ORDERS, NOTIFICATIONS)


class StorefrontDatabaseCleaner:
    def __init__(self):
        self.client = None
        self.db = None

    async def connect(self):
        print(f"Connecting to MongoDB database '{config.mongodb_database}'...")
        self.client = AsyncIOMotorClient(config.mongodb_url)
        self.db = self.client[config.mongodb_database]
        await self.db.command('ping')
        print("Successfully connected to MongoDB!")

    async def clear_all_data(self):
        """Delete every document but keep collections and indexes"""
        for name in COLLECTIONS:
            result = await self.db[name].delete_many({})
            print(f"Deleted {result.deleted_count} documents from '{name}' collection")

    async def drop_all_collections(self):
        for name in COLLECTIONS:
            await self.db[name].drop()
            print(f"Dropped collection: {name}")

    async def close(self):
        if self.client:
            self.client.close()
            print("MongoDB connection closed")


async def main():
    cleaner = StorefrontDatabaseCleaner()
    operation = sys.argv[1] if len(sys.argv) > 1 else "clear"

    try:
        print("=" * 50)
        print("Storefront Database Cleaner")
        print("=" * 50)

        await cleaner.connect()

        if operation == "drop":
            await cleaner.drop_all_collections()
        else:
            await cleaner.clear_all_data()

        print(f"Storefront database {operation} completed!")
    except Exception as error:
        print(f"Storefront database {operation} failed: {error}")
        sys.exit(1)
    finally:
        await cleaner.close()


if __name__ == "__main__":
    asyncio.run(main())
