#!/usr/bin/env python3

import asyncio
import os
import sys
from pathlib import Path

# Add repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from dotenv import load_dotenv

# Load environment variables before the settings object is created
load_dotenv()

from motor.motor_asyncio import AsyncIOMotorClient

from app.core.config import config
from app.core.security import hash_password
from app.db.mongodb import NOTIFICATIONS, ORDERS, PRODUCTS, USERS
from app.models.product import Product
from app.models.user import User

SAMPLE_PRODUCTS = [
    {
        "name": "Honest Hydrogel Cream",
        "image": "/images/6.png",
        "description": "The cooling, Hyaluronic Acid infused face cream your thirsty skin craves. "
                       "Made with Squalane, Jojoba Esters, and 2 sizes of Hyaluronic Acid. Works for all skin types.",
        "price": 89,
        "count_in_stock": 60,
        "rating": 4,
        "num_reviews": 4,
    },
    {
        "name": "Honey Starter Set",
        "image": "/images/5.png",
        "description": "Honey is a natural humectant known to retain and preserve skin's moisture. "
                       "This kit includes a Honey cleanser, Manuka Honey Day Cream, Manuka Honey Night Cream "
                       "and Royal Jelly Eye Cream.",
        "price": 100,
        "count_in_stock": 10,
        "rating": 2,
        "num_reviews": 2,
    },
    {
        "name": "Ultra Dark Self Tan Mousse  By mine",
        "image": "/images/4.png",
        "description": "Achieve ultra dark bronzed, glowing skin in as little as an hour with MineTan "
                       "Ultra Dark Self Tan Mousse. Lightweight, fast drying and with a tropical coconut scent.",
        "price": 35,
        "count_in_stock": 0,
        "rating": 3.5,
        "num_reviews": 3,
    },
    {
        "name": "Ordinary moisturizing factors +HA",
        "image": "/images/3.png",
        "description": "Natural Moisturizing Factors + HA is a moisturizer that works with your skin to "
                       "support its natural hydration barrier, without feeling greasy.",
        "price": 20,
        "count_in_stock": 25,
        "rating": 5,
        "num_reviews": 9,
    },
    {
        "name": "Rituals smooth cleansing foam",
        "image": "/images/2.png",
        "description": "A silky smooth cream that turns into a nourishing cleansing foam when you massage "
                       "it onto wet skin. Added moringa and lotus will soothe and hydrate your complexion.",
        "price": 35,
        "count_in_stock": 50,
        "rating": 2,
        "num_reviews": 2,
    },
    {
        "name": "Clay Cleanser By Nash | Jones",
        "image": "/images/1.png",
        "description": "A very deep cleanser for acne prone and oily skin. Mineral-rich, it deep cleans "
                       "pores of dirt, make-up and impurities.",
        "price": 25,
        "count_in_stock": 100,
        "rating": 0,
        "num_reviews": 0,
    },
]


class StorefrontDatabaseSeeder:
    def __init__(self):
        self.admin_email = os.getenv("SEED_ADMIN_EMAIL", "admin@storefront.com")
        self.admin_password = os.getenv("SEED_ADMIN_PASSWORD", "admin123")
        self.client = None
        self.db = None

    async def connect(self):
        """Establish MongoDB connection"""
        print(f"Connecting to MongoDB database '{config.mongodb_database}'...")
        self.client = AsyncIOMotorClient(config.mongodb_url)
        self.db = self.client[config.mongodb_database]

        await self.db.command('ping')
        print("Successfully connected to MongoDB!")

    async def seed_data(self):
        print("Seeding storefront data...")
        await self.clear_data()
        admin_id = await self.seed_users()
        await self.seed_products(admin_id)
        print("Storefront data seeding completed successfully!")

    async def clear_data(self):
        for name in (PRODUCTS, USERS, ORDERS, NOTIFICATIONS):
            result = await self.db[name].delete_many({})
            print(f"Deleted {result.deleted_count} existing documents from '{name}'")

    async def seed_users(self) -> str:
        """Create the admin account and one customer; returns the admin id"""
        admin = User(
            name="Admin User",
            email=self.admin_email,
            password=hash_password(self.admin_password),
            is_admin=True,
        )
        customer = User(
            name="Jane Doe",
            email="jane@storefront.com",
            password=hash_password("customer123"),
        )
        result = await self.db[USERS].insert_many([admin.to_document(), customer.to_document()])
        print(f"Created {len(result.inserted_ids)} users (admin: {self.admin_email})")
        return str(result.inserted_ids[0])

    async def seed_products(self, admin_id: str):
        documents = [Product(user=admin_id, **data).to_document() for data in SAMPLE_PRODUCTS]
        result = await self.db[PRODUCTS].insert_many(documents)
        print(f"Created {len(result.inserted_ids)} sample products")

    async def close(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            print("MongoDB connection closed")


async def main():
    seeder = StorefrontDatabaseSeeder()

    try:
        print("=" * 50)
        print("Storefront Database Seeder")
        print("=" * 50)

        await seeder.connect()
        await seeder.seed_data()

        print("=" * 50)
        print("Storefront database setup completed!")
        print("=" * 50)
    except Exception as error:
        print(f"Storefront database setup failed: {error}")
        sys.exit(1)
    finally:
        await seeder.close()


if __name__ == "__main__":
    asyncio.run(main())
