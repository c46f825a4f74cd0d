"""
MongoDB database connection and configuration following FastAPI best practices
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from app.core.config import config
from app.core.errors import ErrorResponse
from app.core.logger import logger

PRODUCTS = "products"
USERS = "users"
ORDERS = "orders"
NOTIFICATIONS = "notifications"


class Database:
    """Database connection manager"""

    client: Optional[AsyncIOMotorClient] = None
    database = None


db = Database()


async def connect_to_mongo():
    """Create database connection"""
    logger.info("Connecting to MongoDB...")

    try:
        db.client = AsyncIOMotorClient(config.mongodb_url)
        db.database = db.client[config.mongodb_database]

        await db.client.admin.command('ping')

        logger.info(
            f"Successfully connected to MongoDB database '{config.mongodb_database}'",
            metadata={
                "event": "mongodb_connected",
                "database": config.mongodb_database,
                "host": config.mongodb_host,
                "port": config.mongodb_port
            }
        )
    except PyMongoError as e:
        logger.error(
            f"Could not connect to MongoDB: {e}",
            metadata={"event": "mongodb_connection_error", "error": str(e)}
        )
        raise ErrorResponse(f"Could not connect to MongoDB: {e}", status_code=503)


async def create_indexes():
    """Create the indexes the handlers rely on (idempotent)"""
    database = await get_database()
    try:
        await database[USERS].create_index(
            [("email", ASCENDING)], unique=True, name="idx_email_unique"
        )
        await database[USERS].create_index(
            [("passwordResetToken", ASCENDING)], sparse=True, name="idx_password_reset_token"
        )
        await database[USERS].create_index(
            [("emailResetToken", ASCENDING)], sparse=True, name="idx_email_reset_token"
        )
        await database[PRODUCTS].create_index([("name", ASCENDING)], name="idx_name")
        await database[PRODUCTS].create_index([("rating", DESCENDING)], name="idx_rating")
        await database[ORDERS].create_index([("user", ASCENDING)], name="idx_order_user")
        await database[NOTIFICATIONS].create_index([("user", ASCENDING)], name="idx_notification_user")
        logger.info("MongoDB indexes ensured", metadata={"event": "mongodb_indexes_created"})
    except PyMongoError as e:
        logger.error("Failed to create MongoDB indexes", error=e, metadata={"event": "mongodb_index_error"})


async def close_mongo_connection():
    """Close database connection"""
    logger.info("Closing connection to MongoDB...")
    if db.client is not None:
        db.client.close()
        db.client = None
        db.database = None


async def get_database():
    """Get database instance"""
    if db.database is None:
        await connect_to_mongo()
    return db.database


async def get_product_collection():
    database = await get_database()
    return database[PRODUCTS]


async def get_user_collection():
    database = await get_database()
    return database[USERS]


async def get_order_collection():
    database = await get_database()
    return database[ORDERS]


async def get_notification_collection():
    database = await get_database()
    return database[NOTIFICATIONS]
