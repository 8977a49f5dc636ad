"""
MongoDB connection handling.
A single motor client is opened at application startup and shared by every request.
"""

import logging
from typing import Optional
from bson import ObjectId
from fastapi import HTTPException, status
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from ..config import settings

logger = logging.getLogger(__name__)

USERS = "users"
CATEGORIES = "categories"
QUESTIONS = "questions"
TESTS = "tests"
TEST_RESULTS = "test_results"

class Database:
    """
    Lazily bound handle; collections are looked up with db["name"]
    """
    client: Optional[AsyncIOMotorClient] = None
    database = None

    def bind(self, client, name: str):
        self.client = client
        self.database = client[name]

    def __getitem__(self, collection: str):
        if self.database is None:
            raise RuntimeError("Database connection has not been initialised")
        return self.database[collection]

db = Database()

async def connect_to_db():
    """
    Open the MongoDB connection and make sure indexes exist
    """
    db.bind(AsyncIOMotorClient(settings.MONGODB_URI), settings.MONGODB_DB)
    await ensure_indexes()
    logger.info("Connected to MongoDB database %s", settings.MONGODB_DB)

async def close_db_connection():
    if db.client is not None:
        db.client.close()
        logger.info("MongoDB connection closed")
    db.client = None
    db.database = None

async def ensure_indexes():
    await db[USERS].create_index("email", unique=True)
    await db[TESTS].create_index("category")
    await db[TEST_RESULTS].create_index(
        [("user", ASCENDING), ("test_id", ASCENDING), ("completed_at", DESCENDING)]
    )

def parse_object_id(value: str, label: str) -> ObjectId:
    """
    Convert a path parameter to an ObjectId, rejecting malformed values
    """
    if not ObjectId.is_valid(value):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label} ID format"
        )
    return ObjectId(value)
