"""
labourconnect/db/mongo.py

Purpose: MongoDB handles for the backend gateway

- One Motor client per process, opened at startup and closed at shutdown
- Accessors for users, workers, areas, professions
- GridFS bucket for profile pictures
"""

import asyncio
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorGridFSBucket
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from labourconnect.core.config import settings
from labourconnect.core.logging import get_logger

logger = get_logger(__name__)

USERS = "users"
WORKERS = "workers"
AREAS = "areas"
PROFESSIONS = "professions"
PROFILE_PICTURES_BUCKET = "profile_pictures"

CONNECT_ATTEMPTS = 3
FIRST_BACKOFF_SECONDS = 2

_client: Optional[AsyncIOMotorClient] = None
_database: Optional[AsyncIOMotorDatabase] = None


def _open_client() -> AsyncIOMotorClient:
    return AsyncIOMotorClient(
        settings.MONGODB_URL,
        maxPoolSize=50,
        minPoolSize=5,
        serverSelectionTimeoutMS=5000,
        connectTimeoutMS=10000,
        retryWrites=True,
        retryReads=True,
    )


async def connect_to_mongo():
    """
    Opens the client and pings the server, backing off 2s, 4s between
    attempts. Raises ConnectionError once every attempt has failed.
    """
    global _client, _database

    if _client is not None:
        return

    backoff = FIRST_BACKOFF_SECONDS
    for attempt in range(1, CONNECT_ATTEMPTS + 1):
        client = _open_client()
        try:
            await client.admin.command("ping")
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            client.close()
            logger.error(f"MongoDB ping failed ({attempt}/{CONNECT_ATTEMPTS}): {e}")
            if attempt == CONNECT_ATTEMPTS:
                raise ConnectionError("Could not establish MongoDB connection") from e
            await asyncio.sleep(backoff)
            backoff *= 2
            continue

        _client, _database = client, client[settings.MONGODB_DB_NAME]
        logger.info(f"✅ Connected to MongoDB database '{settings.MONGODB_DB_NAME}'")
        return


async def close_mongo_connection():
    global _client, _database

    if _client is None:
        return
    _client.close()
    _client, _database = None, None
    logger.info("MongoDB connection closed")


def is_connected() -> bool:
    """True once a database handle is available."""
    return _database is not None


async def check_database_health() -> bool:
    if _database is None:
        return False
    try:
        await _database.command("ping")
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
    return True


def get_database() -> AsyncIOMotorDatabase:
    """
    Raises:
        RuntimeError: connect_to_mongo() has not run (or DEMO_MODE is on)
    """
    if _database is None:
        raise RuntimeError("Database not initialized. Call connect_to_mongo() during startup.")
    return _database


def get_users_collection():
    """
    Returns the users collection.

    Fields: fullName, mobile, userType, isActive, isVerified, rating,
    jobsCompleted, profileViews, workersCount, profession, experience,
    dailyRate, age, skills, address, area, pincode, fatherName,
    profilePictureUrl, createdAt, updatedAt
    """
    return get_database()[USERS]


def get_workers_collection():
    """
    Returns the workers collection (laborers added by professionals).

    Fields: worker fields of users + addedBy, addedAt
    """
    return get_database()[WORKERS]


def get_areas_collection():
    """Returns the areas aggregate collection (_id = area slug)."""
    return get_database()[AREAS]


def get_professions_collection():
    """Returns the professions aggregate collection (_id = profession code)."""
    return get_database()[PROFESSIONS]


def get_profile_pictures_bucket() -> AsyncIOMotorGridFSBucket:
    """Returns the GridFS bucket holding profile pictures."""
    return AsyncIOMotorGridFSBucket(get_database(), bucket_name=PROFILE_PICTURES_BUCKET)
