"""
labourconnect/db/indexes.py

Purpose: Database index management

- Unique index restoring the one-active-user-per-mobile rule
- Lookup indexes for the worker directory and the quota counter
"""

from pymongo import ASCENDING, DESCENDING

from labourconnect.core.logging import get_logger
from labourconnect.db.mongo import AREAS, PROFESSIONS, USERS, WORKERS, get_database

logger = get_logger(__name__)

# collection -> [(keys, options)]
INDEXES = {
    USERS: [
        # At most one active user per mobile number
        ("mobile", {"unique": True, "partialFilterExpression": {"isActive": True}, "name": "mobile_active_unique"}),
        ("userType", {"name": "user_type_idx"}),
    ],
    WORKERS: [
        # Quota counter and professional dashboard
        ("addedBy", {"name": "added_by_idx"}),
        ([("area", ASCENDING), ("profession", ASCENDING), ("isActive", ASCENDING)], {"name": "directory_filter_idx"}),
        ([("profession", ASCENDING), ("isActive", ASCENDING)], {"name": "profession_active_idx"}),
    ],
    AREAS: [
        ([("workerCount", DESCENDING)], {"name": "area_count_idx"}),
    ],
    PROFESSIONS: [
        ([("workerCount", DESCENDING)], {"name": "profession_count_idx"}),
    ],
}


async def create_indexes():
    """
    Creates every index in INDEXES. Idempotent; existing indexes with the
    same definition are left alone.
    """
    db = get_database()
    created = 0

    try:
        for collection, specs in INDEXES.items():
            for keys, options in specs:
                await db[collection].create_index(keys, **options)
                logger.debug(f"Index {options['name']} ready on {collection}")
                created += 1
    except Exception as e:
        logger.error(f"Failed to create indexes: {e}", exc_info=True)
        raise

    logger.info(f"✅ {created} indexes ensured across {len(INDEXES)} collections")


if __name__ == "__main__":
    import asyncio
    from labourconnect.db.mongo import connect_to_mongo, close_mongo_connection

    async def main():
        await connect_to_mongo()
        await create_indexes()
        await close_mongo_connection()

    asyncio.run(main())
