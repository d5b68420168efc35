"""
Database initialization script for LabourConnect

Run once to create indexes (and optionally seed the demo workers):
    python scripts/init_db.py
    python scripts/init_db.py --seed-demo
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

from labourconnect.db import mongo
from labourconnect.db.indexes import create_indexes
from labourconnect.services.aggregate_service import record_trade
from utils.constants import DEMO_WORKERS
from utils.time_utils import utc_now_iso

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)

SEED_OWNER = "seed"


async def seed_demo_workers():
    """Insert the demo workers once, keyed by mobile."""
    workers = mongo.get_workers_collection()

    for worker in DEMO_WORKERS:
        document = {key: value for key, value in worker.items() if key != "id"}
        result = await workers.update_one(
            {"mobile": document["mobile"], "addedBy": SEED_OWNER},
            {"$setOnInsert": {**document, "addedBy": SEED_OWNER, "addedAt": utc_now_iso()}},
            upsert=True
        )

        if result.upserted_id:
            await record_trade(document.get("area"), document.get("profession"))
            logger.info(f"  ✅ Seeded {document['fullName']}")
        else:
            logger.info(f"  ℹ️  {document['fullName']} already exists")


async def report():
    """Log indexes and document counts per collection."""
    db = mongo.get_database()

    logger.info("\n🔍 Verifying indexes...")
    for collection_name in [mongo.USERS, mongo.WORKERS, mongo.AREAS, mongo.PROFESSIONS]:
        indexes = await db[collection_name].index_information()
        count = await db[collection_name].count_documents({})
        logger.info(f"\n  {collection_name} ({count} documents):")
        for idx_name in indexes.keys():
            if idx_name != "_id_":
                logger.info(f"    ✅ {idx_name}")


async def main(seed_demo: bool):
    """Main initialization"""
    logger.info("=" * 60)
    logger.info("  LabourConnect Database Setup")
    logger.info("=" * 60 + "\n")

    await mongo.connect_to_mongo()
    try:
        await create_indexes()

        if seed_demo:
            logger.info("\n🌱 Seeding demo workers...")
            await seed_demo_workers()

        await report()
        logger.info("\n✅ Database initialization complete!")
    finally:
        await mongo.close_mongo_connection()

    logger.info("\n" + "=" * 60)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create indexes for LabourConnect")
    parser.add_argument("--seed-demo", action="store_true", help="Insert the demo workers")
    args = parser.parse_args()

    asyncio.run(main(args.seed_demo))
