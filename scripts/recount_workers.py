"""
Reconcile professionals' workersCount with the workers collection

    python scripts/recount_workers.py                 # every professional
    python scripts/recount_workers.py --professional <userId>
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

from labourconnect.core.result import Ok
from labourconnect.db import mongo
from labourconnect.services.quota_service import recount_workers

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


async def professional_ids():
    users = mongo.get_users_collection()
    async for user in users.find({"userType": "professional"}, {"_id": 1}):
        yield str(user["_id"])


async def main(professional_id=None):
    await mongo.connect_to_mongo()

    fixed = failed = 0
    try:
        if professional_id:
            ids = [professional_id]
        else:
            ids = [pid async for pid in professional_ids()]

        for pid in ids:
            result = await recount_workers(pid)
            if isinstance(result, Ok):
                logger.info(f"  ✅ {pid}: {result.value} workers")
                fixed += 1
            else:
                logger.warning(f"  ❌ {pid}: {result.message}")
                failed += 1
    finally:
        await mongo.close_mongo_connection()

    logger.info(f"\n📊 Reconciled {fixed} professionals, {failed} failed")
    return failed


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Recount workers per professional")
    parser.add_argument("--professional", help="Only this professional's user id")
    args = parser.parse_args()

    sys.exit(1 if asyncio.run(main(args.professional)) else 0)
