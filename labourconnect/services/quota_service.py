"""
labourconnect/services/quota_service.py

Purpose: Professional worker quota

- Atomic workersCount increment when a worker is added
- Recount from the workers collection (reconciliation)
- Free-tier status for the dashboard and payment page (display only)
"""

from dataclasses import dataclass
from typing import Optional

from pymongo import ReturnDocument

from labourconnect.core.config import settings
from labourconnect.core.logging import LogContext, get_logger
from labourconnect.core.result import NotFound, Ok, Result
from labourconnect.db.mongo import get_users_collection, get_workers_collection
from labourconnect.services.gateway import gateway_call, to_object_id
from utils.time_utils import utc_now_iso

logger = get_logger(__name__)


@gateway_call("incrementing workers count")
async def increment_workers_count(professional_id: str, by: int = 1) -> Result:
    """
    Atomically bumps the professional's workersCount.

    Concurrent adds each land exactly once, unlike count-then-write.

    Returns:
        Ok(new_count) or NotFound when the professional record is missing
    """
    object_id = to_object_id(professional_id)
    if object_id is None:
        return NotFound("Professional not found")

    users = get_users_collection()
    document = await users.find_one_and_update(
        {"_id": object_id},
        {"$inc": {"workersCount": by}, "$set": {"updatedAt": utc_now_iso()}},
        return_document=ReturnDocument.AFTER
    )

    if document is None:
        return NotFound("Professional not found")

    count = document.get("workersCount", 0)
    logger.debug(f"workersCount incremented to {count}", extra={"professional_id": professional_id})
    return Ok(count)


async def count_workers(professional_id: str) -> int:
    """Workers ever added by the professional, active or not."""
    return await get_workers_collection().count_documents({"addedBy": professional_id})


async def write_workers_count(professional_id: str, count: int) -> bool:
    object_id = to_object_id(professional_id)
    if object_id is None:
        return False

    result = await get_users_collection().update_one(
        {"_id": object_id},
        {"$set": {"workersCount": count, "updatedAt": utc_now_iso()}}
    )
    return result.matched_count > 0


@gateway_call("recounting workers")
async def recount_workers(professional_id: str) -> Result:
    """
    Recomputes workersCount from the workers collection and stores it.

    Count and write are separate round trips, so two recounts racing with
    inserts can leave a stale value. Use for reconciliation, not on the
    add path.
    """
    with LogContext(professional_id=professional_id):
        count = await count_workers(professional_id)

        if not await write_workers_count(professional_id, count):
            return NotFound("Professional not found")

        logger.info(f"workersCount reconciled to {count}")
        return Ok(count)


@dataclass(frozen=True)
class QuotaStatus:
    used: int
    limit: int

    @property
    def remaining(self) -> int:
        return max(self.limit - self.used, 0)

    @property
    def percent(self) -> int:
        if self.limit <= 0:
            return 100
        return min(round(self.used * 100 / self.limit), 100)

    @property
    def over_limit(self) -> bool:
        return self.used >= self.limit


def quota_status(workers_count: Optional[int], limit: Optional[int] = None) -> QuotaStatus:
    """
    Free-tier usage. Nothing blocks an add past the limit.
    """
    return QuotaStatus(
        used=workers_count or 0,
        limit=settings.FREE_WORKER_LIMIT if limit is None else limit,
    )
