"""
labourconnect/services/aggregate_service.py

Purpose: Area / profession aggregates and platform statistics

- Upsert-with-increment of per-area and per-profession worker counts
- Sorted listings for the directory and home page
- Platform-wide stats for the home page
"""

from typing import Any, Dict, List, Optional

from labourconnect.core.logging import get_logger
from labourconnect.core.result import Failure, Ok, Result
from labourconnect.db.mongo import (
    get_areas_collection,
    get_professions_collection,
    get_users_collection,
    get_workers_collection,
)
from labourconnect.services.gateway import gateway_call
from utils.constants import get_profession_name
from utils.time_utils import utc_now_iso
from utils.validation_utils import slugify_area

logger = get_logger(__name__)


@gateway_call("upserting area aggregate")
async def upsert_area_aggregate(name: str) -> Result:
    """
    Increments the worker count of an area, creating it on first use.

    The document id is the slug of the name, so "Andheri East" and
    "andheri  east" share one aggregate.
    """
    slug = slugify_area(name or "")
    if not slug.strip("-"):
        return Failure(message="Area name is required", code="INVALID_AREA")

    areas = get_areas_collection()
    await areas.update_one(
        {"_id": slug},
        {
            "$set": {"name": name.strip(), "updatedAt": utc_now_iso()},
            "$inc": {"workerCount": 1},
        },
        upsert=True
    )
    return Ok({"id": slug})


@gateway_call("upserting profession aggregate")
async def upsert_profession_aggregate(code: str) -> Result:
    if not code:
        return Failure(message="Profession is required", code="INVALID_PROFESSION")

    professions = get_professions_collection()
    await professions.update_one(
        {"_id": code},
        {
            "$set": {"name": get_profession_name(code), "updatedAt": utc_now_iso()},
            "$inc": {"workerCount": 1},
        },
        upsert=True
    )
    return Ok({"id": code})


async def record_trade(area: Optional[str], profession: Optional[str]) -> None:
    """
    Counts a new worker in its area and profession. Failures are logged only.
    """
    if area:
        result = await upsert_area_aggregate(area)
        if isinstance(result, Failure):
            logger.warning(f"Could not update area aggregate: {result.message}")

    if profession:
        result = await upsert_profession_aggregate(profession)
        if isinstance(result, Failure):
            logger.warning(f"Could not update profession aggregate: {result.message}")


def _aggregate_record(document: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": document["_id"],
        "name": document.get("name", document["_id"]),
        "workerCount": document.get("workerCount", 0),
    }


@gateway_call("listing areas")
async def list_areas(limit: int = 0) -> Result:
    """
    Areas ordered by worker count, busiest first.
    """
    cursor = get_areas_collection().find().sort("workerCount", -1)
    if limit:
        cursor = cursor.limit(limit)
    return Ok([_aggregate_record(doc) async for doc in cursor])


@gateway_call("listing professions")
async def list_professions(limit: int = 0) -> Result:
    cursor = get_professions_collection().find().sort("workerCount", -1)
    if limit:
        cursor = cursor.limit(limit)
    return Ok([_aggregate_record(doc) async for doc in cursor])


@gateway_call("computing platform stats")
async def get_platform_stats() -> Result:
    """
    Home page counters.

    Returns:
        Ok({"totalWorkers", "totalAreas", "totalJobs", "avgRating"})
    """
    projection = {"rating": 1, "jobsCompleted": 1}
    records: List[Dict[str, Any]] = []

    async for doc in get_workers_collection().find({"isActive": True}, projection):
        records.append(doc)
    async for doc in get_users_collection().find({"userType": "worker", "isActive": True}, projection):
        records.append(doc)

    ratings = [r.get("rating") or 0 for r in records if (r.get("rating") or 0) > 0]
    total_areas = await get_areas_collection().count_documents({})

    return Ok({
        "totalWorkers": len(records),
        "totalAreas": total_areas,
        "totalJobs": sum(r.get("jobsCompleted") or 0 for r in records),
        "avgRating": round(sum(ratings) / len(ratings), 1) if ratings else 0,
    })


def demo_platform_stats(workers: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Same counters computed over the in-memory demo workers.
    """
    ratings = [w.get("rating", 0) for w in workers if w.get("rating")]
    return {
        "totalWorkers": len(workers),
        "totalAreas": len({w.get("area") for w in workers if w.get("area")}),
        "totalJobs": sum(w.get("jobsCompleted", 0) for w in workers),
        "avgRating": round(sum(ratings) / len(ratings), 1) if ratings else 0,
    }
