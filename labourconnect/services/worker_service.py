"""
labourconnect/services/worker_service.py

Purpose: Workers added by professionals

- Add a worker and bump the professional's quota counter
- List workers by sparse equality filters or by professional
- Get / update / soft-delete a single worker
"""

from typing import Any, Dict

from labourconnect.core.logging import LogContext, get_logger
from labourconnect.core.result import Failure, NotFound, Ok, Result
from labourconnect.db.mongo import get_workers_collection
from labourconnect.services import aggregate_service, quota_service
from labourconnect.services.gateway import gateway_call, serialize_document, to_object_id
from utils.constants import (
    MSG_WORKER_ADDED,
    MSG_WORKER_DELETED,
    MSG_WORKER_NOT_FOUND,
    MSG_WORKER_UPDATED,
)
from utils.time_utils import utc_now_iso

logger = get_logger(__name__)

# Fields the directory can filter on in the database
FILTERABLE_FIELDS = ("area", "profession", "isActive")


@gateway_call("adding worker")
async def add_worker(data: Dict[str, Any], professional_id: str) -> Result:
    """
    Inserts a worker owned by a professional.

    The quota counter and aggregates are updated after the insert; their
    failures are logged and do not fail the add.

    Returns:
        Ok({"workerId", "message", "workersCount"})
    """
    with LogContext(professional_id=professional_id):
        workers = get_workers_collection()
        document = {
            **data,
            "addedBy": professional_id,
            "addedAt": utc_now_iso(),
            "isActive": True,
            "isVerified": False,
            "rating": 0,
            "jobsCompleted": 0,
        }

        result = await workers.insert_one(document)
        worker_id = str(result.inserted_id)
        logger.info(f"Worker added: {worker_id}")

        workers_count = None
        counted = await quota_service.increment_workers_count(professional_id)
        if isinstance(counted, Ok):
            workers_count = counted.value
        else:
            logger.warning(f"workersCount not updated: {counted.message}")

        await aggregate_service.record_trade(data.get("area"), data.get("profession"))

        return Ok({
            "workerId": worker_id,
            "message": MSG_WORKER_ADDED,
            "workersCount": workers_count,
        })


@gateway_call("listing workers")
async def list_workers(filters: Dict[str, Any]) -> Result:
    """
    Workers matching every given equality filter.

    Args:
        filters: Sparse record over area / profession / isActive; other keys
            are ignored and must be applied by the caller

    Returns:
        Ok({"workers": [...], "count": n})
    """
    query = {key: filters[key] for key in FILTERABLE_FIELDS if filters.get(key) is not None}
    ignored = set(filters) - set(FILTERABLE_FIELDS)
    if ignored:
        logger.debug(f"Ignoring non-database filters: {sorted(ignored)}")

    workers = [serialize_document(doc) async for doc in get_workers_collection().find(query)]
    return Ok({"workers": workers, "count": len(workers)})


@gateway_call("listing professional's workers")
async def list_workers_by_professional(professional_id: str) -> Result:
    cursor = get_workers_collection().find({"addedBy": professional_id})
    workers = [serialize_document(doc) async for doc in cursor]
    return Ok({"workers": workers, "count": len(workers)})


@gateway_call("getting worker")
async def get_worker(worker_id: str) -> Result:
    object_id = to_object_id(worker_id)
    if object_id is None:
        return NotFound(MSG_WORKER_NOT_FOUND)

    document = await get_workers_collection().find_one({"_id": object_id})
    if document is None:
        return NotFound(MSG_WORKER_NOT_FOUND)

    return Ok(serialize_document(document))


@gateway_call("updating worker")
async def update_worker(worker_id: str, data: Dict[str, Any]) -> Result:
    object_id = to_object_id(worker_id)
    if object_id is None:
        return NotFound(MSG_WORKER_NOT_FOUND)

    result = await get_workers_collection().update_one(
        {"_id": object_id},
        {"$set": {**data, "updatedAt": utc_now_iso()}}
    )
    if result.matched_count == 0:
        return NotFound(MSG_WORKER_NOT_FOUND)

    return Ok({"message": MSG_WORKER_UPDATED})


async def delete_worker(worker_id: str) -> Result:
    """
    Soft delete: the worker is deactivated, never removed.
    """
    result = await update_worker(worker_id, {"isActive": False})
    if isinstance(result, (NotFound, Failure)):
        return result

    logger.info(f"Worker deactivated: {worker_id}")
    return Ok({"message": MSG_WORKER_DELETED})
