"""
labourconnect/api/workers.py

Purpose: Worker directory and professional worker management

- GET    /workers          directory search
- POST   /workers          professional adds a worker
- GET    /workers/mine     professional's own workers
- GET    /workers/{id}
- PATCH  /workers/{id}     owner only
- DELETE /workers/{id}     owner only, soft delete
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from labourconnect.api.deps import envelope_response, parse_model, require_professional
from labourconnect.core.exceptions import PermissionDeniedError, ValidationError
from labourconnect.core.logging import LogContext, get_logger
from labourconnect.core.result import Failure, Ok
from labourconnect.schemas.worker import WorkerCreate, WorkerSearch, WorkerUpdate
from labourconnect.services import directory_service, quota_service, session_service, worker_service
from labourconnect.services.gateway import backend_available
from labourconnect.services.session_service import SessionContext

logger = get_logger(__name__)
router = APIRouter(prefix="/workers", tags=["workers"])


@router.get("")
async def search_workers(
    area: Optional[str] = None,
    profession: Optional[str] = None,
    experience: Optional[str] = None,
    min_rate: Optional[str] = Query(None, alias="minRate"),
    max_rate: Optional[str] = Query(None, alias="maxRate"),
    verified_only: bool = Query(False, alias="verifiedOnly"),
):
    search = parse_model(WorkerSearch, {
        "area": area,
        "profession": profession,
        "experience": experience,
        "minRate": min_rate,
        "maxRate": max_rate,
        "verifiedOnly": verified_only,
    })
    return envelope_response(await directory_service.search_workers(search))


@router.post("")
async def add_worker(
    payload: WorkerCreate,
    request: Request,
    context: SessionContext = Depends(require_professional)
):
    """
    Adds a worker owned by the signed-in professional.

    A worker without an area takes the professional's area. The free-tier
    limit is reported, not enforced.
    """
    if context.is_demo_user or not backend_available():
        return envelope_response(Failure(message="Adding workers needs a live backend", code="DEMO_MODE"))

    data = payload.model_dump(by_alias=True, exclude_none=True)
    if not data.get("area") and context.user.get("area"):
        data["area"] = context.user["area"]

    with LogContext(professional_id=context.user_id):
        result = await worker_service.add_worker(data, context.user_id)
        if not isinstance(result, Ok):
            return envelope_response(result)

        workers_count = result.value["workersCount"]
        if workers_count is not None:
            session_service.update_current_user(request.session, {"workersCount": workers_count})

        quota = quota_service.quota_status(workers_count)
        return envelope_response(result, quota={
            "used": quota.used,
            "limit": quota.limit,
            "remaining": quota.remaining,
            "overLimit": quota.over_limit,
        })


@router.get("/mine")
async def my_workers(context: SessionContext = Depends(require_professional)):
    if context.is_demo_user or not backend_available():
        return {"success": True, "workers": [], "count": 0, "active": 0}

    result = await worker_service.list_workers_by_professional(context.user_id)
    if not isinstance(result, Ok):
        return envelope_response(result)

    active = sum(1 for w in result.value["workers"] if w.get("isActive"))
    return envelope_response(result, active=active)


@router.get("/{worker_id}")
async def get_worker(worker_id: str):
    return envelope_response(await worker_service.get_worker(worker_id), key="worker")


async def _owned_worker(worker_id: str, context: SessionContext):
    """
    Returns the Ok result of get_worker when the worker belongs to the
    professional, otherwise the failing result.

    Raises:
        PermissionDeniedError: The worker belongs to someone else
    """
    result = await worker_service.get_worker(worker_id)
    if isinstance(result, Ok) and result.value.get("addedBy") != context.user_id:
        raise PermissionDeniedError("You can only manage workers you added")
    return result


@router.patch("/{worker_id}")
async def update_worker(
    worker_id: str,
    payload: WorkerUpdate,
    context: SessionContext = Depends(require_professional)
):
    changes = payload.model_dump(by_alias=True, exclude_none=True)
    if not changes:
        raise ValidationError("Nothing to update")

    owned = await _owned_worker(worker_id, context)
    if not isinstance(owned, Ok):
        return envelope_response(owned)

    return envelope_response(await worker_service.update_worker(worker_id, changes))


@router.delete("/{worker_id}")
async def delete_worker(worker_id: str, context: SessionContext = Depends(require_professional)):
    owned = await _owned_worker(worker_id, context)
    if not isinstance(owned, Ok):
        return envelope_response(owned)

    return envelope_response(await worker_service.delete_worker(worker_id))
