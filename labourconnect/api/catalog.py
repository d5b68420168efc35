"""
labourconnect/api/catalog.py

Purpose: Read-only catalogue endpoints

- GET /areas, /professions   aggregates sorted by worker count
- GET /stats                 platform counters for the home page
- GET /media/profile-pictures/{user_id}   (mounted without the API prefix)
"""

from fastapi import APIRouter, Query
from fastapi.responses import Response

from labourconnect.api.deps import envelope_response
from labourconnect.core.exceptions import ResourceNotFoundError
from labourconnect.core.result import Ok
from labourconnect.services import aggregate_service
from labourconnect.services.gateway import backend_available
from labourconnect.services.storage_service import MEDIA_PREFIX, profile_picture_storage
from utils.constants import DEMO_WORKERS, PROFESSIONS

router = APIRouter(tags=["catalog"])
media_router = APIRouter(tags=["media"])


def _or_empty(result):
    return result.value if isinstance(result, Ok) else []


@router.get("/areas")
async def list_areas(limit: int = Query(0, ge=0)):
    """
    Areas busiest first. A failed read answers with an empty list.
    """
    if not backend_available():
        return {"success": True, "areas": []}
    return {"success": True, "areas": _or_empty(await aggregate_service.list_areas(limit))}


@router.get("/professions")
async def list_professions(limit: int = Query(0, ge=0)):
    """
    Professions with worker counts, plus the full catalogue for forms.
    """
    catalogue = [{"id": code, "name": name} for code, name in PROFESSIONS.items()]
    professions = _or_empty(await aggregate_service.list_professions(limit)) if backend_available() else []
    return {"success": True, "professions": professions, "catalogue": catalogue}


@router.get("/stats")
async def platform_stats():
    if not backend_available():
        return {"success": True, "stats": aggregate_service.demo_platform_stats(DEMO_WORKERS)}
    return envelope_response(await aggregate_service.get_platform_stats(), key="stats")


@media_router.get(f"{MEDIA_PREFIX}/{{user_id}}")
async def profile_picture(user_id: str):
    if not backend_available():
        raise ResourceNotFoundError("Profile picture not found")

    result = await profile_picture_storage.download(user_id)
    if not isinstance(result, Ok):
        return envelope_response(result)

    data, content_type = result.value
    return Response(content=data, media_type=content_type, headers={"Cache-Control": "no-cache"})
