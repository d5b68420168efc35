"""
labourconnect/services/directory_service.py

Purpose: Worker directory search

- Equality filters (area, profession, active) go to the database
- Experience, rate range and verified-only are applied in memory
- Falls back to the demo workers when no backend is available
"""

from numbers import Number
from typing import Any, Dict, Iterable, List

from labourconnect.core.logging import get_logger
from labourconnect.core.result import Ok, Result
from labourconnect.schemas.worker import WorkerSearch
from labourconnect.services import worker_service
from labourconnect.services.gateway import backend_available
from utils.constants import DEMO_WORKERS

logger = get_logger(__name__)


def matches_server_filters(worker: Dict[str, Any], filters: Dict[str, Any]) -> bool:
    return all(worker.get(key) == value for key, value in filters.items())


def matches_client_filters(worker: Dict[str, Any], search: WorkerSearch) -> bool:
    """
    True when a worker passes the in-memory filters.

    A worker without a numeric dailyRate fails any rate bound.
    """
    if search.experience and worker.get("experience") != search.experience:
        return False

    rate = worker.get("dailyRate")
    has_rate = isinstance(rate, Number) and not isinstance(rate, bool)

    if search.min_rate is not None and (not has_rate or rate < search.min_rate):
        return False
    if search.max_rate is not None and (not has_rate or rate > search.max_rate):
        return False

    if search.verified_only and not worker.get("isVerified"):
        return False

    return True


def apply_client_filters(workers: Iterable[Dict[str, Any]], search: WorkerSearch) -> List[Dict[str, Any]]:
    return [w for w in workers if matches_client_filters(w, search)]


async def search_workers(search: WorkerSearch) -> Result:
    """
    Runs a directory search.

    Returns:
        Ok({"workers", "count", "demo"}) or the Failure of the backend call
    """
    filters = search.server_filters()

    if not backend_available():
        candidates = [w for w in DEMO_WORKERS if matches_server_filters(w, filters)]
        workers = apply_client_filters(candidates, search)
        return Ok({"workers": workers, "count": len(workers), "demo": True})

    result = await worker_service.list_workers(filters)
    if not isinstance(result, Ok):
        return result

    workers = apply_client_filters(result.value["workers"], search)
    logger.debug(f"Directory search matched {len(workers)} of {result.value['count']} workers")
    return Ok({"workers": workers, "count": len(workers), "demo": False})
