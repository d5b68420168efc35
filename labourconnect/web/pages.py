"""
labourconnect/web/pages.py

Purpose: Page registry and page data loaders

- Each page has a name, a title, a template and an async loader
- Loaders fetch what the page shows and return the template context
- A loader may redirect to another page (e.g. role guards)
- Unknown page names resolve to home
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping

from labourconnect.core.config import settings
from labourconnect.core.logging import get_logger
from labourconnect.core.result import Ok
from labourconnect.schemas.worker import WorkerSearch
from labourconnect.services import aggregate_service, directory_service, quota_service, worker_service
from labourconnect.services.gateway import backend_available
from labourconnect.services.session_service import SessionContext
from utils.constants import CREDIT_PACKS, DEMO_WORKERS, EXPERIENCE_BRACKETS, PROFESSIONS, USER_TYPES

logger = get_logger(__name__)

DEFAULT_PAGE = "home"

Loader = Callable[[SessionContext, Mapping[str, str]], Awaitable[Dict[str, Any]]]


class PageRedirect(Exception):
    """Raised by a loader to render another page instead."""

    def __init__(self, page: str):
        self.page = page
        super().__init__(page)


@dataclass(frozen=True)
class Page:
    name: str
    title: str
    template: str
    loader: Loader


PAGES: Dict[str, Page] = {}


def page(name: str, title: str):
    """
    Registers a loader; the template is pages/<name with underscores>.html.
    """
    def decorator(loader: Loader) -> Loader:
        PAGES[name] = Page(
            name=name,
            title=title,
            template=f"pages/{name.replace('-', '_')}.html",
            loader=loader,
        )
        return loader
    return decorator


def resolve_page(name: str) -> Page:
    return PAGES.get(name) or PAGES[DEFAULT_PAGE]


def _catalogues() -> Dict[str, Any]:
    return {
        "professions": PROFESSIONS,
        "experiences": EXPERIENCE_BRACKETS,
        "user_types": USER_TYPES,
    }


@page("home", "Home")
async def home(context: SessionContext, params: Mapping[str, str]) -> Dict[str, Any]:
    stats = aggregate_service.demo_platform_stats(DEMO_WORKERS)
    top_professions = []

    if backend_available():
        stats_result = await aggregate_service.get_platform_stats()
        if isinstance(stats_result, Ok):
            stats = stats_result.value
        professions_result = await aggregate_service.list_professions(limit=8)
        if isinstance(professions_result, Ok):
            top_professions = professions_result.value

    return {"stats": stats, "top_professions": top_professions, **_catalogues()}


@page("registration", "Register")
async def registration(context: SessionContext, params: Mapping[str, str]) -> Dict[str, Any]:
    return {"selected_type": params.get("type", "worker"), **_catalogues()}


@page("login", "Login")
async def login(context: SessionContext, params: Mapping[str, str]) -> Dict[str, Any]:
    return {
        "recaptcha_site_key": settings.RECAPTCHA_SITE_KEY,
        "otp_validity_seconds": settings.OTP_VALIDITY_SECONDS,
        "demo_mode": settings.DEMO_MODE,
        "demo_otp_code": settings.DEMO_OTP_CODE if settings.DEMO_MODE else None,
    }


@page("find-workers", "Find Workers")
async def find_workers(context: SessionContext, params: Mapping[str, str]) -> Dict[str, Any]:
    """
    Directory with the current filters applied. Bad filter values fall
    back to an unfiltered search.
    """
    filters = {key: params.get(key) for key in ("area", "profession", "experience", "minRate", "maxRate")}
    filters["verifiedOnly"] = params.get("verifiedOnly") in ("true", "on", "1")

    try:
        search = WorkerSearch.model_validate(filters)
    except ValueError:
        logger.info("Ignoring invalid directory filters")
        search = WorkerSearch()

    workers = []
    error = None
    result = await directory_service.search_workers(search)
    if isinstance(result, Ok):
        workers = result.value["workers"]
    else:
        error = result.message

    popular_areas = []
    if backend_available():
        areas_result = await aggregate_service.list_areas(limit=10)
        if isinstance(areas_result, Ok):
            popular_areas = areas_result.value

    return {
        "search": search,
        "workers": workers,
        "error": error,
        "popular_areas": popular_areas,
        **_catalogues(),
    }


@page("worker-dashboard", "Dashboard")
async def worker_dashboard(context: SessionContext, params: Mapping[str, str]) -> Dict[str, Any]:
    user = context.user or {}
    return {
        "user": user,
        "jobs_completed": user.get("jobsCompleted", 0),
        "daily_rate": user.get("dailyRate", 0),
        "rating": user.get("rating", 0),
        "profile_views": user.get("profileViews", 0),
        **_catalogues(),
    }


@page("professional-dashboard", "Dashboard")
async def professional_dashboard(context: SessionContext, params: Mapping[str, str]) -> Dict[str, Any]:
    if not context.is_professional:
        raise PageRedirect("home")

    workers = []
    error = None
    if backend_available() and not context.is_demo_user:
        result = await worker_service.list_workers_by_professional(context.user_id)
        if isinstance(result, Ok):
            workers = result.value["workers"]
        else:
            error = result.message

    quota = quota_service.quota_status(context.user.get("workersCount", len(workers)))
    return {
        "user": context.user,
        "workers": workers,
        "total_workers": len(workers),
        "active_workers": sum(1 for w in workers if w.get("isActive")),
        "quota": quota,
        "error": error,
        **_catalogues(),
    }


@page("profile", "Profile")
async def profile(context: SessionContext, params: Mapping[str, str]) -> Dict[str, Any]:
    return {"user": context.user or {}, **_catalogues()}


@page("map-view", "Map View")
async def map_view(context: SessionContext, params: Mapping[str, str]) -> Dict[str, Any]:
    """
    Workers in the visitor's area (or everywhere when unknown).
    """
    area = context.user.get("area") if context.user else None
    workers = []

    result = await directory_service.search_workers(WorkerSearch(area=area))
    if isinstance(result, Ok):
        workers = result.value["workers"][:10]

    return {"area": area, "workers": workers, **_catalogues()}


@page("payment", "Buy Credits")
async def payment(context: SessionContext, params: Mapping[str, str]) -> Dict[str, Any]:
    used = context.user.get("workersCount", 0) if context.user else 0
    return {
        "quota": quota_service.quota_status(used),
        "credit_packs": CREDIT_PACKS,
    }
