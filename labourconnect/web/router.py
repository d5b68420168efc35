"""
labourconnect/web/router.py

Purpose: Single-page shell and page fragments

- GET /               shell document (nav + page container + app.js)
- GET /pages/{name}   rendered page fragment and refreshed navigation
"""

from pathlib import Path
from typing import Any, Dict, Mapping

from fastapi import APIRouter, Depends, Request
from fastapi.templating import Jinja2Templates

from labourconnect.api.deps import get_session_context
from labourconnect.core.config import settings
from labourconnect.core.logging import LogContext, get_logger
from labourconnect.services.session_service import SessionContext
from labourconnect.web.pages import DEFAULT_PAGE, PageRedirect, resolve_page
from utils.constants import get_profession_name, get_user_type_display

logger = get_logger(__name__)
router = APIRouter(tags=["web"], include_in_schema=False)

WEB_DIR = Path(__file__).parent
STATIC_DIR = WEB_DIR / "static"

templates = Jinja2Templates(directory=str(WEB_DIR / "templates"))
templates.env.filters["profession_name"] = get_profession_name
templates.env.filters["user_type_name"] = get_user_type_display

# Redirect chains longer than this render home
MAX_REDIRECTS = 3


def render_nav(context: SessionContext) -> str:
    return templates.get_template("nav.html").render(session=context)


async def render_page(name: str, context: SessionContext, params: Mapping[str, str]) -> Dict[str, Any]:
    """
    Renders a named page for the current session.

    Returns:
        {"page", "title", "html", "nav"}
    """
    page = resolve_page(name)

    for _ in range(MAX_REDIRECTS):
        try:
            data = await page.loader(context, params)
            break
        except PageRedirect as redirect:
            logger.info(f"Page {page.name} redirected to {redirect.page}")
            page = resolve_page(redirect.page)
            params = {}
    else:
        page = resolve_page(DEFAULT_PAGE)
        data = await page.loader(context, {})

    html = templates.get_template(page.template).render(session=context, page=page.name, **data)
    return {
        "page": page.name,
        "title": page.title,
        "html": html,
        "nav": render_nav(context),
    }


@router.get("/")
async def shell(request: Request, context: SessionContext = Depends(get_session_context)):
    return templates.TemplateResponse(
        request,
        "shell.html",
        {
            "session": context,
            "nav": render_nav(context),
            "recaptcha_site_key": settings.RECAPTCHA_SITE_KEY,
            "client_config": {
                "initialPage": request.query_params.get("page", DEFAULT_PAGE),
                "apiPrefix": settings.API_PREFIX,
                "pageRenderDelayMs": settings.PAGE_RENDER_DELAY_MS,
                "notificationTimeoutMs": settings.NOTIFICATION_TIMEOUT_MS,
                "otpValiditySeconds": settings.OTP_VALIDITY_SECONDS,
                "recaptchaSiteKey": settings.RECAPTCHA_SITE_KEY,
            },
        },
    )


@router.get("/pages/{name}")
async def page_fragment(
    name: str,
    request: Request,
    context: SessionContext = Depends(get_session_context)
):
    with LogContext(page=name, user_id=context.user_id):
        return await render_page(name, context, dict(request.query_params))
