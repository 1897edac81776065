"""Input form and HTML calculation routes"""

import logging
import uuid

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from starlette.concurrency import run_in_threadpool

from linkbudget.core.config import Settings, settings
from linkbudget.core.logging_config import set_correlation_id
from linkbudget.core.templates import templates
from linkbudget.core.utils.session_store import SessionStore
from linkbudget.services.request_handler import handle_request

logger = logging.getLogger(__name__)

router = APIRouter()


def get_settings() -> Settings:
    """Dependency for the active settings"""
    return settings


def get_session_store(app_settings: Settings = Depends(get_settings)) -> SessionStore:
    """Dependency for the session store backing the calculation route"""
    return SessionStore.from_settings(app_settings)


@router.get("/", response_class=HTMLResponse)
@router.get("/index.html", response_class=HTMLResponse)
async def index(request: Request):
    """Link budget input form"""
    return templates.TemplateResponse(request, "index.html")


@router.post("/calculate", response_class=HTMLResponse)
async def calculate(
    request: Request,
    store: SessionStore = Depends(get_session_store),
    app_settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """
    Calculate received power from the submitted form body.

    The body is read raw and handed to the shared request handler, so the
    route behaves exactly like the gateway entry point. Handled errors are
    rendered into the page and still answer 200.
    """
    set_correlation_id(str(uuid.uuid4()))
    raw_body = (await request.body()).decode("utf-8", errors="replace")
    logger.debug("Calculation request received", extra={"body_length": len(raw_body)})

    # Session and log I/O block, so the handler runs off the event loop
    result = await run_in_threadpool(
        handle_request,
        raw_body,
        cookie_header=request.headers.get("cookie", ""),
        store=store,
        app_settings=app_settings,
    )

    response = HTMLResponse(content=result.body, status_code=200)
    if result.set_cookie:
        response.headers.append("set-cookie", result.set_cookie)
    return response
