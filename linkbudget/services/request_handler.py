"""One link budget request, from cookie and form body to rendered page.

The handler is shared by the ASGI route and the per-process gateway entry
point. Every handled outcome (a result, a validation error or a session
storage failure) produces a complete HTML page.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from linkbudget.core.config import Settings, settings as default_settings
from linkbudget.core.exceptions import InputValidationError, SessionStorageError
from linkbudget.core.logging_config import get_calculation_logger
from linkbudget.core.templates import render_page
from linkbudget.core.utils.request_parsing import get_cookie, parse_form_body
from linkbudget.core.utils.session_store import Session, SessionStore
from linkbudget.services.calculator import calculate, format_dbm
from linkbudget.services.validator import validate_inputs

logger = logging.getLogger(__name__)

LAST_CALCULATION_KEY = "last_calculation"
CONTENT_TYPE = "text/html"
STORAGE_ERROR_MESSAGE = "Internal error: session storage is unavailable."


@dataclass
class LinkBudgetResponse:
    """Rendered page plus the headers that accompany it."""

    body: str
    set_cookie: Optional[str] = None
    headers: List[Tuple[str, str]] = field(default_factory=list)


def build_session_cookie(name: str, session_id: str) -> str:
    """Value of the Set-Cookie header issued for a session."""
    return f"{name}={session_id}; HttpOnly; Secure"


def _render_result(received_power: str, previous: Optional[str]) -> str:
    return render_page(
        "result.html",
        error_message=None,
        received_power=received_power,
        previous_calculation=previous,
    )


def _render_error(message: str) -> str:
    return render_page("result.html", error_message=message)


def _calculate_and_store(session: Session, form_body: str) -> str:
    """Validate, calculate and record the result; returns the rendered page."""
    calc_log = get_calculation_logger()

    inputs = validate_inputs(parse_form_body(form_body))
    received_power = format_dbm(calculate(inputs))

    previous = session.get(LAST_CALCULATION_KEY)
    session.set(LAST_CALCULATION_KEY, received_power)
    calc_log.info(f"Calculation performed. Result: {received_power} dBm")

    if previous is not None and previous != received_power:
        return _render_result(received_power, previous)
    return _render_result(received_power, None)


def handle_request(
    form_body: str,
    cookie_header: str = "",
    store: Optional[SessionStore] = None,
    app_settings: Optional[Settings] = None,
) -> LinkBudgetResponse:
    """
    Run one calculation request.

    Args:
        form_body: Raw request body (``key=value&...``, not percent-decoded)
        cookie_header: Combined cookie header as sent by the client
        store: Session store to use; defaults to a file store from settings
        app_settings: Settings to use; defaults to the global settings

    Returns:
        The rendered page and the Set-Cookie value, if one must be issued
    """
    app_settings = app_settings or default_settings
    store = store or SessionStore.from_settings(app_settings)
    calc_log = get_calculation_logger()

    token = get_cookie(cookie_header, app_settings.SESSION_COOKIE_NAME)
    response = LinkBudgetResponse(body="", headers=[("Content-type", CONTENT_TYPE)])

    try:
        session = store.resolve(token)
        # A rejected token is replaced by a new identifier, which must be issued
        if not token or session.id != token or session.is_expired():
            response.set_cookie = build_session_cookie(
                app_settings.SESSION_COOKIE_NAME, session.id
            )
        response.body = _calculate_and_store(session, form_body)

    except InputValidationError as e:
        calc_log.info(f"Error occurred: {e}")
        response.body = _render_error(str(e))

    except SessionStorageError as e:
        calc_log.error(f"Error occurred: {e}")
        logger.error(f"Session storage failure: {e}")
        response.set_cookie = None
        response.body = _render_error(STORAGE_ERROR_MESSAGE)

    if response.set_cookie:
        response.headers.append(("Set-Cookie", response.set_cookie))
    return response
