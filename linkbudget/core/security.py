"""
Security middleware for rendered pages.

Adds response headers that limit how browsers may interpret and frame the
HTML produced by the service.
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

SECURITY_HEADERS = {
    # Prevent content type sniffing
    "X-Content-Type-Options": "nosniff",

    # Prevent clickjacking
    "X-Frame-Options": "DENY",

    # Pages carry inline styles only; no scripts are served
    "Content-Security-Policy": (
        "default-src 'self'; "
        "script-src 'none'; "
        "style-src 'self' 'unsafe-inline'; "
        "form-action 'self'; "
        "frame-ancestors 'none'; "
        "base-uri 'self'"
    ),

    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers for XSS and other attack prevention.
    """

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        for header_name, header_value in SECURITY_HEADERS.items():
            response.headers.setdefault(header_name, header_value)

        return response
