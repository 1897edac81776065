import logging

from fastapi import FastAPI

from linkbudget.core.config import settings
from linkbudget.core.logging_config import init_application_logging
from linkbudget.core.security import SecurityHeadersMiddleware
from linkbudget.api import link_budget
from linkbudget.web import home

# Initialize structured logging
init_application_logging()

logger = logging.getLogger("linkbudget.main")

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="RF link budget calculator with server-side sessions",
    version=settings.VERSION,
)

# Add security headers middleware for XSS protection
app.add_middleware(SecurityHeadersMiddleware)

# Include API and web routers
app.include_router(link_budget.router, prefix="/api", tags=["Link Budget"])
app.include_router(home.router, tags=["Web"])

logger.info(
    "Application configured: session_dir=%s, session_expiry=%ss",
    settings.SESSION_DIR,
    settings.SESSION_EXPIRY_SECONDS,
)


# Health check endpoint
@app.get("/health")
def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "version": settings.VERSION}
