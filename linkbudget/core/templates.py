"""Shared template configuration for pages rendered by the service"""

from pathlib import Path
from typing import Any

from fastapi.templating import Jinja2Templates

from linkbudget.core.schemas.link_budget import LINK_BUDGET_FIELDS

# Get package directory
PACKAGE_DIR = Path(__file__).parent.parent

# Create shared templates instance (autoescaping is on for .html templates)
templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))

# Register global values
templates.env.globals["link_budget_fields"] = LINK_BUDGET_FIELDS
templates.env.globals["back_link"] = "/index.html"


def render_page(template_name: str, **context: Any) -> str:
    """Render a template to a string outside of a request/response cycle."""
    return templates.get_template(template_name).render(**context)


# Export for use in routes
__all__ = ["templates", "render_page"]
