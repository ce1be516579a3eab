"""
Page rendering

Server-rendered HTML for the web and admin surfaces. Templates live in
``src/api/templates``; forms post to the JSON API.
"""

from pathlib import Path
from typing import Optional

import jinja2
from fastapi import status
from fastapi.responses import HTMLResponse

from config import ApplicationConfig

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

environment = jinja2.Environment(
    loader=jinja2.FileSystemLoader(searchpath=str(TEMPLATE_DIR)),
    autoescape=True,
)
environment.globals.update(
    app_name=ApplicationConfig.APP_NAME,
    api_prefix=ApplicationConfig.API_PREFIX.rstrip("/"),
)


def render_page(
    template: str, context: Optional[dict] = None, status_code: int = status.HTTP_200_OK
) -> HTMLResponse:
    """
    Render a named page, e.g. ``web/sign-in`` or ``admin/dashboard``.

    Raises:
        jinja2.TemplateNotFound: no such page
    """
    content = environment.get_template(f"{template}.html").render(**(context or {}))
    return HTMLResponse(content, status_code=status_code)
