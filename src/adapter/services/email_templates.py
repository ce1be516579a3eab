"""
Email templates

Templates live in ``src/adapter/templates/email`` as ``<name>.txt`` and
``<name>.html``. HTML bodies are autoescaped, text bodies are not.
"""

from datetime import datetime
from pathlib import Path

import jinja2

from config import ApplicationConfig

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"

EXTENSIONS = {"text": "txt", "html": "html"}

environment = jinja2.Environment(
    loader=jinja2.FileSystemLoader(searchpath=str(TEMPLATE_DIR)),
    autoescape=jinja2.select_autoescape(enabled_extensions=("html",)),
    keep_trailing_newline=True,
)


def render(template: str, context: dict, mode: str = "text") -> str:
    """
    Render a named template; mode is "text" or "html".

    Raises:
        jinja2.TemplateNotFound: no such template for that mode
    """
    extension = EXTENSIONS.get(mode)
    if extension is None:
        raise jinja2.TemplateNotFound(f"{template} ({mode})")

    return environment.get_template(f"{template}.{extension}").render(
        app_name=ApplicationConfig.APP_NAME,
        year=datetime.now().year,
        **context,
    )
