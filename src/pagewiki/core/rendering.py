"""Template rendering for wiki pages."""

import logging
from pathlib import Path

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from pagewiki.core.errors import StartupError
from pagewiki.core.models import Page

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class PageRenderer:
    """Renders the view and edit presentations of a page.

    Templates are loaded and parsed once, when the renderer is built.
    A missing or broken template raises StartupError instead of failing
    on the first request.
    """

    TEMPLATES = ("view.html", "edit.html")

    def __init__(self, directory: Path | None = None, app_title: str = "PageWiki"):
        self.directory = directory or DEFAULT_TEMPLATES_DIR
        self.app_title = app_title
        self.templates = Jinja2Templates(directory=str(self.directory))
        for name in self.TEMPLATES:
            try:
                self.templates.get_template(name)
            except TemplateError as exc:
                raise StartupError(
                    f"Cannot load template {name!r} from {self.directory}: {exc}"
                ) from exc

    def render(self, request: Request, name: str, page: Page) -> Response:
        """Render template ``<name>.html`` for a page.

        Rendering errors become a 500 response carrying the error text.
        """
        try:
            return self.templates.TemplateResponse(
                request,
                f"{name}.html",
                {"page": page, "app_title": self.app_title},
            )
        except TemplateError as exc:
            logger.error("Failed to render %s for %s: %s", name, page.title, exc)
            return PlainTextResponse(str(exc), status_code=500)
