"""PageWiki FastAPI application."""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from pagewiki.config import Settings, settings as default_settings
from pagewiki.core.errors import PageNotFoundError, StartupError
from pagewiki.core.models import Page
from pagewiki.core.rendering import PageRenderer
from pagewiki.core.routing import make_handler
from pagewiki.core.storage import FileStorage, Storage

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the server process."""
    logging.basicConfig(
        level=getattr(logging, level.strip().upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_renderer(request: Request) -> PageRenderer:
    return request.app.state.renderer


async def root(request: Request, path: str):
    """Greeting for anything outside the wiki routes."""
    return PlainTextResponse(f"Hi there, I love {path}!")


async def view_page(request: Request, title: str) -> Response:
    """View a wiki page."""
    try:
        page = await get_storage(request).load(title)
    except PageNotFoundError as exc:
        # Page doesn't exist - redirect to edit to create it
        logger.info("%s, redirecting to editor", exc)
        return RedirectResponse(url=f"/edit/{title}", status_code=302)
    return get_renderer(request).render(request, "view", page)


async def edit_page(request: Request, title: str) -> Response:
    """Edit page form."""
    try:
        page = await get_storage(request).load(title)
    except PageNotFoundError:
        # New page
        page = Page(title=title)
    return get_renderer(request).render(request, "edit", page)


async def save_page(request: Request, title: str) -> Response:
    """Save page content from the edit form."""
    form = await request.form()
    body = form.get("body", "")
    if not isinstance(body, str):
        body = ""
    page = Page(title=title, body=body.encode("utf-8"))
    try:
        await get_storage(request).save(page)
    except OSError as exc:
        logger.error("Failed to save page %s: %s", title, exc)
        return PlainTextResponse(str(exc), status_code=500)
    return RedirectResponse(url=f"/view/{title}", status_code=302)


def create_app(
    settings: Settings | None = None,
    storage: Storage | None = None,
) -> FastAPI:
    """Build the application.

    Templates are parsed here, so a broken template directory raises
    StartupError before any request is served.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Serving wiki pages from %s", settings.data_dir.resolve())
        yield

    app = FastAPI(
        title=settings.app_title,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.storage = storage or FileStorage(settings.data_dir)
    app.state.renderer = PageRenderer(settings.templates_dir, settings.app_title)

    # Page routes take everything under their prefix; the dispatcher
    # rejects bad titles with a 404.
    app.add_api_route(
        "/view/{rest:path}", make_handler(view_page), methods=["GET"]
    )
    app.add_api_route(
        "/edit/{rest:path}", make_handler(edit_page), methods=["GET"]
    )
    app.add_api_route(
        "/save/{rest:path}", make_handler(save_page), methods=["POST"]
    )
    # Must stay last: it matches every path.
    app.add_api_route("/{path:path}", root, methods=["GET"])
    return app


def run() -> None:
    """Entry point: start the server on the configured host and port."""
    configure_logging(default_settings.log_level)
    try:
        app = create_app(default_settings)
    except StartupError as exc:
        logger.critical("Startup failed: %s", exc)
        sys.exit(1)
    logger.info(
        "Starting server on http://%s:%d", default_settings.host, default_settings.port
    )
    uvicorn.run(
        app,
        host=default_settings.host,
        port=default_settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
