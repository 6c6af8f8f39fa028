"""Request path validation and handler dispatch.

Every page route goes through :func:`make_handler`, which checks the
request path against :data:`VALID_PATH` before the page operation runs.
Page titles end up in filenames, so anything outside ``[a-zA-Z0-9]`` is
rejected here.
"""

import logging
import re
from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response

from pagewiki.core.errors import InvalidPathError

logger = logging.getLogger(__name__)

VALID_PATH = re.compile(r"^/(edit|save|view)/([a-zA-Z0-9]+)$")

PageOperation = Callable[[Request, str], Awaitable[Response]]
Endpoint = Callable[[Request], Awaitable[Response]]


def get_title(path: str) -> str:
    """Extract the page title from a request path.

    Raises InvalidPathError if the path is not ``/<route>/<title>``.
    """
    match = VALID_PATH.fullmatch(path)
    if match is None:
        raise InvalidPathError(path)
    return match.group(2)


def not_found() -> Response:
    """Plain 404 response."""
    return PlainTextResponse("404 page not found", status_code=404)


def make_handler(fn: PageOperation) -> Endpoint:
    """Wrap a page operation so it only runs for valid paths.

    The returned endpoint takes just the request, so FastAPI never
    treats the title as a query parameter.
    """

    async def handler(request: Request) -> Response:
        try:
            title = get_title(request.scope["path"])
        except InvalidPathError as exc:
            logger.debug("%s", exc)
            return not_found()
        return await fn(request, title)

    handler.__name__ = fn.__name__
    handler.__doc__ = fn.__doc__
    return handler
