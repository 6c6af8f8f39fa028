"""Storage abstraction for wiki pages."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from pagewiki.core.errors import PageNotFoundError
from pagewiki.core.models import Page

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Abstract base class for page storage."""

    @abstractmethod
    async def load(self, title: str) -> Page:
        """Load a page by title. Raises PageNotFoundError if it can't be read."""
        ...

    @abstractmethod
    async def save(self, page: Page) -> None:
        """Save a page, replacing any existing content."""
        ...


class FileStorage(Storage):
    """File-based storage implementation.

    Each page is a single file holding exactly the page body.
    File naming: <title>.txt

    There is no locking; concurrent saves of the same title race and the
    last write wins.
    """

    SUFFIX = ".txt"
    FILE_MODE = 0o600

    def __init__(self, base_path: Path):
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)

    def page_path(self, title: str) -> Path:
        """Get full path for a page."""
        return self.base_path / f"{title}{self.SUFFIX}"

    async def load(self, title: str) -> Page:
        """Load a page."""
        path = self.page_path(title)
        try:
            body = path.read_bytes()
        except OSError as exc:
            raise PageNotFoundError(title, exc.strerror or str(exc)) from exc
        return Page(title=title, body=body)

    async def save(self, page: Page) -> None:
        """Save a page.

        Raises OSError if the file can't be written. Writes are not atomic.
        """
        path = self.page_path(page.title)
        path.touch(mode=self.FILE_MODE, exist_ok=True)
        path.write_bytes(page.body)
        logger.info("Saved page %s (%d bytes)", page.title, len(page.body))
