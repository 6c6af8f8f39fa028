"""Data models for PageWiki."""

from pydantic import BaseModel, Field


class Page(BaseModel):
    """Represents a wiki page.

    The title doubles as the storage key; the body is kept as raw bytes
    exactly as it is stored on disk.
    """

    title: str = Field(min_length=1)
    body: bytes = b""

    @property
    def text(self) -> str:
        """Return the body decoded for display."""
        return self.body.decode("utf-8", errors="replace")
