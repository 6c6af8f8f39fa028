"""Exceptions raised by the wiki core."""


class WikiError(Exception):
    """Base class for wiki errors."""


class InvalidPathError(WikiError):
    """Request path does not name a valid route and page title."""

    def __init__(self, path: str):
        super().__init__(f"Invalid page path: {path!r}")
        self.path = path


class PageNotFoundError(WikiError, LookupError):
    """Page file is missing or unreadable."""

    def __init__(self, title: str, reason: str = ""):
        message = f"Page not found: {title}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.title = title


class StartupError(WikiError):
    """Application could not be initialized."""
