"""Exceptions raised by the content store."""

from __future__ import annotations

from pathlib import Path


class PostkitError(Exception):
    """Base class for all postkit errors."""


class NotFound(PostkitError):
    """No document matches the requested identifier."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Article {identifier!r} not found")
        self.identifier = identifier


class DocumentError(PostkitError):
    """A document exists but cannot be read as an article."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
