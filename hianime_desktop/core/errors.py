"""Exceptions raised by the HiAnime fetch and extract pipeline."""
from typing import Optional


class HianimeError(Exception):
    """Base exception for HiAnime scraping errors."""

    pass


class TransportError(HianimeError):
    """Raised when a request fails or returns a non-success HTTP status."""

    def __init__(self, url: str, status: Optional[int] = None, message: Optional[str] = None):
        self.url = url
        self.status = status
        if message is None:
            if status is not None:
                message = f"HTTP error {status} for {url}"
            else:
                message = f"Request failed for {url}"
        super().__init__(message)


class ParseError(HianimeError):
    """Raised when an episode sources payload is not valid JSON."""

    pass
