"""Exceptions raised at the edges: affiliate API transport and clipboard access."""

from __future__ import annotations


class AfflinkError(Exception):
    """Base class for afflink errors."""


class AffiliateApiError(AfflinkError):
    """The affiliate API call failed (network error or non-2xx response)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidJsonError(AffiliateApiError):
    """A successful response whose body could not be decoded as JSON."""


class MalformedResponseError(AffiliateApiError):
    """The response body was valid JSON without a ``data`` array."""


class ClipboardError(AfflinkError):
    """Copying to the system clipboard failed."""
