"""Custom exception hierarchy for pybiocache."""

from __future__ import annotations


class BiocacheError(Exception):
    """Base exception for all pybiocache errors."""


class BiocacheConfigError(BiocacheError):
    """Invalid or missing configuration.

    Raised synchronously when an :class:`~pybiocache.client.OccurrenceMap`
    is configured without a base URL or with an unusable base query.
    """


class BiocacheFetchError(BiocacheError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class BiocacheDataShapeError(BiocacheError):
    """Response body has the wrong top-level shape for its endpoint."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)
