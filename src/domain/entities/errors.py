"""
Domain Errors

This module defines custom error classes for domain-specific exceptions
raised while decoding and aggregating dense time series.
"""

from typing import Any, Dict, Iterable, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class MalformedPayloadError(DomainError):
    """Raised when a dense payload is structurally invalid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Malformed dense payload: {message}", details)


class RequestFailedError(DomainError):
    """Raised when the data request for a single series fails."""

    def __init__(
        self, key: str, reason: str, details: Optional[Dict[str, Any]] = None
    ):
        self.key = key
        self.reason = reason
        super().__init__(f"Request for {key} failed: {reason}", details)


class NoDataAvailableError(DomainError):
    """Raised when every request of an aggregation failed."""

    def __init__(self, keys: Iterable[str], details: Optional[Dict[str, Any]] = None):
        self.keys = tuple(keys)
        super().__init__(
            "No data available for the requested endpoints",
            {"keys": list(self.keys), **(details or {})},
        )


class AggregatorStateError(DomainError):
    """Raised when an aggregator is used outside of its allowed state."""


class DuplicateKeyError(DomainError, ValueError):
    """Raised when the canonical key order contains the same key twice."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Duplicate series key: {key}", {"key": key})
