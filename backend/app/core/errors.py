"""
Exception hierarchy for the MGNREGA data service.

HTTP mapping (see app.main):
  InputError        -> 400
  NotFound          -> 404
  SourceUnavailable -> never surfaced, the orchestrator switches to fallback data
  anything else     -> 500
"""


class MgnregaError(Exception):
    """Base exception for all application errors."""


class InputError(MgnregaError):
    """Raised for missing or out-of-range caller input."""


class NotFound(MgnregaError):
    """Raised when the store is reachable but the requested record does not exist."""


class SourceUnavailable(MgnregaError):
    """Raised when the persistent store is unreachable or a store call timed out."""
