"""Errors raised while placing a marker.

Every failure kind reaches the CLI boundary unchanged; the CLI prints the
message and exits non-zero. A non-2xx HTTP status is not an error.
"""

from __future__ import annotations


class MarkerError(Exception):
    """Base class for every failure the `mark` command can report."""


class MarkerValidationError(MarkerError):
    """The composed description is too long. Raised before any I/O."""


class ConfigurationError(MarkerError):
    """The configuration could not be loaded or a required key is empty."""


class CredentialError(MarkerError):
    """The named credential could not be found or loaded."""


class TransportError(MarkerError):
    """The request could not be built, failed on the network, or was cancelled."""

    def __init__(self, message: str, *, cause: BaseException | None = None, cancelled: bool = False) -> None:
        super().__init__(message)
        self.cause = cause
        self.cancelled = cancelled
