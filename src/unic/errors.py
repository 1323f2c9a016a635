"""Failure types for unic.

Every failure carries the full user-facing message, already prefixed with the
program name, so the CLI only has to print ``str(error)``.
"""

from typing import Optional

PROG_NAME = "unic"


def describe_os_error(error: OSError) -> str:
    """Return the human-readable reason of an OSError (without filename)."""
    return error.strerror or str(error)


class UnicError(Exception):
    """Base class for all unic failures."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path

    @classmethod
    def from_os_error(cls, error: OSError, path: Optional[str] = None) -> "UnicError":
        """Build a failure from an OSError, naming the offending path if known."""
        reason = describe_os_error(error)
        if path is None:
            return cls(f"{PROG_NAME}: {reason}", path)
        return cls(f"{PROG_NAME}: {path}: {reason}", path)


class SourceOpenError(UnicError):
    """Input could not be opened. Raised before any processing."""


class SinkOpenError(UnicError):
    """Output could not be created. Raised before any processing."""


class StreamError(UnicError):
    """Read or write failure while lines were being processed."""
