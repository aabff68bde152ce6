"""Custom exception types raised by libkit."""

from __future__ import annotations


class LibkitError(RuntimeError):
    """Base class for failures reported by the toolkit."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class EmptySearchTargetError(LibkitError, ValueError):
    """Raised when a substitution is asked to find an empty string."""


class ManifestError(LibkitError):
    """Raised when ``package.json`` cannot be read or lacks a required field."""


class EntryPointError(LibkitError):
    """Raised when the library entry points are inconsistent."""


class ToolError(LibkitError):
    """Raised when an external command cannot be started."""


__all__ = [
    "EmptySearchTargetError",
    "EntryPointError",
    "LibkitError",
    "ManifestError",
    "ToolError",
]
