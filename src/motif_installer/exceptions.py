"""Motif installation exceptions.

Every fatal kind aborts ``install()``; ``LinkCreationError`` is the only one
the installer downgrades to a warning.
"""


class MotifError(Exception):
    """Base exception for motif operations."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (paths, cabin name, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ArchiveOpenError(MotifError):
    """Archive path is unreadable or not a zip container."""


class ExtractionError(MotifError):
    """Archive could not be extracted to its destination."""


class UnknownCabinError(MotifError):
    """Metadata targets a cabin that is not installed."""


class RegistryReadError(MotifError):
    """Cabin registry file exists but cannot be parsed."""


class RegistryWriteError(MotifError):
    """Cabin registry file could not be written."""


class LinkCreationError(MotifError):
    """Symlink wiring failed (non-fatal to an install)."""


class CacheInvalidationError(MotifError):
    """Cache could not be cleared."""
