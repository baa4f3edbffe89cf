"""Protocols for installer collaborators.

Apps provide implementations; the installer only requires these interfaces.
"""

from pathlib import Path
from typing import Protocol
from typing import runtime_checkable


@runtime_checkable
class InstallFileProtocol(Protocol):
    """A downloaded, already-verified motif archive.

    The update pipeline hands one of these to the installer. A plain
    ``Path`` is accepted as well.
    """

    @property
    def path(self) -> Path:
        """Filesystem path of the archive."""
        ...


class CacheInvalidatorProtocol(Protocol):
    """Clears platform caches once an install has finished.

    Example implementations:
    - FileCacheInvalidator: empties cache directories under ``tmp/cache``
    - An app-specific hook that also flushes a shared cache server
    """

    def clear_cache(self) -> bool:
        """Invalidate caches.

        Returns:
            True if caches were cleared

        Raises:
            CacheInvalidationError: If clearing failed
        """
        ...
