"""File-based cache invalidation.

The platform keeps rendered templates, hashes and static output under
``<root>/tmp/cache/<kind>/``. Clearing empties each known kind directory
but keeps the directory itself.
"""

import logging
import shutil
from pathlib import Path

from .exceptions import CacheInvalidationError

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SUBDIRS = (
    "csp_hash",
    "csp_static",
    "hash",
    "markdown",
    "static",
    "twig",
)


class FileCacheInvalidator:
    """Empties cache subdirectories (implements CacheInvalidatorProtocol)."""

    def __init__(self, cache_dir: Path, subdirs: tuple[str, ...] = DEFAULT_CACHE_SUBDIRS):
        self.cache_dir = cache_dir
        self.subdirs = subdirs

    def clear_cache(self) -> bool:
        """
        Delete everything inside each cache subdirectory.

        Missing subdirectories are skipped.

        Returns:
            True once all present subdirectories are empty

        Raises:
            CacheInvalidationError: If an entry cannot be removed
        """
        removed = 0
        for subdir in self.subdirs:
            kind_dir = self.cache_dir / subdir
            if not kind_dir.is_dir():
                continue

            try:
                for item in kind_dir.iterdir():
                    if item.is_dir() and not item.is_symlink():
                        shutil.rmtree(item)
                    else:
                        item.unlink()
                    removed += 1
            except OSError as e:
                raise CacheInvalidationError(
                    f"Could not clear cache directory {kind_dir}: {e}",
                    context={"cache_dir": str(kind_dir)},
                ) from e

        logger.debug(f"Cleared {removed} cache entries under {self.cache_dir}")
        return True
