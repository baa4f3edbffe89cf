"""Cabin discovery - which cabins exist right now.

Direct filesystem checks, no caching: each install takes a fresh snapshot.
"""

import logging
import re

from .config import InstallerConfig

logger = logging.getLogger(__name__)

_INVALID_CABIN_CHARS = re.compile(r"[^A-Za-z0-9_]")


def sanitize_cabin_name(raw: str) -> str:
    """
    Normalize a cabin name from archive metadata.

    Characters outside ``[A-Za-z0-9_]`` become ``_``, then leading and
    trailing underscores are trimmed.

    Examples:
        >>> sanitize_cabin_name("My Zone!!")
        'My_Zone'
        >>> sanitize_cabin_name("__blog__")
        'blog'
        >>> sanitize_cabin_name("!!!")
        ''
    """
    return _INVALID_CABIN_CHARS.sub("_", raw).strip("_")


class CabinDirectory:
    """Query installed cabins under ``<root>/Cabin``."""

    def __init__(self, config: InstallerConfig):
        self.config = config

    def exists(self, cabin: str) -> bool:
        """Check if a cabin directory exists (an empty name never does)."""
        if not cabin:
            return False
        return self.config.cabin_dir(cabin).is_dir()

    def list_cabins(self) -> list[str]:
        """
        Snapshot of installed cabin names.

        Returns:
            Sorted cabin directory names (empty if ``Cabin/`` is missing)
        """
        cabins_dir = self.config.cabins_dir
        if not cabins_dir.is_dir():
            logger.debug(f"No cabins directory at {cabins_dir}")
            return []

        cabins = sorted(item.name for item in cabins_dir.iterdir() if item.is_dir())
        logger.debug(f"Found {len(cabins)} cabins: {cabins}")
        return cabins
