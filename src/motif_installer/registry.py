"""Cabin motif registry - ``Cabin/<cabin>/config/motifs.json``.

Maps display name to install metadata:

    {
        "dark-theme": {
            "path": "acme/dark-theme"
        },
        "dark-theme-2": {
            "path": "other/dark-theme"
        }
    }

Display names are unique per cabin; collisions get ``-2``, ``-3``, ... so the
same motif can be ``theme`` in one cabin and ``theme-2`` in another.
"""

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterable
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pydantic import ValidationError

from .config import InstallerConfig
from .exceptions import RegistryReadError
from .exceptions import RegistryWriteError
from .schema import RegistryEntry

logger = logging.getLogger(__name__)


def resolve_name(existing: Iterable[str], desired: str) -> str:
    """
    Pick the first unused display name.

    Args:
        existing: Display names already taken
        desired: Preferred name

    Returns:
        ``desired`` if free, otherwise ``desired-N`` for the lowest N >= 2 that is free

    Example:
        >>> resolve_name({"theme", "theme-2", "theme-3"}, "theme")
        'theme-4'
    """
    taken = set(existing)
    if desired not in taken:
        return desired

    n = 2
    while f"{desired}-{n}" in taken:
        n += 1
    return f"{desired}-{n}"


class MotifRegistry:
    """Ordered display-name -> RegistryEntry mapping for one cabin."""

    def __init__(self, entries: dict[str, RegistryEntry] | None = None):
        self._entries: dict[str, RegistryEntry] = dict(entries or {})

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, name: str) -> RegistryEntry | None:
        return self._entries.get(name)

    def names(self) -> list[str]:
        return list(self._entries)

    def resolve_name(self, desired: str) -> str:
        return resolve_name(self._entries, desired)

    def put(self, name: str, path: str) -> None:
        """Insert or replace an entry (in memory only)."""
        self._entries[name] = RegistryEntry(path=path)

    def to_json(self) -> str:
        """Serialize with 4-space indent in insertion order, newline-terminated."""
        data = {name: entry.model_dump() for name, entry in self._entries.items()}
        return json.dumps(data, indent=4, ensure_ascii=False) + "\n"

    @classmethod
    def from_json(cls, text: str) -> "MotifRegistry":
        """
        Parse registry JSON.

        Raises:
            ValueError: If the text is not a JSON object of ``{name: {"path": ...}}``
        """
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        try:
            entries = {name: RegistryEntry.model_validate(entry) for name, entry in data.items()}
        except ValidationError as e:
            raise ValueError(str(e)) from e
        return cls(entries)


class RegistryStore:
    """
    Load and save cabin registries (with injected config).

    Saves go through a temp file in the same directory followed by
    ``os.replace``, so readers see either the old or the new file.
    """

    # One lock per registry path touched; bounded by the number of cabins
    _locks: dict[Path, threading.Lock] = {}
    _locks_guard = threading.Lock()

    def __init__(self, config: InstallerConfig):
        self.config = config

    @contextmanager
    def locked(self, cabin: str) -> Iterator[None]:
        """Hold the in-process exclusive lock for a cabin's registry."""
        path = self.config.registry_path(cabin)
        with self._locks_guard:
            lock = self._locks.setdefault(path, threading.Lock())
        with lock:
            yield

    def load(self, cabin: str) -> MotifRegistry:
        """
        Load a cabin's registry.

        Args:
            cabin: Cabin name

        Returns:
            MotifRegistry (empty if the file does not exist)

        Raises:
            RegistryReadError: If the file exists but cannot be read or parsed
        """
        path = self.config.registry_path(cabin)
        if not path.is_file():
            logger.debug(f"No registry for cabin '{cabin}' at {path}, starting empty")
            return MotifRegistry()

        try:
            registry = MotifRegistry.from_json(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise RegistryReadError(
                f"Could not read motif registry for cabin '{cabin}': {e}",
                context={"cabin": cabin, "path": str(path)},
            ) from e

        logger.debug(f"Loaded {len(registry)} motifs from {path}")
        return registry

    def save(self, cabin: str, registry: MotifRegistry) -> None:
        """
        Persist a cabin's registry.

        The ``config/`` directory is created if missing, but never the cabin
        directory itself.

        Raises:
            RegistryWriteError: On any I/O failure
        """
        path = self.config.registry_path(cabin)
        temp_path: Path | None = None
        try:
            path.parent.mkdir(mode=self.config.directory_mode, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                temp_path = Path(f.name)
                f.write(registry.to_json())
            os.replace(temp_path, path)
            temp_path = None
        except OSError as e:
            raise RegistryWriteError(
                f"Could not write motif registry for cabin '{cabin}': {e}",
                context={"cabin": cabin, "path": str(path)},
            ) from e
        finally:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)

        logger.debug(f"Saved {len(registry)} motifs to {path}")
