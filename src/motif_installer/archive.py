"""Motif archive access - open, extract, read comment metadata.

Archives are zip files; their JSON metadata lives in the archive-level
comment, not in a member file.
"""

import logging
import lzma
import os
import shutil
import zipfile
import zlib
from pathlib import Path

from .exceptions import ArchiveOpenError
from .exceptions import ExtractionError
from .schema import MotifMetadata

logger = logging.getLogger(__name__)


class MotifArchive:
    """
    Opened motif archive bound to one filesystem path.

    Use as a context manager so the handle is released on every exit path:

        >>> with open_archive(Path("/tmp/theme.zip")) as archive:
        ...     archive.extract_all(Path("/srv/airship/Motifs/acme/dark-theme"))
        ...     metadata = archive.read_metadata()
    """

    def __init__(self, path: Path, zip_file: zipfile.ZipFile):
        self.path = path
        self._zip = zip_file

    def __enter__(self) -> "MotifArchive":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._zip.close()

    @property
    def closed(self) -> bool:
        return self._zip.fp is None

    def extract_all(self, destination: Path, mode: int = 0o775) -> None:
        """
        Extract every entry beneath destination.

        Creates destination (with parents) if absent. Files already written
        are left in place when a later entry fails.

        Args:
            destination: Extraction directory
            mode: Permission bits for created directories

        Raises:
            ExtractionError: On any unsafe entry or I/O failure
        """
        try:
            destination.mkdir(mode=mode, parents=True, exist_ok=True)
            base = destination.resolve()

            for info in self._zip.infolist():
                name = info.filename
                if not name:
                    continue

                target = (base / name).resolve()
                if target != base and not str(target).startswith(str(base) + os.sep):
                    raise ExtractionError(
                        f"Archive entry escapes destination: {name!r}",
                        context={"archive": str(self.path), "entry": name},
                    )

                if info.is_dir():
                    target.mkdir(mode=mode, parents=True, exist_ok=True)
                    continue

                target.parent.mkdir(mode=mode, parents=True, exist_ok=True)
                with self._zip.open(info, "r") as src, open(target, "wb") as out:
                    shutil.copyfileobj(src, out)

            logger.debug(f"Extracted {len(self._zip.infolist())} entries to {destination}")

        except ExtractionError:
            raise
        except (OSError, EOFError, RuntimeError, zipfile.BadZipFile, zlib.error, lzma.LZMAError) as e:
            raise ExtractionError(
                f"Could not extract {self.path} to {destination}: {e}",
                context={"archive": str(self.path), "destination": str(destination)},
            ) from e

    def read_metadata(self) -> MotifMetadata:
        """Parse the archive comment; malformed or absent comments give empty metadata."""
        return MotifMetadata.from_comment(self._zip.comment)


def open_archive(path: Path | str) -> MotifArchive:
    """
    Open a motif archive.

    Args:
        path: Path to the downloaded zip file

    Returns:
        MotifArchive (caller closes it, preferably via ``with``)

    Raises:
        ArchiveOpenError: If the path is unreadable or not a zip archive
    """
    path = Path(path)
    try:
        zip_file = zipfile.ZipFile(path, "r")
    except (OSError, zipfile.BadZipFile) as e:
        raise ArchiveOpenError(f"Could not open archive {path}: {e}", context={"archive": str(path)}) from e

    logger.debug(f"Opened archive {path}")
    return MotifArchive(path, zip_file)
