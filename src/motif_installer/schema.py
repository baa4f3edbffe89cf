"""Motif data models - package identity, archive metadata, install results.

Metadata lives in the zip archive comment as a JSON object. Only ``cabin``
is recognized; everything else is ignored.
"""

import json
import logging

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator

logger = logging.getLogger(__name__)


class PackageIdentity(BaseModel):
    """Supplier and package name, as handed over by the update pipeline."""

    model_config = ConfigDict(frozen=True)

    supplier: str
    package: str

    @property
    def install_path(self) -> str:
        """Registry ``path`` value: ``<supplier>/<package>``."""
        return f"{self.supplier}/{self.package}"


class MotifMetadata(BaseModel):
    """
    Metadata embedded in the archive comment.

    ``cabin`` set means the motif targets a single cabin; ``None`` means
    global (install into every cabin).
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    cabin: str | None = None

    @field_validator("cabin", mode="before")
    @classmethod
    def _numbers_as_names(cls, v: object) -> object:
        # {"cabin": 123} names cabin "123"; booleans are not names
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def is_global(self) -> bool:
        return self.cabin is None

    @classmethod
    def from_comment(cls, comment: bytes | str | None) -> "MotifMetadata":
        """
        Parse an archive comment into metadata.

        Absent, non-JSON or non-object comments yield empty (global) metadata.
        A ``cabin`` key that is present but not a name yields ``cabin=""``,
        which no installed cabin matches, so the install is never widened
        to every cabin.

        Args:
            comment: Raw archive comment

        Returns:
            MotifMetadata instance
        """
        if not comment:
            return cls()

        if isinstance(comment, bytes):
            try:
                comment = comment.decode("utf-8")
            except UnicodeDecodeError as e:
                logger.debug(f"Archive comment is not UTF-8, ignoring: {e}")
                return cls()

        try:
            data = json.loads(comment)
        except json.JSONDecodeError as e:
            logger.debug(f"Archive comment is not JSON, ignoring: {e}")
            return cls()

        if not isinstance(data, dict):
            logger.debug(f"Archive comment is not a JSON object, ignoring: {type(data).__name__}")
            return cls()

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            if data.get("cabin") is None:
                logger.debug(f"Archive comment has invalid fields, ignoring: {e}")
                return cls()
            logger.warning(f"Archive comment has an unusable cabin value: {data['cabin']!r}")
            return cls(cabin="")


class RegistryEntry(BaseModel):
    """One display-name entry in a cabin's ``motifs.json``."""

    # Keys written by other tooling (e.g. enabled flags) survive a load/save cycle
    model_config = ConfigDict(extra="allow")

    path: str


class InstallResult(BaseModel):
    """Outcome of one ``install()`` call.

    ``cabins`` maps each cabin whose registry was saved to the display name
    used there. ``warnings`` collects non-fatal problems (link failures,
    vanished cabins). ``error`` holds the abort reason when ``success`` is False.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    cabins: dict[str, str] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None

    def __bool__(self) -> bool:
        return self.success
