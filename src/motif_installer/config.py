"""Installer configuration and filesystem layout.

The library never decides WHERE the platform lives: apps inject a root and
the layout below is derived from it.

Layout relative to ``root``::

    Motifs/<supplier>/<package>/          extraction target
    Cabin/<cabin>/config/motifs.json      per-cabin registry
    Cabin/<cabin>/public/motif/<name>     -> Motifs/<supplier>/<package>/public
    Cabin/<cabin>/Lens/motif/<name>       -> Motifs/<supplier>/<package>/lens
    tmp/cache/                            cache root
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import field_validator

from .schema import PackageIdentity


class LinkPolicy(str, Enum):
    """What to do when a symlink path is already occupied."""

    SKIP = "skip"
    OVERWRITE = "overwrite"
    ERROR = "error"


class InstallerConfig(BaseModel):
    """Injected installer settings (immutable)."""

    model_config = ConfigDict(frozen=True)

    root: Path
    link_policy: LinkPolicy = LinkPolicy.ERROR
    directory_mode: int = 0o775
    registry_filename: str = "motifs.json"

    @field_validator("root")
    @classmethod
    def _absolute_root(cls, v: Path) -> Path:
        # Symlink targets are built from root; relative ones would dangle
        return v.expanduser().absolute()

    @property
    def motifs_dir(self) -> Path:
        return self.root / "Motifs"

    @property
    def cabins_dir(self) -> Path:
        return self.root / "Cabin"

    @property
    def cache_dir(self) -> Path:
        return self.root / "tmp" / "cache"

    def motif_dir(self, identity: PackageIdentity) -> Path:
        """Extraction directory shared by every cabin using this motif."""
        return self.motifs_dir / identity.supplier / identity.package

    def cabin_dir(self, cabin: str) -> Path:
        return self.cabins_dir / cabin

    def registry_path(self, cabin: str) -> Path:
        return self.cabin_dir(cabin) / "config" / self.registry_filename

    def public_link(self, cabin: str, name: str) -> Path:
        return self.cabin_dir(cabin) / "public" / "motif" / name

    def lens_link(self, cabin: str, name: str) -> Path:
        return self.cabin_dir(cabin) / "Lens" / "motif" / name
