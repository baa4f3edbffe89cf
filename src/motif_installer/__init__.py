"""motif-installer - Install motif packages into platform cabins.

Apps inject policy (root path, link policy, cache invalidation); the library
provides the install mechanism.
"""

from .archive import MotifArchive
from .archive import open_archive
from .cabins import CabinDirectory
from .cabins import sanitize_cabin_name
from .cache import FileCacheInvalidator
from .config import InstallerConfig
from .config import LinkPolicy
from .exceptions import ArchiveOpenError
from .exceptions import CacheInvalidationError
from .exceptions import ExtractionError
from .exceptions import LinkCreationError
from .exceptions import MotifError
from .exceptions import RegistryReadError
from .exceptions import RegistryWriteError
from .exceptions import UnknownCabinError
from .installer import MotifInstaller
from .installer import install_motif
from .links import create_links
from .protocols import CacheInvalidatorProtocol
from .protocols import InstallFileProtocol
from .registry import MotifRegistry
from .registry import RegistryStore
from .registry import resolve_name
from .schema import InstallResult
from .schema import MotifMetadata
from .schema import PackageIdentity
from .schema import RegistryEntry

__all__ = [
    # Configuration
    "InstallerConfig",
    "LinkPolicy",
    # Data models
    "PackageIdentity",
    "MotifMetadata",
    "RegistryEntry",
    "InstallResult",
    # Installation
    "MotifInstaller",
    "install_motif",
    "InstallFileProtocol",
    "CacheInvalidatorProtocol",
    "FileCacheInvalidator",
    # Components
    "MotifArchive",
    "open_archive",
    "MotifRegistry",
    "RegistryStore",
    "resolve_name",
    "CabinDirectory",
    "sanitize_cabin_name",
    "create_links",
    # Exceptions
    "MotifError",
    "ArchiveOpenError",
    "ExtractionError",
    "UnknownCabinError",
    "RegistryReadError",
    "RegistryWriteError",
    "LinkCreationError",
    "CacheInvalidationError",
]

__version__ = "0.1.0"
