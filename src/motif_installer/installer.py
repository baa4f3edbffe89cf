"""Motif installation - extract, register per cabin, wire links, clear cache.

Apps inject:
- config: where the platform root is and how to treat occupied link paths
- identity: supplier/package of the motif being installed
- cache: how to invalidate caches afterwards

Process:
1. Open the archive
2. Extract to Motifs/<supplier>/<package>/
3. Read comment metadata; a ``cabin`` key targets one cabin, otherwise all
   cabins present right now are targeted
4. Per cabin (sorted): load registry, resolve display name, wire symlinks
   (non-fatal), insert entry, save registry (fatal)
5. Clear caches; that result is the result of the install

A registry save failure stops the install without rolling back cabins that
were already saved.
"""

import logging
from pathlib import Path

from .archive import open_archive
from .cabins import CabinDirectory
from .cabins import sanitize_cabin_name
from .config import InstallerConfig
from .exceptions import CacheInvalidationError
from .exceptions import LinkCreationError
from .exceptions import MotifError
from .exceptions import UnknownCabinError
from .links import create_links
from .protocols import CacheInvalidatorProtocol
from .protocols import InstallFileProtocol
from .registry import RegistryStore
from .schema import InstallResult
from .schema import MotifMetadata
from .schema import PackageIdentity

logger = logging.getLogger(__name__)


class MotifInstaller:
    """
    Installs one motif package into the platform's cabins.

    Example:
        >>> config = InstallerConfig(root=Path("/srv/airship"))
        >>> installer = MotifInstaller(
        ...     config=config,
        ...     identity=PackageIdentity(supplier="acme", package="dark-theme"),
        ...     cache=FileCacheInvalidator(config.cache_dir),
        ... )
        >>> result = installer.install(Path("/tmp/theme.zip"))
        >>> result.cabins
        {'admin': 'dark-theme', 'main': 'dark-theme'}
    """

    def __init__(
        self,
        config: InstallerConfig,
        identity: PackageIdentity,
        cache: CacheInvalidatorProtocol,
        cabins: CabinDirectory | None = None,
        registry_store: RegistryStore | None = None,
    ):
        self.config = config
        self.identity = identity
        self.cache = cache
        self.cabins = cabins or CabinDirectory(config)
        self.registry_store = registry_store or RegistryStore(config)

    def install(self, install_file: InstallFileProtocol | Path | str) -> InstallResult:
        """
        Run the full install protocol.

        Args:
            install_file: Downloaded archive (path, or object with a ``path``)

        Returns:
            InstallResult; ``success`` is True only if extraction, scope
            resolution, every registry save and cache invalidation succeeded.
            The failure reason is logged at error level and kept in ``error``.
        """
        path = Path(getattr(install_file, "path", install_file))
        warnings: list[str] = []
        installed: dict[str, str] = {}

        try:
            logger.info(f"Installing motif {self.identity.install_path} from {path}")

            with open_archive(path) as archive:
                motif_dir = self.config.motif_dir(self.identity)
                archive.extract_all(motif_dir, mode=self.config.directory_mode)
                metadata = archive.read_metadata()

            for cabin in self._resolve_targets(metadata):
                name = self._add_to_cabin(cabin, warnings)
                if name is not None:
                    installed[cabin] = name

            if not self.cache.clear_cache():
                raise CacheInvalidationError("Cache invalidation reported failure")

        except MotifError as e:
            logger.error(f"Could not install motif {self.identity.install_path}: {e.message}")
            return InstallResult(success=False, cabins=installed, warnings=warnings, error=e.message)

        logger.info(f"Successfully installed motif {self.identity.install_path} into {len(installed)} cabins")
        return InstallResult(success=True, cabins=installed, warnings=warnings)

    def _resolve_targets(self, metadata: MotifMetadata) -> list[str]:
        """Cabins to install into: the declared one, or a fresh snapshot of all."""
        if metadata.is_global:
            cabins = self.cabins.list_cabins()
            logger.debug(f"Global motif, targeting cabins: {cabins}")
            return cabins

        cabin = sanitize_cabin_name(metadata.cabin or "")
        if not self.cabins.exists(cabin):
            raise UnknownCabinError(
                f'Cabin "{cabin}" is not installed',
                context={"cabin": cabin, "declared": metadata.cabin},
            )

        logger.debug(f"Cabin-specific motif, targeting cabin: {cabin}")
        return [cabin]

    def _add_to_cabin(self, cabin: str, warnings: list[str]) -> str | None:
        """
        Register the motif in one cabin.

        Returns:
            Display name used, or None if the cabin disappeared since enumeration

        Raises:
            RegistryReadError: If the existing registry is unreadable
            RegistryWriteError: If the registry cannot be saved
        """
        if not self.cabins.exists(cabin):
            message = f'Cabin "{cabin}" disappeared before the motif could be added'
            logger.warning(message)
            warnings.append(message)
            return None

        with self.registry_store.locked(cabin):
            registry = self.registry_store.load(cabin)
            name = registry.resolve_name(self.identity.package)

            try:
                create_links(self.config, cabin, self.identity, name)
            except LinkCreationError as e:
                # Registry stays the source of truth
                logger.warning(e.message)
                warnings.append(e.message)

            registry.put(name, self.identity.install_path)
            self.registry_store.save(cabin, registry)

        logger.debug(f"Registered {self.identity.install_path} as '{name}' in cabin '{cabin}'")
        return name


def install_motif(
    install_file: InstallFileProtocol | Path | str,
    identity: PackageIdentity,
    config: InstallerConfig,
    cache: CacheInvalidatorProtocol,
) -> InstallResult:
    """
    Install a motif with default cabin discovery and registry storage.

    Args:
        install_file: Downloaded archive
        identity: Motif supplier and package
        config: Installer config (app policy)
        cache: Cache invalidator

    Returns:
        InstallResult
    """
    return MotifInstaller(config=config, identity=identity, cache=cache).install(install_file)
