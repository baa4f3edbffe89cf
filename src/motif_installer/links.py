"""Symlink wiring between a cabin and an extracted motif.

Each (cabin, display name) gets two links into the shared extraction dir:

    Cabin/<cabin>/public/motif/<name>  ->  Motifs/<supplier>/<package>/public
    Cabin/<cabin>/Lens/motif/<name>    ->  Motifs/<supplier>/<package>/lens

Links are named after the registry display name, not the package name.
The registry is the source of truth; link failures are reported, never fatal
to the install.
"""

import logging
from pathlib import Path

from .config import InstallerConfig
from .config import LinkPolicy
from .exceptions import LinkCreationError
from .schema import PackageIdentity

logger = logging.getLogger(__name__)


def _place_link(link: Path, target: Path, policy: LinkPolicy) -> None:
    """Create one symlink honoring the policy for occupied paths.

    Raises:
        OSError: If the link cannot be created
    """
    occupied = link.is_symlink() or link.exists()

    if occupied and policy == LinkPolicy.SKIP:
        logger.debug(f"Keeping existing {link}")
        return

    if occupied and policy == LinkPolicy.ERROR:
        raise FileExistsError(f"{link} already exists")

    if occupied and policy == LinkPolicy.OVERWRITE:
        temp_link = link.with_name(f".{link.name}.tmp")
        if temp_link.is_symlink() or temp_link.exists():
            temp_link.unlink()
        temp_link.symlink_to(target, target_is_directory=True)
        try:
            temp_link.replace(link)
        except OSError:
            temp_link.unlink(missing_ok=True)
            raise
        logger.debug(f"Replaced {link} -> {target}")
        return

    # Parent directories are not created; a cabin without motif mount points fails here
    link.symlink_to(target, target_is_directory=True)
    logger.debug(f"Linked {link} -> {target}")


def create_links(
    config: InstallerConfig,
    cabin: str,
    identity: PackageIdentity,
    name: str,
) -> list[Path]:
    """
    Wire the public and lens symlinks for a motif in one cabin.

    Both links are attempted even if the first one fails.

    Args:
        config: Installer config (root and link policy)
        cabin: Cabin name
        identity: Motif supplier and package
        name: Resolved registry display name

    Returns:
        The two link paths

    Raises:
        LinkCreationError: If either link could not be placed
    """
    motif_dir = config.motif_dir(identity)
    pairs = [
        (config.public_link(cabin, name), motif_dir / "public"),
        (config.lens_link(cabin, name), motif_dir / "lens"),
    ]

    failures: dict[str, str] = {}
    for link, target in pairs:
        try:
            _place_link(link, target, config.link_policy)
        except OSError as e:
            failures[str(link)] = str(e)

    if failures:
        raise LinkCreationError(
            f"Could not create symlinks for cabin '{cabin}': " + "; ".join(failures.values()),
            context={"cabin": cabin, "name": name, "failures": failures},
        )

    return [link for link, _ in pairs]
