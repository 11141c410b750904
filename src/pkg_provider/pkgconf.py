"""pkg.conf parsing and install source resolution."""
from __future__ import annotations

from collections.abc import Iterable

from pkg_provider.errors import NoSourceSpecified, NoValidInstallPath
from pkg_provider.logging import get_logger
from pkg_provider.models import INSTALLPATH_KEY, ConfigEntry, PkgConfLookup
from pkg_provider.system import Filesystem, LocalFilesystem

logger = get_logger("pkgconf")


def parse_line(line: str, key: str = INSTALLPATH_KEY) -> ConfigEntry | None:
    """Parse one pkg.conf line, returning an entry only for a usable *key*.

    Supported formats:
    - ``"installpath = /mnt/cdrom/"``
    - ``"installpath=/mnt/cdrom/"``
    - ``"INSTALLPATH = ftp://mirror/pub/OpenBSD/"``

    Leading whitespace of the value is dropped, a single line terminator
    is removed, and any other trailing whitespace is kept.
    """
    if "=" not in line:
        return None

    raw_key, raw_value = line.split("=", 1)
    normalized = raw_key.strip().lower()
    if normalized != key:
        return None

    value = raw_value.lstrip()
    if value.endswith("\r\n"):
        value = value[:-2]
    elif value.endswith("\n"):
        value = value[:-1]

    if not value:
        return None
    return ConfigEntry(key=normalized, value=value)


def find_installpath(lines: Iterable[str]) -> ConfigEntry | None:
    """Return the first usable installpath entry in *lines*."""
    for line in lines:
        entry = parse_line(line)
        if entry is not None:
            return entry
    return None


def read_pkgconf(
    path: str,
    filesystem: Filesystem | None = None,
) -> PkgConfLookup:
    """Read *path* and extract its installpath.

    A missing file is reported through the result. A file that exists
    but cannot be opened raises the underlying ``OSError``.
    """
    fs = filesystem or LocalFilesystem()
    if not fs.exists(path):
        logger.debug("%s does not exist", path)
        return PkgConfLookup.missing()

    entry = find_installpath(fs.read_lines(path))
    if entry is None:
        logger.debug("No usable installpath in %s", path)
    return PkgConfLookup(present=True, entry=entry)


def resolve_source(
    explicit_source: str | None,
    config_path: str,
    filesystem: Filesystem | None = None,
) -> str:
    """Pick the install source for a package.

    An explicit source always wins and is returned untouched, even when
    empty. Otherwise the installpath from *config_path* is used.

    Raises:
        NoSourceSpecified: no explicit source and no config file.
        NoValidInstallPath: config file without a usable installpath.
        OSError: the config file exists but could not be read.
    """
    if explicit_source is not None:
        return explicit_source

    lookup = read_pkgconf(config_path, filesystem)
    if not lookup.present:
        raise NoSourceSpecified(config_path)
    if lookup.entry is None:
        raise NoValidInstallPath(config_path)

    logger.debug("Using installpath %r from %s", lookup.entry.value, config_path)
    return lookup.entry.value
