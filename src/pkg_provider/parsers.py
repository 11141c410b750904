"""
Parsers for pkg_info output.

``pkg_info -a`` and ``pkg_info -I`` print one package per line, the
package stem first::

    bash-3.1.17         GNU Bourne Again Shell
    vim-7.0.42-no_x11   vi clone, many additional features

``pkg_info <name>`` prints a detail block headed by
``Information for bash-3.1.17``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from pkg_provider.logging import get_logger
from pkg_provider.models import PackageRecord

logger = get_logger("parsers")

# name-version[-flavor]; the version is the first dash-separated part starting with a digit
PACKAGE_PATTERN = re.compile(r"^(.*)-(\d[^-]*)-?(\w*)(.*)$")

_PKGDB_NOISE = "Updating the pkgdb"


def _lines(text: str | Iterable[str]) -> Iterable[str]:
    if isinstance(text, str):
        return text.splitlines()
    return text


def parse_stem(stem: str) -> PackageRecord | None:
    """Split a ``name-version[-flavor]`` stem, or return None."""
    match = PACKAGE_PATTERN.match(stem)
    if not match:
        return None
    name, version, flavor, _rest = match.groups()
    return PackageRecord(name=name, version=version, flavor=flavor or None)


def parse_listing(text: str | Iterable[str]) -> Iterator[PackageRecord]:
    """
    Yield a record for each package in a ``pkg_info -a`` listing.

    Lines that do not look like a package are skipped with a warning;
    they never stop the rest of the listing from being reported.
    """
    for line in _lines(text):
        fields = line.split()
        if not fields:
            continue

        record = parse_stem(fields[0])
        if record is not None:
            yield record
        elif _PKGDB_NOISE not in line:
            logger.warning("Failed to match line %r", line.rstrip("\n"))


def parse_version(text: str | Iterable[str]) -> str:
    """Return the version from ``pkg_info -I`` output, or ``""`` if none."""
    for record in parse_listing(text):
        if record.version:
            return record.version
    return ""


def parse_detail(text: str, name: str) -> str | None:
    """Return the installed version of *name* from ``pkg_info <name>`` output."""
    if not text:
        return None
    match = re.search(
        rf"Information for (inst:)?{re.escape(name)}-(\S+)",
        text,
    )
    if match is None:
        return None
    return match.group(2)
