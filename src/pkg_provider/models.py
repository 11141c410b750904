"""Package provider data models."""
from __future__ import annotations

from dataclasses import dataclass

INSTALLPATH_KEY = "installpath"
SEPARATOR = "/"


def is_repository(source: str) -> bool:
    """Return True if *source* names a package directory rather than a package.

    Only the final character matters; the filesystem is never consulted.
    """
    return source.endswith(SEPARATOR)


@dataclass(frozen=True)
class PackageRecord:
    """One installed package, as reported by ``pkg_info``."""

    name: str
    version: str | None = None
    flavor: str | None = None

    @property
    def full_name(self) -> str:
        """Rebuild the ``name-version[-flavor]`` stem."""
        parts = [self.name]
        if self.version:
            parts.append(self.version)
        if self.flavor:
            parts.append(self.flavor)
        return "-".join(parts)

    def to_dict(self) -> dict[str, str | None]:
        return {
            "name": self.name,
            "ensure": self.version,
            "flavor": self.flavor,
            "full_name": self.full_name,
        }


@dataclass(frozen=True)
class ConfigEntry:
    """A ``key = value`` directive from pkg.conf."""

    key: str  # lower-cased
    value: str  # trailing whitespace preserved


@dataclass(frozen=True)
class PkgConfLookup:
    """Outcome of reading pkg.conf.

    ``present`` is False when the file does not exist at all, which is a
    different failure from a file that exists without an installpath.
    """

    present: bool
    entry: ConfigEntry | None = None

    @classmethod
    def missing(cls) -> PkgConfLookup:
        return cls(present=False)


@dataclass
class InstallContext:
    """State for a single install call."""

    package: str
    source: str
    repository_bound: bool = False

    @property
    def is_repository(self) -> bool:
        return is_repository(self.source)

    @property
    def argument(self) -> str:
        """The sole package argument handed to pkg_add."""
        return self.package if self.is_repository else self.source
