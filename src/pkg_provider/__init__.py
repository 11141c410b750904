"""
pkg-provider - drive OpenBSD's pkg_add / pkg_info / pkg_delete from Python.

Resolves where a package should come from (an explicit source or the
``installpath`` in ``/etc/pkg.conf``), installs it, and parses pkg_info
output into package records.

Example:
    from pkg_provider import OpenBSDProvider

    provider = OpenBSDProvider()

    # Install from /etc/pkg.conf's installpath
    provider.install("bash")

    # Install from a package directory (passed through PKG_PATH)
    provider.install("bash", source="ftp://mirror/pub/OpenBSD/5.2/packages/amd64/")

    # Query
    provider.get_version("bash")   # "3.1.17", "" if absent, None if unknown
    provider.query("bash")         # {"ensure": "3.1.17"}
    [p.name for p in provider.instances()]
"""

from pkg_provider.config import ProviderConfig
from pkg_provider.errors import (
    ExecutionFailure,
    ExecutionUnavailable,
    InstallCommandFailed,
    NoSourceSpecified,
    NoValidInstallPath,
    ProviderError,
    ResolutionError,
    UninstallCommandFailed,
)
from pkg_provider.models import (
    ConfigEntry,
    InstallContext,
    PackageRecord,
    PkgConfLookup,
    is_repository,
)
from pkg_provider.parsers import parse_detail, parse_listing, parse_version
from pkg_provider.pkgconf import read_pkgconf, resolve_source
from pkg_provider.provider import OpenBSDProvider
from pkg_provider.runtime import ExecutionResult, PackageTools, PkgToolsRuntime

__version__ = "0.1.0"

__all__ = [
    # Provider
    "OpenBSDProvider",
    "ProviderConfig",
    # Models
    "PackageRecord",
    "ConfigEntry",
    "PkgConfLookup",
    "InstallContext",
    "is_repository",
    # Parsing and resolution
    "parse_listing",
    "parse_version",
    "parse_detail",
    "read_pkgconf",
    "resolve_source",
    # Runtime
    "PackageTools",
    "PkgToolsRuntime",
    "ExecutionResult",
    # Errors
    "ProviderError",
    "ResolutionError",
    "NoSourceSpecified",
    "NoValidInstallPath",
    "ExecutionFailure",
    "ExecutionUnavailable",
    "InstallCommandFailed",
    "UninstallCommandFailed",
]
