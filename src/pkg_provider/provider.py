"""OpenBSD package provider: install, remove and query packages."""
from __future__ import annotations

from pkg_provider.config import ProviderConfig
from pkg_provider.errors import (
    ExecutionFailure,
    InstallCommandFailed,
    UninstallCommandFailed,
)
from pkg_provider.logging import get_logger
from pkg_provider.models import InstallContext, PackageRecord
from pkg_provider.parsers import parse_detail, parse_listing, parse_version
from pkg_provider.pkgconf import resolve_source
from pkg_provider.runtime.base import PackageTools
from pkg_provider.runtime.pkgtools import PkgToolsRuntime
from pkg_provider.system import (
    Environment,
    Filesystem,
    LocalFilesystem,
    ProcessEnvironment,
    bound_env,
)

logger = get_logger("provider")


class OpenBSDProvider:
    """Adapter between "ensure this package is present" and pkg_add/pkg_info.

    Install sources:
    - explicit ``source`` argument, used verbatim
    - ``installpath`` in ``/etc/pkg.conf`` otherwise

    A source ending in ``/`` is a package directory and is handed to
    pkg_add through ``PKG_PATH``; anything else is passed as the
    package argument itself.
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        tools: PackageTools | None = None,
        filesystem: Filesystem | None = None,
        environment: Environment | None = None,
    ) -> None:
        self.config = config or ProviderConfig()
        self.tools = tools or PkgToolsRuntime.from_config(self.config)
        self.filesystem = filesystem or LocalFilesystem()
        self.environment = environment or ProcessEnvironment()

    def instances(self) -> list[PackageRecord] | None:
        """List installed packages.

        Returns ``None`` when pkg_info could not be run, which is not the
        same as an empty list.
        """
        try:
            return list(parse_listing(self.tools.listing()))
        except ExecutionFailure as e:
            logger.warning("Could not list packages: %s", e)
            return None

    def get_version(self, name: str) -> str | None:
        """Installed version of *name*, ``""`` if absent, ``None`` if unknown."""
        try:
            output = self.tools.query(name)
        except ExecutionFailure as e:
            logger.warning("Could not query %s: %s", name, e)
            return None
        return parse_version(output)

    def query(self, name: str) -> dict[str, str] | None:
        """Return ``{"ensure": version}`` for an installed package, else None."""
        try:
            info = self.tools.detail(name)
        except ExecutionFailure as e:
            logger.warning("Could not get details for %s: %s", name, e)
            return None

        version = parse_detail(info, name)
        if version is None:
            return None
        return {"ensure": version}

    def resolve_source(self, source: str | None = None) -> str:
        return resolve_source(source, self.config.pkg_conf_path, self.filesystem)

    def install(self, name: str, source: str | None = None) -> InstallContext:
        """Install *name* from *source* or the configured installpath.

        Raises:
            NoSourceSpecified: no source and no pkg.conf.
            NoValidInstallPath: pkg.conf without a usable installpath.
            OSError: pkg.conf could not be read.
            InstallCommandFailed: pkg_add failed.
        """
        context = InstallContext(package=name, source=self.resolve_source(source))
        logger.debug(
            "Installing %s from %r (%s)",
            name,
            context.source,
            "repository" if context.is_repository else "direct",
        )

        try:
            if context.is_repository:
                var = self.config.repository_env_var
                with bound_env(self.environment, var, context.source):
                    context.repository_bound = True
                    self.tools.install(context.argument)
            else:
                self.tools.install(context.argument)
        except ExecutionFailure as e:
            raise InstallCommandFailed(context.argument, str(e)) from e

        logger.info("Installed %s", name)
        return context

    def uninstall(self, name: str) -> None:
        try:
            self.tools.delete(name)
        except ExecutionFailure as e:
            raise UninstallCommandFailed(name, str(e)) from e
        logger.info("Removed %s", name)
