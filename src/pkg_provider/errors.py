"""
Exceptions raised by the package provider.

Errors reading ``/etc/pkg.conf`` itself (permission denied and other OS
failures) are not wrapped: the original ``OSError`` reaches the caller.
"""

from __future__ import annotations

from collections.abc import Sequence


class ProviderError(Exception):
    """Base class for package provider errors."""


class ResolutionError(ProviderError):
    """No install source could be determined."""


class NoSourceSpecified(ResolutionError):
    """No explicit source was given and no pkg.conf exists."""

    def __init__(self, config_path: str) -> None:
        self.config_path = config_path
        super().__init__(
            "You must specify a package source or configure an installpath "
            f"in {config_path}"
        )


class NoValidInstallPath(ResolutionError):
    """pkg.conf exists but has no usable installpath directive."""

    def __init__(self, config_path: str) -> None:
        self.config_path = config_path
        super().__init__(
            f"No valid installpath found in {config_path} and no source was set"
        )


class ExecutionFailure(ProviderError):
    """A package tool could not be run, or exited with a failure status."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        exit_code: int = -1,
        output: str = "",
    ) -> None:
        self.command = list(command)
        self.exit_code = exit_code
        self.output = output
        super().__init__(message)


# Name used when a read-only query command is unavailable
ExecutionUnavailable = ExecutionFailure


class InstallCommandFailed(ProviderError):
    """pkg_add failed for the requested package."""

    def __init__(self, argument: str, detail: str) -> None:
        self.argument = argument
        self.detail = detail
        super().__init__(f"Could not install {argument}: {detail}")


class UninstallCommandFailed(ProviderError):
    """pkg_delete failed for the requested package."""

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Could not remove {name}: {detail}")
