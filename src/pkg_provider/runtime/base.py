"""
Base package tools interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

from pkg_provider.errors import ExecutionFailure


@dataclass(frozen=True)
class ExecutionResult:
    """Captured outcome of one pkg_* invocation.

    A tool that could not be started or was killed on timeout has
    ``exit_code`` -1 and the reason in ``error``.
    """

    command: list[str]
    exit_code: int
    output: str = ""
    error: str = ""
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    def check(self) -> str:
        """Return stdout, or raise ``ExecutionFailure`` for a failed run."""
        if self.success:
            return self.output
        raise ExecutionFailure(
            f"Execution of '{' '.join(self.command)}' returned {self.exit_code}: {self.error.strip()}",
            command=self.command,
            exit_code=self.exit_code,
            output=self.output,
        )


class PackageTools(ABC):
    """
    Abstract base class for running the pkg_* tools.

    Every method raises ``ExecutionFailure`` when the tool cannot be run
    or reports failure. Empty output is not a failure.
    """

    @abstractmethod
    def listing(self) -> Iterable[str]:
        """Output lines of ``pkg_info -a``."""
        pass

    @abstractmethod
    def query(self, name: str) -> str:
        """Output of ``pkg_info -I <name>``."""
        pass

    @abstractmethod
    def detail(self, name: str) -> str:
        """Output of ``pkg_info <name>``."""
        pass

    @abstractmethod
    def install(self, argument: str) -> None:
        """
        Run ``pkg_add`` with a single package argument.

        Args:
            argument: A package name (looked up in ``PKG_PATH``) or a
                direct package file or URL
        """
        pass

    @abstractmethod
    def delete(self, name: str) -> None:
        """Run ``pkg_delete <name>``."""
        pass
