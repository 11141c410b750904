"""
Subprocess runtime for the pkg_* tools.
"""

from __future__ import annotations

import shutil
import subprocess
import time
from collections.abc import Sequence

from pkg_provider.config import ProviderConfig
from pkg_provider.errors import ExecutionFailure
from pkg_provider.logging import get_logger
from pkg_provider.runtime.base import ExecutionResult, PackageTools

logger = get_logger("runtime")


class PkgToolsRuntime(PackageTools):
    """
    Runs pkg_info, pkg_add and pkg_delete with ``subprocess``.

    Children inherit the current process environment, which is how a
    bound ``PKG_PATH`` reaches pkg_add.
    """

    def __init__(
        self,
        pkg_info: str = "pkg_info",
        pkg_add: str = "pkg_add",
        pkg_delete: str = "pkg_delete",
        timeout: float | None = None,
        pkg_add_flags: Sequence[str] = (),
    ) -> None:
        self.pkg_info = pkg_info
        self.pkg_add = pkg_add
        self.pkg_delete = pkg_delete
        self.timeout = timeout
        self.pkg_add_flags = list(pkg_add_flags)

    @classmethod
    def from_config(cls, config: ProviderConfig) -> PkgToolsRuntime:
        return cls(
            pkg_info=config.pkg_info,
            pkg_add=config.pkg_add,
            pkg_delete=config.pkg_delete,
            timeout=config.command_timeout_seconds,
            pkg_add_flags=config.pkg_add_flags,
        )

    def listing(self) -> list[str]:
        return self._checked([self.pkg_info, "-a"]).splitlines()

    def query(self, name: str) -> str:
        return self._checked([self.pkg_info, "-I", name])

    def detail(self, name: str) -> str:
        return self._checked([self.pkg_info, name])

    def install(self, argument: str) -> None:
        self._checked([self.pkg_add, *self.pkg_add_flags, argument])

    def delete(self, name: str) -> None:
        self._checked([self.pkg_delete, name])

    def command(self, tool: str) -> str:
        """Resolve *tool* to an executable path."""
        path = shutil.which(tool)
        if path is None:
            raise ExecutionFailure(f"Command not found: {tool}", command=[tool])
        return path

    def run(self, args: list[str]) -> ExecutionResult:
        """Run a tool and capture its output without raising on failure."""
        start = time.perf_counter()
        argv = [self.command(args[0]), *args[1:]]
        logger.debug("Executing %s", " ".join(argv))

        try:
            completed = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            return self._not_run(args, f"Command timed out after {self.timeout}s", start)
        except OSError as e:
            return self._not_run(args, str(e), start)

        error = ""
        if completed.returncode != 0:
            error = self._decode_output(completed.stderr) or f"Command failed with exit code {completed.returncode}"
        return ExecutionResult(
            command=list(args),
            exit_code=completed.returncode,
            output=self._decode_output(completed.stdout),
            error=error,
            duration_ms=(time.perf_counter() - start) * 1000,
        )

    def _not_run(self, args: list[str], error: str, start: float) -> ExecutionResult:
        return ExecutionResult(
            command=list(args),
            exit_code=-1,
            error=error,
            duration_ms=(time.perf_counter() - start) * 1000,
        )

    def _checked(self, args: list[str]) -> str:
        result = self.run(args)
        logger.debug("%s finished in %.0fms (exit %d)", args[0], result.duration_ms, result.exit_code)
        return result.check()

    def _decode_output(self, data: bytes | None) -> str:
        if not data:
            return ""
        return data.decode("utf-8", errors="replace")
