"""Shared pytest fixtures for pkg-provider tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from pkg_provider import OpenBSDProvider, ProviderConfig
from pkg_provider.errors import ExecutionFailure
from pkg_provider.runtime.base import PackageTools
from pkg_provider.system import Environment, Filesystem

FIXTURES = Path(__file__).parent / "fixtures"
PKG_CONF = "/etc/pkg.conf"


class FakeFilesystem(Filesystem):
    """In-memory filesystem holding pkg.conf."""

    def __init__(self) -> None:
        self.files: dict[str, list[str]] = {}
        self.errors: dict[str, OSError] = {}
        self.reads: list[str] = []

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.errors

    def read_lines(self, path: str) -> list[str]:
        self.reads.append(path)
        if path in self.errors:
            raise self.errors[path]
        return list(self.files[path])


class FakeEnvironment(Environment):
    """Dict-backed environment that records every change."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.vars: dict[str, str] = dict(initial or {})
        self.changes: list[tuple[str, str, str | None]] = []

    def get(self, name: str) -> str | None:
        return self.vars.get(name)

    def set(self, name: str, value: str) -> None:
        self.changes.append(("set", name, value))
        self.vars[name] = value

    def unset(self, name: str) -> None:
        self.changes.append(("unset", name, None))
        self.vars.pop(name, None)


class FakeTools(PackageTools):
    """Scripted pkg_* tools.

    Outputs are plain strings; an ``ExecutionFailure`` instance is raised
    instead of returned.
    """

    def __init__(self, environment: FakeEnvironment) -> None:
        self.environment = environment
        self.listing_output: str | ExecutionFailure = ""
        self.query_output: dict[str, str | ExecutionFailure] = {}
        self.detail_output: dict[str, str | ExecutionFailure] = {}
        self.install_error: ExecutionFailure | None = None
        self.delete_error: ExecutionFailure | None = None
        self.installs: list[tuple[str, str | None]] = []
        self.deletes: list[str] = []
        self.on_install: Callable[[str], None] | None = None

    @staticmethod
    def _result(value: str | ExecutionFailure) -> str:
        if isinstance(value, ExecutionFailure):
            raise value
        return value

    def listing(self) -> list[str]:
        return self._result(self.listing_output).splitlines()

    def query(self, name: str) -> str:
        return self._result(self.query_output.get(name, ""))

    def detail(self, name: str) -> str:
        return self._result(self.detail_output.get(name, ""))

    def install(self, argument: str) -> None:
        # PKG_PATH as pkg_add would see it
        self.installs.append((argument, self.environment.get("PKG_PATH")))
        if self.on_install:
            self.on_install(argument)
        if self.install_error:
            raise self.install_error

    def delete(self, name: str) -> None:
        self.deletes.append(name)
        if self.delete_error:
            raise self.delete_error


@pytest.fixture
def pkginfo_list() -> str:
    return (FIXTURES / "pkginfo.list").read_text()


@pytest.fixture
def pkginfo_detail() -> str:
    return (FIXTURES / "pkginfo.detail").read_text()


@pytest.fixture
def filesystem() -> FakeFilesystem:
    return FakeFilesystem()


@pytest.fixture
def environment() -> FakeEnvironment:
    return FakeEnvironment()


@pytest.fixture
def tools(environment: FakeEnvironment) -> FakeTools:
    return FakeTools(environment)


@pytest.fixture
def provider(
    tools: FakeTools,
    filesystem: FakeFilesystem,
    environment: FakeEnvironment,
) -> OpenBSDProvider:
    """Provider wired entirely to fakes."""
    return OpenBSDProvider(
        config=ProviderConfig(pkg_conf_path=PKG_CONF),
        tools=tools,
        filesystem=filesystem,
        environment=environment,
    )


@pytest.fixture
def pkgconf(filesystem: FakeFilesystem) -> Callable[[list[str]], None]:
    """Install *lines* as the contents of /etc/pkg.conf."""

    def _write(lines: list[str]) -> None:
        filesystem.files[PKG_CONF] = lines

    return _write
