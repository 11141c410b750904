"""
Package tool runtime.
"""

from pkg_provider.runtime.base import ExecutionResult, PackageTools
from pkg_provider.runtime.pkgtools import PkgToolsRuntime

__all__ = ["PackageTools", "ExecutionResult", "PkgToolsRuntime"]
