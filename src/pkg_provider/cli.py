"""
Command-line interface for the package provider.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pkg_provider.config import ProviderConfig
from pkg_provider.errors import ProviderError
from pkg_provider.logging import disable, setup_logging
from pkg_provider.provider import OpenBSDProvider

console = Console()

CONFIG_SEARCH_PATHS = [
    ("Current directory", Path.cwd() / "pkgprov.yaml"),
    ("User config", Path.home() / ".config" / "pkgprov" / "config.yaml"),
    ("System config", Path("/etc/pkgprov.yaml")),
]


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="OpenBSD package provider",
        prog="pkgprov",
    )

    # Global options
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress log output",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Provider config file (YAML)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    list_parser = subparsers.add_parser("list", help="List installed packages")
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    version_parser = subparsers.add_parser("version", help="Show installed version of a package")
    version_parser.add_argument("name", help="Package name")

    query_parser = subparsers.add_parser("query", help="Query package state from pkg_info details")
    query_parser.add_argument("name", help="Package name")

    install_parser = subparsers.add_parser("install", help="Install a package")
    install_parser.add_argument("name", help="Package name")
    install_parser.add_argument(
        "-s",
        "--source",
        help="Package directory (ending in /), package file or URL",
    )

    uninstall_parser = subparsers.add_parser("uninstall", help="Remove a package")
    uninstall_parser.add_argument("name", help="Package name")

    # Config command with subcommands
    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(dest="config_command", help="Config commands")
    config_subparsers.add_parser("show", help="Show current configuration")
    config_init_parser = config_subparsers.add_parser("init", help="Initialize a new config file")
    config_init_parser.add_argument(
        "-o",
        "--output",
        default="pkgprov.yaml",
        help="Output file path",
    )
    config_subparsers.add_parser("path", help="Show config file paths")

    args = parser.parse_args(argv)

    if getattr(args, "verbose", False):
        setup_logging("DEBUG")
    else:
        setup_logging("WARNING")
    if getattr(args, "quiet", False):
        disable()

    if args.command == "list":
        cmd_list(args)
    elif args.command == "version":
        cmd_version(args)
    elif args.command == "query":
        cmd_query(args)
    elif args.command == "install":
        cmd_install(args)
    elif args.command == "uninstall":
        cmd_uninstall(args)
    elif args.command == "config":
        cmd_config(args)
    else:
        parser.print_help()


LOAD_ERRORS = (OSError, yaml.YAMLError, ValueError)


def _load_config(path: str | None = None) -> tuple[ProviderConfig, Path | None]:
    """Load config from *path* or the first search path that loads.

    Unreadable or invalid files are reported and skipped; defaults are
    used when nothing loads.
    """
    candidates = [Path(path)] if path else [c for _name, c in CONFIG_SEARCH_PATHS if c.exists()]

    for candidate in candidates:
        try:
            return ProviderConfig.from_yaml(candidate), candidate
        except LOAD_ERRORS as e:
            console.print(f"[yellow]Failed to load {candidate}: {escape(str(e))}[/yellow]")
    return ProviderConfig(), None


def _create_provider(args: argparse.Namespace) -> OpenBSDProvider:
    """Create a provider from CLI args."""
    config, _ = _load_config(getattr(args, "config", None))
    return OpenBSDProvider(config=config)


def cmd_list(args: argparse.Namespace) -> None:
    """List installed packages."""
    provider = _create_provider(args)
    packages = provider.instances()

    if packages is None:
        console.print("[red]Could not run pkg_info[/red]")
        sys.exit(1)

    if args.json:
        console.print_json(json.dumps([p.to_dict() for p in packages], indent=2))
        return

    table = Table(title="Installed Packages")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Flavor", style="dim")

    for package in sorted(packages, key=lambda p: p.name):
        table.add_row(package.name, package.version or "", package.flavor or "")

    console.print(table)
    console.print(f"\n[dim]Total: {len(packages)} packages[/dim]")


def cmd_version(args: argparse.Namespace) -> None:
    """Show the installed version of a package."""
    provider = _create_provider(args)
    version = provider.get_version(args.name)

    if version is None:
        console.print(f"[red]Could not query {args.name}[/red]")
        sys.exit(1)
    if version == "":
        console.print(f"[yellow]{args.name} is not installed[/yellow]")
        sys.exit(1)
    console.print(version)


def cmd_query(args: argparse.Namespace) -> None:
    """Show the package state derived from pkg_info details."""
    provider = _create_provider(args)
    state = provider.query(args.name)

    if state is None:
        console.print(f"[yellow]{args.name} is not installed[/yellow]")
        sys.exit(1)
    console.print(yaml.dump(state, default_flow_style=False, sort_keys=False).rstrip())


def cmd_install(args: argparse.Namespace) -> None:
    """Install a package."""
    provider = _create_provider(args)
    try:
        context = provider.install(args.name, source=args.source)
    except (ProviderError, OSError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    how = "package directory" if context.is_repository else "package reference"
    console.print(f"[green]Installed {args.name}[/green] [dim]({how} {context.source})[/dim]")


def cmd_uninstall(args: argparse.Namespace) -> None:
    """Remove a package."""
    provider = _create_provider(args)
    try:
        provider.uninstall(args.name)
    except ProviderError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)
    console.print(f"[green]Removed {args.name}[/green]")


def cmd_config(args: argparse.Namespace) -> None:
    """Configuration management commands."""
    if args.config_command == "show":
        _config_show(getattr(args, "config", None))
    elif args.config_command == "init":
        _config_init(args.output)
    elif args.config_command == "path":
        _config_path()
    else:
        console.print("[yellow]Usage: pkgprov config <show|init|path>[/yellow]")


def _config_show(path: str | None = None) -> None:
    """Show current configuration."""
    config, loaded_from = _load_config(path)

    if loaded_from is None:
        console.print("[dim]No config file found. Using defaults.[/dim]")
    else:
        console.print(f"[dim]Loaded from: {loaded_from}[/dim]\n")

    console.print("[bold]Current Configuration:[/bold]\n")
    console.print(yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False))


def _config_init(output: str) -> None:
    """Initialize a new config file."""
    output_path = Path(output)

    if output_path.exists():
        console.print(f"[red]File already exists: {output_path}[/red]")
        sys.exit(1)

    with open(output_path, "w") as f:
        yaml.dump(ProviderConfig().to_dict(), f, default_flow_style=False, sort_keys=False)

    console.print(f"[green]Created config file: {output_path}[/green]")


def _config_path() -> None:
    """Show config file search paths."""
    console.print("[bold]Config file search paths:[/bold]\n")

    for name, path in CONFIG_SEARCH_PATHS:
        exists = "[green]✓[/green]" if path.exists() else "[dim]·[/dim]"
        console.print(f"  {exists} {name}: {path}")


if __name__ == "__main__":
    main()
