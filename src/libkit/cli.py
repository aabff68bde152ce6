"""Command line interface for the libkit utilities."""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.markup import escape

from .config import ToolkitConfig
from .customize import CustomizationSession
from .distribution import write_distribution
from .entries import discover_entries
from .errors import LibkitError
from .manifest import ATTRIBUTE_FIELDS, AttributeSet, PackageManifest
from .prompts import AttributePrompter
from .runner import ToolRunner
from .stubs import copy_stubs
from .declarations import build_types
from .validators import validators_for
from .watcher import watch

LOGGER = logging.getLogger(__name__)

INTERRUPTED_EXIT_CODE = 255
SEPARATOR = "-" * 66


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="libkit", description="Tooling for the Vue component library starter-kit"
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Project directory containing package.json (defaults to the current directory)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    subparsers = parser.add_subparsers(dest="command", required=True)

    customize_parser = subparsers.add_parser(
        "customize", help="rename the library and rewrite every file mentioning it"
    )
    for field in ATTRIBUTE_FIELDS:
        customize_parser.add_argument(f"--{field}", help=f"New {field} (used as the prompt default)")
    customize_parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Apply the values given on the command line without prompting",
    )

    subparsers.add_parser("entries", help="list the entry points declared with @module")
    subparsers.add_parser("package", help="write dist/package.json and copy README/LICENSE")
    subparsers.add_parser("stubs", help="copy .stub files from src into dist")
    subparsers.add_parser("types", help="generate .d.ts files with vue-tsc and copy them into dist")
    subparsers.add_parser("docs", help="run the docs:build script (API pages come from that script)")

    dev_parser = subparsers.add_parser("dev", help="rebuild the library whenever sources change")
    dev_parser.add_argument(
        "--script",
        default="generate",
        help="Package script executed on every rebuild",
    )

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _requested_attributes(args: argparse.Namespace, current: AttributeSet) -> AttributeSet:
    values = {field: getattr(args, field) or getattr(current, field) for field in ATTRIBUTE_FIELDS}
    return AttributeSet(**values)


def _validate(current: AttributeSet, requested: AttributeSet) -> None:
    validators = validators_for(current)
    for field, value in requested.items():
        result = validators[field](value)
        if result is not True:
            raise LibkitError(f"invalid {field}: {result}")


def _handle_customize(args: argparse.Namespace, config: ToolkitConfig, console: Console) -> int:
    console.print(
        "[yellow]Please wait while the index of files which will need to be customized is built...[/yellow]"
    )
    session = CustomizationSession.start_sync(config)
    console.print(f"[green]Index built[/green] ({len(session.index)} files)")

    requested = _requested_attributes(args, session.original)
    if args.yes:
        _validate(session.original, requested)
        approved = requested
    else:
        approved = AttributePrompter(console).run(session.original, defaults=requested)
    session.approve(approved)

    report = session.apply_sync()
    console.print(f"[green]Updated[/green] [cyan]{escape(report.manifest_path.name)}[/cyan]")
    for path in report.updated:
        console.print(f"[green]Updated[/green] [cyan]{escape(str(path.relative_to(config.root)))}[/cyan]")
    console.print(f"[yellow]{SEPARATOR}[/yellow]")
    console.print("[green]All files have been updated[/green]")
    console.print(f"[yellow]{SEPARATOR}[/yellow]")
    return 0


def _handle_entries(config: ToolkitConfig, console: Console) -> int:
    manifest = PackageManifest.load(config.manifest_path)
    entries = discover_entries(config.src_dir, manifest.name)
    for key, path in sorted(entries.items()):
        console.print(f"[cyan]{escape(key)}[/cyan] {escape(str(path.relative_to(config.root)))}")
    return 0


def _handle_package(config: ToolkitConfig, console: Console) -> int:
    destination = write_distribution(config)
    console.print(f"[green]Wrote[/green] [cyan]{escape(str(destination.relative_to(config.root)))}[/cyan]")
    return 0


def _handle_stubs(config: ToolkitConfig, console: Console) -> int:
    copied = copy_stubs(config)
    console.print(f"[green]{len(copied)} .stub files copied successfully.[/green]")
    return 0


def _handle_types(config: ToolkitConfig, console: Console) -> int:
    console.print("[blue]Generating Typescript Type Definition files...[/blue]")
    copied = build_types(config)
    console.print(f"[green]{len(copied)} Typescript Type Definition files copied successfully.[/green]")
    return 0


def _handle_docs(config: ToolkitConfig, console: Console) -> int:
    console.print("[yellow]Starting Documentation Process...[/yellow]")
    runner = ToolRunner(config)
    exit_code = runner.run(*runner.script("docs:build"))
    if exit_code == 0:
        console.print("[green]Documentation Process has finished[/green]")
    return exit_code


def _handle_dev(args: argparse.Namespace, config: ToolkitConfig, console: Console) -> int:
    runner = ToolRunner(config)

    async def rebuild(changed: list[Path]) -> None:
        if changed:
            LOGGER.info("rebuilding after %s changed files", len(changed))
        exit_code = await runner.run_async(*runner.script(args.script))
        if exit_code != 0:
            LOGGER.error("%s exited with code %s", args.script, exit_code)

    async def develop() -> None:
        await rebuild([])
        await watch(config, rebuild)

    console.print("[green]Dev Process has started[/green]")
    console.print("[yellow]Press Ctrl+C to exit[/yellow]")
    asyncio.run(develop())
    return 0


def _raise_interrupt(signum: int, frame: object) -> None:  # noqa: ARG001
    raise KeyboardInterrupt


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)
    console = Console()
    signal.signal(signal.SIGTERM, _raise_interrupt)

    try:
        config = ToolkitConfig.from_root(args.root)
        if args.command == "customize":
            return _handle_customize(args, config, console)
        if args.command == "entries":
            return _handle_entries(config, console)
        if args.command == "package":
            return _handle_package(config, console)
        if args.command == "stubs":
            return _handle_stubs(config, console)
        if args.command == "types":
            return _handle_types(config, console)
        if args.command == "docs":
            return _handle_docs(config, console)
        if args.command == "dev":
            return _handle_dev(args, config, console)
    except KeyboardInterrupt:
        console.print("[red]Process aborted[/red]")
        return INTERRUPTED_EXIT_CODE
    except (LibkitError, OSError, ValueError) as exc:
        LOGGER.error("%s", exc)
        return 1

    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
