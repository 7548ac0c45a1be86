"""Command-line parsing for ``bd``."""

from __future__ import annotations

import argparse
import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from brewdock.verbosity import Verbosity

_VERSION = "0.1.0"


class Command(enum.Enum):
    """The subcommands ``bd`` understands."""

    INSTALL = "install"
    UPDATE = "update"
    UPGRADE = "upgrade"
    OUTDATED = "outdated"
    SEARCH = "search"
    INFO = "info"
    LIST = "list"
    CLEANUP = "cleanup"
    DOCTOR = "doctor"


@dataclass(frozen=True)
class Cli:
    """Parsed command line."""

    command: Command
    formulae: tuple[str, ...] = ()
    pattern: Optional[str] = None
    formula: Optional[str] = None
    dry_run: bool = False
    verbose: bool = False
    quiet: bool = False

    def verbosity(self) -> Verbosity:
        if self.verbose:
            return Verbosity.VERBOSE
        if self.quiet:
            return Verbosity.QUIET
        return Verbosity.NORMAL


def _global_options() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--dry-run",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Show what would be done without executing.",
    )
    group = common.add_mutually_exclusive_group()
    group.add_argument(
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Increase log detail.",
    )
    group.add_argument(
        "--quiet",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Suppress non-error output.",
    )
    return common


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for ``bd``; global flags work before or after the subcommand."""
    common = _global_options()
    parser = argparse.ArgumentParser(
        prog="bd", description="Fast Homebrew bottle installer.", parents=[common]
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_VERSION}")
    commands = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    def add(command: Command, help_text: str) -> argparse.ArgumentParser:
        return commands.add_parser(command.value, help=help_text, parents=[common])

    add(Command.INSTALL, "Install formulae.").add_argument(
        "formulae", nargs="+", help="Formula names to install."
    )
    add(Command.UPDATE, "Update formula index.")
    add(Command.UPGRADE, "Upgrade installed formulae.").add_argument(
        "formulae", nargs="*", help="Formula names to upgrade (all if empty)."
    )
    add(Command.OUTDATED, "Show outdated formulae.").add_argument(
        "formulae", nargs="*", help="Formula names to check (all if empty)."
    )
    add(Command.SEARCH, "Search available formulae.").add_argument(
        "pattern", help="Search pattern (substring match)."
    )
    add(Command.INFO, "Show formula information.").add_argument(
        "formula", help="Formula name."
    )
    add(Command.LIST, "List installed formulae.")
    add(Command.CLEANUP, "Remove stale caches and downloads.")
    add(Command.DOCTOR, "Check for potential problems.")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> Cli:
    """Parse ``argv`` (the process arguments by default).

    Invalid usage exits through :class:`SystemExit` with status 2.
    """
    parser = build_parser()
    namespace = parser.parse_args(None if argv is None else list(argv))
    verbose = getattr(namespace, "verbose", False)
    quiet = getattr(namespace, "quiet", False)
    if verbose and quiet:
        parser.error("argument --quiet: not allowed with argument --verbose")
    return Cli(
        command=Command(namespace.command),
        formulae=tuple(getattr(namespace, "formulae", ())),
        pattern=getattr(namespace, "pattern", None),
        formula=getattr(namespace, "formula", None),
        dry_run=getattr(namespace, "dry_run", False),
        verbose=verbose,
        quiet=quiet,
    )