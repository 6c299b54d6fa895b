"""
resolvediff.cli - Command-line interface.

Main entry point for the resolvediff CLI tool.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from resolvediff import __version__
from resolvediff.commands import config_cmd, diff_cmd, init
from resolvediff.config.defaults import OUTPUT_FORMATS


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="resolvediff",
        description="Find where two resolved dependency graphs diverge",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  resolvediff diff old.json new.json          # Trails for every changed root
  resolvediff diff old.json new.json -m cargo # Treat `cargo` as modified
  resolvediff diff old.json new.json --json   # Machine-readable output
  cargo metadata --format-version 1 | resolvediff diff old.json -

Configuration:
  resolvediff init              # Create .resolvediff.toml in current directory
  resolvediff config path       # Show config file location
  resolvediff config show       # View all settings

For detailed command help: resolvediff <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"resolvediff {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # diff command
    diff_parser = subparsers.add_parser(
        "diff",
        help="Compare two cargo metadata snapshots",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Snapshots are the JSON printed by `cargo metadata --format-version 1`
(with dependencies resolved). Use `-` to read one of them from stdin.

Each output line is a trail from a workspace member to the first package
where the two graphs disagree, e.g.:
  cargo 0.40.0 -> curl 0.4.25
""",
    )
    diff_parser.add_argument("old", help="Snapshot before the update", metavar="OLD")
    diff_parser.add_argument("new", help="Snapshot after the update", metavar="NEW")
    diff_parser.add_argument(
        "-m",
        "--modified",
        action="append",
        help="Workspace member to treat as modified (can be repeated)",
        metavar="NAME",
    )
    diff_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        help="Output format (default: from config, else text)",
    )
    diff_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Shorthand for --format json",
    )
    diff_parser.add_argument(
        "--no-paths",
        action="store_true",
        help="Do not list affected member directories",
    )
    diff_parser.add_argument(
        "--exit-code",
        action="store_true",
        help="Exit with 1 if any divergence is found",
    )
    diff_parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject snapshots with dangling dependency edges",
    )
    diff_parser.add_argument(
        "--max-depth",
        type=int,
        help="Maximum dependency edges to follow from a root (0 = unlimited)",
        metavar="N",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="View configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    config_show = config_subparsers.add_parser("show", help="Show effective configuration")
    config_show.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    config_subparsers.add_parser("path", help="Show config file location")

    # init command
    init_parser = subparsers.add_parser(
        "init",
        help="Create .resolvediff.toml configuration",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite existing configuration",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install resolvediff[completion]
    # Then activate: eval "$(register-python-argcomplete resolvediff)"
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        # Dispatch to command handlers
        if args.command == "diff":
            return diff_cmd.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        elif args.command == "init":
            return init.run(args)
        elif args.command == "version":
            return version_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


def version_command(args: argparse.Namespace) -> int:
    """Handle version command."""
    print(f"resolvediff {__version__}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
