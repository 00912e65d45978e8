#!/usr/bin/env python3
"""Command-line interface for rootalias.

Subcommands:
    - rootalias resolve: Resolve an import specifier from a file
    - rootalias locate: Show the babel root-import configuration in effect

Example:
    $ rootalias resolve "~/utils/helpers" src/app.js
    $ rootalias resolve "@/file" src/app.js --config '{"rootPathPrefix": "@"}'
    $ rootalias locate /my/project/src
"""

import argparse
import json
import logging
import os
import sys

from . import __version__
from .alias_resolver import resolve
from .colors import get_colors
from .config_locator import DEFAULT_CONFIG_FILE, NOT_CONFIGURED, ConfigParseError, locate_config

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def _parse_config_arg(value):
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"--config is not valid JSON: {exc}") from exc


def run_resolve(args) -> int:
    """Run the resolve subcommand and return the exit status."""
    c = get_colors(args.no_color)
    config = _parse_config_arg(args.config)
    file = os.path.abspath(args.file)

    result = resolve(
        args.source,
        file,
        config,
        config_file_name=args.config_file,
        root_dir=args.root,
    )

    if args.json:
        print(json.dumps(result.to_dict()))
    elif result.is_builtin:
        print(c.yellow(f"{args.source} (builtin)"))
    elif result.found:
        print(c.green(result.path))
    else:
        print(c.error(f"{args.source}: not found"))

    return EXIT_FOUND if result.found else EXIT_NOT_FOUND


def run_locate(args) -> int:
    """Run the locate subcommand and return the exit status."""
    c = get_colors(args.no_color)
    located = locate_config(args.directory, args.config_file)

    if located is NOT_CONFIGURED:
        if args.json:
            print(json.dumps({"configured": False}))
        else:
            print(c.yellow("root-import plugin is not configured"))
        return EXIT_NOT_FOUND

    source = str(located.source) if located.source else None
    if args.json:
        payload = {
            "configured": True,
            "root": str(located.root_dir),
            "source": source,
            "entries": located.entries,
        }
        print(json.dumps(payload, indent=2))
        return EXIT_FOUND

    print(f"{c.dim('root:')}    {c.cyan(str(located.root_dir))}")
    print(f"{c.dim('source:')}  {c.cyan(source) if source else '(none, using defaults)'}")
    print(f"{c.dim('entries:')} {json.dumps(located.entries)}")
    return EXIT_FOUND


def main():
    """Command-line interface for rootalias.

    Usage:
        rootalias resolve SOURCE FILE [--config JSON] [--config-file NAME] [--root DIR]
        rootalias locate [DIR] [--config-file NAME]
    """
    parser = argparse.ArgumentParser(
        prog="rootalias",
        description="Resolve babel-plugin-root-import aliases to real files",
        epilog="Run 'rootalias <command> --help' for more information on a command.",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    # rootalias resolve
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve an import specifier",
        description="Resolve an import specifier, rewriting root-import aliases first.",
        epilog='Example: rootalias resolve "~/utils/helpers" src/app.js',
    )
    resolve_parser.add_argument("source", help="Import specifier, e.g. ~/utils or ./helpers")
    resolve_parser.add_argument("file", help="File containing the import")
    resolve_parser.add_argument(
        "--config",
        help='Alias configuration as JSON, e.g. \'[{"rootPathPrefix": "@"}]\'',
    )
    resolve_parser.add_argument(
        "--config-file",
        default=DEFAULT_CONFIG_FILE,
        help=f"Babel config file name (default: {DEFAULT_CONFIG_FILE})",
    )
    resolve_parser.add_argument(
        "--root", help="Project root, and where config discovery starts (default: cwd)"
    )
    resolve_parser.add_argument("--json", action="store_true", help="Output the result as JSON")
    resolve_parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    # rootalias locate
    locate_parser = subparsers.add_parser(
        "locate",
        help="Show the root-import configuration in effect",
        description="Walk up from a directory and print the babel root-import configuration.",
        epilog="Example: rootalias locate /my/project/src",
    )
    locate_parser.add_argument(
        "directory", nargs="?", default=None, help="Directory to start from (default: cwd)"
    )
    locate_parser.add_argument(
        "--config-file",
        default=DEFAULT_CONFIG_FILE,
        help=f"Babel config file name (default: {DEFAULT_CONFIG_FILE})",
    )
    locate_parser.add_argument("--json", action="store_true", help="Output as JSON")
    locate_parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    c = get_colors(getattr(args, "no_color", False))
    try:
        if args.command == "resolve":
            status = run_resolve(args)
        else:
            status = run_locate(args)
    except (ConfigParseError, argparse.ArgumentTypeError) as exc:
        print(c.error(f"Error: {exc}"), file=sys.stderr)
        sys.exit(EXIT_ERROR)

    sys.exit(status)


if __name__ == "__main__":
    main()
