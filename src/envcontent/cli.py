"""Command line interface for envcontent.

USAGE:
    envcontent show [FILE ...] [--format table|json]
    envcontent get KEY [FILE ...]
    envcontent check [FILE ...]
    envcontent run [-f FILE ...] [--no-override] -- COMMAND [ARGS ...]

FILE defaults to ./.env. Several files are merged in order; later files
override earlier ones.

ENVIRONMENT VARIABLES:
    ENVCONTENT_ENCODING          File encoding (default: utf-8)
    ENVCONTENT_REJECT_DUPLICATES "true" to fail on repeated keys
    ENVCONTENT_LOG_LEVEL         DEBUG, INFO, WARNING (default), ERROR, CRITICAL
    ENVCONTENT_LOG_FORMAT        console (default) or json
"""

import argparse
import json
import logging
import subprocess
import sys
from typing import List, Optional, Sequence

from envcontent.config import get_settings
from envcontent.content import EnvContent, LoadResult
from envcontent.exceptions import EmptyMapError, EnvContentError, MissingValueError
from envcontent.logger import create_logger

DEFAULT_FILES = [".env"]


def _report_errors(result: LoadResult) -> None:
    for error in result.errors:
        path = error.details.get("path", "?")
        print(f"ERROR: {path}: {error.message}", file=sys.stderr)


def cmd_show(env: EnvContent, files: List[str], format: str = "table") -> int:
    """Print the merged mapping."""
    result = env.load_files(files)
    _report_errors(result)

    if format == "json":
        print(json.dumps(result.pairs, indent=2, sort_keys=True))
        return 0 if result.ok else 1

    if not result.pairs:
        print("No key value pairs found")
        return 1

    width = max(len(key) for key in result.pairs) + 2
    print(f"\n{'Key':<{width}} Value")
    print("-" * (width + 30))
    for key in sorted(result.pairs):
        print(f"{key:<{width}} {result.pairs[key]}")

    print(f"\nTotal: {len(result.pairs)} pairs from {len(result.files_loaded)} files")
    return 0 if result.ok else 1


def cmd_get(env: EnvContent, key: str, files: List[str]) -> int:
    """Print a single value."""
    result = env.load_files(files)
    _report_errors(result)

    try:
        print(env.get(key))
    except MissingValueError:
        print(f"ERROR: No value for '{key}'", file=sys.stderr)
        return 1
    return 0


def cmd_check(env: EnvContent, files: List[str]) -> int:
    """Validate every file, reporting each problem."""
    failures = 0
    for path in files:
        try:
            pairs = env.load_file(path)
        except EnvContentError as e:
            failures += 1
            where = f" (line {e.details['line']})" if "line" in e.details else ""
            print(f"FAIL {path}{where}: {e.message}")
            continue
        print(f"OK   {path}: {len(pairs)} pairs")

    return 1 if failures else 0


def cmd_run(env: EnvContent, files: List[str], command: List[str], override: bool = True) -> int:
    """Export the loaded pairs and run a command with them."""
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        print("ERROR: No command given", file=sys.stderr)
        return 2

    result = env.load_files(files)
    _report_errors(result)

    try:
        env.export_to_environment(override=override)
    except EmptyMapError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 1

    try:
        return subprocess.run(command).returncode
    except OSError as e:
        print(f"ERROR: Could not run {command[0]}: {e}", file=sys.stderr)
        return 127


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="envcontent",
        description="Inspect and apply .env style key/value files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES:
  Show the merged result of two files:
    %(prog)s show .env .env.local

  Read one value:
    %(prog)s get DATABASE_URL .env

  Validate files in CI:
    %(prog)s check .env.example .env.test

  Run a command with the variables exported:
    %(prog)s run -f .env -- python manage.py migrate
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging on stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    show_parser = subparsers.add_parser("show", help="Print all key/value pairs")
    show_parser.add_argument("files", nargs="*", default=DEFAULT_FILES, help="Files to load")
    show_parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: %(default)s)",
    )

    get_parser = subparsers.add_parser("get", help="Print the value of one key")
    get_parser.add_argument("key", help="Key to look up")
    get_parser.add_argument("files", nargs="*", default=DEFAULT_FILES, help="Files to load")

    check_parser = subparsers.add_parser("check", help="Validate files")
    check_parser.add_argument("files", nargs="*", default=DEFAULT_FILES, help="Files to check")

    run_parser = subparsers.add_parser("run", help="Run a command with the pairs exported")
    run_parser.add_argument(
        "-f", "--file",
        dest="files",
        action="append",
        help="File to load (repeatable, default: .env)",
    )
    run_parser.add_argument(
        "--no-override",
        dest="override",
        action="store_false",
        help="Keep variables that are already set",
    )
    run_parser.add_argument("cmd", nargs=argparse.REMAINDER, help="Command to run")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = get_settings()
    except EnvContentError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    level = logging.DEBUG if args.verbose else getattr(logging, settings.log.level)
    logger = create_logger(
        level=level,
        json_format=settings.log.json_format,
        stream=sys.stderr,
    )
    env = EnvContent(logger=logger)

    if args.command == "show":
        return cmd_show(env, args.files, args.format)
    elif args.command == "get":
        return cmd_get(env, args.key, args.files)
    elif args.command == "check":
        return cmd_check(env, args.files)
    elif args.command == "run":
        return cmd_run(env, args.files or DEFAULT_FILES, args.cmd, args.override)

    return 0


if __name__ == "__main__":
    sys.exit(main())
