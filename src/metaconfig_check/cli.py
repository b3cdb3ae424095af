"""Command line interface for metaconfig-check."""

import argparse
import logging
import sys
from pathlib import Path

from .checker import MetaconfigChecker
from .exceptions import MetaconfigError
from .flatten import render_config
from .models import Severity
from .settings import load_settings
from .utils import location

_LOGGER_NAME = "metaconfig_check"


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Send metaconfig_check log records to stderr."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when main() runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[metaconfig] %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        type=Path,
        default=argparse.SUPPRESS,
        help="Project root containing the imports directory (defaults to current directory).",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=argparse.SUPPRESS,
        help="Settings file (defaults to <root>/.metaconfig.yaml when present).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Increase log verbosity for troubleshooting.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metaconfig-check",
        description="Resolve metaconfig inheritance and report override problems.",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Report issues for one or more metaconfig files.")
    _add_common_options(check_parser)
    check_parser.add_argument("paths", nargs="+", type=Path, help="Metaconfig files to check.")

    flatten_parser = subparsers.add_parser("flatten", help="Print the effective configuration of a file.")
    _add_common_options(flatten_parser)
    flatten_parser.add_argument("path", type=Path, help="Metaconfig file to flatten.")

    locate_parser = subparsers.add_parser("locate", help="Print the file an import name refers to.")
    _add_common_options(locate_parser)
    locate_parser.add_argument("name", help="Import name, with or without the leading '!'.")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint; returns the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(getattr(args, "verbose", False)))

    root = getattr(args, "root", None) or Path.cwd()
    try:
        settings = load_settings(root, getattr(args, "settings", None))
    except MetaconfigError as exc:
        parser.exit(2, f"{exc}\n")

    checker = MetaconfigChecker(settings)

    if args.command == "check":
        failed = False
        for path in args.paths:
            try:
                issues = checker.analyze(path)
            except MetaconfigError as exc:
                print(f"{path}: error: {exc}", file=sys.stderr)
                failed = True
                continue
            for issue in issues:
                where = location(issue.file, issue.line, settings.root)
                print(f"{where}: {issue.severity.name.lower()}: {issue.message}")
                failed = failed or issue.severity is Severity.ERROR
        return 1 if failed else 0

    if args.command == "flatten":
        try:
            config = checker.effective_config(args.path)
        except MetaconfigError as exc:
            parser.exit(1, f"{exc}\n")
        sys.stdout.write(render_config(config))
        return 0

    if args.command == "locate":
        target = checker.locate_import_target(args.name.strip().removeprefix("!"))
        if target is None:
            print(f"Import '{args.name}' not found", file=sys.stderr)
            return 1
        print(target)
        return 0

    parser.exit(2, "Unknown command\n")  # pragma: no cover - argparse enforces choices


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
