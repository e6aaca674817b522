"""Search the start directory and its parents for a file and print its path."""

from __future__ import annotations

import argparse
from typing import Any

from lazi.core import lazi

from findup import configure_logging
from findup import consts
from findup.consts import ERROR
from findup.consts import OK
from findup.consts import LogLevels
from findup.locator import LocatorError
from findup.locator import SearchOptions
from findup.locator import search
from findup.settings import SettingsError
from findup.settings import get_setting
from findup.settings import load_settings

# lazi imports only actually imported when used,
# helps to speed up loading and the use of optional imports.
with lazi:  # type: ignore[attr-defined] # lazi has incorrectly typed code
    import importlib.metadata

    import structlog
    from rich.console import Console
    from rich.text import Text

logger = structlog.getLogger("findup")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="findup",
        description=__doc__,
        usage="%(prog)s [options] filename",
    )
    parser.add_argument(
        "filename",
        help="Name of the file or directory to search for",
    )
    parser.add_argument(
        "--flag-file",
        "-f",
        metavar="NAME",
        help="Stop searching if a directory contains this file or directory name",
    )
    parser.add_argument(
        "--stop-directory",
        "-s",
        metavar="PATH",
        help="Stop searching at this directory",
    )
    parser.add_argument(
        "--start-directory",
        "-d",
        metavar="PATH",
        help="Start searching at this directory (default '.')",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Do not print error messages",
    )
    parser.add_argument(
        "--config",
        "-c",
        metavar="PATH",
        help="Read default options from this TOML settings file",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"%(prog)s {_installed_version()}",
    )

    loglevel_group = parser.add_mutually_exclusive_group()
    loglevel_group.add_argument(
        "--log-warning",
        "-v",
        help="Enable logging",
        action="store_const",
        const=LogLevels.WARNING,
        default=LogLevels.ERROR,
        dest="loglevel",
    )
    loglevel_group.add_argument(
        "--log-info",
        "-vv",
        help="Enable verbose logging",
        action="store_const",
        const=LogLevels.INFO,
        default=LogLevels.ERROR,
        dest="loglevel",
    )
    loglevel_group.add_argument(
        "--log-debug",
        "-vvv",
        help="Enable very verbose logging (all)",
        action="store_const",
        const=LogLevels.DEBUG,
        default=LogLevels.ERROR,
        dest="loglevel",
    )
    return parser


def _installed_version() -> str:
    try:
        return consts.version()
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def _report_error(message: str, *, quiet: bool) -> None:
    if quiet:
        return
    console = Console(stderr=True, highlight=False, soft_wrap=True)
    text = Text("ERROR: ", style="bold red")
    text.append(message)
    console.print(text)


def _as_optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _build_options(args: argparse.Namespace, settings: dict[str, Any]) -> SearchOptions:
    """Combine command-line flags with configured defaults; flags win."""
    start = args.start_directory or get_setting(settings, "search", "start_directory")
    flag_file = args.flag_file or get_setting(settings, "search", "flag_file")
    stop = args.stop_directory or get_setting(settings, "search", "stop_directory")
    return SearchOptions(
        target_file=args.filename,
        start_directory=_as_optional_str(start) or ".",
        stop_marker=_as_optional_str(flag_file),
        stop_directory=_as_optional_str(stop),
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point for the findup command."""
    args = _build_parser().parse_args(argv)
    configure_logging(args.loglevel)
    logger.debug("finished parsing arguments", args=vars(args))

    quiet = bool(args.quiet)
    try:
        settings = load_settings(args.config)
        quiet = quiet or bool(get_setting(settings, "output", "quiet", fallback=False))
        options = _build_options(args, settings)
        found = search(options)
    except (LocatorError, SettingsError) as exc:
        logger.info("search failed", error=str(exc), kind=type(exc).__name__)
        _report_error(str(exc), quiet=quiet)
        return ERROR

    print(found)
    return OK


if __name__ == "__main__":
    raise SystemExit(main())
