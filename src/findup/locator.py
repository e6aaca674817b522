"""Locate a file in a directory or the nearest of its ancestors.

The walk starts at a directory, probes it for the target and then moves to
its parent until one of three boundaries is hit:

* an explicit stop directory, which is never probed itself;
* a stop marker, a file or directory whose presence ends the walk once the
  directory holding it has been probed for the target;
* the filesystem root.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import structlog

logger = structlog.getLogger("findup")

NOT_FOUND_MESSAGE = "file not found"


class LocatorError(Exception):
    """Base class for failures reported by the locator."""


class PathResolutionError(LocatorError):
    """Raised when the start or stop directory cannot be made absolute."""

    def __init__(self, role: str, path: str | os.PathLike[str], reason: str) -> None:
        """Remember which boundary failed to resolve."""
        self.role = role
        self.path = path
        super().__init__(
            f"failed to get absolute path of {role} directory: {reason}",
        )


class NotFoundError(LocatorError, FileNotFoundError):
    """Raised when no visited directory contains the target."""

    def __init__(self, target_file: str) -> None:
        """Store the name that could not be found."""
        self.target_file = target_file
        super().__init__(NOT_FOUND_MESSAGE)


class InvalidTargetError(LocatorError, ValueError):
    """Raised for an empty target name or an absolute target/marker."""


@dataclass(frozen=True, slots=True)
class SearchOptions:
    """Immutable description of one upward search."""

    target_file: str
    start_directory: str | os.PathLike[str] = "."
    stop_marker: str | None = None
    stop_directory: str | os.PathLike[str] | None = None


def path_exists(path: str | os.PathLike[str]) -> bool:
    """Return True if ``path`` can be stat'ed; any error means it does not exist."""
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def iter_ancestors(directory: Path) -> Iterator[Path]:
    """Yield ``directory`` followed by each parent, ending at the root."""
    current = directory
    while True:
        yield current
        parent = current.parent
        if parent == current:
            return
        current = parent


def _absolute(path: str | os.PathLike[str], role: str) -> Path:
    try:
        return Path(os.path.abspath(os.fspath(path)))
    except (OSError, ValueError) as exc:
        raise PathResolutionError(role, path, str(exc)) from exc


def _check_name(name: str, what: str) -> None:
    if os.path.isabs(name):
        msg = f"{what} must be a relative name, got {name!r}"
        raise InvalidTargetError(msg)


def locate(
    start_directory: str | os.PathLike[str],
    target_file: str,
    stop_marker: str | None = None,
    stop_directory: str | os.PathLike[str] | None = None,
) -> Path:
    """Return the path of ``target_file`` in the nearest directory that has it.

    Raises PathResolutionError when the start or stop directory cannot be
    made absolute, and NotFoundError when the walk reaches the stop
    directory, a directory containing ``stop_marker``, or the root without
    finding the target.
    """
    if not target_file:
        msg = "target file name must not be empty"
        raise InvalidTargetError(msg)
    _check_name(target_file, "target file")
    if stop_marker:
        _check_name(stop_marker, "flag file")

    start = _absolute(start_directory, "start")
    stop = _absolute(stop_directory, "stop") if stop_directory else None
    logger.debug(
        "starting search",
        target=target_file,
        start=str(start),
        stop_directory=str(stop) if stop else None,
        stop_marker=stop_marker or None,
    )

    for current in iter_ancestors(start):
        if stop is not None and current == stop:
            logger.debug("reached stop directory", directory=str(current))
            break

        candidate = Path(os.path.normpath(current / target_file))
        if path_exists(candidate):
            logger.debug("found target", path=str(candidate))
            return candidate

        if stop_marker and path_exists(current / stop_marker):
            logger.debug("found stop marker", directory=str(current), marker=stop_marker)
            break

        logger.debug("target not in directory", directory=str(current))

    raise NotFoundError(target_file)


def search(options: SearchOptions) -> Path:
    """Run :func:`locate` with the values held by ``options``."""
    return locate(
        options.start_directory,
        options.target_file,
        stop_marker=options.stop_marker,
        stop_directory=options.stop_directory,
    )
