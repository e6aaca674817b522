"""Find a file by walking up from a directory towards the filesystem root."""

# ruff: noqa: I001
from beartype.claw import beartype_this_package

beartype_this_package()

from .consts import LogLevels as LogLevels
from .consts import version as version
from .locator import InvalidTargetError as InvalidTargetError
from .locator import LocatorError as LocatorError
from .locator import NotFoundError as NotFoundError
from .locator import PathResolutionError as PathResolutionError
from .locator import SearchOptions as SearchOptions
from .locator import locate as locate
from .locator import search as search

import logging
import structlog
import sys

logger = structlog.getLogger("findup")


class SemanticSorter:
    """Structlog processor which lets you control key order."""

    def __init__(self, order: list[str]) -> None:
        """Initialize the processor order."""
        self._order = order

    def __call__(
        self,
        _logger: object,
        _method_name: str,
        event_dict: structlog.types.EventDict,
    ) -> structlog.types.EventDict:
        """Sort the keys."""
        ordered_dict = {k: v for k in self._order if (v := event_dict.pop(k, None))}
        ordered_dict |= event_dict
        return ordered_dict


def configure_logging(loglevel: int) -> None:
    """Route structured log output at or above ``loglevel`` to stderr."""
    # stdout is reserved for the located path
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(loglevel),
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.dict_tracebacks,
            SemanticSorter(["timestamp", "level", "event", "logger", "message"]),
            structlog.processors.JSONRenderer(sort_keys=False),
        ],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    match loglevel:
        case LogLevels.DEBUG:
            logger.debug("Log level set to DEBUG")
        case LogLevels.INFO:
            logger.info("Log level set to INFO")
        case LogLevels.WARNING:
            logger.warning("Log level set to WARNING")
        case LogLevels.ERROR | LogLevels.CRITICAL:
            pass
        case _:
            logger.warning("Log level set to UNKNOWN LEVEL", level=loglevel)
    logger.debug("logger setup.")


def _determine_log_level(argv: list[str]) -> int:
    """Derive the desired log level from CLI flags like -v/-vv/-vvv."""
    verbosity = 0
    long_flags = {"--log-warning": 1, "--log-info": 2, "--log-debug": 3}
    for arg in argv:
        if arg == "--":
            break
        if arg in {"-v", "-vv", "-vvv"}:
            verbosity = max(verbosity, arg.count("v"))
        elif arg in long_flags:
            verbosity = max(verbosity, long_flags[arg])
    verbosity = min(verbosity, 3)
    return {
        0: logging.ERROR,
        1: logging.WARNING,
        2: logging.INFO,
        3: logging.DEBUG,
    }[verbosity]


configure_logging(_determine_log_level(sys.argv[1:]))
