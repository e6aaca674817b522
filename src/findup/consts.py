"""Hold constants and enum values."""

from lazi.core import lazi

with lazi:  # type: ignore[attr-defined] # lazi has incorrectly typed code
    import importlib.metadata
    import logging
    from enum import IntEnum

OK = 0
ERROR = 1
USAGE = 2

DISTRIBUTION = "findup"


class LogLevels(IntEnum):
    """Enumerate valid log levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


def version() -> str:
    """Return version of the project that is installed."""
    return importlib.metadata.version(DISTRIBUTION)


if __name__ == "__main__":
    print(version())
