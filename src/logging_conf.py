"""Logging setup and verbosity options."""
import logging
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from src.config import config

# Completion and summary lines: shown by default, hidden by --quiet.
NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

# Every module logger lives under this name.
PACKAGE_LOGGER = "src"

_handler: Optional[logging.Handler] = None


@dataclass(frozen=True)
class LogOptions:
    """Verbosity flags shared by every component of a run."""

    verbose: bool = False
    quiet: bool = False
    debug: bool = False

    @property
    def level(self) -> int:
        """Package log level implied by the flags (debug > verbose > quiet)."""
        if self.debug:
            return logging.DEBUG
        if self.verbose:
            return logging.INFO
        if self.quiet:
            return logging.ERROR
        return NOTICE


def notice(logger: logging.Logger, msg: str, *args) -> None:
    """Log a completion or summary line."""
    logger.log(NOTICE, msg, *args)


class VerbosityFilter(logging.Filter):
    """Drop INFO records unless --verbose was given.

    Keeps --debug and --verbose independent: debug output does not turn on
    the verbose statistics lines.
    """

    def __init__(self, options: LogOptions):
        super().__init__()
        self.options = options

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno != logging.INFO or self.options.verbose


def setup_logging(options: Optional[LogOptions] = None, stream: Optional[TextIO] = None) -> None:
    """Configure the package logger and a stderr handler on the root logger.

    Only loggers under ``src`` follow the verbosity flags; third-party
    loggers keep the root default (WARNING). Calling it again replaces the
    handler installed by the previous call and leaves any other handler
    alone.
    """
    global _handler
    options = options or LogOptions()
    fmt = config.DEBUG_LOG_FORMAT if options.debug else config.LOG_FORMAT

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter(fmt))
    _handler.addFilter(VerbosityFilter(options))
    root.addHandler(_handler)
    logging.getLogger(PACKAGE_LOGGER).setLevel(options.level)
