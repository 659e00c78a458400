"""Logging setup for the mosaic library.

The library itself only logs through loggers returned by getLogger(), which
never emit anything until an application installs handlers, for instance
with activate().
"""

from __future__ import annotations
from dataclasses import dataclass

import logging
import re
import sys
import time
import json
from typing import TYPE_CHECKING, ClassVar

from colorama import Fore, Style
from tqdm import tqdm

from mosaic.config import ConfigSection

if TYPE_CHECKING:
    from typing import Any, Dict, Optional, List, Mapping


@dataclass
class LogConfig(ConfigSection):
    title: ClassVar[str] = "log"

    pretty: bool = True
    stream_fmt: str = "%(levelname)-8s %(message)s"
    file_fmt: str = "%(asctime)s: %(name)-24s: %(levelname)-8s %(message)s"


log_config = LogConfig.load()

# Colored output is only used when stdout is a terminal
pretty_cli = log_config.pretty and sys.stdout.isatty()


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Only the attributes listed in STD_ATTR are kept, plus the optional
    context. Empty attributes are omitted.
    """

    STD_ATTR: List[str] = [
        "asctime",
        "levelname",
        "name",
        "message",
        "module",
        "exc_text",
    ]

    def __init__(
        self,
        date_fmt: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ):
        """Initialize formatter with context.

        :param date_fmt: see logging module
        :param context: entries added to every JSON record
        """
        # asctime is only computed when the format string references it
        super().__init__(fmt="%(asctime)s", datefmt=date_fmt)
        self.context = dict(context) if context else {}

    def format(self, record: logging.LogRecord) -> str:
        super().format(record)

        json_record = {attr: getattr(record, attr, None) for attr in self.STD_ATTR}
        json_record.update(self.context)
        return json.dumps({attr: val for attr, val in json_record.items() if val})


class TqdmHandler(logging.StreamHandler):
    """Colored handler writing through tqdm, so that progress bars are kept."""

    LEVEL_COLORS: Dict[str, str] = {
        "DEBUG": Fore.CYAN,
        "INFO": Style.DIM,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.RED + Style.BRIGHT,
    }
    LEVEL_PREFIX = re.compile(r"^(%s)" % "|".join(LEVEL_COLORS))

    def colorize(self, msg: str) -> str:
        """Color the level name starting msg, if any."""
        return self.LEVEL_PREFIX.sub(
            lambda m: self.LEVEL_COLORS[m.group(1)]
            + m.group(1)
            + Fore.RESET
            + Style.RESET_ALL,
            msg,
        )

    def emit(self, record: logging.LogRecord) -> None:
        msg = self.format(record)

        # Continuation lines are aligned with the message of the first line
        first_line = msg.split("\n")[0]
        first_message_line = record.getMessage().split("\n")[0]
        indent = "\n" + " " * (len(first_line) - len(first_message_line))
        tqdm.write(self.colorize(msg.replace("\n", indent)), file=sys.stderr)


_null_handler_prefixes = set()


def getLogger(name: Optional[str] = None, prefix: str = "mosaic") -> logging.Logger:
    """Get a logger named <prefix>.<name>.

    A handler doing nothing is attached to the prefix logger, so that using
    the library without configuring logging does not produce warnings.

    :param name: logger name
    :param prefix: application prefix, will be prepended to the name
    """
    if prefix not in _null_handler_prefixes:
        logging.getLogger(prefix).addHandler(logging.NullHandler())
        _null_handler_prefixes.add(prefix)
    return logging.getLogger(f"{prefix}.{name}")


def add_log_handlers(
    level: int,
    log_format: str,
    datefmt: Optional[str] = None,
    filename: Optional[str] = None,
    json_format: bool = False,
) -> logging.Handler:
    """Add a handler to the root logger, timestamps are in GMT.

    :param level: level of the new handler
    :param log_format: format string of the handler
    :param datefmt: date/time format of the handler
    :param filename: if not None log into that file instead of stderr
    :param json_format: emit one JSON object per log record
    :return: the new handler
    """
    handler: logging.Handler
    if filename is not None:
        handler = logging.FileHandler(filename)
    elif pretty_cli:
        handler = TqdmHandler()
    else:
        handler = logging.StreamHandler()

    fmt: logging.Formatter
    if json_format:
        fmt = JSONFormatter(datefmt)
    else:
        fmt = logging.Formatter(log_format, datefmt)
    fmt.converter = time.gmtime  # type: ignore
    handler.setFormatter(fmt)
    handler.setLevel(level)

    logging.getLogger("").addHandler(handler)
    return handler


def activate(
    stream_format: str = log_config.stream_fmt,
    file_format: str = log_config.file_fmt,
    datefmt: Optional[str] = None,
    level: int = logging.INFO,
    filename: Optional[str] = None,
    mosaic_debug: bool = False,
    json_format: bool = False,
) -> None:
    """Activate default mosaic logging.

    :param stream_format: format string for the stream handler
    :param file_format: format string for the file handler
    :param datefmt: date/time format for the log handlers
    :param level: level of the stream handler
    :param filename: also log into that file, including debug records
    :param mosaic_debug: activate full debug of the mosaic library
    :param json_format: emit JSON formatted log records
    """
    # Filtering is done by the handlers
    logging.getLogger("").setLevel(logging.DEBUG)

    add_log_handlers(level, stream_format, datefmt, json_format=json_format)
    if filename is not None:
        add_log_handlers(
            min(level, logging.DEBUG),
            file_format,
            datefmt,
            filename=filename,
            json_format=json_format,
        )

    if mosaic_debug:
        getLogger("debug").setLevel(logging.DEBUG)


# Library debug logger, silent unless activate(mosaic_debug=True) is called
mosaic_debug_logger = getLogger("debug")
mosaic_debug_logger.setLevel(logging.CRITICAL + 1)

debug = mosaic_debug_logger.debug
