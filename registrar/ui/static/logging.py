#!/usr/bin/env python3
# registrar/ui/static/logging.py
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, MutableMapping, Optional, Union

from registrar.ui.utils import ANSI, strip_ansi, supports_color
from registrar.ui.utils import PRINT_MUTEX


class ColorizingStreamHandler(logging.StreamHandler):
    """
    StreamHandler that colours whole records by level when the stream
    supports ANSI, and writes plain text otherwise.
    """

    _LEVEL_COLORS = {
        logging.DEBUG: ANSI["bright_black"],
        logging.INFO: "",
        logging.WARNING: ANSI["yellow"],
        logging.ERROR: ANSI["red"],
        logging.CRITICAL: ANSI["magenta"],
    }

    def __init__(self, stream=None) -> None:
        super().__init__(stream)
        self._use_ansi = supports_color(self.stream)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if self._use_ansi:
                color = self._LEVEL_COLORS.get(record.levelno, "")
                if color:
                    message = f"{color}{message}{ANSI['reset']}"
            else:
                message = strip_ansi(message)

            with PRINT_MUTEX:
                self.stream.write(message + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


class PlainFormatter(logging.Formatter):
    """Formatter that strips ANSI (good for log files)."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().format(record))


class TagAdapter(logging.LoggerAdapter):
    """Prefix every message with a subsystem tag, e.g. ``[COMMANDS]``."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.extra['tag']}] {msg}", kwargs


def tagged(logger: Union[logging.Logger, logging.LoggerAdapter], tag: str) -> TagAdapter:
    """Return `logger` wrapped so that each record carries `tag`."""
    if isinstance(logger, logging.LoggerAdapter):
        logger = logger.logger
    return TagAdapter(logger, {"tag": tag})


def init_logger(
    name: str = "registrar",
    level: Union[int, str, None] = logging.INFO,
    logfile: Optional[str] = None,
) -> logging.Logger:
    """
    Initialize a colour-safe logger.

    Console: ANSI if the stream supports it, else plain.
    File (optional): rotating, plain text, UTF-8, always at DEBUG.
    Calling it again for the same name only adjusts the level.
    """
    if level is None:
        level = logging.INFO
    elif isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if logfile else level)
    logger.propagate = False

    console_handler = next(
        (h for h in logger.handlers if isinstance(h, ColorizingStreamHandler)), None)
    if console_handler is None:
        console_handler = ColorizingStreamHandler(stream=sys.stderr)
        console_handler.setFormatter(
            logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(console_handler)
    console_handler.setLevel(level)

    if logfile and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        file_handler = RotatingFileHandler(
            logfile, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            PlainFormatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger
