# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vcd_extraconfig/core/logger.py
"""
Console and file logging for the CLI.

stdout carries command results only, so every handler here writes to stderr
or to the optional log file. Structured context travels in `extra={"ctx": ...}`
and is rendered as trailing `key=value` pairs.
"""
from __future__ import annotations

import datetime as _dt
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from termcolor import colored as _colored

LOGGER_NAME = "vcd_extraconfig"

_LEVEL_EMOJI = {
    "DEBUG": "🔍",
    "INFO": "✅",
    "WARNING": "⚠️",
    "ERROR": "💥",
    "CRITICAL": "🧨",
}
_LEVEL_COLOR = {
    "DEBUG": "blue",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red",
}


def _stderr_is_tty() -> bool:
    try:
        return sys.stderr.isatty()
    except (AttributeError, OSError, ValueError):
        return False


def _stderr_takes_emoji() -> bool:
    enc = getattr(sys.stderr, "encoding", None) or "utf-8"
    try:
        "✅".encode(enc)
        return True
    except (UnicodeEncodeError, LookupError):
        return False


def c(
    text: str,
    color: Optional[str] = None,
    attrs: Optional[List[str]] = None,
    *,
    enable: bool = True,
) -> str:
    """Colorize text if enabled."""
    if not enable or not color:
        return text
    return _colored(text, color=color, attrs=attrs or [])


def _format_ctx(ctx: Any) -> str:
    if not ctx:
        return ""
    pairs = []
    for k in sorted(ctx, key=str):
        v = str(ctx[k]).replace("\r", "\\r").replace("\n", "\\n")
        pairs.append(f"{k}={v if len(v) <= 240 else v[:239] + '…'}")
    return " " + " ".join(pairs)


@dataclass(frozen=True)
class LogStyle:
    color: bool = True
    detailed: bool = False  # milliseconds, pid, logger name, module:line
    unicode: bool = True
    align_level: int = 8


class EmojiFormatter(logging.Formatter):
    def __init__(self, style: LogStyle):
        super().__init__()
        self._style = style

    def _timestamp(self, created: float) -> str:
        dt = _dt.datetime.fromtimestamp(created)
        return dt.strftime("%H:%M:%S.%f")[:-3] if self._style.detailed else dt.strftime("%H:%M:%S")

    def _origin(self, record: logging.LogRecord) -> str:
        if not self._style.detailed:
            return ""
        return f" [pid={os.getpid()} {record.name} {record.module}:{record.lineno}]"

    def format(self, record: logging.LogRecord) -> str:
        color_ok = self._style.color and _stderr_is_tty()
        tint = _LEVEL_COLOR.get(record.levelname)

        emoji = _LEVEL_EMOJI.get(record.levelname, "•") if self._style.unicode else "·"
        lvl = c(record.levelname, tint, enable=color_ok)
        msg = record.getMessage()
        if record.levelno >= logging.WARNING:
            msg = c(msg, tint, attrs=["bold"], enable=color_ok)

        line = (
            f"{self._timestamp(record.created)} {emoji} {lvl:<{self._style.align_level}}"
            f"{self._origin(record)} {msg}{_format_ctx(getattr(record, 'ctx', None))}"
        )
        if record.exc_info:
            tb = "\n".join("  " + ln for ln in self.formatException(record.exc_info).splitlines())
            line += "\n" + c(tb, "red", enable=color_ok)
        return line


class Log:
    @staticmethod
    def _level_from_flags(verbose: int) -> int:
        """
        default: WARNING
        -v: INFO
        -vv: DEBUG
        """
        if verbose >= 2:
            return logging.DEBUG
        if verbose == 1:
            return logging.INFO
        return logging.WARNING

    @staticmethod
    def step(logger: logging.Logger, msg: str, **ctx: Any) -> None:
        logger.info("➡️  %s", msg, extra={"ctx": ctx} if ctx else None)

    @staticmethod
    def ok(logger: logging.Logger, msg: str, **ctx: Any) -> None:
        logger.info("✅ %s", msg, extra={"ctx": ctx} if ctx else None)

    @staticmethod
    def warn(logger: logging.Logger, msg: str, **ctx: Any) -> None:
        logger.warning("⚠️  %s", msg, extra={"ctx": ctx} if ctx else None)

    @staticmethod
    def setup(
        verbose: int = 0,
        log_file: Optional[str] = None,
        *,
        color: bool = True,
        logger_name: str = LOGGER_NAME,
    ) -> logging.Logger:
        """
        Configure and return the project's logger.

        Calling it again replaces the handlers. A log file, when given, gets
        every record at DEBUG in the detailed, uncolored format regardless of
        the console level. An unusable log file path raises OSError.
        """
        logger = logging.getLogger(logger_name)
        logger.propagate = False

        level = Log._level_from_flags(verbose)
        logger.setLevel(level)

        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()

        unicode = _stderr_takes_emoji()
        sh = logging.StreamHandler(stream=sys.stderr)
        sh.setLevel(level)
        sh.setFormatter(EmojiFormatter(LogStyle(color=bool(color), detailed=verbose >= 2, unicode=unicode)))
        logger.addHandler(sh)

        if log_file:
            fp = Path(log_file).expanduser().resolve()
            fp.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(fp, encoding="utf-8")
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(EmojiFormatter(LogStyle(color=False, detailed=True, unicode=unicode)))
            logger.addHandler(fh)
            logger.setLevel(logging.DEBUG)

        logger.debug("Logger initialized (level=%s, pid=%s)", logging.getLevelName(level), os.getpid())
        return logger
