"""
Leveled logger used across QRyd.

The logger is a thin layer over the standard :mod:`logging` module. Each
message can carry an indentation level (``lvl``) so that nested build steps
read as a tree in the console, and an optional ``color`` hint that is only
honoured when the output stream is a terminal.

----------------------------------------------------------
File            : QRyd/common/flog.py
Description     : Leveled console logger.
----------------------------------------------------------
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_COLORS = {
    "white"     : "\033[97m",
    "red"       : "\033[91m",
    "green"     : "\033[92m",
    "yellow"    : "\033[93m",
    "blue"      : "\033[94m",
    "orange"    : "\033[33m",
}
_RESET          = "\033[0m"
_DEFAULT_FMT    = "%(asctime)s [%(levelname)s] %(message)s"
_DEFAULT_DATE   = "%H:%M:%S"

# ----------------------------------------------------------------------------

class Logger:
    """
    Console logger with indentation levels.

    Parameters
    ----------
    name : str
        Name of the underlying :class:`logging.Logger`.
    level : int or str
        Threshold of the underlying logger (``logging.INFO`` by default).
    use_colors : bool, optional
        Force colored output on or off. By default colors are used only when
        ``stderr`` is a terminal.
    """

    _INDENT = "  "

    def __init__(self, name: str = "QRyd", level=logging.INFO, use_colors: Optional[bool] = None):
        self._logger        = logging.getLogger(name)
        self._logger.setLevel(level)
        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(_DEFAULT_FMT, _DEFAULT_DATE))
            self._logger.addHandler(handler)
        self._logger.propagate = False
        self._use_colors    = sys.stderr.isatty() if use_colors is None else use_colors

    # ------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def set_level(self, level) -> None:
        self._logger.setLevel(level)

    def _format(self, msg: str, lvl: int, color: Optional[str]) -> str:
        text = f"{self._INDENT * max(int(lvl), 0)}{msg}"
        if self._use_colors and color in _COLORS:
            return f"{_COLORS[color]}{text}{_RESET}"
        return text

    # ------------------------------------------------------------------------

    def debug(self, msg: str, lvl: int = 0, color: Optional[str] = None) -> None:
        self._logger.debug(self._format(msg, lvl, color))

    def info(self, msg: str, lvl: int = 0, color: Optional[str] = None) -> None:
        self._logger.info(self._format(msg, lvl, color))

    def warning(self, msg: str, lvl: int = 0, color: Optional[str] = "yellow") -> None:
        self._logger.warning(self._format(msg, lvl, color))

    def error(self, msg: str, lvl: int = 0, color: Optional[str] = "red") -> None:
        self._logger.error(self._format(msg, lvl, color))

    def say(self, msg: str, log: str = "info", lvl: int = 0, color: Optional[str] = None) -> None:
        """Dispatch ``msg`` to the method named by ``log`` ('debug', 'info', ...)."""
        fun = getattr(self, log, None)
        if fun is None or log == "say":
            raise ValueError(f"Unknown log level '{log}'.")
        fun(msg, lvl=lvl, color=color)

# ----------------------------------------------------------------------------

def get_global_logger(name: str = "QRyd", level=logging.INFO, use_colors: Optional[bool] = None) -> Logger:
    """Create the package logger. Use :func:`QRyd.qryd_globals.get_logger` instead."""
    return Logger(name=name, level=level, use_colors=use_colors)

__all__ = ["Logger", "get_global_logger"]

# ----------------------------------------------------------------------------
#! EOF
# ----------------------------------------------------------------------------
