"""
Centralized global singletons for the QRyd package.

This module is the single place where process-wide shared objects are created.
All other code should import the accessors defined here instead of
constructing new instances.

Provided Singletons
-------------------
- Global logger        : via `get_logger()` (returns the flog.Logger instance)

Usage Pattern
-------------
    from QRyd.qryd_globals import get_logger

    log = get_logger()
    log.info("Building subspace...", lvl=1)

!IMPORTANT: Do NOT perform side effects at module import other than creating
!lightweight sentinels; initialization is deferred until first access.
"""

from __future__ import annotations
from typing import Any
import threading

_LOCK               = threading.Lock()

# Internal storage for singletons
_LOGGER: Any        = None

def get_logger(**kwargs):
    """
    Return the process-global logger instance.

    Parameters
    ----------
    **kwargs : dict
        Optional keyword arguments forwarded to `get_global_logger` the first
        time the logger is created.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER
    with _LOCK:
        if _LOGGER is None:
            from QRyd.common.flog import get_global_logger
            _LOGGER = get_global_logger(**kwargs)
    return _LOGGER

# ----------------------------------------------------------------

__all__ = [
    "get_logger",
]

# ----------------------------------------------------------------
#! End of QRyd global singletons
