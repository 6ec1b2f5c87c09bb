"""
Common utilities shared by the QRyd subpackages (logging).
"""

MODULE_DESCRIPTION = "Common utilities: leveled console logger."

from .flog import Logger, get_global_logger

__all__ = ["Logger", "get_global_logger"]
