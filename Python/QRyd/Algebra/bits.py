"""
Bit utilities for integer-encoded Rydberg configurations.

Conventions used throughout QRyd:

* Sites are labelled ``1`` to ``n`` (1-indexed).
* A configuration is an integer ``c = sum_k n_k 2^{k-1}`` where ``n_k = 1``
  means that site ``k`` is in the Rydberg (excited) state.
* Configurations are stored as ``np.int64``, hence at most 62 sites.

The ``_``-prefixed functions are Numba kernels used inside the matrix
builders; they do not validate their input. The public wrappers do.
"""

from __future__ import annotations

import numba
import numpy as np

MAX_SITES           = 62

_ERR_SITE_RANGE     = "Site index must satisfy 1 <= k <= {}, got k={}."
_ERR_SINGLE_BIT     = "Mask must have exactly one bit set."
_ERR_NEGATIVE       = "Configurations and masks must be non-negative integers."

# ---------------------------------------------------------------------------
#! Numba kernels
# ---------------------------------------------------------------------------

@numba.njit(cache=True, inline='always')
def _readbit(config: np.int64, k: np.int64) -> np.int64:
    # requires 1 <= k <= 63
    return (config >> (k - 1)) & 1

@numba.njit(cache=True, inline='always')
def _flip(config: np.int64, mask: np.int64) -> np.int64:
    return config ^ mask

@numba.njit(cache=True)
def _log2i(mask: np.int64) -> np.int64:
    if mask <= 0 or (mask & (mask - 1)) != 0:
        raise ValueError("Mask must have exactly one bit set.")
    k = np.int64(1)
    while mask > 1:
        mask >>= 1
        k += 1
    return k

# ---------------------------------------------------------------------------
#! Public helpers
# ---------------------------------------------------------------------------

def readbit(config: int, k: int) -> int:
    """
    Return the value (0 or 1) of site ``k`` in ``config``.

    Parameters
    ----------
    config : int
        Integer-encoded configuration.
    k : int
        1-indexed site, ``1 <= k <= 63``.
    """
    k = int(k)
    if not 1 <= k <= MAX_SITES + 1:
        raise ValueError(_ERR_SITE_RANGE.format(MAX_SITES + 1, k))
    if int(config) < 0:
        raise ValueError(_ERR_NEGATIVE)
    return (int(config) >> (k - 1)) & 1

def flip(config: int, mask: int) -> int:
    """Toggle the bits of ``config`` set in ``mask``."""
    return int(config) ^ int(mask)

def log2i(mask: int) -> int:
    """
    Position (1-indexed) of the only bit set in ``mask``.

    Raises
    ------
    ValueError
        If ``mask`` is zero, negative or has more than one bit set.
    """
    mask = int(mask)
    if mask <= 0 or mask & (mask - 1):
        raise ValueError(_ERR_SINGLE_BIT)
    return mask.bit_length()

def bmask(*sites: int) -> int:
    """Mask with the given 1-indexed ``sites`` set, e.g. ``bmask(1, 3) == 0b101``."""
    mask = 0
    for k in sites:
        k = int(k)
        if not 1 <= k <= MAX_SITES + 1:
            raise ValueError(_ERR_SITE_RANGE.format(MAX_SITES + 1, k))
        mask |= 1 << (k - 1)
    return mask

def bitstring(config: int, n: int) -> str:
    """Return ``config`` as a string of length ``n``, site 1 first."""
    return "".join(str(readbit(config, k)) for k in range(1, n + 1))

__all__ = [
    "MAX_SITES",
    "readbit",
    "flip",
    "log2i",
    "bmask",
    "bitstring",
]
