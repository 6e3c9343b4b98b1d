"""Single-ridge area transform.

Numba-compiled step function giving, for one ridge, the fraction of its
footprint that falls in each thickness category. Across the footprint the
bulk thickness rises linearly from the level ice at the edges to the crest,
where it equals keel depth plus sail height.
"""

from __future__ import annotations

import numpy as np
from numba import njit

from .energetics import draft, energetics
from .types import PhysicalConstants


@njit(cache=True)
def _bin_index(edges: np.ndarray, h: float) -> int:
    """Index of the category [edges[k], edges[k+1]) holding h."""
    n = len(edges) - 1
    for k in range(n):
        if h < edges[k + 1]:
            return k
    return n - 1


@njit(cache=True)
def _profile(x: float, base: float, keel: float, half_lk: float, sail: float, half_ls: float) -> float:
    """Bulk thickness at distance x from the ridge crest [m]."""
    h = base
    if half_lk > 0.0 and x < half_lk:
        h += keel * (1.0 - x / half_lk)
    if half_ls > 0.0 and x < half_ls:
        h += sail * (1.0 - x / half_ls)
    return h


@njit(cache=True)
def _grhphi_numba(
    edges: np.ndarray,
    base: float,
    keel: float,
    half_lk: float,
    sail: float,
    half_ls: float,
) -> np.ndarray:
    """Fraction of the ridge half-footprint in each thickness category."""
    n = len(edges) - 1
    out = np.zeros(n, dtype=np.float64)

    half_width = max(half_lk, half_ls)
    if half_width <= 0.0:
        out[_bin_index(edges, base)] = 1.0
        return out

    # The profile is linear between the crest, the narrower toe and the wider toe
    breaks = np.array([0.0, min(half_lk, half_ls), half_width])
    for s in range(2):
        x0 = breaks[s]
        x1 = breaks[s + 1]
        length = x1 - x0
        if length <= 0.0:
            continue
        h0 = _profile(x0, base, keel, half_lk, sail, half_ls)
        h1 = _profile(x1, base, keel, half_lk, sail, half_ls)
        rise = h0 - h1
        if rise <= 0.0:
            out[_bin_index(edges, h1)] += length
            continue
        for k in range(n):
            lo = max(edges[k], h1)
            hi = min(edges[k + 1], h0)
            if hi > lo:
                out[k] += length * (hi - lo) / rise

    for k in range(n):
        out[k] /= half_width
    return out


def thickness_edges(hgrid: np.ndarray) -> np.ndarray:
    """Category edges at the midpoints of hgrid, with open outer categories."""
    hgrid = np.asarray(hgrid, dtype=np.float64)
    mid = 0.5 * (hgrid[1:] + hgrid[:-1])
    return np.concatenate(([-np.inf], mid, [np.inf]))


def grhphi(
    hgrid: np.ndarray,
    hf: float,
    hfs: float,
    epsilon: float,
    phi: float,
    constants: PhysicalConstants | None = None,
) -> np.ndarray:
    """Step function of ridged area over the thickness grid for one ridge.

    The result sums to 1 per unit ridge footprint. The area change of
    ridging, a factor (1 + epsilon), is applied by the caller.

    Args:
        hgrid: Thickness grid [m], strictly increasing.
        hf: Parent level ice thickness [m].
        hfs: Parent snow thickness [m].
        epsilon: Ridging strain [-].
        phi: Ridge macroporosity [-].
        constants: Physical constants, defaults to PhysicalConstants().

    Returns:
        Array of len(hgrid) with the footprint fraction per thickness category.
    """
    if constants is None:
        constants = PhysicalConstants()

    geometry = energetics(hf, hfs, epsilon, phi, constants)
    hfd = float(draft(hf, hfs, constants))
    hff = hf + hfs - hfd

    return _grhphi_numba(
        thickness_edges(hgrid),
        float(hf + hfs),
        max(float(geometry.hk) - hfd, 0.0),
        0.5 * float(geometry.lk),
        max(float(geometry.hs) - hff, 0.0),
        0.5 * float(geometry.ls),
    )
