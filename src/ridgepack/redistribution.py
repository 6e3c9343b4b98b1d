"""Redistribution function Psi for a bivariate thickness distribution.

This module provides the ridging transform of g(h, phi), the sea ice area
distribution over thickness and macroporosity:
- redistribute(): Advance g(h, phi) through one ridging event
- energy_ratio(), ridging_probability(): Weighting of ridge configurations
- ridged_area(): Undeformed area closed by the strain over a timestep
- nearest_index(): Map a porosity onto the distribution grid
- compact_porosity(): Compaction of porous ice into higher porosity categories
"""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any, TypeVar

import numpy as np
from numpy.typing import ArrayLike

from .errors import ArgumentError
from .grhphi import grhphi
from .outputs import ZetaHatPlane
from .types import GridSpec, PhysicalConstants
from .zetahatplane import zetahatplane

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _checked_arguments(func: F) -> F:
    """Raise ArgumentError when a call does not match the signature of func."""
    signature = inspect.signature(func)

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            signature.bind(*args, **kwargs)
        except TypeError as e:
            msg = f"{func.__name__}() requires exactly ghphi, hgrid, phigrid, strain_rate and dt: {e}"
            raise ArgumentError(msg) from e
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def bulk_strain(strain_rate: ArrayLike, dt: float) -> np.ndarray:
    """Strain accumulated over a timestep.

    Args:
        strain_rate: Strain rate, negative for convergence [1/s].
        dt: Timestep [s].

    Returns:
        strain_rate * dt [-].

    Raises:
        ValueError: If dt is not positive, or the strain is non-finite or
            at or below -1.
    """
    if not np.isfinite(dt) or dt <= 0.0:
        msg = f"dt must be a positive number of seconds, got {dt}"
        raise ValueError(msg)
    strain = np.asarray(strain_rate, dtype=np.float64) * dt
    if not np.all(np.isfinite(strain)):
        msg = "strain_rate contains non-finite values"
        raise ValueError(msg)
    if np.any(strain <= -1.0):
        msg = f"strain over the timestep must exceed -1, got minimum {strain.min()}"
        raise ValueError(msg)
    return strain


def nearest_index(grid: np.ndarray, value: float) -> int:
    """Index of the grid entry closest to value, the lower one on ties.

    Args:
        grid: Strictly increasing 1D array.
        value: Value to locate.

    Returns:
        Smallest index minimizing abs(grid - value).
    """
    i = int(np.searchsorted(grid, value, side="left"))
    if i == 0:
        return 0
    if i == len(grid):
        return len(grid) - 1
    if abs(value - grid[i - 1]) <= abs(grid[i] - value):
        return i - 1
    return i


def energy_ratio(plane: ZetaHatPlane) -> np.ndarray:
    """Weight of each ridge configuration relative to the total ridging work.

    energy_ratio = sum(LK * VR) / (LK * VR), favoring thin, low-energy ridges.
    Cells with no work done are given zero weight.
    """
    work = plane.lk * plane.vr
    total = work.sum()
    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = total / work
    return np.where(work > 0.0, ratio, 0.0)


def ridging_probability(
    undeformed: np.ndarray,
    plane: ZetaHatPlane,
    ratio: np.ndarray | None = None,
) -> np.ndarray:
    """Probability of a ridge forming per (parent thickness, strain).

    Args:
        undeformed: Area of undeformed ice per thickness, g(h, phi=0).
        plane: Zeta-hat plane over the same thickness grid.
        ratio: Precomputed energy_ratio(plane).

    Returns:
        Array of plane.shape summing to 1, or all zeros if no ice can ridge.
    """
    undeformed = np.asarray(undeformed, dtype=np.float64)
    if undeformed.shape != (plane.shape[0],):
        msg = f"undeformed ice has shape {undeformed.shape}, expected ({plane.shape[0]},)"
        raise ValueError(msg)
    if ratio is None:
        ratio = energy_ratio(plane)

    numerator = undeformed[:, None] * ratio
    numerator[~plane.valid] = 0.0
    total = numerator.sum()
    if total <= 0.0:
        return np.zeros(plane.shape)
    return numerator / total


def ridged_area(
    ghphi: np.ndarray,
    strain: ArrayLike,
    plane: ZetaHatPlane,
    probability: np.ndarray,
) -> float:
    """Area of undeformed ice that ridges over the timestep.

    A unit of parent ice ridging at strain eps closes -eps of its area, so the
    expected closing per unit ridged area is sum(probability * -eps). The
    ridged area closes the convergence -mean(strain) * sum(ghphi), limited so
    that no thickness category loses more undeformed ice than it holds.
    Divergence, or ridging that closes no area, ridges nothing.

    Args:
        ghphi: Distribution at the start of the step.
        strain: Bulk strain over the timestep, scalar or field [-].
        plane: Zeta-hat plane the probability was computed on.
        probability: ridging_probability() over plane.

    Returns:
        Parent area drawn from the undeformed category.
    """
    convergence = max(-float(np.mean(strain)), 0.0) * ghphi.sum()
    closing = float((probability * -plane.epsilon).sum())
    if convergence <= 0.0 or closing <= 0.0:
        return 0.0

    # Share of the ridged area drawn from each thickness category
    share = probability.sum(axis=1)
    drawn = share > 0.0
    available = float(np.min(ghphi[drawn, 0] / share[drawn]))
    return min(convergence / closing, available)


def compact_porosity(ar: np.ndarray, ghphi: np.ndarray) -> np.ndarray:
    """Shift porous ice into higher porosity categories.

    For each interior porosity category j, the fraction of all ice found at
    that porosity is removed from column j and added to every higher column
    in proportion to the ice those columns already hold (equally if they are
    empty). Area removed and area added balance row by row.

    Args:
        ar: Accumulated area field to update, shape (n_thickness, n_porosity).
        ghphi: Distribution at the start of the step, same shape.

    Returns:
        New array with the compaction applied.
    """
    out = np.array(ar, dtype=np.float64, copy=True)
    total = ghphi.sum()
    if total <= 0.0:
        return out

    n_phi = ghphi.shape[1]
    for j in range(1, n_phi - 1):
        weight = ghphi[:, j].sum() / total
        if weight <= 0.0:
            continue
        removed = weight * ghphi[:, j]

        column_area = ghphi[:, j + 1 :].sum(axis=0)
        if column_area.sum() > 0.0:
            shares = column_area / column_area.sum()
        else:
            shares = np.full(n_phi - j - 1, 1.0 / (n_phi - j - 1))

        out[:, j] -= removed
        out[:, j + 1 :] += removed[:, None] * shares[None, :]
    return out


def _validate_distribution(ghphi: ArrayLike, grid: GridSpec) -> np.ndarray:
    arr = np.asarray(ghphi, dtype=np.float64)
    if arr.ndim != 2:
        msg = f"ghphi must be 2D (thickness x porosity), got {arr.ndim}D"
        raise ValueError(msg)
    if arr.shape != grid.shape:
        msg = f"ghphi has shape {arr.shape}, expected {grid.shape} from hgrid x phigrid"
        raise ValueError(msg)
    if not np.all(np.isfinite(arr)):
        msg = "ghphi contains non-finite values"
        raise ValueError(msg)
    if np.any(arr < 0.0):
        msg = "ghphi must be non-negative"
        raise ValueError(msg)
    return arr


def _resolve_grid(hgrid: ArrayLike, phigrid: ArrayLike, grid: GridSpec | None) -> GridSpec:
    if grid is None:
        return GridSpec.default(thickness=hgrid, porosity=phigrid)
    if not np.array_equal(np.asarray(hgrid, dtype=np.float64), grid.thickness):
        msg = "hgrid does not match grid.thickness"
        raise ValueError(msg)
    if not np.array_equal(np.asarray(phigrid, dtype=np.float64), grid.porosity):
        msg = "phigrid does not match grid.porosity"
        raise ValueError(msg)
    return grid


@_checked_arguments
def redistribute(
    ghphi: ArrayLike,
    hgrid: ArrayLike,
    phigrid: ArrayLike,
    strain_rate: ArrayLike,
    dt: float,
    *,
    grid: GridSpec | None = None,
    constants: PhysicalConstants | None = None,
    log: logging.Logger | None = None,
) -> np.ndarray:
    """Advance the bivariate thickness distribution through one timestep of ridging.

    Undeformed ice (porosity column 0) of each thickness ridges along its
    minimum-energy trajectory, weighted by the energy ratio of every strain.
    The bulk strain strain_rate * dt sets how much undeformed area ridges
    (see ridged_area()); convergence ridges area, divergence ridges none.
    The ridged area, scaled by (1 + strain), is deposited at the equilibrium
    porosity of each ridge, then porous ice is compacted into higher porosity
    categories.

    The result is the accumulated ridging field alone; it is not added to
    ghphi. Removal of the ridged undeformed ice is left to the caller.

    Args:
        ghphi: g(h, phi) at time t, shape (len(hgrid), len(phigrid)).
        hgrid: Thickness grid [m].
        phigrid: Macroporosity grid [-].
        strain_rate: Strain rate, scalar or field [1/s].
        dt: Timestep [s].
        grid: Strain sweep and ridge porosity axis; its thickness and
            porosity grids must equal hgrid and phigrid.
        constants: Physical constants, defaults to PhysicalConstants().
        log: Receives diagnostics, defaults to the module logger.

    Returns:
        g(h, phi) at time t + dt, same shape as ghphi.

    Raises:
        ArgumentError: If not called with exactly the five main arguments.
        ValueError: If the inputs have the wrong shape or values.
    """
    if log is None:
        log = logger
    log.debug("Entering redistribute")

    grid = _resolve_grid(hgrid, phigrid, grid)
    ghphi = _validate_distribution(ghphi, grid)
    strain = bulk_strain(strain_rate, dt)
    log.debug("Bulk strain over dt=%.1f s spans [%.4g, %.4g]", dt, strain.min(), strain.max())

    ar = np.zeros(ghphi.shape)
    ridging = np.flatnonzero(ghphi[:, 0] > 0.0)
    if ridging.size == 0:
        log.debug("No undeformed ice, leaving redistribute")
        return ar

    plane = zetahatplane(grid, 0.0, constants).mask_inadmissible(grid.thickness[-1])
    ratio = energy_ratio(plane)
    probability = ridging_probability(ghphi[:, 0], plane, ratio)

    log.debug("size of ghphi is %s", ghphi.shape)
    log.debug("size of zeta-hat plane is %s", plane.shape)
    area = ridged_area(ghphi, strain, plane, probability)

    log.debug("admissible ridges: %d of %d", int(plane.valid.sum()), plane.vr.size)
    log.debug("ridged undeformed area: %.6g", area)

    for i in ridging:
        for j in np.flatnonzero(plane.valid[i]):
            pidx = nearest_index(grid.porosity, plane.phi[i, j])
            kernel = grhphi(
                grid.thickness,
                plane.hf[i, j],
                plane.hfs[i, j],
                plane.epsilon[i, j],
                plane.phi[i, j],
                constants,
            )
            ar[:, pidx] += area * probability[i, j] * (1.0 + plane.epsilon[i, j]) * kernel

    ar = compact_porosity(ar, ghphi)

    log.debug("Leaving redistribute, ridged area %.6g", ar.sum())
    return ar
