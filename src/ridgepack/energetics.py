"""Ridge geometry and potential energy density.

A ridge formed from level ice of thickness hF (snow hFs) under strain eps
is a porous cross-section of bulk solid fraction (1 - phi): a box spanning the
level draft and freeboard, a triangular keel below and a triangular sail above,
both with fixed slope angles. Its energy density is the gravitational potential
energy above that of the parent level ice it was built from, plus the work
stored in compacting the rubble. The first grows with porosity and the second
falls with it, so each strain has an interior minimum-energy porosity.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from .constants import KEEL_DEPTH_COEFFICIENT, SAIL_HEIGHT_COEFFICIENT
from .errors import InadmissibleRidgeError
from .outputs import RidgeGeometry
from .types import PhysicalConstants


def draft(h: ArrayLike, hs: ArrayLike, constants: PhysicalConstants) -> np.ndarray:
    """Hydrostatic draft of an ice column with snow cover [m]."""
    return (constants.rho_ice * np.asarray(h) + constants.rho_snow * np.asarray(hs)) / constants.rho_water


def _column_density(hf: np.ndarray, hfs: np.ndarray, constants: PhysicalConstants) -> np.ndarray:
    """Mean density of the ice and snow column, ice density for an empty column."""
    total = hf + hfs
    with np.errstate(divide="ignore", invalid="ignore"):
        rho = (constants.rho_ice * hf + constants.rho_snow * hfs) / total
    return np.where(total > 0.0, rho, constants.rho_ice)


def _check_inputs(hf: np.ndarray, hfs: np.ndarray, epsilon: np.ndarray, phi: np.ndarray) -> None:
    if np.any(hf < 0.0) or np.any(hfs < 0.0):
        msg = "ice and snow thickness must be non-negative"
        raise ValueError(msg)
    if np.any(epsilon <= -1.0):
        msg = f"strain must exceed -1, got minimum {epsilon.min()}"
        raise InadmissibleRidgeError(msg)
    if np.any(phi < 0.0) or np.any(phi >= 1.0):
        msg = f"porosity must lie in [0, 1), got [{phi.min()}, {phi.max()}]"
        raise InadmissibleRidgeError(msg)


def energetics(
    hf: ArrayLike,
    hfs: ArrayLike,
    epsilon: ArrayLike,
    phi: ArrayLike,
    constants: PhysicalConstants | None = None,
) -> RidgeGeometry:
    """Compute ridge geometry and potential energy density.

    Inputs broadcast against each other, so a meshgrid of strain and porosity
    yields the full zeta-hat manifold for one parent thickness.

    Args:
        hf: Level ice thickness [m].
        hfs: Snow thickness on the level ice [m].
        epsilon: Ridging strain, in (-1, 0] [-].
        phi: Ridge macroporosity, in [0, 1) [-].
        constants: Physical constants, defaults to PhysicalConstants().

    Returns:
        RidgeGeometry with arrays of the broadcast input shape.

    Raises:
        InadmissibleRidgeError: If strain or porosity is out of range, or the
            level draft or freeboard exceeds that of the deformed ice, or a
            ridge has zero porosity.
        ValueError: If a thickness is negative.
    """
    if constants is None:
        constants = PhysicalConstants()

    hf, hfs, epsilon, phi = np.broadcast_arrays(
        np.asarray(hf, dtype=np.float64),
        np.asarray(hfs, dtype=np.float64),
        np.asarray(epsilon, dtype=np.float64),
        np.asarray(phi, dtype=np.float64),
    )
    _check_inputs(hf, hfs, epsilon, phi)

    solid = 1.0 - phi

    # Level ice
    hfd = draft(hf, hfs, constants)
    hff = hf + hfs - hfd

    # Deformed ice holds the same column compressed by the strain
    hd = hf / (1.0 + epsilon)
    hds = hfs / (1.0 + epsilon)
    hdd = draft(hd, hds, constants)
    hdf = hd + hds - hdd

    bulk_draft = hdd / solid
    bulk_freeboard = hdf / solid
    too_deep = (hfd > bulk_draft) & ~np.isclose(hfd, bulk_draft)
    too_high = (hff > bulk_freeboard) & ~np.isclose(hff, bulk_freeboard)
    if np.any(too_deep | too_high):
        msg = "There are no keels or ridges with this setting: level draft exceeds deformed draft"
        raise InadmissibleRidgeError(msg)
    if np.any(epsilon > 0.0):
        msg = f"strain must be non-positive for ridging, got maximum {epsilon.max()}"
        raise InadmissibleRidgeError(msg)

    # Keel
    hk = 2.0 * bulk_draft - hfd
    keel_excess = np.maximum(hk - hfd, 0.0)
    lk = 2.0 * keel_excess / constants.tan_keel

    # Sail
    sail_area = np.maximum(lk * (bulk_freeboard - hff), 0.0)
    sail_excess = np.sqrt(constants.tan_ridge * sail_area)
    hs = hff + sail_excess
    ls = 2.0 * sail_excess / constants.tan_ridge

    has_ridge = lk > 0.0
    safe_lk = np.where(has_ridge, lk, 1.0)
    alphahat = np.where(has_ridge, np.degrees(np.arctan(2.0 * sail_excess / safe_lk)), 0.0)

    # Energy per unit ridge length divided by the keel width. Voids hold
    # air above sea level and water below it.
    rho = _column_density(hf, hfs, constants)
    buoyancy = constants.rho_water - rho
    sail_fraction = np.where(has_ridge, sail_area / safe_lk, 0.0)
    keel_fraction = keel_excess / 2.0
    above = solid * rho * (0.5 * hff**2 + sail_fraction * (hff + sail_excess / 3.0))
    below = solid * buoyancy * (0.5 * hfd**2 + keel_fraction * (hfd + keel_excess / 3.0))
    level = (rho * 0.5 * hff**2 + buoyancy * 0.5 * hfd**2) / (1.0 + epsilon)

    # Rubble skeleton, diverging as the voids close
    if np.any(has_ridge & (phi <= 0.0)):
        msg = "ridged ice must be porous, got porosity 0 for a ridge of non-zero width"
        raise InadmissibleRidgeError(msg)
    safe_phi = np.where(has_ridge, phi, 1.0)
    compaction = constants.compaction_length * rho * (hd + hds) * np.log(1.0 / safe_phi)

    vr = np.where(has_ridge, constants.gravity * (above + below - level + compaction), 0.0)

    return RidgeGeometry(vr=vr, alphahat=alphahat, hk=hk, hs=hs, lk=lk, ls=ls)


def observed_keel_depth(hf: ArrayLike, hfs: ArrayLike, constants: PhysicalConstants | None = None) -> np.ndarray:
    """Maximum observed keel depth 16 sqrt(hFd) (Melling and Riedel, 1996) [m]."""
    if constants is None:
        constants = PhysicalConstants()
    return KEEL_DEPTH_COEFFICIENT * np.sqrt(draft(hf, hfs, constants))


def observed_sail_height(hf: ArrayLike) -> np.ndarray:
    """Maximum observed sail height 5.24 sqrt(hF) (Tucker et al., 1984) [m]."""
    return SAIL_HEIGHT_COEFFICIENT * np.sqrt(np.asarray(hf, dtype=np.float64))
