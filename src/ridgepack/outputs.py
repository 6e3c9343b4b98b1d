"""Structured outputs of the ridging computations.

This module provides dataclasses for organizing the results:
- RidgeGeometry: Keel/sail geometry and potential energy density
- TrajectoryPoint: One step of the minimum-energy path
- ZetaHatPlane: Trajectory fields tabulated over (parent thickness, strain)
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, fields

import numpy as np


@dataclass(frozen=True)
class RidgeGeometry:
    """Ridge and keel geometry over broadcast (strain, porosity) inputs.

    All arrays share the broadcast shape of the energetics inputs.

    Attributes:
        vr: Potential energy density of the ridge [J/m^2].
        alphahat: Effective ridge angle [deg].
        hk: Keel depth below sea level [m].
        hs: Sail height above sea level [m].
        lk: Keel width [m].
        ls: Sail width [m].
    """

    vr: np.ndarray
    alphahat: np.ndarray
    hk: np.ndarray
    hs: np.ndarray
    lk: np.ndarray
    ls: np.ndarray

    def to_dict(self) -> dict[str, np.ndarray]:
        return {field.name: getattr(self, field.name) for field in fields(self)}


@dataclass(frozen=True)
class TrajectoryPoint:
    """Minimum-energy ridge at one strain.

    Attributes:
        strain: Ridging strain [-].
        porosity: Equilibrium macroporosity [-].
        alphahat: Effective ridge angle [deg].
        energy: Potential energy density [J/m^2].
        hk: Keel depth [m].
        hs: Sail height [m].
        lk: Keel width [m].
        ls: Sail width [m].
    """

    strain: float
    porosity: float
    alphahat: float
    energy: float
    hk: float
    hs: float
    lk: float
    ls: float


@dataclass(frozen=True)
class ZetaHatPlane:
    """Zeta-hat plane fields, one entry per (parent thickness, strain) pair.

    All arrays have shape (n_thickness, n_strain). Cells with no admissible
    ridge carry vr == 0.

    Attributes:
        hf: Parent level ice thickness [m].
        hfs: Parent snow thickness [m].
        epsilon: Strain [-].
        phi: Equilibrium macroporosity [-].
        alphahat: Effective ridge angle [deg].
        vr: Potential energy density [J/m^2].
        hk: Keel depth [m].
        hs: Sail height [m].
        lk: Keel width [m].
        ls: Sail width [m].
    """

    hf: np.ndarray
    hfs: np.ndarray
    epsilon: np.ndarray
    phi: np.ndarray
    alphahat: np.ndarray
    vr: np.ndarray
    hk: np.ndarray
    hs: np.ndarray
    lk: np.ndarray
    ls: np.ndarray

    @property
    def shape(self) -> tuple[int, int]:
        return self.vr.shape

    @property
    def valid(self) -> np.ndarray:
        """Boolean mask of cells holding an admissible ridge."""
        return self.vr > 0.0

    def mask_inadmissible(self, max_thickness: float) -> ZetaHatPlane:
        """Zero the energy of ridges thicker than the modeled thickness range.

        Args:
            max_thickness: Largest thickness of the distribution grid [m].

        Returns:
            New plane with vr set to 0 where hk + hs > max_thickness.
        """
        vr = np.where(self.hk + self.hs > max_thickness, 0.0, self.vr)
        return dataclasses.replace(self, vr=vr)

    def to_dict(self) -> dict[str, np.ndarray]:
        """Convert to dictionary of arrays.

        Returns:
            Dictionary mapping field names to their numpy array values.
        """
        return {field.name: getattr(self, field.name) for field in fields(self)}
