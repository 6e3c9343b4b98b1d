"""Minimum-energy ridging trajectory through the zeta-hat plane.

At each strain the ridge porosity relaxes to the value minimizing the
potential energy density. Each strain is minimized independently; there is
no optimization across strain.
"""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np
import pandas as pd

from .energetics import energetics
from .outputs import RidgeGeometry, TrajectoryPoint
from .types import GridSpec, PhysicalConstants

# Trajectory columns in output order
TRAJECTORY_FIELDS: tuple[str, ...] = ("strain", "porosity", "alphahat", "energy", "hk", "hs", "lk", "ls")


def minimum_energy(
    hf: float,
    hfs: float,
    strain: np.ndarray,
    porosity: np.ndarray,
    constants: PhysicalConstants,
) -> tuple[np.ndarray, RidgeGeometry]:
    """Find the minimum-energy porosity for each strain.

    Args:
        hf: Level ice thickness [m].
        hfs: Snow thickness [m].
        strain: 1D strain values [-].
        porosity: 1D porosity axis to search [-].
        constants: Physical constants.

    Returns:
        Tuple of (index, geometry): the argmin along the porosity axis per
        strain (lowest index on ties) and the geometry at those minima, each
        field of shape (len(strain),).
    """
    epsilon, phi = np.meshgrid(strain, porosity, indexing="ij")
    geometry = energetics(hf, hfs, epsilon, phi, constants)

    # np.argmin returns the first occurrence
    index = np.argmin(geometry.vr, axis=1)
    rows = np.arange(len(strain))
    at_minimum = RidgeGeometry(**{name: values[rows, index] for name, values in geometry.to_dict().items()})
    return index, at_minimum


class Trajectory:
    """Lazy, restartable minimum-energy path for one parent ice/snow thickness.

    Nothing is computed until the trajectory is iterated, and every iteration
    starts again from zero strain.

    Attributes:
        hf: Level ice thickness [m].
        hfs: Snow thickness [m].
        strain: Strain sweep, from 0 toward -1 [-].
        porosity: Porosity axis searched at each strain [-].
        constants: Physical constants.
    """

    def __init__(
        self,
        hf: float,
        hfs: float,
        strain: np.ndarray,
        porosity: np.ndarray,
        constants: PhysicalConstants,
    ) -> None:
        self.hf = float(hf)
        self.hfs = float(hfs)
        self.strain = strain
        self.porosity = porosity
        self.constants = constants

    def __len__(self) -> int:
        return len(self.strain)

    def __iter__(self) -> Iterator[TrajectoryPoint]:
        for eps in self.strain:
            index, geometry = minimum_energy(self.hf, self.hfs, np.array([eps]), self.porosity, self.constants)
            yield TrajectoryPoint(
                strain=float(eps),
                porosity=float(self.porosity[index[0]]),
                alphahat=float(geometry.alphahat[0]),
                energy=float(geometry.vr[0]),
                hk=float(geometry.hk[0]),
                hs=float(geometry.hs[0]),
                lk=float(geometry.lk[0]),
                ls=float(geometry.ls[0]),
            )

    def arrays(self) -> dict[str, np.ndarray]:
        """Compute the whole trajectory at once.

        Returns:
            Dictionary of 1D arrays keyed by TRAJECTORY_FIELDS.
        """
        index, geometry = minimum_energy(self.hf, self.hfs, self.strain, self.porosity, self.constants)
        return {
            "strain": self.strain.copy(),
            "porosity": self.porosity[index],
            "alphahat": geometry.alphahat,
            "energy": geometry.vr,
            "hk": geometry.hk,
            "hs": geometry.hs,
            "lk": geometry.lk,
            "ls": geometry.ls,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to DataFrame indexed by strain."""
        df = pd.DataFrame(self.arrays())
        return df.set_index("strain")


def trajectory(
    hf: float,
    hfs: float = 0.0,
    grid: GridSpec | None = None,
    constants: PhysicalConstants | None = None,
) -> Trajectory:
    """Minimum-energy path of a ridge built from the given level ice.

    Args:
        hf: Level ice thickness [m].
        hfs: Snow thickness on the level ice [m].
        grid: Supplies the strain sweep and the porosity axis, defaults to
            GridSpec.default().
        constants: Physical constants, defaults to PhysicalConstants().

    Returns:
        Trajectory sweeping strain from 0 toward -1.
    """
    if grid is None:
        grid = GridSpec.default()
    if constants is None:
        constants = PhysicalConstants()
    if hf < 0.0 or hfs < 0.0:
        msg = f"ice and snow thickness must be non-negative, got hf={hf}, hfs={hfs}"
        raise ValueError(msg)
    return Trajectory(hf, hfs, grid.strain, grid.ridge_porosity, constants)
