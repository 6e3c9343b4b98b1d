"""Ridgepack sea ice ridging toolkit.

Redistribution of a bivariate sea ice thickness distribution g(h, phi) under
ridging, and the zeta-hat plane energetics of ridge and keel geometry that
parameterize it.
"""

from ridgepack.energetics import energetics, observed_keel_depth, observed_sail_height
from ridgepack.errors import ArgumentError, InadmissibleRidgeError, RidgepackError
from ridgepack.grhphi import grhphi
from ridgepack.outputs import RidgeGeometry, TrajectoryPoint, ZetaHatPlane
from ridgepack.redistribution import (
    bulk_strain,
    compact_porosity,
    energy_ratio,
    nearest_index,
    redistribute,
    ridged_area,
    ridging_probability,
)
from ridgepack.trajectory import Trajectory, trajectory
from ridgepack.types import GridSpec, PhysicalConstants
from ridgepack.zetahatplane import zetahatplane

__all__ = [
    "ArgumentError",
    "GridSpec",
    "InadmissibleRidgeError",
    "PhysicalConstants",
    "RidgeGeometry",
    "RidgepackError",
    "Trajectory",
    "TrajectoryPoint",
    "ZetaHatPlane",
    "bulk_strain",
    "compact_porosity",
    "energetics",
    "energy_ratio",
    "grhphi",
    "nearest_index",
    "observed_keel_depth",
    "observed_sail_height",
    "redistribute",
    "ridged_area",
    "ridging_probability",
    "trajectory",
    "zetahatplane",
]
