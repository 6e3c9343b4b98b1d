"""Configuration containers for ridgepack.

This module defines the validated inputs shared by every component:
- PhysicalConstants: Densities, gravity, ridge shape angles and rubble compaction
- GridSpec: Thickness, porosity and strain discretization axes
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import ClassVar

import numpy as np
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .constants import (
    COMPACTION_LENGTH,
    DISTRIBUTION_POROSITY_INCREMENT,
    GRAVITY,
    KEEL_ANGLE,
    MAX_RIDGE_POROSITY,
    MAX_THICKNESS,
    MIN_RIDGE_POROSITY,
    MIN_STRAIN,
    MIN_THICKNESS,
    POROSITY_INCREMENT,
    RHO_ICE,
    RHO_SNOW,
    RHO_WATER,
    RIDGE_ANGLE,
    STRAIN_INCREMENT,
    THICKNESS_INCREMENT,
    TYPICAL_BOUNDS,
)

logger = logging.getLogger(__name__)


def _warn_if_outside_bounds(constants: PhysicalConstants) -> None:
    """Log warnings for constants outside typical ranges.

    This does not raise errors - values outside bounds may still be valid
    for sensitivity studies.
    """
    for name, (lower, upper) in TYPICAL_BOUNDS.items():
        value = getattr(constants, name)
        if value < lower or value > upper:
            logger.warning(
                "Physical constant %s=%.4f is outside typical range [%.2f, %.2f]",
                name,
                value,
                lower,
                upper,
            )


@dataclass(frozen=True)
class PhysicalConstants:
    """Physical constants of the ridging scheme.

    Attributes:
        rho_ice: Density of sea ice [kg/m^3].
        rho_snow: Density of snow [kg/m^3].
        rho_water: Density of seawater [kg/m^3].
        gravity: Gravitational acceleration [m/s^2].
        ridge_angle: Slope of the sail [deg].
        keel_angle: Slope of the keel [deg].
        compaction_length: Work stored in the rubble skeleton per unit
            weight of ridged ice and per e-fold of porosity [m].
    """

    rho_ice: float = RHO_ICE
    rho_snow: float = RHO_SNOW
    rho_water: float = RHO_WATER
    gravity: float = GRAVITY
    ridge_angle: float = RIDGE_ANGLE
    keel_angle: float = KEEL_ANGLE
    compaction_length: float = COMPACTION_LENGTH

    BOUNDS: ClassVar[dict[str, tuple[float, float]]] = TYPICAL_BOUNDS

    def __post_init__(self) -> None:
        """Reject unphysical constants and warn on unusual ones."""
        for name in ("rho_ice", "rho_snow", "rho_water", "gravity", "compaction_length"):
            if not getattr(self, name) > 0.0:
                msg = f"{name} must be positive, got {getattr(self, name)}"
                raise ValueError(msg)
        if self.rho_ice >= self.rho_water:
            msg = f"rho_ice ({self.rho_ice}) must be less than rho_water ({self.rho_water}) for ice to float"
            raise ValueError(msg)
        for name in ("ridge_angle", "keel_angle"):
            angle = getattr(self, name)
            if not 0.0 < angle < 90.0:
                msg = f"{name} must lie in (0, 90) degrees, got {angle}"
                raise ValueError(msg)
        _warn_if_outside_bounds(self)

    @property
    def delta_rho(self) -> float:
        """Density difference between seawater and ice [kg/m^3]."""
        return self.rho_water - self.rho_ice

    @property
    def tan_ridge(self) -> float:
        return math.tan(math.radians(self.ridge_angle))

    @property
    def tan_keel(self) -> float:
        return math.tan(math.radians(self.keel_angle))

    def __array__(self, dtype: np.dtype | None = None) -> np.ndarray:
        """Convert constants to 1D array in CONSTANT_NAMES order."""
        arr = np.array(
            [
                self.rho_ice,
                self.rho_snow,
                self.rho_water,
                self.gravity,
                self.ridge_angle,
                self.keel_angle,
                self.compaction_length,
            ],
            dtype=np.float64,
        )
        if dtype is not None:
            arr = arr.astype(dtype)
        return arr

    @classmethod
    def from_array(cls, arr: np.ndarray) -> PhysicalConstants:
        """Reconstruct PhysicalConstants from array."""
        return cls(
            rho_ice=float(arr[0]),
            rho_snow=float(arr[1]),
            rho_water=float(arr[2]),
            gravity=float(arr[3]),
            ridge_angle=float(arr[4]),
            keel_angle=float(arr[5]),
            compaction_length=float(arr[6]),
        )


def _as_axis(v: np.ndarray, name: str) -> np.ndarray:
    """Coerce to a 1D, non-empty, finite float64 array."""
    arr = np.asarray(v, dtype=np.float64)
    if arr.ndim != 1:
        msg = f"{name} array must be 1D, got {arr.ndim}D"
        raise ValueError(msg)
    if arr.size == 0:
        msg = f"{name} array must not be empty"
        raise ValueError(msg)
    if not np.all(np.isfinite(arr)):
        msg = f"{name} array contains non-finite values"
        raise ValueError(msg)
    return arr


def _require_increasing(arr: np.ndarray, name: str) -> None:
    if np.any(np.diff(arr) <= 0.0):
        msg = f"{name} array must be strictly increasing"
        raise ValueError(msg)


def _axis(start: float, stop: float, step: float) -> np.ndarray:
    """Evenly spaced axis including both ends."""
    n = round(abs(stop - start) / step) + 1
    return np.linspace(start, stop, n)


class GridSpec(BaseModel):
    """Validated discretization shared by all ridging components.

    Attributes:
        thickness: Thickness grid of g(h, phi) and parent ice of the
            zeta-hat plane [m]. Strictly increasing, non-negative.
        porosity: Macroporosity grid of g(h, phi) [-]. Strictly increasing
            in [0, 1]. The first entry is undeformed ice.
        strain: Strain sweep of the zeta-hat plane [-]. Strictly decreasing
            in (-1, 0].
        ridge_porosity: Porosity axis searched for the minimum-energy ridge [-].
            Strictly increasing in (0, 1).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    thickness: np.ndarray  # [m]
    porosity: np.ndarray  # [-]
    strain: np.ndarray  # [-]
    ridge_porosity: np.ndarray  # [-]

    @field_validator("thickness", mode="before")
    @classmethod
    def validate_thickness(cls, v: np.ndarray) -> np.ndarray:
        arr = _as_axis(v, "thickness")
        _require_increasing(arr, "thickness")
        if arr[0] < 0.0:
            msg = f"thickness must be non-negative, got minimum {arr[0]}"
            raise ValueError(msg)
        return arr

    @field_validator("porosity", mode="before")
    @classmethod
    def validate_porosity(cls, v: np.ndarray) -> np.ndarray:
        arr = _as_axis(v, "porosity")
        _require_increasing(arr, "porosity")
        if arr[0] < 0.0 or arr[-1] > 1.0:
            msg = f"porosity must lie in [0, 1], got [{arr[0]}, {arr[-1]}]"
            raise ValueError(msg)
        return arr

    @field_validator("strain", mode="before")
    @classmethod
    def validate_strain(cls, v: np.ndarray) -> np.ndarray:
        arr = _as_axis(v, "strain")
        if np.any(np.diff(arr) >= 0.0):
            msg = "strain array must be strictly decreasing (sweep from 0 toward -1)"
            raise ValueError(msg)
        if arr[0] > 0.0 or arr[-1] <= -1.0:
            msg = f"strain must lie in (-1, 0], got [{arr[-1]}, {arr[0]}]"
            raise ValueError(msg)
        return arr

    @field_validator("ridge_porosity", mode="before")
    @classmethod
    def validate_ridge_porosity(cls, v: np.ndarray) -> np.ndarray:
        arr = _as_axis(v, "ridge_porosity")
        _require_increasing(arr, "ridge_porosity")
        if arr[0] <= 0.0 or arr[-1] >= 1.0:
            msg = f"ridge_porosity must lie in (0, 1), got [{arr[0]}, {arr[-1]}]"
            raise ValueError(msg)
        return arr

    @model_validator(mode="after")
    def validate_porosity_coverage(self) -> GridSpec:
        """Ridge porosities must be representable on the distribution grid."""
        if self.ridge_porosity[-1] > self.porosity[-1] or self.ridge_porosity[0] < self.porosity[0]:
            logger.warning(
                "ridge_porosity [%.3f, %.3f] extends beyond porosity grid [%.3f, %.3f]; "
                "ridges will be mapped to the nearest edge category",
                self.ridge_porosity[0],
                self.ridge_porosity[-1],
                self.porosity[0],
                self.porosity[-1],
            )
        return self

    @property
    def shape(self) -> tuple[int, int]:
        """Shape of g(h, phi) on this grid."""
        return (len(self.thickness), len(self.porosity))

    @classmethod
    def default(
        cls,
        thickness: np.ndarray | None = None,
        porosity: np.ndarray | None = None,
    ) -> GridSpec:
        """Build the default grids, optionally with caller-supplied g(h, phi) axes."""
        if thickness is None:
            thickness = _axis(MIN_THICKNESS, MAX_THICKNESS, THICKNESS_INCREMENT)
        if porosity is None:
            porosity = _axis(0.0, 1.0, DISTRIBUTION_POROSITY_INCREMENT)
        return cls(
            thickness=thickness,
            porosity=porosity,
            strain=_axis(0.0, MIN_STRAIN, STRAIN_INCREMENT),
            ridge_porosity=_axis(MIN_RIDGE_POROSITY, MAX_RIDGE_POROSITY, POROSITY_INCREMENT),
        )
