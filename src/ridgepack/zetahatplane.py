"""Tabulation of the zeta-hat plane over parent thickness and strain."""

from __future__ import annotations

import logging

import numpy as np
from tqdm.auto import tqdm

from .outputs import ZetaHatPlane
from .trajectory import trajectory
from .types import GridSpec, PhysicalConstants

logger = logging.getLogger(__name__)


def zetahatplane(
    grid: GridSpec | None = None,
    hfs: float | np.ndarray = 0.0,
    constants: PhysicalConstants | None = None,
    progress: bool = False,
) -> ZetaHatPlane:
    """Tabulate the minimum-energy trajectory of every parent thickness.

    Row i of each field follows the trajectory of level ice with thickness
    grid.thickness[i]; column j is the strain grid.strain[j].

    Args:
        grid: Discretization, defaults to GridSpec.default().
        hfs: Snow thickness on the parent ice [m], scalar or one per thickness.
        constants: Physical constants, defaults to PhysicalConstants().
        progress: Show a progress bar over thickness rows.

    Returns:
        ZetaHatPlane with fields of shape (n_thickness, n_strain).
    """
    if grid is None:
        grid = GridSpec.default()
    if constants is None:
        constants = PhysicalConstants()

    n_h = len(grid.thickness)
    n_e = len(grid.strain)
    snow = np.broadcast_to(np.asarray(hfs, dtype=np.float64), (n_h,))

    fields = {name: np.zeros((n_h, n_e)) for name in ("phi", "alphahat", "vr", "hk", "hs", "lk", "ls")}

    rows = tqdm(range(n_h), desc="Zeta-hat plane", unit="hF", disable=not progress)
    for i in rows:
        path = trajectory(grid.thickness[i], snow[i], grid, constants).arrays()
        fields["phi"][i] = path["porosity"]
        fields["vr"][i] = path["energy"]
        for name in ("alphahat", "hk", "hs", "lk", "ls"):
            fields[name][i] = path[name]

    hf, epsilon = np.meshgrid(grid.thickness, grid.strain, indexing="ij")
    logger.debug("Tabulated zeta-hat plane of shape %s", (n_h, n_e))

    return ZetaHatPlane(
        hf=hf,
        hfs=np.repeat(snow[:, None], n_e, axis=1),
        epsilon=epsilon,
        **fields,
    )
