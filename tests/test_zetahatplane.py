"""Tests for the zeta-hat plane tabulation."""

import numpy as np
import pytest

from ridgepack import GridSpec, ZetaHatPlane, trajectory, zetahatplane


@pytest.fixture
def grid() -> GridSpec:
    return GridSpec(
        thickness=np.array([0.0, 0.5, 1.0, 2.0, 4.0]),
        porosity=np.linspace(0.0, 1.0, 11),
        strain=np.linspace(0.0, -0.8, 9),
        ridge_porosity=np.linspace(0.1, 0.9, 9),
    )


@pytest.fixture
def plane(grid: GridSpec) -> ZetaHatPlane:
    return zetahatplane(grid)


class TestZetaHatPlane:
    """Tests for zetahatplane."""

    def test_field_shapes(self, plane: ZetaHatPlane) -> None:
        """Every field is thickness x strain."""
        for values in plane.to_dict().values():
            assert values.shape == (5, 9)

    def test_axes(self, plane: ZetaHatPlane, grid: GridSpec) -> None:
        """Rows follow thickness and columns follow strain."""
        np.testing.assert_array_equal(plane.hf[:, 0], grid.thickness)
        np.testing.assert_array_equal(plane.epsilon[0], grid.strain)
        assert np.all(plane.hf == plane.hf[:, :1])
        assert np.all(plane.hfs == 0.0)

    def test_rows_follow_trajectories(self, plane: ZetaHatPlane, grid: GridSpec) -> None:
        """Row i is the trajectory of thickness i."""
        for i, hf in enumerate(grid.thickness):
            path = trajectory(hf, 0.0, grid).arrays()
            np.testing.assert_allclose(plane.phi[i], path["porosity"])
            np.testing.assert_allclose(plane.vr[i], path["energy"])
            np.testing.assert_allclose(plane.lk[i], path["lk"])

    def test_equilibrium_porosity_varies(self, plane: ZetaHatPlane) -> None:
        """Ridges of different parents and strains settle at different porosities."""
        porosities = np.unique(plane.phi[plane.valid])
        assert len(porosities) >= 3

    def test_thin_ice_ridges_are_more_porous(self, plane: ZetaHatPlane) -> None:
        """At the same strain, thinner parents give looser ridges."""
        assert np.all(plane.phi[1, 1:] >= plane.phi[3, 1:])
        assert np.any(plane.phi[1, 1:] > plane.phi[3, 1:])

    def test_open_water_row_has_no_ridges(self, plane: ZetaHatPlane) -> None:
        """Zero thickness builds no ridges."""
        assert np.all(plane.vr[0] == 0.0)
        assert not plane.valid[0].any()

    def test_snow_per_thickness(self, grid: GridSpec) -> None:
        """Snow may be given per thickness row."""
        snow = np.array([0.0, 0.1, 0.2, 0.3, 0.4])
        plane = zetahatplane(grid, hfs=snow)

        np.testing.assert_array_equal(plane.hfs[:, 0], snow)
        path = trajectory(2.0, 0.3, grid).arrays()
        np.testing.assert_allclose(plane.hk[3], path["hk"])

    def test_progress_bar(self, grid: GridSpec) -> None:
        """The progress bar does not change the result."""
        plane = zetahatplane(grid, progress=True)
        assert plane.shape == (5, 9)


class TestMaskInadmissible:
    """Tests for masking ridges beyond the thickness range."""

    def test_zeroes_ridges_beyond_thickness_range(self, plane: ZetaHatPlane) -> None:
        """Only ridges with hk + hs above the limit are zeroed."""
        masked = plane.mask_inadmissible(4.0)
        too_thick = plane.hk + plane.hs > 4.0

        assert too_thick.any()
        assert np.all(masked.vr[too_thick] == 0.0)
        np.testing.assert_array_equal(masked.vr[~too_thick], plane.vr[~too_thick])

    def test_returns_new_plane(self, plane: ZetaHatPlane) -> None:
        """Masking leaves the original plane and geometry untouched."""
        masked = plane.mask_inadmissible(1.0)

        assert masked is not plane
        assert plane.valid.sum() > masked.valid.sum()
        np.testing.assert_array_equal(masked.hk, plane.hk)
