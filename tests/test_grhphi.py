"""Tests for the single-ridge area transform.

Tests verify:
- The step function covers a unit ridge footprint
- Ridged area lies between the level ice and the ridge crest
- Degenerate ridges collapse onto the level ice category
"""

import numpy as np
import pytest

from ridgepack import energetics, grhphi
from ridgepack.grhphi import thickness_edges


@pytest.fixture
def hgrid() -> np.ndarray:
    return np.linspace(0.0, 10.0, 101)


def _category(edges: np.ndarray, h: float) -> int:
    return int(np.searchsorted(edges, h, side="right")) - 1


class TestThicknessEdges:
    """Tests for the thickness category edges."""

    def test_midpoints_with_open_ends(self) -> None:
        """Edges sit at grid midpoints with open outer bounds."""
        edges = thickness_edges(np.array([0.0, 1.0, 3.0]))
        np.testing.assert_array_equal(edges, [-np.inf, 0.5, 2.0, np.inf])


class TestGrhphi:
    """Tests for the single-ridge area kernel."""

    @pytest.mark.parametrize(
        ("hf", "hfs", "eps", "phi"),
        [
            (0.5, 0.0, -0.1, 0.1),
            (1.0, 0.0, -0.5, 0.3),
            (2.0, 0.3, -0.3, 0.2),
            (1.0, 0.1, -0.8, 0.6),
        ],
    )
    def test_unit_footprint(self, hgrid: np.ndarray, hf: float, hfs: float, eps: float, phi: float) -> None:
        """Kernel fractions sum to 1 and are non-negative."""
        kernel = grhphi(hgrid, hf, hfs, eps, phi)

        assert kernel.shape == hgrid.shape
        assert kernel.sum() == pytest.approx(1.0, abs=1e-12)
        assert np.all(kernel >= 0.0)

    def test_area_between_level_ice_and_crest(self, hgrid: np.ndarray) -> None:
        """Ridged area spans the level ice to the ridge crest."""
        hf, hfs, eps, phi = 1.0, 0.0, -0.5, 0.3
        kernel = grhphi(hgrid, hf, hfs, eps, phi)
        ridge = energetics(hf, hfs, eps, phi)
        edges = thickness_edges(hgrid)

        lowest = _category(edges, hf + hfs)
        highest = _category(edges, float(ridge.hk + ridge.hs))
        assert np.all(kernel[:lowest] == 0.0)
        assert np.all(kernel[highest + 1 :] == 0.0)
        assert kernel[lowest : highest + 1].sum() == pytest.approx(1.0)

    def test_more_strain_shifts_area_to_thicker_ice(self, hgrid: np.ndarray) -> None:
        """Stronger strain moves the kernel mean to thicker ice."""
        mild = grhphi(hgrid, 1.0, 0.0, -0.2, 0.3)
        strong = grhphi(hgrid, 1.0, 0.0, -0.6, 0.3)

        assert np.dot(strong, hgrid) > np.dot(mild, hgrid)

    def test_degenerate_ridge_stays_at_level_ice(self, hgrid: np.ndarray) -> None:
        """Without strain or porosity there is no keel, all area stays at hF."""
        kernel = grhphi(hgrid, 1.0, 0.0, 0.0, 0.0)

        expected = np.zeros_like(hgrid)
        expected[10] = 1.0
        np.testing.assert_array_equal(kernel, expected)

    def test_ridge_beyond_grid_lands_in_last_category(self) -> None:
        """Ridges thicker than the grid collect in the last category."""
        hgrid = np.array([0.0, 1.0, 2.0])
        kernel = grhphi(hgrid, 1.0, 0.0, -0.8, 0.5)

        assert kernel.sum() == pytest.approx(1.0)
        assert kernel[-1] > kernel[1]
