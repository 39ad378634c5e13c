"""
Tests for the reference product rule on the prism.
"""

import numpy as np
import pytest

from symquad.reference import gauss_points_weights_prism


@pytest.fixture
def rule():
    return gauss_points_weights_prism(4)


class TestPrismGaussRule:

    def test_size(self, rule):
        pts, w = rule
        assert pts.shape == (64, 3)
        assert w.shape == (64,)

    def test_volume(self, rule):
        _, w = rule
        assert w.sum() == pytest.approx(4.0)
        assert np.all(w > 0)

    def test_points_inside(self, rule):
        pts, _ = rule
        assert np.all(pts[:, :2] > -1)
        assert np.all(pts[:, 0] + pts[:, 1] < 0)
        assert np.all(np.abs(pts[:, 2]) < 1)

    @pytest.mark.parametrize("f,exact", [
        (lambda x, y, z: x, -4/3),
        (lambda x, y, z: z**2, 4/3),
        (lambda x, y, z: x*y, 0.0),
        (lambda x, y, z: x**2*z**2, 2/3*2/3),
    ])
    def test_integrates_polynomials(self, rule, f, exact):
        pts, w = rule
        assert f(*pts.T) @ w == pytest.approx(exact, abs=1e-13)

    def test_invalid(self):
        with pytest.raises(ValueError):
            gauss_points_weights_prism(0)
