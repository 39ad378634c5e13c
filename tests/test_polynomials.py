"""
Tests for the recurrent orthogonal polynomial evaluators.
"""

import numpy as np
import pytest
from scipy.special import eval_jacobi

from symquad.numeric import MPScalar
from symquad.polynomials import EvenLegendreP, JacobiP


@pytest.fixture
def abscissae():
    return np.linspace(-1, 1, 11)


class TestJacobiP:
    """JacobiP against scipy's closed-form evaluation."""

    @pytest.mark.parametrize("alpha", [0, 1, 3, 5])
    def test_matches_scipy(self, abscissae, alpha):
        jp = JacobiP(alpha, 0, abscissae)
        for n in range(9):
            np.testing.assert_allclose(jp(n), eval_jacobi(n, alpha, 0, abscissae), rtol=1e-12, atol=1e-12)

    def test_nonzero_beta(self, abscissae):
        jp = JacobiP(2, 3, abscissae)
        np.testing.assert_allclose(jp(6), eval_jacobi(6, 2, 3, abscissae), rtol=1e-12, atol=1e-12)

    def test_out_of_order_requests(self, abscissae):
        """Asking for a lower order after a higher one reuses the cached value."""
        jp = JacobiP(3, 0, abscissae)
        high = jp(6)
        low = jp(2)
        np.testing.assert_allclose(low, JacobiP(3, 0, abscissae)(2))
        np.testing.assert_allclose(high, eval_jacobi(6, 3, 0, abscissae), rtol=1e-12)

    def test_negative_order_rejected(self, abscissae):
        with pytest.raises(ValueError):
            JacobiP(1, 0, abscissae)(-1)

    def test_multiprecision_endpoint(self):
        """P_n^(a,0)(1) = binomial(n + a, n) exactly."""
        T = MPScalar(40)
        x = T.asarray([1])
        value = JacobiP(3, 0, x)(4)[0]
        assert isinstance(value, type(T(0)))
        assert abs(value - 35) < T("1e-35")


class TestEvenLegendreP:
    """EvenLegendreP evaluates ordinary Legendre polynomials at even orders."""

    def test_matches_numpy(self, abscissae):
        jp = EvenLegendreP(abscissae)
        for n in range(0, 10, 2):
            coeffs = np.zeros(n + 1)
            coeffs[n] = 1
            np.testing.assert_allclose(jp(n), np.polynomial.legendre.legval(abscissae, coeffs), atol=1e-13)

    def test_odd_order_rejected(self, abscissae):
        with pytest.raises(ValueError):
            EvenLegendreP(abscissae)(3)

    def test_even_function(self, abscissae):
        jp = EvenLegendreP(abscissae)
        np.testing.assert_allclose(jp(4), jp(4)[::-1], atol=1e-14)
