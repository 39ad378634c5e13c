from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from scipy.special import roots_jacobi

if TYPE_CHECKING:
    import numpy.typing as npt


def gauss_points_weights_prism(n_points: int) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Generate Gauss points and weights for the reference prism.

    The triangle (-1, -1), (1, -1), (-1, 1) is collapsed onto the square
    [-1, 1]^2; Gauss-Legendre points run along the collapsed direction,
    Gauss-Jacobi(1, 0) points absorb the collapse Jacobian along the other,
    and Gauss-Legendre points run along the extrusion axis z in [-1, 1].

    Args:
        n_points: Number of Gauss points per direction.

    Raises:
        ValueError: If `n_points` is smaller than 1.

    Returns:
        A tuple containing the (n_points^3, 3) points and their weights. The
        rule integrates polynomials of degree 2*n_points - 1 exactly.
    """
    if n_points < 1:
        raise ValueError(f"Unsupported number of Gauss points: {n_points}. "
                         f"'n_points' must be at least 1.")

    xa, wa = np.polynomial.legendre.leggauss(n_points)
    xb, wb = roots_jacobi(n_points, 1, 0)
    xc, wc = np.polynomial.legendre.leggauss(n_points)

    a, b, c = (g.ravel() for g in np.meshgrid(xa, xb, xc, indexing="ij"))
    w = np.einsum("i,j,k->ijk", wa, wb, wc).ravel() / 2

    p = (1 + a)*(1 - b)/2 - 1
    return np.column_stack([p, b, c]), w
