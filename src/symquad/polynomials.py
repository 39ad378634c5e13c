from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import numpy.typing as npt


class JacobiP:
    """
    Jacobi polynomials P_n^(alpha, beta) evaluated at a fixed array of abscissae.

    Orders are produced on demand by the three-term recurrence and cached, so
    asking for n = 0, 1, 2, ... in turn costs a single recurrence step each.
    The arithmetic follows the element type of ``x`` (float64 or mpmath).
    """

    def __init__(self, alpha: int, beta: int, x: npt.NDArray[Any]) -> None:
        """
        Args:
            alpha: First Jacobi parameter.
            beta: Second Jacobi parameter.
            x: Abscissae in [-1, 1].
        """
        self.alpha = alpha
        self.beta = beta
        self.x = x
        self._values = [x*0 + 1]

    def __call__(self, n: int) -> npt.NDArray[Any]:
        """
        Value of the order ``n`` polynomial at every abscissa.

        Raises:
            ValueError: If ``n`` is negative.
        """
        if n < 0:
            raise ValueError(f"Polynomial order must be non-negative, got {n}")

        while len(self._values) <= n:
            self._step()

        return self._values[n]

    def _step(self) -> None:
        a, b, x = self.alpha, self.beta, self.x
        n = len(self._values) - 1
        p = self._values

        if n == 0:
            p.append(((a + b + 2)*x + (a - b)) / 2)
            return

        # 2(n+1)(n+a+b+1)(2n+a+b) P_{n+1} =
        #   (2n+a+b+1)[(2n+a+b+2)(2n+a+b) x + a^2 - b^2] P_n
        #   - 2(n+a)(n+b)(2n+a+b+2) P_{n-1}
        c = 2*n + a + b
        a1 = 2*(n + 1)*(n + a + b + 1)*c
        a2 = (c + 1)*(a*a - b*b)
        a3 = c*(c + 1)*(c + 2)
        a4 = 2*(n + a)*(n + b)*(c + 2)

        p.append(((a2 + a3*x)*p[n] - a4*p[n - 1]) / a1)


class EvenLegendreP(JacobiP):
    """
    Legendre polynomials restricted to even orders.

    Bases on reference cells with a reflection symmetry only ever need the
    even members; asking for an odd order is a programming error.
    """

    def __init__(self, x: npt.NDArray[Any]) -> None:
        super().__init__(0, 0, x)

    def __call__(self, n: int) -> npt.NDArray[Any]:
        if n % 2:
            raise ValueError(f"EvenLegendreP only evaluates even orders, got {n}")

        return super().__call__(n)
