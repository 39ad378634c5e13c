"""
Real Scalar Types
=================
Every domain computes in exactly one real scalar type. Parameter vectors,
point matrices and basis matrices are numpy arrays of that type: ``float64``
for double precision, or ``object`` arrays of mpmath ``mpf`` values when a
rule needs more digits than a double can hold.

Each ``MPScalar`` owns a private mpmath context, so two domains running at
different precisions never interfere with each other.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

import numpy as np
from mpmath.ctx_mp import MPContext

if TYPE_CHECKING:
    import numpy.typing as npt


def clamp(lo: Any, x: Any, hi: Any) -> Any:
    """
    Restrict ``x`` to the closed interval ``[lo, hi]``.

    NaN is mapped onto ``lo``, which keeps the result inside the interval
    whatever the optimiser produced. A bound that replaces ``x`` is returned
    in the type of ``x`` so object arrays of mpf stay homogeneous.
    """
    if x > hi:
        bound = hi
    elif x > lo:
        return x
    else:
        bound = lo

    if isinstance(x, int):
        return bound
    return type(x)(bound)


class FloatScalar:
    """
    Double precision scalars backed by numpy ``float64`` arrays.
    """
    dtype: Any = np.float64
    name = "float64"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    @property
    def dps(self) -> int:
        """Number of significant decimal digits."""
        return 15

    def __call__(self, value: Any) -> Any:
        """Convert ``value`` into the scalar type."""
        return np.float64(value)

    def sqrt(self, value: Any) -> Any:
        return np.sqrt(self(value))

    def zeros(self, shape: int | tuple[int, ...]) -> npt.NDArray[Any]:
        return np.zeros(shape, dtype=np.float64)

    def asarray(self, values: Any) -> npt.NDArray[Any]:
        return np.asarray(values, dtype=np.float64)

    def lstsq(self, a: npt.NDArray[Any], b: npt.NDArray[Any]) -> npt.NDArray[Any]:
        """Minimum-norm least squares solution of ``a @ x = b``."""
        return np.linalg.lstsq(a, b, rcond=None)[0]


class MPScalar(FloatScalar):
    """
    Multiprecision scalars backed by numpy ``object`` arrays of mpmath ``mpf``.
    """
    dtype = object
    name = "mpmath"

    def __init__(self, dps: int) -> None:
        """
        Args:
            dps: Number of decimal digits carried by every operation.
        """
        if dps <= 0:
            raise ValueError(f"Precision must be positive, got dps={dps}")
        self.ctx = MPContext()
        self.ctx.dps = dps

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(dps={self.ctx.dps})"

    @property
    def dps(self) -> int:
        return self.ctx.dps

    def __call__(self, value: Any) -> Any:
        return self.ctx.mpf(value)

    def sqrt(self, value: Any) -> Any:
        return self.ctx.sqrt(self(value))

    def zeros(self, shape: int | tuple[int, ...]) -> npt.NDArray[Any]:
        return np.full(shape, self.ctx.zero, dtype=object)

    def asarray(self, values: Any) -> npt.NDArray[Any]:
        arr = np.asarray(values, dtype=object)
        out = np.array([self(v) for v in arr.flat], dtype=object)
        return out.reshape(arr.shape)

    def lstsq(self, a: npt.NDArray[Any], b: npt.NDArray[Any]) -> npt.NDArray[Any]:
        """
        Least squares solution of ``a @ x = b`` via Householder QR.

        mpmath only solves square or overdetermined systems; an
        underdetermined ``a`` raises ``ValueError``.
        """
        x, _ = self.ctx.qr_solve(self.ctx.matrix(a.tolist()), self.ctx.matrix(list(b)))
        return np.array([x[i] for i in range(x.rows)], dtype=object)


def scalar_type(dps: Optional[int] = None) -> FloatScalar:
    """
    Select the scalar type for a domain.

    Args:
        dps: Decimal digits of precision, or None for numpy ``float64``.

    Returns:
        A ``FloatScalar`` or an ``MPScalar`` carrying ``dps`` digits.
    """
    if dps is None:
        return FloatScalar()
    return MPScalar(dps)
