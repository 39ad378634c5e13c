from __future__ import annotations

from itertools import groupby
from operator import itemgetter
from typing import TYPE_CHECKING, Any, Iterator

import numpy as np

from symquad import config
from symquad.domains.base import BaseDomain, OrbitDescriptor
from symquad.domains.registry import register_domain
from symquad.numeric import clamp
from symquad.polynomials import EvenLegendreP, JacobiP

if TYPE_CHECKING:
    import numpy.typing as npt


def orthob_indices(qdeg: int) -> Iterator[tuple[int, int, int]]:
    """
    Degree triples ``(i, j, k)`` of the prism basis, in evaluation order.

    ``i`` indexes the Legendre factor in the collapsed triangle coordinate,
    ``j`` the Jacobi factor along the triangle's second axis and ``k`` the
    Legendre factor along the extrusion axis. Both Legendre indices only take
    even values.
    """
    for i in range(0, qdeg + 1, 2):
        for j in range(i, qdeg - i + 1):
            for k in range(0, qdeg - i - j + 1, 2):
                yield i, j, k


@register_domain
class PrismDomain(BaseDomain):
    """
    Symmetric orbit model of the reference triangular prism.

    The prism is the triangle with vertices (-1, -1), (1, -1), (-1, 1)
    extruded over z in [-1, 1]. Points are described by the barycentric
    coordinates of their triangular cross-section together with an axial
    offset; orbits combine the six permutations of the barycentric triple
    with the z -> -z reflection.

    ==== ====== ====== ==========================================
    id   points params generator
    ==== ====== ====== ==========================================
    0    1      0      centroid
    1    2      1      centroid at z = +-b
    2    3      1      (a, a, 1 - 2a) at z = 0
    3    6      2      (a, a, 1 - 2a) at z = +-b
    4    6      2      (a, b, 1 - a - b) at z = 0
    5    12     3      (a, b, 1 - a - b) at z = +-c
    ==== ====== ====== ==========================================
    """
    name = "pri"
    ndim = 3
    volume = 4
    descriptor = OrbitDescriptor(npts=(1, 2, 3, 6, 6, 12), narg=(0, 1, 1, 2, 2, 3))

    @staticmethod
    def nbfn_for_qdeg(qdeg: int) -> int:
        return sum(1 for _ in orthob_indices(qdeg))

    @staticmethod
    def validate_orbit(orb: tuple[int, ...]) -> bool:
        # A second centroid point would duplicate the first
        return orb[0] <= config.MAX_CENTROID_POINTS

    @staticmethod
    def bary_to_cart(p1: Any, p2: Any, p3: Any, z: Any) -> tuple[Any, Any, Any]:
        """Map barycentric cross-section coordinates plus an axial offset to (x, y, z)."""
        return -p1 + p2 - p3, -p1 - p2 + p3, z

    def expand_orbit(self, i: int, aoff: int, poff: int,
                     args: npt.NDArray[Any], pts: npt.NDArray[Any]) -> None:
        b2c = self.bary_to_cart
        zero = self.scalar(0)

        if i == 0:
            a = self.scalar(1) / 3
            pts[poff] = b2c(a, a, a, zero)
        elif i == 1:
            a = self.scalar(1) / 3
            b = args[aoff]
            pts[poff + 0] = b2c(a, a, a, -b)
            pts[poff + 1] = b2c(a, a, a, b)
        elif i in (2, 3):
            a = args[aoff]
            zs = (zero,) if i == 2 else (-args[aoff + 1], args[aoff + 1])
            for m, z in enumerate(zs):
                pts[poff + 3*m + 0] = b2c(a, a, 1 - 2*a, z)
                pts[poff + 3*m + 1] = b2c(a, 1 - 2*a, a, z)
                pts[poff + 3*m + 2] = b2c(1 - 2*a, a, a, z)
        elif i in (4, 5):
            a, b = args[aoff], args[aoff + 1]
            c = 1 - a - b
            zs = (zero,) if i == 4 else (-args[aoff + 2], args[aoff + 2])
            for m, z in enumerate(zs):
                pts[poff + 6*m + 0] = b2c(a, b, c, z)
                pts[poff + 6*m + 1] = b2c(a, c, b, z)
                pts[poff + 6*m + 2] = b2c(b, a, c, z)
                pts[poff + 6*m + 3] = b2c(b, c, a, z)
                pts[poff + 6*m + 4] = b2c(c, a, b, z)
                pts[poff + 6*m + 5] = b2c(c, b, a, z)
        else:
            raise ValueError(f"Bad orbit: {i}")

    def seed_orbit(self, i: int, aoff: int, args: npt.NDArray[Any]) -> None:
        def seeda():
            return self.rand(0, 0.5)

        def seedb():
            return self.rand(0, 1.0 / 3.0)

        # Axial offsets concentrate towards the end caps
        def seedc():
            return self.scalar.sqrt(1 - self.rand()**2)

        if i == 0:
            pass
        elif i == 1:
            args[aoff] = seedc()
        elif i == 2:
            args[aoff] = seeda()
        elif i == 3:
            args[aoff + 0] = seeda()
            args[aoff + 1] = seedc()
        elif i == 4:
            args[aoff + 0] = seedb()
            args[aoff + 1] = seedb()
        elif i == 5:
            args[aoff + 0] = seedb()
            args[aoff + 1] = seedb()
            args[aoff + 2] = seedc()
        else:
            raise ValueError(f"Bad orbit: {i}")

    @staticmethod
    def clamp_orbit(i: int, aoff: int, args: npt.NDArray[Any]) -> None:
        if i == 0:
            pass
        elif i == 1:
            args[aoff] = clamp(0, args[aoff], 1)
        elif i == 2:
            args[aoff] = clamp(0, args[aoff], 0.5)
        elif i == 3:
            args[aoff + 0] = clamp(0, args[aoff + 0], 0.5)
            args[aoff + 1] = clamp(0, args[aoff + 1], 1)
        elif i in (4, 5):
            # All three barycentric coordinates must stay in [0, 1]
            args[aoff + 0] = clamp(0, args[aoff + 0], 1)
            args[aoff + 1] = clamp(0, args[aoff + 1], 1 - args[aoff + 0])
            if i == 5:
                args[aoff + 2] = clamp(0, args[aoff + 2], 1)
        else:
            raise ValueError(f"Bad orbit: {i}")

    @staticmethod
    def canonicalize_orbit(i: int, aoff: int, args: npt.NDArray[Any]) -> None:
        if i in (4, 5):
            baryc = sorted([args[aoff + 0], args[aoff + 1], 1 - args[aoff + 0] - args[aoff + 1]])
            args[aoff + 0], args[aoff + 1] = baryc[0], baryc[1]
        elif not 0 <= i <= 3:
            raise ValueError(f"Bad orbit: {i}")

    def eval_basis_block(self, pts: npt.NDArray[Any], out: npt.NDArray[Any]) -> int:
        """
        Evaluate the orthonormal prism basis.

        Function ``(i, j, k)`` is

            2^(-i-1) sqrt((2i + 1)(2k + 1)(i + j + 1))
                * (1 - q)^i P_i(a) P_j^(2i+1, 0)(q) P_k(r)

        with the collapsed coordinate ``a = 2(1 + p)/(1 - q) - 1``, taken as
        zero at the collapsed vertex ``q = 1``.

        Args:
            pts: (n, 3) array of points ``(p, q, r)``.
            out: (nbfn, n) array receiving one basis function per row.

        Returns:
            Number of rows written.
        """
        T = self.scalar
        p, q, r = pts[:, 0], pts[:, 1], pts[:, 2]

        collapsed = q == 1
        a = np.where(collapsed, T(0), 2*(1 + p)/np.where(collapsed, T(1), 1 - q) - 1)
        b, c = q, r

        pow2ip1 = T(1) / 2
        pow1mqi = b*0 + 1
        ipow = 0

        jpa = EvenLegendreP(a)

        off = 0
        for i, ijk in groupby(orthob_indices(self.qdeg), key=itemgetter(0)):
            while ipow < i:
                pow1mqi = pow1mqi*(1 - b)*(1 - b)
                pow2ip1 /= 4
                ipow += 2

            jpb = JacobiP(2*i + 1, 0, b)

            for j, jk in groupby(ijk, key=itemgetter(1)):
                jpc = EvenLegendreP(c)

                for _, _, k in jk:
                    cijk = pow2ip1*T.sqrt((2*i + 1)*(2*k + 1)*(i + j + 1))

                    out[off] = cijk*pow1mqi*jpa(i)*jpb(j)*jpc(k)
                    off += 1

        return off
