from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Iterator, Optional, Sequence

import numpy as np

from symquad import config
from symquad.numeric import FloatScalar, scalar_type

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrbitDescriptor:
    """
    Immutable orbit table of a reference cell.

    Entry ``i`` states how many points orbit ``i`` expands to and how many
    free parameters it consumes.
    """
    npts: tuple[int, ...]
    narg: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.npts) != len(self.narg):
            raise ValueError("Orbit table needs one point count and one parameter count per orbit")

    @property
    def norbits(self) -> int:
        """Number of distinct orbit types."""
        return len(self.npts)

    def _check(self, i: int) -> None:
        if not 0 <= i < self.norbits:
            raise ValueError(f"Bad orbit: {i}. Orbit ids run from 0 to {self.norbits - 1}.")

    def points_for_orbit(self, i: int) -> int:
        """Number of points orbit ``i`` expands to."""
        self._check(i)
        return self.npts[i]

    def params_for_orbit(self, i: int) -> int:
        """Number of free parameters orbit ``i`` consumes."""
        self._check(i)
        return self.narg[i]


class BaseDomain(ABC):
    """
    Abstract base class for the symmetric orbit model of a reference cell.

    A solver trial works with a fixed orbit-count vector ``orb``: ``orb[i]``
    copies of orbit ``i`` are present, each with its own parameters and its
    own weight. The parameter vector concatenates the parameters of every
    orbit copy in order of increasing orbit id, and the point matrix
    concatenates their expansions in the same order.

    Subclasses supply the shape specific pieces: the orbit table, the per
    orbit expansion, clamping, canonicalisation and seeding, and the
    orthonormal basis.
    """
    name: ClassVar[str]
    ndim: ClassVar[int]
    volume: ClassVar[float]
    descriptor: ClassVar[OrbitDescriptor]

    def __init__(
        self,
        qdeg: int,
        scalar: Optional[FloatScalar] = None,
        seed: Optional[int] = config.DEFAULT_SEED,
    ) -> None:
        """
        Initialize the domain.

        Args:
            qdeg: Polynomial degree the rules must integrate exactly.
            scalar: Real scalar type, double precision if omitted.
            seed: Seed of the random generator used by ``seed``.
        """
        if qdeg < 0:
            raise ValueError(f"Quadrature degree must be non-negative, got {qdeg}")

        self._qdeg = qdeg
        self.scalar = scalar if scalar is not None else scalar_type(config.DEFAULT_DPS)
        self.rng = np.random.default_rng(seed)
        self._orb: tuple[int, ...] = (0,)*self.descriptor.norbits

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(qdeg={self._qdeg}, orbits={self._orb}, scalar={self.scalar!r})"

    @property
    def qdeg(self) -> int:
        return self._qdeg

    @property
    def nbfn(self) -> int:
        """Number of basis functions, and so of moment equations, for ``qdeg``."""
        return self.nbfn_for_qdeg(self._qdeg)

    @property
    def orbits(self) -> tuple[int, ...]:
        return self._orb

    @property
    def npts(self) -> int:
        """Number of points of the configured rule."""
        return sum(n*p for n, p in zip(self._orb, self.descriptor.npts))

    @property
    def nargs(self) -> int:
        """Length of the parameter vector of the configured rule."""
        return sum(n*a for n, a in zip(self._orb, self.descriptor.narg))

    @property
    def nwts(self) -> int:
        """Number of independent weights, one per orbit copy."""
        return sum(self._orb)

    # ------------------------------------------------------------------
    # Shape descriptor
    # ------------------------------------------------------------------

    @classmethod
    def points_for_orbit(cls, i: int) -> int:
        return cls.descriptor.points_for_orbit(i)

    @classmethod
    def params_for_orbit(cls, i: int) -> int:
        return cls.descriptor.params_for_orbit(i)

    @classmethod
    def basis_count_for_degree(cls, qdeg: int) -> int:
        return cls.nbfn_for_qdeg(qdeg)

    @classmethod
    def is_orbit_combination_valid(cls, orb: Sequence[int]) -> bool:
        """
        Check that ``orb`` is an acceptable orbit-count vector for this shape.

        The vector needs one non-negative integer count per orbit type and
        must satisfy the shape specific rule of ``validate_orbit``.
        """
        if len(orb) != cls.descriptor.norbits:
            return False
        if not all(isinstance(n, (int, np.integer)) and n >= 0 for n in orb):
            return False

        return cls.validate_orbit(tuple(int(n) for n in orb))

    def configure(self, orb: Sequence[int]) -> None:
        """
        Fix the orbit-count vector for the next solver trial.

        Raises:
            ValueError: If ``orb`` is not a valid combination for this shape.
        """
        if not self.is_orbit_combination_valid(orb):
            raise ValueError(f"Invalid orbit combination for {self.name}: {tuple(orb)}")

        self._orb = tuple(int(n) for n in orb)
        logger.debug(f"{self.name}: orbits={self._orb}, npts={self.npts}, nargs={self.nargs}, "
                     f"nbfn={self.nbfn}")

    def orbit_layout(self) -> Iterator[tuple[int, int, int]]:
        """
        Yield ``(orbit_id, arg_offset, pt_offset)`` for every orbit copy.
        """
        aoff = poff = 0
        for i, n in enumerate(self._orb):
            for _ in range(n):
                yield i, aoff, poff
                aoff += self.descriptor.narg[i]
                poff += self.descriptor.npts[i]

    # ------------------------------------------------------------------
    # Whole-vector operations
    # ------------------------------------------------------------------

    def _check_args(self, args: npt.NDArray[Any]) -> None:
        if len(args) != self.nargs:
            raise ValueError(f"Expected {self.nargs} parameters, got {len(args)}")

    def expand(self, args: npt.NDArray[Any], out: Optional[npt.NDArray[Any]] = None) -> npt.NDArray[Any]:
        """
        Expand a parameter vector into the (npts, ndim) point matrix.

        Args:
            args: Parameter vector of the configured rule.
            out: Optional caller-owned buffer to write the points into.

        Returns:
            The point matrix.
        """
        self._check_args(args)

        if out is None:
            out = self.scalar.zeros((self.npts, self.ndim))
        elif out.shape != (self.npts, self.ndim):
            raise ValueError(f"Point buffer must have shape {(self.npts, self.ndim)}, got {out.shape}")

        for i, aoff, poff in self.orbit_layout():
            self.expand_orbit(i, aoff, poff, args, out)

        return out

    def clamp(self, args: npt.NDArray[Any]) -> None:
        """Pull every orbit's parameters back into its feasible region, in place."""
        self._check_args(args)
        for i, aoff, _ in self.orbit_layout():
            self.clamp_orbit(i, aoff, args)

    def canonicalize(self, args: npt.NDArray[Any]) -> None:
        """Rewrite every orbit's parameters in their canonical form, in place."""
        self._check_args(args)
        for i, aoff, _ in self.orbit_layout():
            self.canonicalize_orbit(i, aoff, args)

    def seed(self, args: Optional[npt.NDArray[Any]] = None) -> npt.NDArray[Any]:
        """
        Draw a random starting point for the optimiser.

        Every orbit is seeded and then clamped, so the result always lies in
        the feasible region.

        Args:
            args: Optional caller-owned parameter vector to overwrite.

        Returns:
            The seeded parameter vector.
        """
        if args is None:
            args = self.scalar.zeros(self.nargs)
        self._check_args(args)

        for i, aoff, _ in self.orbit_layout():
            self.seed_orbit(i, aoff, args)
            self.clamp_orbit(i, aoff, args)

        logger.debug(f"{self.name}: seeded {self.nargs} parameters")
        return args

    def rand(self, lo: float = 0.0, hi: float = 1.0) -> Any:
        """Uniform random number in ``[lo, hi)`` in the domain's scalar type."""
        return self.scalar(self.rng.uniform(lo, hi))

    def eval_basis(self, pts: npt.NDArray[Any], out: Optional[npt.NDArray[Any]] = None) -> npt.NDArray[Any]:
        """
        Evaluate the orthonormal basis at a batch of points.

        Args:
            pts: (n, ndim) array of points in the reference cell.
            out: Optional caller-owned (nbfn, n) buffer.

        Returns:
            (nbfn, n) array, row ``m`` holding basis function ``m`` at every point.

        Raises:
            RuntimeError: If the evaluator and the degree enumeration disagree
                on the number of basis functions.
        """
        shape = (self.nbfn, len(pts))
        if out is None:
            out = self.scalar.zeros(shape)
        elif out.shape != shape:
            raise ValueError(f"Basis buffer must have shape {shape}, got {out.shape}")

        nrows = self.eval_basis_block(pts, out)
        if nrows != self.nbfn:
            raise RuntimeError(f"{self.name}: basis evaluation produced {nrows} functions, "
                               f"degree {self._qdeg} requires {self.nbfn}")

        return out

    def expand_weights(self, wts: npt.NDArray[Any]) -> npt.NDArray[Any]:
        """Repeat each orbit weight over the points of its orbit."""
        if len(wts) != self.nwts:
            raise ValueError(f"Expected {self.nwts} weights, got {len(wts)}")

        npts = [self.descriptor.npts[i] for i, _, _ in self.orbit_layout()]
        return np.repeat(np.asarray(wts, dtype=self.scalar.dtype), npts)

    def exact_moments(self) -> npt.NDArray[Any]:
        """
        Integrals of the basis functions over the reference cell.

        The basis is orthonormal and its first member is constant, so only
        that function has a non-zero integral, ``sqrt(volume)``.
        """
        moments = self.scalar.zeros(self.nbfn)
        moments[0] = self.scalar.sqrt(self.volume)
        return moments

    def moments(self, args: npt.NDArray[Any], wts: npt.NDArray[Any]) -> npt.NDArray[Any]:
        """Basis moments computed by the rule with parameters ``args`` and weights ``wts``."""
        return self.eval_basis(self.expand(args)) @ self.expand_weights(wts)

    def residual(self, args: npt.NDArray[Any], wts: npt.NDArray[Any]) -> npt.NDArray[Any]:
        """Difference between the rule's moments and the exact ones."""
        return self.moments(args, wts) - self.exact_moments()

    def fit_weights(self, args: npt.NDArray[Any]) -> npt.NDArray[Any]:
        """
        Orbit weights that best reproduce the exact moments for fixed points.

        Args:
            args: Parameter vector of the configured rule.

        Returns:
            Least squares orbit weights, one per orbit copy.
        """
        b = self.eval_basis(self.expand(args))

        a = self.scalar.zeros((self.nbfn, self.nwts))
        for m, (i, _, poff) in enumerate(self.orbit_layout()):
            a[:, m] = b[:, poff:poff + self.descriptor.npts[i]].sum(axis=1)

        wts = self.scalar.lstsq(a, self.exact_moments())
        logger.debug(f"{self.name}: fitted {self.nwts} weights against {self.nbfn} moments")
        return wts

    # ------------------------------------------------------------------
    # Shape specific pieces
    # ------------------------------------------------------------------

    @staticmethod
    @abstractmethod
    def nbfn_for_qdeg(qdeg: int) -> int:
        """Number of basis functions needed for degree ``qdeg``."""
        pass

    @staticmethod
    @abstractmethod
    def validate_orbit(orb: tuple[int, ...]) -> bool:
        """Shape specific rule on which orbit-count vectors are acceptable."""
        pass

    @abstractmethod
    def expand_orbit(self, i: int, aoff: int, poff: int,
                     args: npt.NDArray[Any], pts: npt.NDArray[Any]) -> None:
        """Write the points of orbit ``i`` into ``pts`` starting at row ``poff``."""
        pass

    @abstractmethod
    def seed_orbit(self, i: int, aoff: int, args: npt.NDArray[Any]) -> None:
        """Draw random parameters for orbit ``i`` starting at ``args[aoff]``."""
        pass

    @staticmethod
    @abstractmethod
    def clamp_orbit(i: int, aoff: int, args: npt.NDArray[Any]) -> None:
        """Clamp the parameters of orbit ``i`` into its feasible region."""
        pass

    @staticmethod
    @abstractmethod
    def canonicalize_orbit(i: int, aoff: int, args: npt.NDArray[Any]) -> None:
        """Replace the parameters of orbit ``i`` by their canonical representative."""
        pass

    @abstractmethod
    def eval_basis_block(self, pts: npt.NDArray[Any], out: npt.NDArray[Any]) -> int:
        """Fill ``out`` with the basis at ``pts`` and return the number of rows written."""
        pass
