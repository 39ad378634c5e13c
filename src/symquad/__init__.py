"""
symquad
=======
Symmetric orbit model and orthonormal polynomial basis for computing
fully symmetric quadrature rules on reference cells.

Note: This package is pure Python/NumPy; multiprecision support comes from mpmath.
"""
from symquad.domains import BaseDomain, OrbitDescriptor, PrismDomain, create_domain, list_domains
from symquad.numeric import FloatScalar, MPScalar, scalar_type

__all__ = [
    "BaseDomain",
    "FloatScalar",
    "MPScalar",
    "OrbitDescriptor",
    "PrismDomain",
    "create_domain",
    "list_domains",
    "scalar_type",
]

__version__ = "0.1.0"
