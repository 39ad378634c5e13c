"""
Configuration & Global Constants
================================
This module serves as the central registry for the package-wide defaults.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (precision, seeds, tolerances)
   scattered throughout the domains and the command-line driver.
2. Reproducibility: Solver trials that do not pass their own seed fall back
   to DEFAULT_SEED, so two runs of the driver produce identical points.

Exports:
    DEFAULT_DPS (int | None): Decimal digits for multiprecision domains
        (None selects numpy float64).
    DEFAULT_SEED (int | None): Seed of the per-domain random generator.
    ORTHONORMALITY_TOL (float): Tolerance for the orthonormality backstop.
    MAX_CENTROID_POINTS (int): How often the lone centroid point may appear.
"""
from typing import Optional

# Global Constants
DEFAULT_DPS: Optional[int] = None
DEFAULT_SEED: Optional[int] = None
ORTHONORMALITY_TOL: float = 1e-10
MAX_CENTROID_POINTS: int = 1
