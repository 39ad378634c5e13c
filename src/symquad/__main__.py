"""Command-line interface."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from symquad import config
from symquad.domains import create_domain, list_domains
from symquad.logging_config import setup_logging
from symquad.numeric import scalar_type

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symquad",
        description="Seed a symmetric orbit configuration, fit its weights and report the moment residual.",
    )
    parser.add_argument("--shape", default="pri", choices=list_domains(),
                        help="Reference cell shape.")
    parser.add_argument("--qdeg", type=int, required=True,
                        help="Polynomial degree the rule must integrate exactly.")
    parser.add_argument("--orbits", type=int, nargs="+", required=True,
                        help="Number of copies of each orbit type.")
    parser.add_argument("--seed", type=int, default=config.DEFAULT_SEED,
                        help="Seed of the random generator.")
    parser.add_argument("--dps", type=int, default=config.DEFAULT_DPS,
                        help="Decimal digits of precision (default: float64).")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    domain = create_domain(args.shape, args.qdeg, scalar=scalar_type(args.dps), seed=args.seed)

    if not domain.is_orbit_combination_valid(args.orbits):
        logger.error(f"Invalid orbit combination for {args.shape}: {tuple(args.orbits)}")
        return 2

    domain.configure(args.orbits)

    params = domain.seed()
    domain.canonicalize(params)

    try:
        wts = domain.fit_weights(params)
    except ValueError as e:
        logger.error(f"Could not fit weights: {e}")
        return 2

    resid = domain.residual(params, wts)
    pts = domain.expand(params)
    pt_wts = domain.expand_weights(wts)

    print(f"shape: {domain.name}  qdeg: {domain.qdeg}  orbits: {domain.orbits}")
    print(f"basis functions: {domain.nbfn}  points: {domain.npts}  parameters: {domain.nargs}")
    print(f"residual norm: {max((abs(r) for r in resid), default=0)}")
    for pt, w in zip(pts, pt_wts):
        print(" ".join(str(x) for x in pt), w)

    return 0


if __name__ == "__main__":
    sys.exit(main())
