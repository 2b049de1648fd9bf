#!/usr/bin/env python3
from __future__ import annotations

import argparse
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from hilal.core.config import SearchConfig
from hilal.engines.locator import bracket_new_moon, phase_at, refine_new_moon
from hilal.reference import time_scales as ts


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "hilal[diagnostics]"') from e


def _need_scipy_optimize():
    try:
        import scipy.optimize as opt
        return opt
    except ImportError as e:
        raise RuntimeError('Need scipy. Install: pip install "hilal[diagnostics]"') from e


def bisection_errors_seconds(np, opt, start: datetime, count: int, search: Optional[SearchConfig] = None):
    """
    For `count` consecutive lunations, the difference (seconds) between the
    fixed-iteration bisection and a converged brentq root of the same phase model.
    """
    search = search or SearchConfig()

    def signed(jd: float) -> float:
        p = phase_at(jd, search)
        return p - 1.0 if p >= 0.5 else p

    errs = np.empty(count, dtype=float)
    seed = start
    for i in range(count):
        lo, hi = bracket_new_moon(seed, search)
        jd_bisect = refine_new_moon(lo, hi, search)
        jd_root = opt.brentq(signed, lo, hi, xtol=1e-9)
        errs[i] = (jd_bisect - jd_root) * 86400.0
        seed = ts.from_julian_date(jd_root) + timedelta(days=search.resume_offset_days)
    return errs


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Bisection precision of the new-moon locator against brentq.")
    p.add_argument("--start-year", type=int, default=2020)
    p.add_argument("--count", type=int, default=120)
    p.add_argument("--iterations", type=int, default=10, help="Bisection iterations.")
    p.add_argument("--phase-model", choices=["apparent", "mean"], default="apparent")
    args = p.parse_args(argv)

    np = _need_numpy()
    opt = _need_scipy_optimize()

    search = SearchConfig(bisection_iterations=args.iterations, phase_model=args.phase_model)
    start = datetime(args.start_year, 1, 1, tzinfo=timezone.utc)
    errs = bisection_errors_seconds(np, opt, start, args.count, search)

    print(f"{args.count} lunations from {start.date().isoformat()}, {args.iterations} bisection iterations")
    print(f"  max |error| = {np.max(np.abs(errs)):.1f} s")
    print(f"  rms error   = {np.sqrt(np.mean(errs ** 2)):.1f} s")
    print(f"  bound       = {86400.0 * search.bracket_half_width_days / 2 ** args.iterations:.1f} s")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
