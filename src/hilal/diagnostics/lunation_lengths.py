#!/usr/bin/env python3
from __future__ import annotations

import argparse
from datetime import datetime, timezone
from typing import List, Optional

from hilal.core.config import SearchConfig
from hilal.engines.locator import find_new_moons
from hilal.reference import time_scales as ts


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "hilal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "hilal[diagnostics]"') from e


def new_moon_jds(np, start: datetime, count: int, search: Optional[SearchConfig] = None):
    return np.array([ts.to_julian_date(t) for t in find_new_moons(start, count, search)], dtype=float)


def lunation_lengths(np, start: datetime, count: int, search: Optional[SearchConfig] = None):
    """Days between consecutive new moons (count - 1 values)."""
    return np.diff(new_moon_jds(np, start, count, search))


def summarize(np, lengths) -> dict:
    return {
        "n": int(lengths.size),
        "mean": float(np.mean(lengths)),
        "std": float(np.std(lengths)),
        "min": float(np.min(lengths)),
        "max": float(np.max(lengths)),
    }


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Statistics of lunation lengths from the new-moon locator.")
    p.add_argument("--start-year", type=int, default=2000)
    p.add_argument("--count", type=int, default=250, help="Number of new moons to locate.")
    p.add_argument("--phase-model", choices=["apparent", "mean"], default="apparent")
    p.add_argument("--out-png", default=None, help="Write a plot of lunation length vs. time.")
    args = p.parse_args(argv)

    np = _need_numpy()
    start = datetime(args.start_year, 1, 1, tzinfo=timezone.utc)
    search = SearchConfig(phase_model=args.phase_model)

    jds = new_moon_jds(np, start, args.count, search)
    lengths = np.diff(jds)
    s = summarize(np, lengths)

    print(f"Lunations from {start.date().isoformat()} ({args.phase_model} phase): {s['n']}")
    print(f"  mean = {s['mean']:.6f} d")
    print(f"  std  = {s['std'] * 24:.3f} h")
    print(f"  min  = {s['min']:.4f} d")
    print(f"  max  = {s['max']:.4f} d")
    print(f"  mean - synodic = {(s['mean'] - search.synodic_month) * 1440:+.2f} min")

    if args.out_png:
        plt = _need_matplotlib()
        years = 2000.0 + (jds[1:] - 2451545.0) / 365.25
        fig, ax = plt.subplots(figsize=(10, 4))
        ax.plot(years, lengths, ".-", lw=0.8, ms=3)
        ax.axhline(search.synodic_month, color="gray", ls="--", lw=0.8)
        ax.set_xlabel("year")
        ax.set_ylabel("lunation length (days)")
        ax.set_title(f"Lunation lengths ({args.phase_model} phase)")
        fig.tight_layout()
        fig.savefig(args.out_png, dpi=150)
        print(f"Wrote {args.out_png}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
