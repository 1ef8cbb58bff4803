#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

import argparse

import novenacal


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "novenacal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "novenacal[diagnostics]"') from e


def days_after_equinox(d: date) -> int:
    """Days after the ecclesiastical equinox, with Mar 21 = 0."""
    return (d - date(d.year, 3, 21)).days


@dataclass(frozen=True)
class Style:
    label: str
    color: str
    marker: str
    size: float = 14.0


def build_series(np, anchor: str, start_year: int, end_year: int) -> Tuple["np.ndarray", "np.ndarray"]:
    years = np.arange(start_year, end_year + 1, dtype=int)
    y = np.empty_like(years, dtype=float)
    for i, Y in enumerate(years):
        y[i] = float(days_after_equinox(novenacal.anchor_table(int(Y))[anchor]))
    return years, y


def histogram(np, y) -> Dict[int, int]:
    values, counts = np.unique(y.astype(int), return_counts=True)
    return {int(v): int(c) for v, c in zip(values, counts)}


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Scatter plot of Easter (and Pentecost) dates across years.")
    p.add_argument("--start-year", type=int, default=1900)
    p.add_argument("--end-year", type=int, default=2100)
    p.add_argument("--with-pentecost", action="store_true")
    p.add_argument("--outbase", default="easter_scatter", help="Output base name (writes .png)")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    styles: Dict[str, Style] = {"easter": Style("Easter", "tab:blue", "o")}
    if args.with_pentecost:
        styles["pentecost"] = Style("Pentecost", "tab:red", "_", size=18)

    fig, ax = plt.subplots(figsize=(9.2, 4.8), constrained_layout=True)
    ax.set_axisbelow(True)
    ax.grid(True, which="major", color="0.88", linewidth=0.7)
    ax.set_xlabel("Gregorian year")
    ax.set_ylabel("Days after March 21")
    ax.set_title("Movable feast dates")

    for anchor, st in styles.items():
        x, y = build_series(np, anchor, args.start_year, args.end_year)
        ax.scatter(x, y, s=st.size, marker=st.marker, c=st.color, alpha=0.45, label=st.label)
        if anchor == "easter":
            h = histogram(np, y)
            lo, hi = min(h), max(h)
            print(f"Easter range: March 21 + {lo} .. March 21 + {hi} days")

    ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5), frameon=False)

    outbase = args.outbase
    fig.savefig(outbase + ".png", dpi=300)
    print(f"Saved: {outbase}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
