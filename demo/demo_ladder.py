#!/usr/bin/env python3
"""
Demo: Pattern Analysis

Classifies a handful of siteswaps, draws their ladder diagrams and shows
that a valid pattern's next cycle reproduces itself.

Output: output/demo_ladder/
"""

import os

import matplotlib.pyplot as plt

from jugglesim.analysis import classify_siteswap, next_cycle
from jugglesim.viz import plot_ladder_diagram, save_figure

PATTERNS = ["3", "51", "531", "441", "4", "(4x,4x)", "[34]2", "32"]


def main():
    print("=" * 60)
    print("  SITESWAP ANALYSIS")
    print("=" * 60)

    out_dir = "output/demo_ladder"
    os.makedirs(out_dir, exist_ok=True)

    print("\n1. Classification")
    valid = []
    for siteswap in PATTERNS:
        result = classify_siteswap(siteswap)
        print(f"   {siteswap:10s} {result.type:12s} balls={result.num_balls:2d}  {result.reason}")
        if result.type != "invalid":
            valid.append(siteswap)

    print("\n2. Next cycle (async, no multiplex)")
    for siteswap in ("3", "531", "441", "b97531"):
        print(f"   {siteswap:10s} -> {''.join(format(v, 'x') for v in next_cycle(siteswap))}")

    print("\n3. Ladder diagrams")
    fig, axes = plt.subplots(len(valid), 1, figsize=(10, 2.2 * len(valid)))
    for ax, siteswap in zip(axes, valid):
        plot_ladder_diagram(siteswap, ax=ax)
    fig.tight_layout()
    save_figure(fig, f"{out_dir}/ladders.png")
    plt.close(fig)
    print(f"   Saved: {out_dir}/ladders.png")


if __name__ == "__main__":
    main()
