"""
Ladder (space-time) diagram of a siteswap.

Beats run left to right, the left hand on the top row and the right
hand on the bottom row. Each throw is an arc from its beat to the beat
and hand where it is thrown again.
"""

from __future__ import annotations

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from jugglesim.analysis.ladder import ladder_entries
from jugglesim.core.notation import Pattern, parse_siteswap

ROW = {"L": 1.0, "R": 0.0}


def plot_ladder_diagram(
    pattern: Pattern | str,
    n_beats: int | None = None,
    title: str | None = None,
    ax: Axes | None = None,
    figsize: tuple[float, float] = (10, 3),
) -> tuple[Figure, Axes]:
    """
    Plot throws as arcs between (beat, hand) nodes.

    Args:
        pattern: Pattern or siteswap string
        n_beats: Beats to draw (default: two periods)
        title: Plot title (default: the notation)
        ax: Existing axes (creates new if None)

    Returns:
        (fig, ax) tuple
    """
    if not isinstance(pattern, Pattern):
        pattern = parse_siteswap(pattern)
    entries = ladder_entries(pattern, n_beats)

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    cmap = plt.get_cmap("tab10")
    last_beat = max(e.beat for e in entries)

    for i, entry in enumerate(entries):
        y0 = ROW[entry.hand]
        ax.scatter([entry.beat], [y0], color="black", s=30, zorder=3)
        ax.annotate(
            ",".join(str(v) for v in entry.values),
            (entry.beat, y0),
            textcoords="offset points",
            xytext=(0, 8 if y0 > 0.5 else -14),
            ha="center",
            fontsize=8,
        )
        for value, beat, hand in zip(
            [v for v in entry.values if v > 0], entry.landing_beats, entry.landing_hands
        ):
            y1 = ROW[hand]
            t = np.linspace(0.0, 1.0, 30)
            xs = entry.beat + (beat - entry.beat) * t
            bulge = 0.15 * value if y0 == y1 else 0.0
            direction = 1.0 if y0 > 0.5 else -1.0
            ys = y0 + (y1 - y0) * t + direction * bulge * np.sin(np.pi * t)
            ax.plot(xs, ys, color=cmap(i % 10), linewidth=1.5, alpha=0.8)

    ax.set_xlim(-0.5, last_beat + 0.5)
    ax.set_yticks([ROW["R"], ROW["L"]])
    ax.set_yticklabels(["Right", "Left"])
    ax.set_xlabel("Beat")
    ax.set_title(title if title is not None else pattern.source)
    ax.grid(True, axis="x", alpha=0.3)
    fig.tight_layout()
    return fig, ax
