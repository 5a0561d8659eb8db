"""
Frame rendering with matplotlib.

Consumes FrameState snapshots only. Axes use screen coordinates
(y grows downward) so positions are drawn exactly as the engine reports
them.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Sequence

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Rectangle

from jugglesim.analysis.tracks import ball_tracks
from jugglesim.core.scheduler import LayoutConfig

if TYPE_CHECKING:
    from jugglesim.core.scheduler import FrameState, JugglingScheduler

ACTIVE_BEAT_COLOR = "#007acc"
INACTIVE_BEAT_COLOR = "#444444"
ACTIVE_BEAT_BORDER_COLOR = "#ffffff"
BACKGROUND_COLOR = "#1e1e1e"


def _setup_axes(ax: Axes, layout: LayoutConfig) -> None:
    ax.set_xlim(0, layout.width)
    ax.set_ylim(layout.height, 0)
    ax.set_aspect("equal")
    ax.set_facecolor(BACKGROUND_COLOR)
    ax.set_xticks([])
    ax.set_yticks([])


def _draw(ax: Axes, frame: "FrameState", layout: LayoutConfig, show_beat: bool) -> list:
    artists = []
    for hand in frame.hands:
        active = show_beat and hand.active
        rect = Rectangle(
            (hand.x - layout.hand_width / 2, hand.y - layout.hand_height / 2),
            layout.hand_width,
            layout.hand_height,
            facecolor=ACTIVE_BEAT_COLOR if active else INACTIVE_BEAT_COLOR,
            edgecolor=ACTIVE_BEAT_BORDER_COLOR if active else "none",
            linewidth=2,
        )
        ax.add_patch(rect)
        artists.append(rect)

    for ball in frame.balls:
        circle = Circle((ball.x, ball.y), layout.ball_radius, color=ball.color, zorder=3)
        ax.add_patch(circle)
        artists.append(circle)
    return artists


def plot_frame(
    frame: "FrameState",
    layout: LayoutConfig | None = None,
    title: str | None = None,
    ax: Axes | None = None,
    show_beat: bool = True,
) -> tuple[Figure, Axes]:
    """
    Draw one frame: hands as rectangles, balls as circles.

    Args:
        frame: Snapshot from JugglingScheduler.tick() or .frame()
        layout: Geometry used by the scheduler (default LayoutConfig())
        title: Optional title (default shows time and beat)
        ax: Existing axes (creates new if None)
        show_beat: Highlight the hand whose beat is current

    Returns:
        (fig, ax) tuple
    """
    layout = layout if layout is not None else LayoutConfig()
    if ax is None:
        fig, ax = plt.subplots(figsize=(layout.width / 100, layout.height / 100))
    else:
        fig = ax.figure

    _setup_axes(ax, layout)
    _draw(ax, frame, layout, show_beat)
    ax.set_title(title if title is not None else f"t={frame.time:.0f}ms  beat {frame.beat}")
    return fig, ax


def plot_ball_tracks(
    frames: Sequence["FrameState"],
    layout: LayoutConfig | None = None,
    title: str = "Ball Paths",
    figsize: tuple[float, float] = (10, 5),
) -> Figure:
    """Overlay the path of every ball across a recording."""
    layout = layout if layout is not None else LayoutConfig()
    fig, ax = plt.subplots(figsize=figsize)
    _setup_axes(ax, layout)

    colors = {b.id: b.color for b in frames[0].balls} if frames else {}
    for ball_id, (xs, ys) in ball_tracks(frames).items():
        ax.plot(xs, ys, color=colors[ball_id], linewidth=1.5, alpha=0.8, label=f"ball {ball_id}")

    ax.set_title(title)
    if colors:
        ax.legend(loc="upper right", fontsize=8)
    fig.tight_layout()
    return fig


def frame_updater(
    scheduler: "JugglingScheduler",
    ax: Axes,
    interval: float,
    show_beat: bool = True,
) -> Callable[[int], list]:
    """
    Build the per-frame callback used by animate().

    Each call ticks the scheduler by `interval` ms and replaces the
    previously drawn artists.
    """
    layout = scheduler.layout
    _setup_axes(ax, layout)
    artists: list = []

    def update(_frame_number: int) -> list:
        for artist in artists:
            artist.remove()
        artists.clear()
        frame = scheduler.tick(interval)
        artists.extend(_draw(ax, frame, layout, show_beat))
        ax.set_title(f"{scheduler.pattern.source}  beat {frame.beat}")
        return artists

    return update


def animate(
    scheduler: "JugglingScheduler",
    n_frames: int = 300,
    interval: float = 1000.0 / 60.0,
    show_beat: bool = True,
) -> FuncAnimation:
    """
    Drive a scheduler from matplotlib's timer.

    The animation owns the render loop: stopping it stops the clock.
    """
    layout = scheduler.layout
    fig, ax = plt.subplots(figsize=(layout.width / 100, layout.height / 100))
    update = frame_updater(scheduler, ax, interval, show_beat)
    return FuncAnimation(fig, update, frames=n_frames, interval=interval, blit=False)


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
