"""
Visualization utilities.

- Single-frame rendering (hands, balls, beat indicator)
- Ball path overlays from recorded frames
- Live animation driven by the scheduler
- Ladder (space-time) diagrams
"""

from jugglesim.viz.frames import (
    plot_frame,
    plot_ball_tracks,
    animate,
    frame_updater,
    save_figure,
)

from jugglesim.viz.ladder import plot_ladder_diagram

__all__ = [
    "plot_frame",
    "plot_ball_tracks",
    "animate",
    "frame_updater",
    "save_figure",
    "plot_ladder_diagram",
]
