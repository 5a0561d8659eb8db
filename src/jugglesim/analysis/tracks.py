"""
Position tracks extracted from recorded frames.
"""

from __future__ import annotations
from typing import Sequence, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from jugglesim.core.scheduler import FrameState


def frame_times(frames: Sequence["FrameState"]) -> np.ndarray:
    """Simulation clock of each frame (ms)."""
    return np.array([f.time for f in frames], dtype=np.float64)


def ball_tracks(frames: Sequence["FrameState"]) -> dict[int, tuple[np.ndarray, np.ndarray]]:
    """
    Positions of every ball over the recording.

    Returns:
        {ball_id: (x_array, y_array)}, arrays aligned with frame_times()
    """
    if not frames:
        return {}

    ids = [b.id for b in frames[0].balls]
    xs = np.array([[b.x for b in f.balls] for f in frames], dtype=np.float64)
    ys = np.array([[b.y for b in f.balls] for f in frames], dtype=np.float64)
    return {ball_id: (xs[:, i], ys[:, i]) for i, ball_id in enumerate(ids)}


def airborne_counts(frames: Sequence["FrameState"]) -> np.ndarray:
    """Number of balls in flight at each frame."""
    return np.array([f.airborne for f in frames], dtype=np.int64)
