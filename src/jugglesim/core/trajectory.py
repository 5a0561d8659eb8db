"""
Trajectory math: continuous positions from scheduled throws.

Everything here is a pure function of its arguments. Coordinates follow
screen conventions: x grows to the right, y grows DOWNWARD, so a rising
ball has a decreasing y.

- Non-crossing throws bow sideways and come back: x = start + sin(pπ)·offset
- Crossing throws follow a quadratic Bézier with eased progress sin(pπ/2)
- Height follows a parabola 4p(1-p); value-1 throws use sin(pπ)
"""

from __future__ import annotations
from dataclasses import dataclass
import math

import numpy as np

# Throw value that maps to the neutral height scale
REFERENCE_THROW = 5.0

# Throws of this value use the sine arc instead of the parabola
SHOWER_VALUE = 1


@dataclass(frozen=True)
class TrajectoryParams:
    """Geometry of a single flight."""

    start_x: float
    start_y: float
    end_x: float
    control_x: float  # Bézier control point (crossing) or lateral offset (self)
    height: float  # Peak rise above start_y, in pixels
    is_crossing: bool
    value: int


def throw_height(
    value: int,
    max_height: float,
    start_y: float,
    ball_radius: float,
    height_scale: float = 5.0,
) -> float:
    """
    Peak height for a throw, quadratic in the throw value.

    Capped at start_y - 3·ball_radius so a ball never clips the top edge.
    """
    raw = max_height * (value / REFERENCE_THROW) ** 2 * (height_scale / REFERENCE_THROW)
    ceiling = max(0.0, start_y - ball_radius * 3)
    return min(raw, ceiling)


def make_params(
    value: int,
    is_crossing: bool,
    start: tuple[float, float],
    end_x: float,
    height: float,
    lateral_offset: float = 0.0,
) -> TrajectoryParams:
    """Build flight parameters; crossing throws use the midpoint as control."""
    start_x, start_y = start
    control_x = (start_x + end_x) / 2 if is_crossing else lateral_offset
    return TrajectoryParams(
        start_x=start_x,
        start_y=start_y,
        end_x=end_x,
        control_x=control_x,
        height=height,
        is_crossing=is_crossing,
        value=value,
    )


def horizontal_position(params: TrajectoryParams, progress: float) -> float:
    if params.is_crossing:
        t = math.sin(progress * math.pi / 2)
        return (
            (1 - t) ** 2 * params.start_x
            + 2 * (1 - t) * t * params.control_x
            + t ** 2 * params.end_x
        )
    return params.start_x + math.sin(progress * math.pi) * params.control_x


def vertical_position(params: TrajectoryParams, progress: float) -> float:
    if params.value == SHOWER_VALUE:
        return params.start_y - params.height * math.sin(progress * math.pi)
    return params.start_y - params.height * 4 * progress * (1 - progress)


def position_at(params: TrajectoryParams, progress: float) -> tuple[float, float]:
    """
    Ball position at a given flight progress.

    Args:
        params: Flight geometry
        progress: Fraction of the flight completed, clamped to [0, 1]

    Returns:
        (x, y) in screen coordinates
    """
    p = min(max(progress, 0.0), 1.0)
    return horizontal_position(params, p), vertical_position(params, p)


def sample_flight(params: TrajectoryParams, n_points: int = 50) -> tuple[np.ndarray, np.ndarray]:
    """Sample a whole flight as (x_array, y_array) for plotting."""
    progress = np.linspace(0.0, 1.0, n_points)
    points = np.array([position_at(params, p) for p in progress])
    return points[:, 0], points[:, 1]


def hand_position(
    base: tuple[float, float],
    time: float,
    period: float,
    phase_offset: float,
    radii: tuple[float, float],
    direction: int,
) -> tuple[float, float]:
    """
    Oscillating hand position around its base.

    The hand sits at the top of its loop (y = base_y - y_radius) whenever
    time/period equals phase_offset modulo 1, i.e. exactly when a throw is
    due.

    Args:
        base: (x, y) oscillation center
        time: Simulation clock (ms)
        period: Duration of one loop (ms)
        phase_offset: Fraction of the period by which this hand lags
        radii: (x_radius, y_radius)
        direction: +1 for the left hand, -1 for the right hand
    """
    base_x, base_y = base
    x_radius, y_radius = radii
    phase = ((time % period) / period - phase_offset) * 2 * math.pi + math.pi
    return (
        base_x + math.sin(phase) * x_radius * direction,
        base_y + math.cos(phase) * y_radius,
    )
