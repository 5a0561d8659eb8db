"""
Ball and hand state for the juggling engine.

A ball is always in exactly one of two states:
- Held(hand_id): resting in a hand's queue
- InFlight(...): thrown at throw_time, lands after duration

Transitions are pure functions (launch, land) returning a new state;
the scheduler decides WHEN they fire and moves balls between queues.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Union
import colorsys

from jugglesim.core.notation import Beat, Throw
from jugglesim.core.trajectory import TrajectoryParams, position_at

LEFT = 0
RIGHT = 1


@dataclass(frozen=True)
class Held:
    """Ball rests in a hand."""

    hand_id: int


@dataclass(frozen=True)
class InFlight:
    """Ball travels between hands."""

    throw_time: float  # Simulation clock at release (ms)
    duration: float  # Flight time (ms)
    from_hand: int
    landing_hand: int
    trajectory: TrajectoryParams

    @property
    def land_time(self) -> float:
        return self.throw_time + self.duration

    @property
    def value(self) -> int:
        return self.trajectory.value


BallState = Union[Held, InFlight]


def launch(
    state: BallState,
    throw: Throw,
    time: float,
    duration: float,
    landing_hand: int,
    trajectory: TrajectoryParams,
) -> InFlight:
    """
    Held -> InFlight.

    Raises:
        ValueError: if the ball is already airborne, or the throw is a 0
    """
    if not isinstance(state, Held):
        raise ValueError("Cannot throw a ball that is already in flight")
    if throw.value <= 0 or duration <= 0:
        raise ValueError(f"Throw value {throw.value} does not launch a ball")
    return InFlight(
        throw_time=time,
        duration=duration,
        from_hand=state.hand_id,
        landing_hand=landing_hand,
        trajectory=trajectory,
    )


def land(state: BallState) -> Held:
    """InFlight -> Held, in the hand the flight was aimed at."""
    if not isinstance(state, InFlight):
        raise ValueError("Cannot catch a ball that is not in flight")
    return Held(hand_id=state.landing_hand)


def flight_progress(state: InFlight, time: float) -> float:
    """Fraction of the flight completed at `time`, clamped to [0, 1]."""
    if state.duration <= 0:
        return 1.0
    return min(max((time - state.throw_time) / state.duration, 0.0), 1.0)


def ball_color(
    index: int,
    base_hue: float = 0.0,
    hue_step: float = 40.0,
    saturation: float = 90.0,
    lightness: float = 60.0,
) -> str:
    """hsl(base_hue + index·hue_step, saturation%, lightness%) as #rrggbb."""
    hue = ((base_hue + index * hue_step) % 360) / 360
    r, g, b = colorsys.hls_to_rgb(hue, lightness / 100, saturation / 100)
    return "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255))


@dataclass
class Ball:
    """One juggled object. Position is refreshed every tick."""

    id: int
    color: str
    state: BallState
    x: float = 0.0
    y: float = 0.0

    @property
    def in_air(self) -> bool:
        return isinstance(self.state, InFlight)

    @property
    def current_throw(self) -> int:
        return self.state.value if isinstance(self.state, InFlight) else 0

    def move_along_flight(self, time: float) -> None:
        self.x, self.y = position_at(self.state.trajectory, flight_progress(self.state, time))


@dataclass
class Hand:
    """
    One of the juggler's two hands.

    The held-queue stores ball ids sorted ascending, so the next ball to
    leave is always the lowest id.
    """

    id: int
    base_x: float
    base_y: float
    direction: int  # +1 left, -1 right (sideways bow of self throws)
    phase: float  # Oscillation lag as a fraction of the loop period
    pattern_index: int  # Absolute beat index of the next throw
    next_throw_time: float
    next_throw_value: Beat | None = None
    held: list[int] = field(default_factory=list)
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self):
        self.x = self.base_x
        self.y = self.base_y

    @property
    def base(self) -> tuple[float, float]:
        return self.base_x, self.base_y

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y

    def receive(self, ball_id: int) -> None:
        """Add a ball to the held-queue, keeping id order."""
        self.held.append(ball_id)
        self.held.sort()

    def release(self) -> int | None:
        """Take the next ball to throw, or None if the hand is empty."""
        if not self.held:
            return None
        return self.held.pop(0)
