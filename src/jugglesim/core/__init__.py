"""
Core engine primitives.

This layer knows NOTHING about plotting or analysis.
It only knows:
- Siteswap notation and its validity rules
- Ball states (held / in flight) and their transitions
- Trajectory and hand-oscillation math
- The frame-driven scheduler that fires throws and catches
"""

from jugglesim.core.notation import (
    Throw,
    Beat,
    Pattern,
    InvalidPatternError,
    is_crossing,
    parse_siteswap,
    landing_collisions,
)
from jugglesim.core.trajectory import TrajectoryParams, throw_height, position_at, hand_position
from jugglesim.core.state import Ball, Hand, Held, InFlight, launch, land, flight_progress
from jugglesim.core.scheduler import (
    LayoutConfig,
    ColorConfig,
    SchedulerConfig,
    BallView,
    HandView,
    FrameState,
    ThrowRecord,
    JugglingScheduler,
    create_scheduler,
)

__all__ = [
    "Throw",
    "Beat",
    "Pattern",
    "InvalidPatternError",
    "is_crossing",
    "parse_siteswap",
    "landing_collisions",
    "TrajectoryParams",
    "throw_height",
    "position_at",
    "hand_position",
    "Ball",
    "Hand",
    "Held",
    "InFlight",
    "launch",
    "land",
    "flight_progress",
    "LayoutConfig",
    "ColorConfig",
    "SchedulerConfig",
    "BallView",
    "HandView",
    "FrameState",
    "ThrowRecord",
    "JugglingScheduler",
    "create_scheduler",
]
