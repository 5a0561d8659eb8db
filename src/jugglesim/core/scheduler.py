"""
Juggling Scheduler: advances hands and balls through a siteswap.

The scheduler owns all mutable simulation state. The host calls
tick(delta_ms) once per frame and draws the returned FrameState; it
never touches balls or hands directly.

Timing model:
- Beat k of the pattern happens at (k - start_beat) × beat_duration on the
  simulation clock. Async: beat k belongs to hand k mod 2. Sync: both
  hands act every second beat, left reading entry k and right entry k+1.
- A throw of value v flies for v × beat - dwell, so it is caught before
  the hand has to throw it again.
- Inside a tick, catches and throws run in timestamp order, each at its
  own scheduled time. Frame size never changes the outcome.

The simulation clock only moves inside tick(), scaled by the pace
multiplier. Pausing is simply not advancing it.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, fields, replace
import logging
import math

from jugglesim.core.notation import Pattern, parse_siteswap, InvalidPatternError
from jugglesim.core.state import (
    LEFT,
    RIGHT,
    Ball,
    Hand,
    Held,
    ball_color,
    land,
    launch,
)
from jugglesim.core.trajectory import hand_position, make_params, throw_height

logger = logging.getLogger(__name__)

# Dwell never takes more than this fraction of a beat
MAX_DWELL_FRACTION = 0.9

# Default frame delta (ms) for run() and record()
FRAME_MS = 1000.0 / 60.0


@dataclass
class LayoutConfig:
    """Drawable area and hand/ball geometry (pixels, y grows downward)."""

    width: float = 800.0
    height: float = 400.0
    hand_y_offset: float = 50.0  # Hands sit this far above the bottom edge
    hand_separation: float = 0.2  # Fraction of width between the hands
    hand_x_radius: float = 20.0
    hand_y_radius: float = 30.0
    hand_width: float = 40.0
    hand_height: float = 10.0
    ball_radius: float = 10.0
    throw_height: float = 5.0  # Height knob, 5 = neutral
    self_throw_offset: float = 30.0  # Sideways bow of non-crossing throws

    @property
    def hand_y(self) -> float:
        return self.height - self.hand_y_offset

    @property
    def max_height(self) -> float:
        return self.hand_y

    def hand_base_x(self) -> tuple[float, float]:
        """(left, right) oscillation centers."""
        center = self.width / 2
        spread = self.width * self.hand_separation / 2
        return center - spread, center + spread


@dataclass
class ColorConfig:
    """Ball coloring."""

    base_hue: float = 0.0
    hue_step: float = 40.0
    saturation: float = 90.0
    lightness: float = 60.0
    use_single_color: bool = False
    single_ball_color: str = "#ff0000"

    def color_for(self, index: int) -> str:
        if self.use_single_color:
            return self.single_ball_color
        return ball_color(index, self.base_hue, self.hue_step, self.saturation, self.lightness)


@dataclass
class SchedulerConfig:
    """Timing configuration. Affects timing math only, never validity."""

    bpm: float = 180.0
    speed_multiplier: float = 1.0  # >1 shortens every beat
    pace_multiplier: float = 1.0  # >1 slows the clock relative to wall time
    speed_limit: float | None = None  # Cap on a single flight (ms)
    dwell_ratio: float = 0.5  # Dwell as a fraction of the beat, before bounds
    dwell_min: float = 50.0  # ms
    dwell_max: float = 5000.0  # ms
    throw_limit: int = 0  # 0 = unbounded
    history_limit: int = 10  # Throw records kept

    def __post_init__(self):
        if self.bpm <= 0:
            raise ValueError(f"bpm must be positive, got {self.bpm}")
        if self.speed_multiplier <= 0 or self.pace_multiplier <= 0:
            raise ValueError("speed and pace multipliers must be positive")
        if self.speed_limit is not None and self.speed_limit <= 0:
            raise ValueError(f"speed_limit must be positive, got {self.speed_limit}")
        if not 0.0 <= self.dwell_ratio < 1.0:
            raise ValueError(f"dwell_ratio must be in [0, 1), got {self.dwell_ratio}")
        if self.dwell_min < 0 or self.dwell_max < self.dwell_min:
            raise ValueError(
                f"dwell bounds must satisfy 0 <= min <= max, got "
                f"({self.dwell_min}, {self.dwell_max})"
            )
        if self.throw_limit < 0 or self.history_limit < 0:
            raise ValueError("throw_limit and history_limit must be >= 0")

    @property
    def beat_duration(self) -> float:
        """Milliseconds per beat."""
        return 60_000.0 / self.bpm / self.speed_multiplier

    @property
    def dwell_time(self) -> float:
        beat = self.beat_duration
        dwell = min(max(self.dwell_ratio * beat, self.dwell_min), self.dwell_max)
        return min(dwell, MAX_DWELL_FRACTION * beat)

    def flight_duration(self, value: int) -> float:
        """Time in the air for a throw of `value` beats."""
        duration = value * self.beat_duration - self.dwell_time
        if self.speed_limit is not None:
            duration = min(duration, self.speed_limit)
        return duration


@dataclass(frozen=True)
class BallView:
    id: int
    x: float
    y: float
    color: str
    in_air: bool


@dataclass(frozen=True)
class HandView:
    id: int
    x: float
    y: float
    held: tuple[int, ...]
    active: bool  # Beat indicator: this hand's beat is current


@dataclass(frozen=True)
class FrameState:
    """Read-only snapshot handed to renderers."""

    time: float
    beat: int
    balls: tuple[BallView, ...]
    hands: tuple[HandView, ...]
    throw_count: int

    @property
    def airborne(self) -> int:
        return sum(1 for b in self.balls if b.in_air)


@dataclass(frozen=True)
class ThrowRecord:
    """One row of the throw history."""

    ball_id: int
    time: float
    hand_id: int
    value: int

    @property
    def hand_name(self) -> str:
        return "Left" if self.hand_id == LEFT else "Right"


class JugglingScheduler:
    """
    Owns the simulation state for one siteswap and advances it per frame.

    Usage:
        scheduler = JugglingScheduler("531")
        frame = scheduler.tick(16.7)
        for ball in frame.balls: draw(ball.x, ball.y, ball.color)
    """

    def __init__(
        self,
        siteswap: str | Pattern = "3",
        config: SchedulerConfig | None = None,
        layout: LayoutConfig | None = None,
        colors: ColorConfig | None = None,
    ):
        self.config = config if config is not None else SchedulerConfig()
        self.layout = layout if layout is not None else LayoutConfig()
        self.colors = colors if colors is not None else ColorConfig()
        self.running = True

        self.pattern: Pattern
        self.hands: list[Hand] = []
        self.balls: list[Ball] = []
        self.time: float = 0.0
        self.throw_count: int = 0
        self.history: deque[ThrowRecord] = deque(maxlen=self.config.history_limit)
        self._start_beat = 0

        pattern = siteswap if isinstance(siteswap, Pattern) else parse_siteswap(siteswap)
        self._install(pattern)

    # Pattern and configuration changes

    @property
    def num_balls(self) -> int:
        return self.pattern.num_balls

    @property
    def is_sync(self) -> bool:
        return self.pattern.is_sync

    @property
    def beat_duration(self) -> float:
        return self.config.beat_duration

    def load(self, siteswap: str) -> Pattern:
        """
        Parse and switch to a new pattern, restarting from beat 0.

        Raises:
            InvalidPatternError: current pattern keeps running unchanged
        """
        pattern = parse_siteswap(siteswap)
        self._install(pattern)
        return pattern

    def set_siteswap(self, siteswap: str) -> str:
        """Like load(), but reports failure as a message ("" on success)."""
        try:
            self.load(siteswap)
        except InvalidPatternError as err:
            logger.warning("Rejected siteswap %r: %s", siteswap, err.reason)
            return err.reason
        return ""

    def set_tempo(self, bpm: float) -> None:
        self.configure(bpm=bpm)

    def configure(self, **changes) -> None:
        """Replace configuration fields and restart the current pattern."""
        known = {f.name for f in fields(SchedulerConfig)}
        unknown = set(changes) - known
        if unknown:
            raise ValueError(f"Unknown scheduler options: {sorted(unknown)}")
        self.config = replace(self.config, **changes)
        self.reset()

    def reset(self) -> None:
        """Restart the current pattern from beat 0."""
        self._install(self.pattern)

    def pause(self) -> None:
        self.running = False

    def resume(self) -> None:
        self.running = True

    def _install(self, pattern: Pattern) -> None:
        self.pattern = pattern
        self.time = 0.0
        self.throw_count = 0
        self.history = deque(maxlen=self.config.history_limit)
        self._start_beat = self._first_active_beat(pattern)

        left_x, right_x = self.layout.hand_base_x()
        hand_y = self.layout.hand_y
        self.hands = []
        for hand_id, base_x, direction in ((LEFT, left_x, 1), (RIGHT, right_x, -1)):
            first = self._first_index(hand_id)
            hand = Hand(
                id=hand_id,
                base_x=base_x,
                base_y=hand_y,
                direction=direction,
                phase=0.0 if pattern.is_sync else ((first - self._start_beat) % 2) / 2,
                pattern_index=first,
                next_throw_time=0.0,
                next_throw_value=pattern.beat_at(first),
            )
            hand.next_throw_time = self._throw_time(hand)
            self.hands.append(hand)

        self.balls = []
        for ball_id, hand_id in enumerate(self._initial_placement()):
            self.balls.append(Ball(
                id=ball_id,
                color=self.colors.color_for(ball_id),
                state=Held(hand_id),
            ))
            self.hands[hand_id].receive(ball_id)

        self._update_positions()
        logger.info(
            "Loaded %r: %d balls, %s, beat=%.1fms",
            pattern.source, pattern.num_balls,
            "sync" if pattern.is_sync else "async", self.beat_duration,
        )

    # Beat bookkeeping

    @staticmethod
    def _first_active_beat(pattern: Pattern) -> int:
        """First beat with a real throw; sync patterns start on a pair."""
        step = 2 if pattern.is_sync else 1
        for index in range(0, pattern.period, step):
            if any(not pattern.beat_at(index + h).is_empty for h in range(step)):
                return index
        return 0

    def _first_index(self, hand_id: int) -> int:
        start = self._start_beat
        if self.pattern.is_sync:
            return start + hand_id
        return start if start % 2 == hand_id else start + 1

    def _beat_of(self, hand_id: int, index: int) -> int:
        """Clock beat (from start) at which pattern entry `index` is thrown."""
        if self.pattern.is_sync:
            index -= hand_id
        return index - self._start_beat

    def _throw_time(self, hand: Hand) -> float:
        return self._beat_of(hand.id, hand.pattern_index) * self.beat_duration

    def _landing_hand(self, hand_id: int, is_crossing: bool) -> int:
        return 1 - hand_id if is_crossing else hand_id

    def _throw_events(self, count: int):
        """(clock beat, hand_id, pattern index) for the first `count` throws, in order."""
        emitted = 0
        step = 0
        while emitted < count:
            for hand_id in (LEFT, RIGHT):
                index = self._first_index(hand_id) + 2 * step
                yield self._beat_of(hand_id, index), hand_id, index
            step += 1
            emitted += 2

    def _initial_placement(self) -> list[int]:
        """
        Hand holding each ball at beat 0, indexed by ball id.

        Walks the landing schedule forward: a hand only receives a fresh
        ball when it must throw and nothing has landed in it in time.
        """
        pattern = self.pattern
        horizon = 2 * (pattern.period + pattern.max_value + 2)
        events = sorted(self._throw_events(horizon))

        placement: list[int] = []
        stock = [0, 0]
        arrivals: list[tuple[int, int]] = []

        for beat, hand_id, index in events:
            if len(placement) >= pattern.num_balls:
                break
            for arrival in [a for a in arrivals if a[0] <= beat]:
                arrivals.remove(arrival)
                stock[arrival[1]] += 1

            throws = pattern.beat_at(index).active_throws
            reused = min(stock[hand_id], len(throws))
            stock[hand_id] -= reused
            fresh = min(len(throws) - reused, pattern.num_balls - len(placement))
            placement.extend([hand_id] * fresh)

            for throw in throws[:reused + fresh]:
                arrivals.append((beat + throw.value, self._landing_hand(hand_id, throw.is_crossing)))

        while len(placement) < pattern.num_balls:
            placement.append(len(placement) % 2)
        return placement

    # Simulation

    def tick(self, delta: float) -> FrameState:
        """
        Advance the simulation by a wall-clock delta (ms) and report the frame.

        The clock moves by delta / pace_multiplier. A paused scheduler
        reports the current frame unchanged.
        """
        if not self.running:
            return self.frame()
        if delta < 0:
            raise ValueError(f"delta must be >= 0, got {delta}")

        target = self.time + delta / self.config.pace_multiplier
        self._process_events(target)
        self.time = target
        self._update_positions()
        return self.frame()

    def _throws_allowed(self) -> bool:
        limit = self.config.throw_limit
        return limit == 0 or self.throw_count < limit

    def _next_event(self):
        best = None
        for ball in self.balls:
            if ball.in_air:
                key = (ball.state.land_time, 0, ball.id)
                if best is None or key < best:
                    best = key
        if self._throws_allowed():
            for hand in self.hands:
                key = (hand.next_throw_time, 1, hand.id)
                if best is None or key < best:
                    best = key
        return best

    def _process_events(self, target: float) -> None:
        while True:
            event = self._next_event()
            if event is None or event[0] > target:
                return
            time, kind, ident = event
            if kind == 0:
                self._catch(self.balls[ident], time)
            else:
                self._throw(self.hands[ident], time)

    def _hand_position_at(self, hand: Hand, time: float) -> tuple[float, float]:
        layout = self.layout
        radii = (layout.hand_x_radius, layout.hand_y_radius)
        if self.pattern.is_fountain:
            radii = radii[::-1]
        period = self.beat_duration * (1 if self.pattern.is_sync else 2)
        return hand_position(hand.base, time, period, hand.phase, radii, hand.direction)

    def _throw(self, hand: Hand, time: float) -> None:
        beat = self.pattern.beat_at(hand.pattern_index)
        start = self._hand_position_at(hand, time)

        for throw in beat.active_throws:
            if not self._throws_allowed():
                break
            ball_id = hand.release()
            if ball_id is None:
                logger.debug("Hand %d empty at t=%.1f, skipping %d", hand.id, time, throw.value)
                continue

            ball = self.balls[ball_id]
            landing_id = self._landing_hand(hand.id, throw.is_crossing)
            layout = self.layout
            params = make_params(
                value=throw.value,
                is_crossing=throw.is_crossing,
                start=start,
                end_x=self.hands[landing_id].base_x,
                height=throw_height(
                    throw.value, layout.max_height, start[1],
                    layout.ball_radius, layout.throw_height,
                ),
                lateral_offset=layout.self_throw_offset * hand.direction,
            )
            ball.state = launch(
                ball.state, throw, time,
                self.config.flight_duration(throw.value), landing_id, params,
            )
            ball.x, ball.y = start
            self.throw_count += 1
            self.history.append(ThrowRecord(ball.id, time, hand.id, throw.value))
            logger.debug("t=%.1f hand %d throws ball %d (%d)", time, hand.id, ball.id, throw.value)

        hand.pattern_index += 2
        hand.next_throw_time = self._throw_time(hand)
        hand.next_throw_value = self.pattern.beat_at(hand.pattern_index)

    def _catch(self, ball: Ball, time: float) -> None:
        ball.state = land(ball.state)
        hand = self.hands[ball.state.hand_id]
        hand.receive(ball.id)
        ball.x, ball.y = self._hand_position_at(hand, time)
        logger.debug("t=%.1f hand %d catches ball %d", time, hand.id, ball.id)

    def _update_positions(self) -> None:
        for hand in self.hands:
            hand.x, hand.y = self._hand_position_at(hand, self.time)
        for ball in self.balls:
            if ball.in_air:
                ball.move_along_flight(self.time)
            else:
                hand = self.hands[ball.state.hand_id]
                ball.x, ball.y = hand.x, hand.y

    # Read model

    @property
    def current_beat(self) -> int:
        return int(math.floor(self.time / self.beat_duration))

    def _is_active(self, hand: Hand) -> bool:
        if self.pattern.is_sync:
            return True
        return self.current_beat % 2 == round(hand.phase * 2)

    def frame(self) -> FrameState:
        return FrameState(
            time=self.time,
            beat=self.current_beat,
            balls=tuple(
                BallView(b.id, b.x, b.y, b.color, b.in_air) for b in self.balls
            ),
            hands=tuple(
                HandView(h.id, h.x, h.y, tuple(h.held), self._is_active(h))
                for h in self.hands
            ),
            throw_count=self.throw_count,
        )

    def airborne(self) -> list[Ball]:
        return [b for b in self.balls if b.in_air]

    def run(self, n_frames: int, delta: float = FRAME_MS) -> dict:
        """Run n_frames ticks of `delta` ms each and summarize."""
        for _ in range(n_frames):
            self.tick(delta)

        return {
            "n_frames": n_frames,
            "time": self.time,
            "beat": self.current_beat,
            "throw_count": self.throw_count,
            "airborne": len(self.airborne()),
            "held": [len(h.held) for h in self.hands],
        }

    def record(self, n_frames: int, delta: float = FRAME_MS) -> list[FrameState]:
        """Tick n_frames times, collecting every frame."""
        return [self.tick(delta) for _ in range(n_frames)]


def create_scheduler(
    siteswap: str = "3",
    bpm: float = 180.0,
    layout: LayoutConfig | None = None,
    colors: ColorConfig | None = None,
    **options,
) -> JugglingScheduler:
    """
    Convenience factory.

    Args:
        siteswap: Pattern notation
        bpm: Beats per minute
        layout: Optional geometry
        colors: Optional ball coloring
        **options: Any other SchedulerConfig field

    Raises:
        InvalidPatternError: if the siteswap does not parse
    """
    config = SchedulerConfig(bpm=bpm, **options)
    return JugglingScheduler(siteswap, config=config, layout=layout, colors=colors)
