"""
Landing schedule of a pattern, beat by beat.

The ladder (space-time) diagram draws one rung per throwing beat with
an arc to the beat and hand where each ball is thrown next.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass

from jugglesim.core.notation import Pattern, parse_siteswap

HAND_NAMES = ("L", "R")


@dataclass(frozen=True)
class LadderEntry:
    """One hand's action on one beat."""

    beat: int
    hand: str  # "L" or "R"
    values: tuple[int, ...]
    landing_beats: tuple[int, ...]  # One per non-zero throw
    landing_hands: tuple[str, ...]


def _as_pattern(pattern: Pattern | str) -> Pattern:
    return pattern if isinstance(pattern, Pattern) else parse_siteswap(pattern)


def ladder_entries(pattern: Pattern | str, n_beats: int | None = None) -> list[LadderEntry]:
    """
    Per-beat throw table.

    Async beat k is thrown by hand k mod 2; sync pairs are thrown by both
    hands on the same (even) beat.

    Args:
        pattern: Pattern or siteswap string
        n_beats: Number of beats to list (default: two periods)

    Raises:
        ValueError: if n_beats < 1
    """
    pattern = _as_pattern(pattern)
    if n_beats is None:
        n_beats = 2 * pattern.period
    if n_beats < 1:
        raise ValueError(f"n_beats must be >= 1, got {n_beats}")

    entries = []
    for index in range(n_beats):
        hand = index % 2
        beat = index - hand if pattern.is_sync else index
        entry = pattern.beat_at(index)
        landing_beats = []
        landing_hands = []
        for throw in entry.active_throws:
            landing_beats.append(beat + throw.value)
            landing_hands.append(HAND_NAMES[1 - hand if throw.is_crossing else hand])
        entries.append(LadderEntry(
            beat=beat,
            hand=HAND_NAMES[hand],
            values=entry.values,
            landing_beats=tuple(landing_beats),
            landing_hands=tuple(landing_hands),
        ))
    return entries


def next_cycle(pattern: Pattern | str) -> list[int]:
    """
    Throw values for the second period, derived from where balls land.

    Assumes the pattern has been running forever. A beat on which no
    ball lands yields 0. For a valid async pattern the result equals the
    pattern itself; a mismatch exposes an inconsistent landing schedule.

    Raises:
        ValueError: for sync or multiplex patterns
    """
    pattern = _as_pattern(pattern)
    if pattern.is_sync or pattern.has_multiplex:
        raise ValueError("next_cycle supports async patterns without multiplex beats")

    period = pattern.period
    values = [beat.throws[0].value for beat in pattern.beats]
    landings = Counter(
        beat + values[beat % period]
        for beat in range(-pattern.max_value, period)
        if values[beat % period] > 0
    )

    cycle = []
    for beat in range(period, 2 * period):
        if landings[beat] > 0:
            value = values[beat % period]
            landings[beat] -= 1
            if value > 0:
                landings[beat + value] += 1
            cycle.append(value)
        else:
            cycle.append(0)
    return cycle
