"""
Siteswap notation: parsing strings into validated patterns.

A pattern is an ordered sequence of beats. Each beat holds one Throw, or
several Throws for a multiplex beat. Sync pairs "(a,b)" contribute two
consecutive entries: the left hand reads the first, the right hand the
second.

Supported notation:
- Async:     "3", "531", "b97531" (base-36, so 'a' = 10 ... 'z' = 35)
- Sync:      "(4,4)", "(4x,4x)(4,4)"  ('x' forces a crossing throw)
- Multiplex: "[34]2", "[43]23"

Crossing-ness is resolved once, here, into Throw.is_crossing.
Nothing downstream ever re-derives it from the raw value.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
import logging
import re
import string

logger = logging.getLogger(__name__)

BASE = 36
MAX_THROW = BASE - 1
CROSS_MARKER = "x"

_DIGITS = string.digits + string.ascii_lowercase

_WHITESPACE = re.compile(r"\s+")
_SYNC_ONLY = re.compile(r"(\([^()]*\))+")


class InvalidPatternError(ValueError):
    """Raised when a siteswap string is malformed or not jugglable."""

    def __init__(self, siteswap: str, reason: str):
        super().__init__(reason)
        self.siteswap = siteswap
        self.reason = reason


def is_crossing(value: int, forced: bool = False) -> bool:
    """
    Whether a throw travels to the other hand.

    Odd values cross, even values return to the throwing hand, unless the
    notation forces a crossing with a trailing 'x'.
    """
    return forced or value % 2 == 1


@dataclass(frozen=True)
class Throw:
    """A single scheduled toss."""

    value: int  # Beats until the ball is thrown again (0 = no throw)
    is_crossing: bool

    @classmethod
    def of(cls, value: int, forced_crossing: bool = False) -> "Throw":
        return cls(value=value, is_crossing=is_crossing(value, forced_crossing))


@dataclass(frozen=True)
class Beat:
    """One pattern entry: a single throw or a multiplex set."""

    throws: tuple[Throw, ...]
    multiplex: bool = False

    @property
    def values(self) -> tuple[int, ...]:
        return tuple(t.value for t in self.throws)

    @property
    def active_throws(self) -> tuple[Throw, ...]:
        """Throws that actually launch a ball (value > 0)."""
        return tuple(t for t in self.throws if t.value > 0)

    @property
    def is_empty(self) -> bool:
        return not self.active_throws

    def __str__(self) -> str:
        digits = "".join(_format_value(t.value) for t in self.throws)
        return f"[{digits}]" if self.multiplex else digits


@dataclass(frozen=True)
class Pattern:
    """
    An immutable, validated siteswap.

    Attributes:
        beats: Pattern entries in throw order (sync pairs flattened)
        num_balls: Average throw value (flattened over multiplex sets)
        is_sync: True if both hands throw together
        source: Normalized notation the pattern was parsed from
    """

    beats: tuple[Beat, ...]
    num_balls: int
    is_sync: bool
    source: str = ""

    @property
    def period(self) -> int:
        return len(self.beats)

    @property
    def throws(self) -> tuple[Throw, ...]:
        """All throws, multiplex sets flattened."""
        return tuple(t for beat in self.beats for t in beat.throws)

    @property
    def has_multiplex(self) -> bool:
        return any(beat.multiplex for beat in self.beats)

    @property
    def max_value(self) -> int:
        return max(t.value for t in self.throws)

    @property
    def is_fountain(self) -> bool:
        """Every throw is a positive even (non-crossing) value."""
        return all(t.value > 0 and t.value % 2 == 0 for t in self.throws)

    def beat_at(self, index: int) -> Beat:
        """Entry for an absolute beat index, wrapping around the period."""
        return self.beats[index % self.period]

    def __len__(self) -> int:
        return self.period


def _format_value(value: int) -> str:
    if value < 10:
        return str(value)
    return chr(ord("a") + value - 10)


def _parse_digit(char: str, siteswap: str) -> int:
    value = _DIGITS.find(char)
    if len(char) != 1 or value == -1:
        raise InvalidPatternError(
            siteswap, f"Invalid throw character '{char}'."
        )
    return value


def _parse_sync_value(token: str, siteswap: str) -> Throw:
    forced = token.endswith(CROSS_MARKER) and len(token) > 1
    digits = token[:-1] if forced else token
    if len(digits) != 1:
        raise InvalidPatternError(
            siteswap, f"Invalid sync throw '{token}'."
        )
    return Throw.of(_parse_digit(digits, siteswap), forced)


def _closing(text: str, start: int, close: str, siteswap: str, what: str) -> int:
    end = text.find(close, start + 1)
    if end == -1:
        raise InvalidPatternError(siteswap, f"Mismatched {what}.")
    return end


def tokenize(siteswap: str, original: str | None = None) -> list[Beat]:
    """
    Split normalized notation into beats.

    Sync pairs yield two beats, one per hand. Raises InvalidPatternError
    on any malformed token.
    """
    original = siteswap if original is None else original
    beats: list[Beat] = []
    i = 0

    while i < len(siteswap):
        char = siteswap[i]

        if char == "(":
            end = _closing(siteswap, i, ")", original, "parentheses in sync pattern")
            parts = siteswap[i + 1:end].split(",")
            if len(parts) != 2:
                raise InvalidPatternError(
                    original, "A sync beat needs exactly two throws, e.g. (4,4)."
                )
            left, right = (_parse_sync_value(p, original) for p in parts)
            if left.is_crossing != right.is_crossing:
                raise InvalidPatternError(
                    original,
                    f"Sync pair ({parts[0]},{parts[1]}) mixes crossing and "
                    "non-crossing throws.",
                )
            beats.append(Beat((left,)))
            beats.append(Beat((right,)))
            i = end + 1

        elif char == "[":
            end = _closing(siteswap, i, "]", original, "brackets in multiplex pattern")
            content = siteswap[i + 1:end]
            if not content:
                raise InvalidPatternError(original, "Empty multiplex beat.")
            throws = tuple(Throw.of(_parse_digit(c, original)) for c in content)
            beats.append(Beat(throws, multiplex=True))
            i = end + 1

        else:
            beats.append(Beat((Throw.of(_parse_digit(char, original)),)))
            i += 1

    return beats


def landing_index(index: int, throw: Throw, period: int, is_sync: bool = False) -> int:
    """
    Pattern entry (mod period) at which a throw is next thrown.

    Async: simply index + value. Sync: entries come in (left, right) pairs,
    so the landing hand depends on crossing and odd values wait for the
    next pair.
    """
    if not is_sync:
        return (index + throw.value) % period
    hand = index % 2
    arrival = index - hand + throw.value
    arrival += arrival % 2
    landing_hand = 1 - hand if throw.is_crossing else hand
    return (arrival + landing_hand) % period


def landing_collisions(
    beats: tuple[Beat, ...] | list[Beat],
    is_sync: bool = False,
) -> list[int]:
    """
    Landing entries (mod period) that receive more than one throw.

    Only meaningful for patterns with one throw per beat; an empty list
    means the landing schedule is a permutation.
    """
    period = len(beats)
    landings = Counter(
        landing_index(index, beat.throws[0], period, is_sync)
        for index, beat in enumerate(beats)
    )
    return sorted(beat for beat, count in landings.items() if count > 1)


def parse_siteswap(siteswap: str) -> Pattern:
    """
    Parse a siteswap string into a validated Pattern.

    Args:
        siteswap: Notation such as "531", "(4,4)" or "[34]2"

    Returns:
        Immutable Pattern

    Raises:
        InvalidPatternError: malformed notation, non-integer ball count,
            mismatched sync crossing, or colliding landings
    """
    normalized = _WHITESPACE.sub("", siteswap.lower())
    if not normalized:
        raise InvalidPatternError(siteswap, "Siteswap cannot be empty.")

    is_sync = "(" in normalized
    beats = tuple(tokenize(normalized, siteswap))
    if is_sync and not _SYNC_ONLY.fullmatch(normalized):
        raise InvalidPatternError(
            siteswap, "Sync patterns may only contain sync pairs."
        )

    values = [t.value for beat in beats for t in beat.throws]
    total = sum(values)
    if total == 0:
        raise InvalidPatternError(siteswap, "Pattern contains no throws.")
    if total % len(values) != 0:
        average = total / len(values)
        raise InvalidPatternError(
            siteswap,
            f"Average throw value must be a whole number (got {average:g}).",
        )

    # Multiplex sets are checked by ball count alone
    if not any(beat.multiplex for beat in beats):
        collisions = landing_collisions(beats, is_sync)
        if collisions:
            listed = ", ".join(str(c) for c in collisions)
            raise InvalidPatternError(
                siteswap, f"Several throws land on the same beat ({listed})."
            )

    pattern = Pattern(
        beats=beats,
        num_balls=total // len(values),
        is_sync=is_sync,
        source=normalized,
    )
    logger.debug(
        "Parsed %r: period=%d balls=%d sync=%s",
        normalized, pattern.period, pattern.num_balls, pattern.is_sync,
    )
    return pattern
