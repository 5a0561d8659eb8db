"""
Pattern families by throw parity.

- cascade: every throw odd (balls alternate hands)
- shower: one high throw, the rest 1s
- half-shower: several high throws followed by 1s
- fountain: every throw even (each hand juggles its own balls)
- mixed: anything else
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Literal

from jugglesim.core.notation import InvalidPatternError, parse_siteswap

PatternType = Literal["invalid", "cascade", "shower", "half-shower", "fountain", "mixed"]


@dataclass(frozen=True)
class Classification:
    type: PatternType
    num_balls: int  # -1 when invalid
    reason: str


def classify_siteswap(siteswap: str) -> Classification:
    """
    Classify a siteswap. Never raises: invalid input yields type "invalid".
    """
    try:
        pattern = parse_siteswap(siteswap)
    except InvalidPatternError as err:
        return Classification("invalid", -1, err.reason)

    values = [t.value for t in pattern.throws]
    period = len(values)
    balls = pattern.num_balls
    odd = [v for v in values if v % 2 == 1]
    ones = [v for v in values if v == 1]
    high = [v for v in values if v > 1]

    if len(odd) == period:
        if period == 1:
            return Classification("cascade", balls, "Single odd throw, alternating hands.")
        if len(high) == 1 and len(ones) == period - 1:
            return Classification(
                "shower", balls,
                f"High throw ({high[0]}) followed by {len(ones)} '1's.",
            )
        if ones and all(v == 1 for v in values[-len(ones):]):
            listed = ", ".join(str(v) for v in high)
            return Classification(
                "half-shower", balls,
                f"High throws ({listed}) followed by {len(ones)} '1's.",
            )
        return Classification("cascade", balls, "All odd throws, alternating hands.")

    if not odd:
        return Classification("fountain", balls, "All even throws, same-hand pattern.")

    return Classification("mixed", balls, "Combination of odd and even throws.")
