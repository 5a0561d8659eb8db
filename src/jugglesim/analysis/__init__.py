"""
Analysis layer: derived views of patterns and recorded runs.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- classify_siteswap: name the pattern family (cascade, shower, fountain, ...)
- ladder_entries / next_cycle: beat-by-beat landing schedule
- ball_tracks: numpy position tracks from recorded frames
"""

from jugglesim.analysis.classify import Classification, classify_siteswap
from jugglesim.analysis.ladder import LadderEntry, ladder_entries, next_cycle
from jugglesim.analysis.tracks import ball_tracks, frame_times, airborne_counts

__all__ = [
    "Classification",
    "classify_siteswap",
    "LadderEntry",
    "ladder_entries",
    "next_cycle",
    "ball_tracks",
    "frame_times",
    "airborne_counts",
]
