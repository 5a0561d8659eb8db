"""Unit tests for the analysis layer."""

import numpy as np
import pytest

from jugglesim.analysis import (
    airborne_counts,
    ball_tracks,
    classify_siteswap,
    frame_times,
    ladder_entries,
    next_cycle,
)


class TestClassify:
    """Tests for classify_siteswap."""

    @pytest.mark.parametrize("siteswap,kind", [
        ("3", "cascade"),
        ("51", "shower"),
        ("71", "shower"),
        ("531", "half-shower"),
        ("753", "cascade"),
        ("4", "fountain"),
        ("(4,4)", "fountain"),
        ("441", "mixed"),
    ])
    def test_types(self, siteswap, kind):
        assert classify_siteswap(siteswap).type == kind

    def test_ball_count(self):
        assert classify_siteswap("531").num_balls == 3

    def test_shower_reason(self):
        assert classify_siteswap("51").reason == "High throw (5) followed by 1 '1's."

    def test_invalid_never_raises(self):
        result = classify_siteswap("32")
        assert result.type == "invalid"
        assert result.num_balls == -1
        assert "whole number" in result.reason


class TestLadder:
    """Tests for ladder_entries and next_cycle."""

    def test_async_hands_alternate(self):
        entries = ladder_entries("3", n_beats=4)
        assert [e.hand for e in entries] == ["L", "R", "L", "R"]
        assert entries[0].landing_beats == (3,)
        assert entries[0].landing_hands == ("R",)

    def test_default_length_is_two_periods(self):
        assert len(ladder_entries("531")) == 6

    def test_even_throw_stays(self):
        entry = ladder_entries("4", n_beats=1)[0]
        assert entry.landing_hands == ("L",)

    def test_sync_pairs_share_a_beat(self):
        entries = ladder_entries("(4x,4x)", n_beats=4)
        assert [e.beat for e in entries] == [0, 0, 2, 2]
        assert [e.hand for e in entries] == ["L", "R", "L", "R"]
        assert entries[0].landing_hands == ("R",)

    @pytest.mark.parametrize("n_beats", [0, -2])
    def test_rejects_empty_range(self, n_beats):
        with pytest.raises(ValueError, match="n_beats"):
            ladder_entries("3", n_beats=n_beats)

    def test_zero_has_no_landing(self):
        entry = ladder_entries("40", n_beats=2)[1]
        assert entry.values == (0,)
        assert entry.landing_beats == ()

    def test_multiplex_lists_every_throw(self):
        entry = ladder_entries("[34]2", n_beats=1)[0]
        assert entry.values == (3, 4)
        assert entry.landing_beats == (3, 4)
        assert entry.landing_hands == ("R", "L")

    @pytest.mark.parametrize("siteswap", ["3", "531", "441", "40", "b97531"])
    def test_next_cycle_repeats_valid_pattern(self, siteswap):
        from jugglesim.core import parse_siteswap
        values = [t.value for t in parse_siteswap(siteswap).throws]
        assert next_cycle(siteswap) == values

    def test_next_cycle_rejects_sync(self):
        with pytest.raises(ValueError):
            next_cycle("(4,4)")


class TestTracks:
    """Tests for recorded-frame helpers."""

    def test_tracks_align_with_frames(self, make_scheduler):
        frames = make_scheduler("3").record(50, delta=20.0)
        tracks = ball_tracks(frames)
        times = frame_times(frames)

        assert set(tracks) == {0, 1, 2}
        xs, ys = tracks[0]
        assert xs.shape == ys.shape == times.shape == (50,)
        assert np.all(np.diff(times) > 0)

    def test_thrown_ball_rises(self, make_scheduler):
        frames = make_scheduler("3").record(40, delta=20.0)
        _, ys = ball_tracks(frames)[0]
        assert ys.min() < ys[0]

    def test_airborne_counts(self, make_scheduler):
        frames = make_scheduler("3").record(100, delta=20.0)
        counts = airborne_counts(frames)
        assert counts.dtype == np.int64
        assert counts[0] == 1
        assert counts.max() <= 3

    def test_empty(self):
        assert ball_tracks([]) == {}
