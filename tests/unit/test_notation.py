"""Unit tests for siteswap parsing."""

import pytest

from jugglesim.core.notation import (
    Beat,
    InvalidPatternError,
    Throw,
    is_crossing,
    landing_collisions,
    parse_siteswap,
    tokenize,
)


class TestIsCrossing:
    """Tests for the crossing rule."""

    def test_odd_values_cross(self):
        assert is_crossing(3) is True
        assert is_crossing(1) is True

    def test_even_values_stay(self):
        assert is_crossing(4) is False
        assert is_crossing(0) is False

    def test_marker_forces_crossing(self):
        assert is_crossing(4, forced=True) is True


class TestParseAsync:
    """Tests for plain async patterns."""

    def test_cascade(self):
        pattern = parse_siteswap("3")
        assert pattern.num_balls == 3
        assert pattern.is_sync is False
        assert pattern.period == 1

    def test_x_outside_sync_is_a_digit(self):
        pattern = parse_siteswap("3x")
        assert [t.value for t in pattern.throws] == [3, 33]
        assert pattern.num_balls == 18

    def test_531(self):
        pattern = parse_siteswap("531")
        assert pattern.num_balls == 3
        assert pattern.is_sync is False
        assert [t.value for t in pattern.throws] == [5, 3, 1]

    def test_531_landings_are_distinct(self):
        pattern = parse_siteswap("531")
        landings = [(i + t.value) % 3 for i, t in enumerate(pattern.throws)]
        assert sorted(landings) == [0, 1, 2]

    def test_crossing_defaults_to_parity(self):
        pattern = parse_siteswap("441")
        assert [t.is_crossing for t in pattern.throws] == [False, False, True]

    def test_base36_heights(self):
        pattern = parse_siteswap("a")
        assert pattern.throws[0].value == 10
        assert pattern.num_balls == 10

    def test_normalizes_case_and_whitespace(self):
        assert parse_siteswap(" B 1 ").source == "b1"
        assert parse_siteswap("B1").num_balls == 6

    def test_zero_throws_allowed(self):
        pattern = parse_siteswap("40")
        assert pattern.num_balls == 2
        assert pattern.beats[1].is_empty

    @pytest.mark.parametrize("siteswap,balls", [
        ("3", 3), ("4", 4), ("51", 3), ("441", 3), ("97531", 5), ("b97531", 6),
    ])
    def test_ball_count_is_average(self, siteswap, balls):
        pattern = parse_siteswap(siteswap)
        values = [t.value for t in pattern.throws]
        assert pattern.num_balls == sum(values) // len(values) == balls


class TestParseSync:
    """Tests for sync pairs."""

    def test_four_ball_sync(self):
        pattern = parse_siteswap("(4,4)")
        assert pattern.num_balls == 4
        assert pattern.is_sync is True
        assert pattern.period == 2

    def test_crossing_marker(self):
        pattern = parse_siteswap("(4x,4x)")
        assert all(t.is_crossing for t in pattern.throws)
        assert [t.value for t in pattern.throws] == [4, 4]

    def test_multiple_pairs(self):
        pattern = parse_siteswap("(4,4)(4x,4x)")
        assert pattern.period == 4
        assert pattern.num_balls == 4

    def test_crossing_pair_first(self):
        pattern = parse_siteswap("(4x,4x)(4,4)")
        assert [t.is_crossing for t in pattern.throws] == [True, True, False, False]

    def test_same_hand_collision_rejected(self):
        # Left's 4 and later 2 both come back to the left hand on beat 4
        with pytest.raises(InvalidPatternError, match="same beat"):
            parse_siteswap("(4,2)(2,4)")

    def test_unequal_crossing_rejected(self):
        with pytest.raises(InvalidPatternError, match="crossing"):
            parse_siteswap("(4,5)")

    def test_marker_mismatch_rejected(self):
        with pytest.raises(InvalidPatternError):
            parse_siteswap("(4x,4)")

    def test_pair_needs_two_values(self):
        with pytest.raises(InvalidPatternError, match="two throws"):
            parse_siteswap("(4,4,4)")

    def test_unclosed_pair(self):
        with pytest.raises(InvalidPatternError, match="Mismatched parentheses"):
            parse_siteswap("(4,4")

    def test_mixed_sync_and_async_rejected(self):
        with pytest.raises(InvalidPatternError, match="sync pairs"):
            parse_siteswap("(4,4)4")

    def test_sync_collision_rejected(self):
        with pytest.raises(InvalidPatternError, match="same beat"):
            parse_siteswap("(6x,4x)(4x,6x)")


class TestParseMultiplex:
    """Tests for multiplex beats."""

    def test_multiplex_beat(self):
        pattern = parse_siteswap("[34]2")
        assert pattern.num_balls == 3
        assert pattern.beats[0].multiplex is True
        assert set(pattern.beats[0].values) == {3, 4}
        assert pattern.has_multiplex

    def test_multiplex_crossing_by_parity(self):
        beat = parse_siteswap("[34]2").beats[0]
        assert [t.is_crossing for t in beat.throws] == [True, False]

    def test_empty_multiplex(self):
        with pytest.raises(InvalidPatternError, match="Empty multiplex"):
            parse_siteswap("[]3")

    def test_unclosed_multiplex(self):
        with pytest.raises(InvalidPatternError, match="Mismatched brackets"):
            parse_siteswap("[34")


class TestInvalidPatterns:
    """Tests for rejected input."""

    @pytest.mark.parametrize("siteswap", ["", "   "])
    def test_empty(self, siteswap):
        with pytest.raises(InvalidPatternError, match="empty"):
            parse_siteswap(siteswap)

    def test_non_integer_average(self):
        with pytest.raises(InvalidPatternError, match="whole number") as excinfo:
            parse_siteswap("32")
        assert "2.5" in excinfo.value.reason

    def test_all_zero(self):
        with pytest.raises(InvalidPatternError, match="no throws"):
            parse_siteswap("00")

    def test_collision(self):
        with pytest.raises(InvalidPatternError, match="same beat"):
            parse_siteswap("321")

    @pytest.mark.parametrize("siteswap", ["3!", ")3", "3]", "-3", "٣", "３", "(٣,٣)"])
    def test_bad_characters(self, siteswap):
        with pytest.raises(InvalidPatternError, match="Invalid throw character"):
            parse_siteswap(siteswap)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_siteswap("32")

    def test_error_keeps_input(self):
        with pytest.raises(InvalidPatternError) as excinfo:
            parse_siteswap("32")
        assert excinfo.value.siteswap == "32"
        assert str(excinfo.value) == excinfo.value.reason


class TestPatternStructure:
    """Tests for Pattern helpers and idempotence."""

    def test_parse_is_idempotent(self):
        assert parse_siteswap("[34]2") == parse_siteswap("[34]2")
        assert parse_siteswap("(4x,4x)") == parse_siteswap("(4x,4x)")

    def test_beat_at_wraps(self):
        pattern = parse_siteswap("531")
        assert pattern.beat_at(4).values == (3,)

    def test_fountain_flag(self):
        assert parse_siteswap("4").is_fountain
        assert not parse_siteswap("3").is_fountain
        assert not parse_siteswap("40").is_fountain

    def test_beat_str(self):
        assert str(Beat((Throw.of(3), Throw.of(4)), multiplex=True)) == "[34]"
        assert str(Beat((Throw.of(11),))) == "b"

    def test_tokenize_flattens_pairs(self):
        beats = tokenize("(4,4)")
        assert len(beats) == 2

    def test_landing_collisions(self):
        assert landing_collisions(tokenize("531")) == []
        assert landing_collisions(tokenize("321")) == [0]
