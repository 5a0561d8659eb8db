"""Unit tests for ball states and their transitions."""

import pytest

from jugglesim.core.notation import Throw
from jugglesim.core.state import (
    Ball,
    Hand,
    Held,
    InFlight,
    ball_color,
    flight_progress,
    land,
    launch,
)
from jugglesim.core.trajectory import make_params


def _params(value=3):
    return make_params(value, value % 2 == 1, start=(100.0, 300.0), end_x=500.0, height=100.0)


class TestTransitions:
    """Tests for launch / land."""

    def test_launch_from_held(self):
        state = launch(Held(0), Throw.of(3), time=250.0, duration=1400.0,
                       landing_hand=1, trajectory=_params())
        assert isinstance(state, InFlight)
        assert state.from_hand == 0
        assert state.landing_hand == 1
        assert state.land_time == pytest.approx(1650.0)
        assert state.value == 3

    def test_launch_in_flight_rejected(self):
        flying = launch(Held(0), Throw.of(3), 0.0, 1000.0, 1, _params())
        with pytest.raises(ValueError):
            launch(flying, Throw.of(3), 10.0, 1000.0, 1, _params())

    def test_zero_throw_never_launches(self):
        with pytest.raises(ValueError):
            launch(Held(0), Throw.of(0), 0.0, 1000.0, 0, _params(0))

    def test_land_goes_to_target_hand(self):
        flying = launch(Held(0), Throw.of(3), 0.0, 1000.0, 1, _params())
        assert land(flying) == Held(1)

    def test_land_held_rejected(self):
        with pytest.raises(ValueError):
            land(Held(1))

    def test_flight_progress(self):
        flying = launch(Held(0), Throw.of(3), 100.0, 1000.0, 1, _params())
        assert flight_progress(flying, 100.0) == 0.0
        assert flight_progress(flying, 600.0) == pytest.approx(0.5)
        assert flight_progress(flying, 5000.0) == 1.0


class TestBallAndHand:
    """Tests for Ball / Hand containers."""

    def test_ball_in_air_flag(self):
        ball = Ball(id=0, color="#fff", state=Held(0))
        assert ball.in_air is False
        assert ball.current_throw == 0
        ball.state = launch(ball.state, Throw.of(5), 0.0, 2000.0, 1, _params(5))
        assert ball.in_air is True
        assert ball.current_throw == 5

    def test_move_along_flight(self):
        ball = Ball(id=0, color="#fff", state=launch(Held(0), Throw.of(3), 0.0, 1000.0, 1, _params()))
        ball.move_along_flight(1000.0)
        assert (ball.x, ball.y) == pytest.approx((500.0, 300.0))

    def test_hand_queue_sorted_by_id(self):
        hand = Hand(id=0, base_x=320.0, base_y=350.0, direction=1, phase=0.0,
                    pattern_index=0, next_throw_time=0.0)
        for ball_id in (4, 1, 3):
            hand.receive(ball_id)
        assert hand.held == [1, 3, 4]
        assert hand.release() == 1
        assert hand.held == [3, 4]

    def test_release_empty_hand(self):
        hand = Hand(id=1, base_x=480.0, base_y=350.0, direction=-1, phase=0.5,
                    pattern_index=1, next_throw_time=500.0)
        assert hand.release() is None
        assert hand.position == (480.0, 350.0)


class TestBallColor:
    """Tests for ball_color."""

    def test_hex_format(self):
        color = ball_color(0)
        assert color.startswith("#")
        assert len(color) == 7

    def test_hue_zero_is_red(self):
        r, g, b = (int(ball_color(0)[i:i + 2], 16) for i in (1, 3, 5))
        assert r > g and r > b
        assert g == b

    def test_hue_wraps(self):
        assert ball_color(9, hue_step=40) == ball_color(0, hue_step=40)
