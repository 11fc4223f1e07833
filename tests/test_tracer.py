import pytest
from hypothesis import given
from hypothesis import strategies as st

from linetrace.control import ControlState
from linetrace.hardware import Board, Pin, duty_to_compare
from linetrace.tracer import LineTracer, line_trace_duties


def _tracer(readings=None):
    readings = readings if readings is not None else {"right": 0, "left": 0}
    board = Board()
    tracer = LineTracer(
        board,
        right_sensor=lambda: readings["right"],
        left_sensor=lambda: readings["left"],
    )
    return tracer, board, readings


def test_balanced_sensors_give_cruising_duty():
    assert line_trace_duties(0, 0) == pytest.approx((0.4, 0.4))


def test_readings_below_one_thousand_count_as_zero():
    assert line_trace_duties(999, 0) == line_trace_duties(0, 0)
    assert line_trace_duties(0, 999) == line_trace_duties(0, 0)


@given(st.integers(0, 4095), st.integers(0, 4095))
def test_duties_are_symmetric_around_base(right, left):
    duty_right, duty_left = line_trace_duties(right, left)
    assert duty_right - 0.4 == pytest.approx(-(duty_left - 0.4))


def test_brighter_left_turns_right_wheel_faster():
    duty_right, duty_left = line_trace_duties(0, 3000)
    assert duty_right > duty_left


def test_large_error_is_capped():
    assert line_trace_duties(0, 40000) == pytest.approx((0.75, 0.4))
    assert line_trace_duties(40000, 0) == pytest.approx((0.4, 0.75))


def test_out_of_range_reading_rejected():
    with pytest.raises(ValueError):
        line_trace_duties(-1, 0)
    with pytest.raises(ValueError):
        line_trace_duties(0, 0x10000)


def test_tick_writes_wheel_motors_on_even_ticks():
    tracer, board, readings = _tracer({"right": 0, "left": 3000})
    tracer.tick()
    duty_right, duty_left = line_trace_duties(0, 3000)
    assert board.compare[3] == duty_to_compare(duty_right)
    assert board.compare[4] == duty_to_compare(duty_left)

    readings["left"] = 0
    tracer.tick()
    assert board.compare[3] == duty_to_compare(duty_right)

    tracer.tick()
    assert board.compare[3] == duty_to_compare(0.4)


def test_counter_wraps_each_cycle():
    tracer, _, _ = _tracer()
    for _ in range(99):
        tracer.tick()
    assert tracer.counter == 99
    tracer.tick()
    assert tracer.counter == 0


def test_led_toggles_once_per_cycle():
    tracer, board, _ = _tracer()
    tracer.tick()
    assert board.pins[Pin.LED1] == 1
    for _ in range(99):
        tracer.tick()
    assert board.pins[Pin.LED1] == 1
    tracer.tick()
    assert board.pins[Pin.LED1] == 0


def test_tick_updates_odometry_and_rewinds_counters():
    tracer, board, _ = _tracer()
    board.counters["right"] = 100
    board.counters["left"] = 100
    tracer.tick()
    assert tracer.odometry.x > 0.0
    assert tracer.odometry.angle == pytest.approx(0.0)
    assert board.counters["right"] == 0
    assert board.counters["left"] == 0


def test_arm_encoder_read_on_even_ticks_only():
    tracer, board, _ = _tracer()
    board.counters["arm"] = 10
    tracer.tick()
    assert tracer.arm.count == 10
    board.counters["arm"] = 5
    tracer.tick()
    assert tracer.arm.count == 10
    assert board.counters["arm"] == 5
    tracer.tick()
    assert tracer.arm.count == 15


def test_photo_reflector_starts_arm_hold_and_lights_led():
    tracer, board, _ = _tracer()
    tracer.on_photo_reflector()
    assert ControlState.ARM_VELOCITY in tracer.controller.state
    assert tracer.controller.arm_target == 0.0
    assert board.pins[Pin.LED_THREE_1] == 1
    assert board.pins[Pin.LED_THREE_2] == 1