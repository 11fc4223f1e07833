"""Periodic line-tracing loop driven by two reflectance sensors."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from .control import LEFT_WHEEL_MOTOR, RIGHT_WHEEL_MOTOR, Controller
from .hardware import ArmEncoder, Board, Pin
from .odometry import Odometry

TICKS_PER_CYCLE = 100
LINE_TRACE_EVERY = 2
LED_TOGGLE_EVERY = 100

SENSOR_SCALE = 1000
MAX_DUTY = 0.7
_KP, _KI, _KD = 0.1, 0.0, 0.0001
_PERIOD = 0.020
_DUTY_GAIN = 0.5
_DUTY_BASE = 0.4
_ADC_MAX = 0xFFFF


def line_trace_duties(right_raw: int, left_raw: int) -> tuple[float, float]:
    """Right and left wheel duties for raw sensor readings.

    Readings are scaled down by whole thousands, so values below 1000 read
    as zero. A duty above the limit is capped and the other wheel's share
    is dropped; both are then mapped around the cruising duty.
    """
    for raw in (right_raw, left_raw):
        if not 0 <= raw <= _ADC_MAX:
            raise ValueError(f"sensor reading {raw!r} out of range")
    right = float(right_raw // SENSOR_SCALE)
    left = float(left_raw // SENSOR_SCALE)

    error = left - right
    integral = min(error * _PERIOD, 1.0)
    derivative = error / _PERIOD

    duty_right = _KP * error + _KI * integral + _KD * derivative
    duty_left = -_KP * error - _KI * integral - _KD * derivative

    if duty_right > MAX_DUTY:
        duty_right, duty_left = MAX_DUTY, 0.0
    elif duty_left > MAX_DUTY:
        duty_right, duty_left = 0.0, MAX_DUTY

    return duty_right * _DUTY_GAIN + _DUTY_BASE, duty_left * _DUTY_GAIN + _DUTY_BASE


@dataclass
class LineTracer:
    """The 10 ms periodic task: odometry, arm encoder, line following and heartbeat LED."""

    board: Board
    right_sensor: Callable[[], int]
    left_sensor: Callable[[], int]
    odometry: Odometry = field(default_factory=Odometry)
    arm: ArmEncoder | None = None
    controller: Controller | None = None
    counter: int = 0

    def __post_init__(self) -> None:
        if self.arm is None:
            self.arm = ArmEncoder(self.board)
        if self.controller is None:
            self.controller = Controller(self.board, self.odometry, self.arm)

    def tick(self) -> None:
        """Run one 10 ms period."""
        right = self.board.take_encoder_count("right")
        left = self.board.take_encoder_count("left")
        self.odometry.update(right, left)

        if self.counter % LINE_TRACE_EVERY == 0:
            self.arm.update()
            duty_right, duty_left = line_trace_duties(self.right_sensor(), self.left_sensor())
            self.board.write_motor(RIGHT_WHEEL_MOTOR, duty_right)
            self.board.write_motor(LEFT_WHEEL_MOTOR, duty_left)

        if self.counter % LED_TOGGLE_EVERY == 0:
            self.board.write_led(1, self.board.pins[Pin.LED1] ^ 1)

        self.counter += 1
        if self.counter == TICKS_PER_CYCLE:
            self.counter = 0

    def on_photo_reflector(self) -> None:
        """Handle the photo-reflector edge: hold the arm still and light the LED."""
        self.controller.start_arm_velocity(0.0)
        self.board.write_three_color_led(1, 1)