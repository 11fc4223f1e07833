"""Feedback controllers for wheel speed, curve following and arm speed."""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import IntFlag

from .body import (
    G,
    L_SG_THROWING_ARM,
    M_THROWING_ARM,
    MOTOR_THROWING_ARM_MAX_T,
    PI,
    WHEEL_DISTANCE,
    WHEEL_RADIUS,
)
from .geometry import CubicCurve, Vec2
from .hardware import ArmEncoder, Board
from .odometry import Odometry

ARM_MOTOR = 2
RIGHT_WHEEL_MOTOR = 3
LEFT_WHEEL_MOTOR = 4

_WHEEL_P, _WHEEL_I, _WHEEL_D, _WHEEL_PERIOD = 0.050, 0.000010, 0.000010, 0.040
_ARM_P, _ARM_I, _ARM_D, _ARM_PERIOD = 0.10, 0.10, 0.0010, 0.040
_ARM_GRAVITY_GAIN = (M_THROWING_ARM * G * L_SG_THROWING_ARM / MOTOR_THROWING_ARM_MAX_T) * 1.5
_HEADING_GAIN = 0.4
_SPEED_POINTS = 5


class ControlState(IntFlag):
    """Which controllers are active."""

    IDLE = 0
    WHEEL_VELOCITY = 0x01
    CURVE_FOLLOWING = 0x02
    ARM_VELOCITY = 0x04


class Controller:
    """Runs the control loops against a board, an odometry and an arm encoder."""

    def __init__(self, board: Board, odometry: Odometry, arm: ArmEncoder | None = None) -> None:
        self.board = board
        self.odometry = odometry
        self.arm = arm if arm is not None else ArmEncoder(board)
        self.state = ControlState.IDLE

        self.wheel_target_right = 0.0
        self.wheel_target_left = 0.0
        self._wheel_error_right = 0.0
        self._wheel_error_left = 0.0
        self._wheel_integral_right = 0.0
        self._wheel_integral_left = 0.0

        self.curve: CubicCurve | None = None
        self.speeds: tuple[float, ...] = (0.0,) * _SPEED_POINTS
        self._u = 0.0
        self._speed_segment = 0

        self.arm_target = 0.0
        self._arm_error = 0.0
        self._arm_integral = 0.0

    def _clear(self, flag: ControlState) -> ControlState:
        self.state = ControlState(self.state & ~flag.value)
        return self.state

    def start_wheel_velocity(self, right: float, left: float) -> ControlState:
        """Set wheel angular velocity targets and reset the wheel loop."""
        self.wheel_target_right = right
        self.wheel_target_left = left
        self._wheel_error_right = 0.0
        self._wheel_error_left = 0.0
        self._wheel_integral_right = 0.0
        self._wheel_integral_left = 0.0
        self.state |= ControlState.WHEEL_VELOCITY
        return self.state

    def start_curve_following(self, curve: CubicCurve, speeds: Sequence[float]) -> ControlState:
        """Follow ``curve`` with speeds at ``u = 0, 1/4, 1/2, 3/4, 1``."""
        speeds = tuple(speeds)
        if len(speeds) != _SPEED_POINTS:
            raise ValueError(f"expected {_SPEED_POINTS} speeds, got {len(speeds)}")
        self.curve = curve
        self.speeds = speeds
        self.state |= ControlState.CURVE_FOLLOWING
        return self.state

    def start_arm_velocity(self, velocity: float) -> ControlState:
        """Set the arm angular velocity target."""
        self.arm_target = velocity
        self.state |= ControlState.ARM_VELOCITY
        return self.state

    def end_wheel_velocity(self) -> ControlState:
        """Stop the wheel motors and the wheel loop."""
        self.board.write_motor(RIGHT_WHEEL_MOTOR, 0.0)
        self.board.write_motor(LEFT_WHEEL_MOTOR, 0.0)
        return self._clear(ControlState.WHEEL_VELOCITY)

    def end_curve_following(self) -> ControlState:
        """Stop the wheel motors and curve following."""
        self.board.write_motor(RIGHT_WHEEL_MOTOR, 0.0)
        self.board.write_motor(LEFT_WHEEL_MOTOR, 0.0)
        return self._clear(ControlState.CURVE_FOLLOWING)

    def end_arm_velocity(self) -> ControlState:
        """Stop the arm motor and the arm loop."""
        self.board.write_motor(ARM_MOTOR, 0.0)
        return self._clear(ControlState.ARM_VELOCITY)

    def wheel_velocity_step(self) -> None:
        """One PID step of the wheel velocity loop."""
        error_right = self.wheel_target_right - self.odometry.right_wheel_velocity
        error_left = self.wheel_target_left - self.odometry.left_wheel_velocity

        # Both derivative terms are taken from the right wheel error.
        derivative_right = (self._wheel_error_right - error_right) / _WHEEL_PERIOD
        derivative_left = (self._wheel_error_right - error_right) / _WHEEL_PERIOD

        self._wheel_error_right = error_right
        self._wheel_error_left = error_left
        self._wheel_integral_right += error_right * _WHEEL_PERIOD
        self._wheel_integral_left += error_left * _WHEEL_PERIOD

        self.board.write_motor(
            RIGHT_WHEEL_MOTOR,
            _WHEEL_P * error_right + _WHEEL_I * self._wheel_integral_right + _WHEEL_D * derivative_right,
        )
        self.board.write_motor(
            LEFT_WHEEL_MOTOR,
            _WHEEL_P * error_left + _WHEEL_I * self._wheel_integral_left + _WHEEL_D * derivative_left,
        )

    def curve_following_step(self) -> None:
        """Update wheel targets to follow the curve, ending when its end is passed."""
        curve = self.curve
        if curve is None:
            raise RuntimeError("no curve to follow")
        seg = self._speed_segment
        v = self.speeds[seg] + (self.speeds[seg + 1] - self.speeds[seg]) * (4.0 * self._u - seg)
        lateral_gain = -1.0 / v

        odo = self.odometry
        here = Vec2(odo.x, odo.y)
        self._u = curve.nearest_parameter(here, self._u)
        u = self._u
        if 4.0 * u - self._speed_segment > 1.0:
            self._speed_segment += 1

        target = curve.point(u)
        d_phi = odo.angle - curve.heading(u)
        d_y = (target.x - here.x) * math.sin(-odo.angle) + (target.y - here.y) * math.cos(-odo.angle)

        if d_phi < -PI:
            d_phi = -(d_phi + 2.0 * PI)
        elif d_phi > PI:
            d_phi = -(d_phi - 2.0 * PI)

        radius = curve.curvature_radius(u)
        feed_forward = 0.0 if math.isnan(radius) else v / radius * WHEEL_DISTANCE / 2.0

        if u < 1.0:
            correction = _HEADING_GAIN * d_phi + lateral_gain * d_y
            self.start_wheel_velocity(
                (v + feed_forward - correction) / WHEEL_RADIUS,
                (v - feed_forward + correction) / WHEEL_RADIUS,
            )
        else:
            self.end_wheel_velocity()
            self.end_curve_following()
            self._u = 0.0
            self._speed_segment = 0

    def arm_velocity_step(self) -> None:
        """One PID step of the arm velocity loop with gravity compensation."""
        error = self.arm_target - self.arm.angular_velocity
        derivative = (self._arm_error - error) / _ARM_PERIOD
        self._arm_error = error
        self._arm_integral += error * _ARM_PERIOD
        self.board.write_motor(
            ARM_MOTOR,
            _ARM_P * error
            + _ARM_I * self._arm_integral
            + _ARM_D * derivative
            + _ARM_GRAVITY_GAIN * math.cos(self.arm.angle),
        )