"""Dead-reckoning of the robot pose from the two wheel encoders."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .body import ENCODER_DISTANCE, ENCODER_RADIUS, PI, WHEEL_DISTANCE, WHEEL_RADIUS
from .geometry import sinc

PULSES_PER_REVOLUTION = 4000
UPDATE_PERIOD = 0.010


@dataclass
class Odometry:
    """Pose estimate and wheel angular velocities."""

    x: float = 0.0
    y: float = 0.0
    angle: float = 0.0
    right_wheel_velocity: float = 0.0
    left_wheel_velocity: float = 0.0

    def set_position(self, x: float, y: float, angle: float) -> None:
        """Overwrite the pose."""
        self.x = x
        self.y = y
        self.angle = angle

    def update(self, right_count: int, left_count: int) -> None:
        """Advance the pose by one period's encoder counts."""
        diff = right_count - left_count
        offset = diff / ENCODER_DISTANCE * (ENCODER_DISTANCE - WHEEL_DISTANCE) / 2.0
        to_wheel = 2.0 * PI * ENCODER_RADIUS / WHEEL_RADIUS / PULSES_PER_REVOLUTION / UPDATE_PERIOD
        self.right_wheel_velocity = (-offset + right_count) * to_wheel
        self.left_wheel_velocity = (offset + left_count) * to_wheel

        d_angle = diff / PULSES_PER_REVOLUTION * 2.0 * PI * ENCODER_RADIUS / ENCODER_DISTANCE
        step = (right_count + left_count) / 2.0 / PULSES_PER_REVOLUTION * 2.0 * PI * ENCODER_RADIUS
        half = d_angle / 2.0
        self.x += step * math.cos(self.angle + half) * sinc(half)
        self.y += step * math.sin(self.angle + half) * sinc(half)

        self.angle += d_angle
        if self.angle > PI:
            self.angle -= 2.0 * PI
        elif self.angle < -PI:
            self.angle += 2.0 * PI