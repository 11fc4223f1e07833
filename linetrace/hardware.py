"""In-memory model of the robot's board: motor PWM, encoder counters, switches and LEDs."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from .geometry import saturation

COMPARE_NEUTRAL = 750
COMPARE_SPAN = 250
MOTOR_CHANNELS = (1, 2, 3, 4)

# Encoder counters: right wheel on TIM3, left wheel on TIM1, throwing arm on TIM4.
ENCODERS = ("right", "left", "arm")

ARM_PULSES_PER_REVOLUTION = 400 * 84
ARM_UPDATE_PERIOD = 0.020

_COUNTER_MASK = 0xFFFF


class Pin(Enum):
    """GPIO pins wired on the board, as (port, pin number)."""

    B1 = ("C", 13)
    REMOTE_SWITCH = ("C", 0)
    SOLENOID_OUT = ("C", 3)
    LD2 = ("A", 5)
    LED1 = ("C", 5)
    LED_THREE_2 = ("C", 6)
    LED_THREE_1 = ("C", 8)
    PR_EVENT = ("C", 9)
    LED2 = ("A", 12)
    SWITCH2 = ("C", 10)
    SWITCH = ("C", 11)
    SWITCH3 = ("C", 12)

    @property
    def port(self) -> str:
        return self.value[0]

    @property
    def number(self) -> int:
        return self.value[1]


_SWITCHES = {1: Pin.SWITCH, 2: Pin.SWITCH2, 3: Pin.SWITCH3}
_LEDS = {1: Pin.LED1, 2: Pin.LED2}


def duty_to_compare(ratio: float) -> int:
    """PWM compare value for a motor duty ratio, clamped to ``[-1, 1]``."""
    return int(COMPARE_SPAN * saturation(ratio, -1.0, 1.0) + COMPARE_NEUTRAL)


def counter_to_signed(bits: int) -> int:
    """Read a 16-bit counter value as a signed two's-complement number."""
    bits &= _COUNTER_MASK
    return bits - 0x10000 if bits & 0x8000 else bits


def _initial_pins() -> dict[Pin, int]:
    pins = dict.fromkeys(Pin, 0)
    # The switches are pulled up, so they read high when open.
    for pin in _SWITCHES.values():
        pins[pin] = 1
    return pins


@dataclass
class Board:
    """Peripheral state of the controller board."""

    compare: dict[int, int] = field(default_factory=lambda: dict.fromkeys(MOTOR_CHANNELS, 0))
    counters: dict[str, int] = field(default_factory=lambda: dict.fromkeys(ENCODERS, 0))
    pins: dict[Pin, int] = field(default_factory=_initial_pins)

    def write_motor(self, channel: int, ratio: float) -> None:
        """Drive motor ``channel`` (1 to 4) at duty ``ratio``."""
        if channel not in self.compare:
            raise ValueError(f"no motor channel {channel!r}")
        self.compare[channel] = duty_to_compare(ratio)

    def take_encoder_count(self, name: str) -> int:
        """Return the signed count of encoder ``name`` and rewind its counter by it."""
        if name not in self.counters:
            raise ValueError(f"no encoder named {name!r}")
        bits = self.counters[name] & _COUNTER_MASK
        value = counter_to_signed(bits)
        self.counters[name] = (bits - value) & _COUNTER_MASK
        return value

    def read_switch(self, index: int) -> int:
        """Level of switch ``index`` (1 to 3)."""
        try:
            pin = _SWITCHES[index]
        except KeyError:
            raise ValueError(f"no switch {index!r}") from None
        return self.pins[pin]

    def write_three_color_led(self, first: int, second: int) -> None:
        """Set the two lines of the three-colour LED from the low bits of the inputs."""
        self.pins[Pin.LED_THREE_1] = first & 1
        self.pins[Pin.LED_THREE_2] = second & 1

    def write_led(self, index: int, value: int) -> None:
        """Set LED ``index`` (1 or 2) from the low bit of ``value``."""
        try:
            pin = _LEDS[index]
        except KeyError:
            raise ValueError(f"no LED {index!r}") from None
        self.pins[pin] = value & 1


@dataclass
class ArmEncoder:
    """Angle and angular velocity of the throwing arm from its encoder."""

    board: Board
    count: int = 0
    angular_velocity: float = 0.0

    def update(self) -> None:
        """Collect the pulses since the last update; call once per update period."""
        value = self.board.take_encoder_count("arm")
        self.count += value
        self.angular_velocity = value / ARM_PULSES_PER_REVOLUTION * 2.0 * math.pi / ARM_UPDATE_PERIOD

    def set_angle(self, angle: float) -> None:
        """Clear the arm counter and store ``angle`` as the accumulated count."""
        self.board.counters["arm"] = 0
        self.count = int(angle)

    @property
    def angle(self) -> float:
        """Arm angle in radians."""
        return self.count / ARM_PULSES_PER_REVOLUTION * 2.0 * math.pi