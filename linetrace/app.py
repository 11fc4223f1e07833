"""Board start-up and a command that runs the line-tracing loop on the board model."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass, field

from .hardware import MOTOR_CHANNELS, Board, Pin
from .tracer import LineTracer

ADC_CHANNELS = 2
_SAMPLE_MAX = 0xFFFF


def _check_sample(value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"ADC sample must be an integer, got {type(value).__name__}")
    if not 0 <= value <= _SAMPLE_MAX:
        raise ValueError(f"ADC sample {value!r} out of range")
    return value


@dataclass
class AdcSamples:
    """The latest conversion of each ADC channel, as the DMA leaves them.

    Channel 0 carries the left reflectance sensor, channel 1 the right one.
    """

    values: list[int] = field(default_factory=lambda: [0] * ADC_CHANNELS)

    def __post_init__(self) -> None:
        self.values = [_check_sample(v) for v in self.values]
        if len(self.values) != ADC_CHANNELS:
            raise ValueError(f"expected {ADC_CHANNELS} samples, got {len(self.values)}")

    def channel(self, index: int) -> int:
        """Latest sample of channel ``index`` (0 or 1)."""
        if not 0 <= index < ADC_CHANNELS:
            raise IndexError(f"no ADC channel {index!r}")
        return self.values[index]

    def __setitem__(self, index: int, value: int) -> None:
        if not 0 <= index < ADC_CHANNELS:
            raise IndexError(f"no ADC channel {index!r}")
        self.values[index] = _check_sample(value)


def build_tracer(board: Board, samples: AdcSamples) -> LineTracer:
    """Wire the periodic task to ``board`` with the sensors read from ``samples``."""
    return LineTracer(
        board,
        right_sensor=lambda: samples.channel(1),
        left_sensor=lambda: samples.channel(0),
    )


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linetrace",
        description="Run the 10 ms line-tracing task on a simulated board.",
    )
    parser.add_argument("--ticks", type=int, default=100, help="number of 10 ms periods to run")
    parser.add_argument("--left", type=int, default=0, help="raw left sensor reading")
    parser.add_argument("--right", type=int, default=0, help="raw right sensor reading")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tracer for a number of periods and print the motor and LED state."""
    parser = _parser()
    args = parser.parse_args(argv)
    if args.ticks < 0:
        parser.error("--ticks must not be negative")
    try:
        samples = AdcSamples([args.left, args.right])
    except ValueError as exc:
        parser.error(str(exc))

    board = Board()
    tracer = build_tracer(board, samples)
    for _ in range(args.ticks):
        tracer.tick()

    for channel in MOTOR_CHANNELS:
        print(f"motor{channel} compare {board.compare[channel]}")
    print(f"led1 {board.pins[Pin.LED1]}")
    odo = tracer.odometry
    print(f"pose {odo.x:.6f} {odo.y:.6f} {odo.angle:.6f}")
    return 0