# linetrace

Control software for a small two-wheeled line-tracing robot, as a plain
Python package. The board is an in-memory model, so the control loops run
and can be checked on any desktop; no hardware is needed or used.

## Modules

- `linetrace.geometry`: `Vec2`, `Vec4` and `CubicCurve`. A `CubicCurve` holds
  cubic coefficients for x and y in a parameter `u`. It gives the point
  (`point`), the tangent angle (`heading`) and the signed radius of curvature
  (`curvature_radius`, NaN where the curve is straight) at `u`, and refines a
  parameter towards the point on the curve nearest a given point with five
  Newton steps (`nearest_parameter`). Coefficients come from
  `lagrange_coefficients` (cubic through four values at `u = 0, 1/3, 2/3, 1`)
  or `bezier_coefficients`. Also `saturation` (clamp) and `sinc`.
- `linetrace.body`: the robot's physical constants: wheel and encoder
  geometry, masses, inertias and motor characteristics.
- `linetrace.xprintf`: `format_string`, a printf-style formatter supporting
  `%s %c %b %o %d %u %x %X` with a `0` or `-` flag, a width and an `l` prefix,
  which turns each `\n` into `\r\n`; `dump_line`, one line of hex dump for
  1-, 2- or 4-byte items (with an ASCII column for bytes); `parse_int`, which
  reads one decimal, `0x` hex, `0b` binary or leading-zero octal integer and
  returns it with the unread rest of the text; and `Console`, which writes
  through a one-character `writer` callable and reads lines from a
  one-character `reader` callable (`putc`, `puts`, `printf`, `put_dump`,
  `gets`).
- `linetrace.hardware`: `Board`, holding motor PWM compare values, 16-bit
  encoder counters (`"right"`, `"left"`, `"arm"`), switch levels and LED pins
  (`Pin`). `duty_to_compare` maps a duty in `[-1, 1]` to a compare value
  around 750; `counter_to_signed` reads a 16-bit counter as signed.
  `ArmEncoder` accumulates the throwing arm's count and gives its `angle` and
  `angular_velocity`.
- `linetrace.odometry`: `Odometry` dead-reckons `x`, `y` and `angle` and the
  wheel angular velocities from each period's encoder counts.
- `linetrace.control`: `Controller` runs a wheel-velocity PID, cubic-curve
  following and a throwing-arm velocity PID with gravity compensation.
  `ControlState` is the set of flags for the active loops; the `start_*` and
  `end_*` methods return it.
- `linetrace.tracer`: `LineTracer.tick` runs one 10 ms period: odometry every
  tick; every second tick the arm encoder and the line-following duties from
  the two reflectance sensors (`line_trace_duties`); the heartbeat LED toggles
  once per 100 ticks. `on_photo_reflector` starts the arm velocity loop at
  zero and lights the three-colour LED.
- `linetrace.app`: `AdcSamples` (the latest sample of ADC channels 0 and 1:
  left and right sensor), `build_tracer`, and the `main` command.

## Installation

```
pip install .
```

## Quick look

```python
from linetrace.geometry import saturation, sinc
from linetrace.hardware import counter_to_signed, duty_to_compare
from linetrace.tracer import line_trace_duties
from linetrace.xprintf import format_string, parse_int

saturation(1.5, -1.0, 1.0)            # 1.0
sinc(0.0)                             # 1.0
duty_to_compare(0.0)                  # 750
counter_to_signed(0xFFFF)             # -1
line_trace_duties(0, 0)               # (0.4, 0.4)
format_string("%6d,%3d%%", -200, 5)   # "  -200,  5%"
format_string("%04x", 0xA3)           # "00a3"
format_string("%-5s|", "abc")         # "abc  |"
parse_int("0x3ff rest")               # (1023, " rest")
```

## Command line

Installing the package installs the `linetrace` command. It builds a tracer
on a simulated board, holds the sensor readings fixed, runs a number of
10 ms periods and prints the four motor compare values, the LED1 level and
the pose:

```
linetrace --ticks 100 --left 3000 --right 1000
```

Options: `--ticks` (default 100), `--left` and `--right` (raw readings,
0 to 65535, default 0).

## What it does not do

- It does not talk to any real board; `Board` is only a model in memory.
- The periodic `LineTracer.tick` drives the wheels from the line sensors
  only. The `Controller` loops (wheel velocity, curve following, arm
  velocity) are not stepped by the tick; call their `*_step` methods
  yourself.
- The command takes fixed sensor readings; there is no sensor model or track
  simulation that changes them as the robot moves.

## Running the tests

```
pip install .[test]
pytest
```