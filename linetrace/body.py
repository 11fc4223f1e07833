"""Physical constants of the robot body."""

import math

PI = math.pi
G = 9.81

# Motor characteristics
MOTOR_THROWING_ARM_MAX_T = 11.1 * G * 0.010 * 84 * 0.60
MOTOR_THROWING_ARM_MAX_S = 21000 * 2.0 * PI / 60
MOTOR_THROWING_ARM_TS = (1.34 * G * 0.01) / (21000 * 2.0 * PI / 60)

MOTOR_WHEEL_MAX_T = 1.97 / 71 * 19
MOTOR_WHEEL_MAX_S = 128 * 71 / 19 * 2 * PI / 60
MOTOR_WHEEL_TS = 3.0 * (1.97 / 71 * 19) / (128 * 71 / 19 * 2 * PI / 60)

# Mass
M_SHAGAI = 0.660
M_THROWING_ARM = 1.419691

# Inertia
I_WHEEL = 0.000129
I_THROWING_ARM = 0.281587727
I_THROWING_ARM_WITH_SHAGAI = 0.758285147

# Geometry
WHEEL_DISTANCE = 0.424
WHEEL_RADIUS = 0.085 / 2.0

ENCODER_DISTANCE = 0.619
ENCODER_RADIUS = 0.051 / 2.0

THROWING_ARM_ENCODER_RATIO = 1.0
THROWING_ARM_DISTANCE_GP = 1.0

L_SG_THROWING_ARM = 0.281587727
L_SG_THROWING_ARM_WITH_SHAGAI = 0.758285147