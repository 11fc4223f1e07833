"""Line-tracing robot control on a simulated board: geometry, odometry, PID control and console formatting."""

__version__ = "0.1.0"

__all__ = ["__version__"]