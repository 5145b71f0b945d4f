"""
planar_traj Python Package

Fixed-step kinematic setpoint generation for a planar vehicle.

Key components:
- State: kinematic snapshot (x, y, v, a, theta, omega)
- Continue / Done: tagged result of each segment step
- StraightSegment: straight run with a trapezoidal speed ramp
- PivotSegment: in-place turn on a cycloidal heading ramp
- LinearProfile / EaseProfile: reusable scalar ramp generators
"""

from ._version import __version__
from .motion import (
    EaseProfile,
    LinearProfile,
    PivotSegment,
    StraightSegment,
    run_segment,
)
from .protocol.types import Continue, Done, State, StepResult
from .utils.errors import InvalidDurationError, SegmentExhaustedError

__all__ = [
    "__version__",
    "State",
    "Continue",
    "Done",
    "StepResult",
    "StraightSegment",
    "PivotSegment",
    "LinearProfile",
    "EaseProfile",
    "run_segment",
    "InvalidDurationError",
    "SegmentExhaustedError",
]
