from planar_traj.utils.errors import (
    InvalidDurationError,
    SegmentExhaustedError,
    TrajectoryError,
)

__all__ = [
    "TrajectoryError",
    "InvalidDurationError",
    "SegmentExhaustedError",
]
