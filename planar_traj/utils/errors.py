"""Exceptions raised by profile generators and trajectory segments."""


class TrajectoryError(Exception):
    """Base class for planar_traj errors."""


class InvalidDurationError(TrajectoryError, ValueError):
    """Segment parameters yield a zero, negative or non-finite duration.

    Raised at construction, before any state is built, so NaN/Inf never
    reach the emitted samples.
    """


class SegmentExhaustedError(TrajectoryError, RuntimeError):
    """A profile or segment was advanced after producing its final sample."""
