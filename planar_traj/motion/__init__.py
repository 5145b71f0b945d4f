"""
Motion primitives for a planar vehicle.

Profile generators produce bounded scalar ramps:
- LinearProfile (constant increment)
- EaseProfile (cycloidal ease-in/ease-out)

Segments turn an initial State into a stream of Continue/Done results:
- StraightSegment (trapezoidal speed ramp along the current heading)
- PivotSegment (in-place heading change on an EaseProfile)
"""

from planar_traj.motion.profiles import (
    EaseProfile,
    LinearProfile,
    RampProfile,
    profile_values,
)
from planar_traj.motion.segments import (
    PivotSegment,
    Segment,
    StraightSegment,
    iter_states,
    run_segment,
    states_to_array,
)

__all__ = [
    # Profile generators
    "RampProfile",
    "LinearProfile",
    "EaseProfile",
    "profile_values",
    # Segments
    "Segment",
    "StraightSegment",
    "PivotSegment",
    "iter_states",
    "run_segment",
    "states_to_array",
]
