"""State record and its wire codec."""

from planar_traj.protocol.types import Continue, Done, State, StepResult

__all__ = ["State", "Continue", "Done", "StepResult"]
