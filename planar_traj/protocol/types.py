"""
Type definitions for the planar_traj boundary.

State is the only record exchanged with other processes; Continue and Done
wrap it as the result of every trajectory step.
"""

from __future__ import annotations

from typing import Union

import msgspec


class State(msgspec.Struct, frozen=True):
    """Kinematic snapshot of the vehicle at a single instant.

    Field order is the wire order. There is no time field; segments count
    fixed ``dt`` steps internally.
    """

    x: float = 0.0  # position, distance units
    y: float = 0.0
    v: float = 0.0  # signed speed along heading
    a: float = 0.0  # signed acceleration, output only
    theta: float = 0.0  # heading (rad), unwrapped
    omega: float = 0.0  # angular velocity (rad/s)

    @property
    def pose(self) -> tuple[float, float, float]:
        """(x, y, theta)."""
        return (self.x, self.y, self.theta)

    def replace(self, **changes: float) -> State:
        """Copy with the given fields changed."""
        return msgspec.structs.replace(self, **changes)

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.x, self.y, self.v, self.a, self.theta, self.omega)


class Continue(msgspec.Struct, tag="continue", frozen=True):
    """Intermediate sample; more follow."""

    state: State

    @property
    def done(self) -> bool:
        return False


class Done(msgspec.Struct, tag="done", frozen=True):
    """Final, snapped sample. The segment must not be stepped again."""

    state: State

    @property
    def done(self) -> bool:
        return True


StepResult = Union[Continue, Done]
