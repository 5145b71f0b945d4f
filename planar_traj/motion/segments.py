"""
Trajectory primitives for a planar vehicle.

- StraightSegment: constant-acceleration run along the heading held at
  construction, from the current speed to a target terminal speed.
- PivotSegment: in-place heading change following an EaseProfile.

Both are stepped one ``dt`` at a time. Every step returns ``Continue(state)``
until the last, which returns ``Done(state)`` with the terminal sample
snapped to its closed-form value. The ``Done`` state is the natural initial
state for whatever segment the caller runs next.

Each segment is a frozen config plus a frozen cursor advanced by a pure
transition function; the classes only hold the current cursor.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray

import planar_traj.config as cfg
from planar_traj.config import DT_S
from planar_traj.motion.profiles import (
    EaseConfig,
    EaseCursor,
    compute_step_count,
    ease_transition,
)
from planar_traj.protocol.types import Continue, Done, State, StepResult
from planar_traj.utils.errors import InvalidDurationError, SegmentExhaustedError

logger = logging.getLogger(__name__)


@runtime_checkable
class Segment(Protocol):
    """A primitive that can be stepped until it returns Done."""

    @property
    def state(self) -> State: ...

    @property
    def done(self) -> bool: ...

    def step(self) -> StepResult: ...

    def __iter__(self) -> Iterator[StepResult]: ...


# =============================================================================
# Straight segment
# =============================================================================


@dataclass(frozen=True, slots=True)
class StraightConfig:
    """
    Derived constants of a straight run.

    Attributes:
        x_origin, y_origin: Position at construction
        theta: Heading held for the whole segment (rad)
        distance: Travel along theta; negative runs backwards
        final_velocity: Speed at the end of the segment
        duration: 2 * distance / (v0 + final_velocity)
        step_count: Whole dt steps in duration
        acceleration: (final_velocity - v0) / duration
        dt: Integration step
    """

    x_origin: float
    y_origin: float
    theta: float
    cos_theta: float
    sin_theta: float
    distance: float
    final_velocity: float
    duration: float
    step_count: int
    acceleration: float
    dt: float

    @classmethod
    def build(
        cls, state: State, distance: float, final_velocity: float, dt: float
    ) -> StraightConfig:
        """
        Derive segment constants from the initial state.

        Raises:
            InvalidDurationError: If v0 + final_velocity is zero or the derived
                duration is not a positive finite number
        """
        speed_sum = state.v + final_velocity
        if speed_sum == 0.0:
            raise InvalidDurationError(
                f"v0 + final_velocity is zero (v0={state.v!r}, "
                f"final_velocity={final_velocity!r}); duration is undefined"
            )
        duration = 2.0 * distance / speed_sum
        if not (math.isfinite(duration) and duration > 0.0):
            raise InvalidDurationError(
                f"distance={distance!r} with v0={state.v!r}, "
                f"final_velocity={final_velocity!r} gives duration {duration!r}"
            )
        step_count = compute_step_count(duration, dt)
        return cls(
            x_origin=state.x,
            y_origin=state.y,
            theta=state.theta,
            cos_theta=math.cos(state.theta),
            sin_theta=math.sin(state.theta),
            distance=distance,
            final_velocity=final_velocity,
            duration=duration,
            step_count=step_count,
            acceleration=(final_velocity - state.v) / duration,
            dt=dt,
        )

    def terminal_state(self) -> State:
        """Closed-form end of the segment."""
        return State(
            x=self.x_origin + self.distance * self.cos_theta,
            y=self.y_origin + self.distance * self.sin_theta,
            v=self.final_velocity,
            a=0.0,
            theta=self.theta,
            omega=0.0,
        )


@dataclass(frozen=True, slots=True)
class StraightCursor:
    """Live state of a straight run."""

    state: State
    position: float  # signed distance integrated so far
    steps_left: int
    finished: bool = False


def straight_transition(
    cursor: StraightCursor, config: StraightConfig
) -> tuple[StraightCursor, StepResult]:
    """
    Advance a straight run by one dt.

    Ends when the step budget is spent or the integrated distance reaches
    ``|distance|``, whichever comes first; the final sample is replaced by
    ``config.terminal_state()``.

    Raises:
        SegmentExhaustedError: If the cursor already produced Done
    """
    if cursor.finished:
        raise SegmentExhaustedError("StraightSegment already returned Done")

    if cursor.steps_left == 0:
        terminal = config.terminal_state()
        return replace(cursor, state=terminal, finished=True), Done(terminal)

    dt = config.dt
    s = cursor.state
    v = s.v + config.acceleration * dt
    state = State(
        x=s.x + v * dt * config.cos_theta,
        y=s.y + v * dt * config.sin_theta,
        v=v,
        a=config.acceleration,
        theta=s.theta,
        omega=0.0,
    )
    position = cursor.position + v * dt
    steps_left = cursor.steps_left - 1

    if abs(position) >= abs(config.distance):
        terminal = config.terminal_state()
        return (
            StraightCursor(terminal, position, steps_left, finished=True),
            Done(terminal),
        )

    return StraightCursor(state, position, steps_left), Continue(state)


class StraightSegment:
    """
    Straight run with a trapezoidal (constant-acceleration) speed ramp.

    Speed ramps linearly from the initial ``v`` to ``final_velocity`` while
    the vehicle covers ``distance`` along its current heading. ``omega`` is
    zero on every sample; the terminal sample has ``a == 0``.

    Calling ``step()`` after it returned Done raises SegmentExhaustedError.
    """

    def __init__(
        self,
        state: State,
        distance: float,
        final_velocity: float,
        dt: float = DT_S,
    ) -> None:
        self.config = StraightConfig.build(state, distance, final_velocity, dt)
        self._cursor = StraightCursor(
            state=state, position=0.0, steps_left=self.config.step_count
        )
        logger.debug(
            "StraightSegment: distance=%.6g v0=%.6g vf=%.6g duration=%.6g "
            "steps=%d accel=%.6g",
            distance,
            state.v,
            final_velocity,
            self.config.duration,
            self.config.step_count,
            self.config.acceleration,
        )
        if self.config.step_count == 0:
            logger.debug("StraightSegment: shorter than one step, emits terminal only")

    @property
    def cursor(self) -> StraightCursor:
        return self._cursor

    @property
    def state(self) -> State:
        return self._cursor.state

    @property
    def done(self) -> bool:
        return self._cursor.finished

    @property
    def origin(self) -> tuple[float, float]:
        """(x, y) where the segment started."""
        return (self.config.x_origin, self.config.y_origin)

    @property
    def position(self) -> float:
        """Distance integrated so far."""
        return self._cursor.position

    def step(self) -> StepResult:
        self._cursor, result = straight_transition(self._cursor, self.config)
        if cfg.TRACE_ENABLED:
            logger.trace("StraightSegment: %s", result)  # type: ignore[attr-defined]
        return result

    def __iter__(self) -> Iterator[StepResult]:
        while not self.done:
            yield self.step()


# =============================================================================
# Pivot segment
# =============================================================================


@dataclass(frozen=True, slots=True)
class PivotConfig:
    """Derived constants of an in-place pivot."""

    theta_origin: float
    final_theta: float  # signed heading change, not an absolute target
    duration: float
    dt: float
    ease: EaseConfig

    @classmethod
    def build(
        cls, state: State, final_theta: float, duration: float, dt: float
    ) -> PivotConfig:
        """
        Raises:
            InvalidDurationError: If duration or dt is not positive and finite
        """
        ease = EaseConfig.build(state.theta, state.theta + final_theta, duration, dt)
        return cls(
            theta_origin=state.theta,
            final_theta=final_theta,
            duration=duration,
            dt=dt,
            ease=ease,
        )

    @property
    def step_count(self) -> int:
        return self.ease.step_count


@dataclass(frozen=True, slots=True)
class PivotCursor:
    """Live state of a pivot."""

    state: State
    ease: EaseCursor
    finished: bool = False


def pivot_transition(
    cursor: PivotCursor, config: PivotConfig
) -> tuple[PivotCursor, StepResult]:
    """
    Advance a pivot by one dt.

    Heading comes from the ease ramp; omega is the backward difference
    against the previous heading. x, y, v and a are carried through.

    Raises:
        SegmentExhaustedError: If the cursor already produced Done
    """
    if cursor.finished:
        raise SegmentExhaustedError("PivotSegment already returned Done")

    ease, theta = ease_transition(cursor.ease, config.ease)
    assert theta is not None  # the ramp's last value sets finished
    s = cursor.state
    state = s.replace(theta=theta, omega=(theta - s.theta) / config.dt)

    if ease.index > config.ease.step_count:
        return PivotCursor(state, ease, finished=True), Done(state)
    return PivotCursor(state, ease), Continue(state)


class PivotSegment:
    """
    In-place turn by ``final_theta`` radians over ``duration``.

    Heading follows a cycloidal ease, so omega starts and ends near zero.
    Position, speed and acceleration are held at their initial values. The
    terminal heading is exactly ``theta_origin + final_theta``.

    Calling ``step()`` after it returned Done raises SegmentExhaustedError.
    """

    def __init__(
        self,
        state: State,
        final_theta: float,
        duration: float,
        dt: float = DT_S,
    ) -> None:
        self.config = PivotConfig.build(state, final_theta, duration, dt)
        self._cursor = PivotCursor(state=state, ease=self.config.ease.initial_cursor())
        logger.debug(
            "PivotSegment: theta0=%.6g delta=%.6g duration=%.6g steps=%d",
            state.theta,
            final_theta,
            duration,
            self.config.step_count,
        )
        if self.config.step_count == 0:
            logger.debug("PivotSegment: shorter than one step, emits terminal only")

    @property
    def cursor(self) -> PivotCursor:
        return self._cursor

    @property
    def state(self) -> State:
        return self._cursor.state

    @property
    def done(self) -> bool:
        return self._cursor.finished

    @property
    def target_theta(self) -> float:
        return self.config.ease.end

    def step(self) -> StepResult:
        self._cursor, result = pivot_transition(self._cursor, self.config)
        if cfg.TRACE_ENABLED:
            logger.trace("PivotSegment: %s", result)  # type: ignore[attr-defined]
        return result

    def __iter__(self) -> Iterator[StepResult]:
        while not self.done:
            yield self.step()


# =============================================================================
# Helpers
# =============================================================================


def iter_states(segment: Segment) -> Iterator[State]:
    """Step a segment to completion, yielding every sample including the last."""
    while not segment.done:
        yield segment.step().state


def run_segment(segment: Segment) -> list[State]:
    """Step a segment to completion and return all samples."""
    return list(iter_states(segment))


def states_to_array(states: Iterable[State]) -> NDArray[np.float32]:
    """(N, 6) float32 array in wire order (x, y, v, a, theta, omega)."""
    rows = [s.as_tuple() for s in states]
    if not rows:
        return np.empty((0, 6), dtype=np.float32)
    return np.asarray(rows, dtype=np.float32)
