"""
Bounded scalar ramp generators.

Two independent generators share one capability (``RampProfile``): each
emits a finite sequence of floats from ``start`` to ``end`` over
``floor(duration / dt) + 1`` samples, the first exactly ``start`` and the
last exactly ``end``.

- LinearProfile: constant increment per step.
- EaseProfile: cycloid ``(t - sin t)`` over ``t in [0, 2pi]``, so the rate is
  zero at both ends.

Each generator is a frozen config plus a frozen cursor advanced by a pure
transition function; the classes only hold the current cursor.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray

from planar_traj.config import DT_S
from planar_traj.utils.errors import InvalidDurationError

logger = logging.getLogger(__name__)

TWO_PI: float = 2.0 * math.pi


def compute_step_count(duration: float, dt: float) -> int:
    """
    Number of whole ``dt`` steps in ``duration``.

    Raises:
        InvalidDurationError: If duration or dt is not a positive finite number
    """
    if not (math.isfinite(dt) and dt > 0.0):
        raise InvalidDurationError(f"dt must be positive and finite, got {dt!r}")
    if not (math.isfinite(duration) and duration > 0.0):
        raise InvalidDurationError(
            f"duration must be positive and finite, got {duration!r}"
        )
    return int(np.floor(duration / dt))


@runtime_checkable
class RampProfile(Protocol):
    """Finite scalar ramp: iterate for values, ``advance()`` for value-or-None."""

    @property
    def step_count(self) -> int: ...

    @property
    def remaining(self) -> int: ...

    @property
    def exhausted(self) -> bool: ...

    def advance(self) -> float | None: ...

    def __iter__(self) -> RampProfile: ...

    def __next__(self) -> float: ...


# =============================================================================
# Linear ramp
# =============================================================================


@dataclass(frozen=True, slots=True)
class LinearConfig:
    """Immutable parameters of a linear ramp."""

    start: float
    end: float
    step_count: int
    increment: float

    @classmethod
    def build(
        cls, start: float, end: float, duration: float, dt: float
    ) -> LinearConfig:
        step_count = compute_step_count(duration, dt)
        # A zero-step ramp emits only ``end``; the increment is never applied.
        increment = (end - start) / step_count if step_count > 0 else 0.0
        return cls(start=start, end=end, step_count=step_count, increment=increment)

    def initial_cursor(self) -> LinearCursor:
        return LinearCursor(index=0, value=self.start)


@dataclass(frozen=True, slots=True)
class LinearCursor:
    """Position within a linear ramp."""

    index: int
    value: float


def linear_transition(
    cursor: LinearCursor, config: LinearConfig
) -> tuple[LinearCursor, float | None]:
    """
    Advance a linear ramp by one sample.

    Returns:
        (next_cursor, value): value is None once the ramp is exhausted
    """
    if cursor.index > config.step_count:
        return cursor, None
    if cursor.index == config.step_count:
        return LinearCursor(index=cursor.index + 1, value=cursor.value), config.end
    return (
        LinearCursor(index=cursor.index + 1, value=cursor.value + config.increment),
        cursor.value,
    )


class LinearProfile:
    """
    Scalar ramp from ``start`` to ``end`` with a constant per-step increment.

    The final sample is ``end`` itself, not the accumulated value.
    """

    def __init__(
        self, start: float, end: float, duration: float, dt: float = DT_S
    ) -> None:
        self.config = LinearConfig.build(start, end, duration, dt)
        self._cursor = self.config.initial_cursor()
        logger.debug(
            "LinearProfile: start=%.6g end=%.6g steps=%d increment=%.6g",
            start,
            end,
            self.config.step_count,
            self.config.increment,
        )

    @property
    def cursor(self) -> LinearCursor:
        return self._cursor

    @property
    def step_count(self) -> int:
        return self.config.step_count

    @property
    def remaining(self) -> int:
        """Samples left to emit."""
        return max(0, self.config.step_count + 1 - self._cursor.index)

    @property
    def exhausted(self) -> bool:
        return self._cursor.index > self.config.step_count

    def advance(self) -> float | None:
        self._cursor, value = linear_transition(self._cursor, self.config)
        return value

    def __iter__(self) -> LinearProfile:
        return self

    def __next__(self) -> float:
        value = self.advance()
        if value is None:
            raise StopIteration
        return value


# =============================================================================
# Cycloidal ease ramp
# =============================================================================


@dataclass(frozen=True, slots=True)
class EaseConfig:
    """Immutable parameters of a cycloidal ease ramp."""

    start: float
    end: float
    step_count: int
    amplitude: float  # (end - start) / 2pi
    angular_dt: float  # dt rescaled so t sweeps 0 -> 2pi over the duration

    @classmethod
    def build(
        cls, start: float, end: float, duration: float, dt: float
    ) -> EaseConfig:
        step_count = compute_step_count(duration, dt)
        return cls(
            start=start,
            end=end,
            step_count=step_count,
            amplitude=(end - start) / TWO_PI,
            angular_dt=dt * TWO_PI / duration,
        )

    def initial_cursor(self) -> EaseCursor:
        return EaseCursor(index=0, t=0.0)


@dataclass(frozen=True, slots=True)
class EaseCursor:
    """Position within an ease ramp; ``t`` is the angular accumulator."""

    index: int
    t: float


def ease_transition(
    cursor: EaseCursor, config: EaseConfig
) -> tuple[EaseCursor, float | None]:
    """
    Advance an ease ramp by one sample.

    Returns:
        (next_cursor, value): value is None once the ramp is exhausted
    """
    if cursor.index > config.step_count:
        return cursor, None
    if cursor.index == config.step_count:
        return EaseCursor(index=cursor.index + 1, t=cursor.t), config.end
    t = cursor.t
    value = (t - math.sin(t)) * config.amplitude + config.start
    return EaseCursor(index=cursor.index + 1, t=t + config.angular_dt), value


class EaseProfile:
    """
    Scalar ramp from ``start`` to ``end`` following a cycloid.

    The discrete rate is near zero at both ends, so a quantity driven by it
    starts and stops without a jump in its derivative.
    """

    def __init__(
        self, start: float, end: float, duration: float, dt: float = DT_S
    ) -> None:
        self.config = EaseConfig.build(start, end, duration, dt)
        self._cursor = self.config.initial_cursor()
        logger.debug(
            "EaseProfile: start=%.6g end=%.6g steps=%d angular_dt=%.6g",
            start,
            end,
            self.config.step_count,
            self.config.angular_dt,
        )

    @property
    def cursor(self) -> EaseCursor:
        return self._cursor

    @property
    def step_count(self) -> int:
        return self.config.step_count

    @property
    def remaining(self) -> int:
        """Samples left to emit."""
        return max(0, self.config.step_count + 1 - self._cursor.index)

    @property
    def exhausted(self) -> bool:
        return self._cursor.index > self.config.step_count

    def advance(self) -> float | None:
        self._cursor, value = ease_transition(self._cursor, self.config)
        return value

    def __iter__(self) -> EaseProfile:
        return self

    def __next__(self) -> float:
        value = self.advance()
        if value is None:
            raise StopIteration
        return value


def profile_values(profile: RampProfile) -> NDArray[np.float64]:
    """Drain a profile into an array of its remaining samples."""
    return np.fromiter(profile, dtype=np.float64, count=profile.remaining)
