"""
Central configuration for planar_traj tunables and shared constants.
"""

from __future__ import annotations

import logging
import math
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


TRACE_ENABLED: bool = _env_bool("PLANAR_TRAJ_TRACE")

logger = logging.getLogger(__name__)

# Fixed integration step (seconds). Every segment of one path must share it.
DT_S: float = float(os.getenv("PLANAR_TRAJ_DT", "0.001"))

if not (math.isfinite(DT_S) and DT_S > 0.0):
    raise ValueError(f"PLANAR_TRAJ_DT must be positive and finite, got {DT_S!r}")

# Setpoint rate implied by DT_S (Hz)
CONTROL_RATE_HZ: float = 1.0 / DT_S

LOG_LEVEL_DEFAULT: str = "INFO"

# Wire order of the State record
STATE_FIELDS: tuple[str, ...] = ("x", "y", "v", "a", "theta", "omega")
