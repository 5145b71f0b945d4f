"""
Wire codec for exchanging State records with other processes.

Formats:
- STATE (msgpack): map {x, y, v, a, theta, omega}, each value a float32
- STATE (json):    object with the same keys, values quantised to float32
- RESULT (msgpack): {"type": "continue" | "done", "state": STATE}

Decoding is typed and validated; malformed payloads raise
``msgspec.ValidationError`` or ``msgspec.DecodeError``.
"""

import logging

import msgspec
import numpy as np
import ormsgpack

from planar_traj.config import STATE_FIELDS
from planar_traj.protocol.types import Continue, Done, State, StepResult

logger = logging.getLogger(__name__)


# Module-level encoders/decoders (thread-safe, reusable)
_state_decoder = msgspec.msgpack.Decoder(State)
_result_decoder = msgspec.msgpack.Decoder(StepResult)

_json_encoder = msgspec.json.Encoder()
_json_state_decoder = msgspec.json.Decoder(State)


# =============================================================================
# State
# =============================================================================


def state_to_array(state: State) -> np.ndarray:
    """State as a float32 vector in wire order."""
    return np.array(state.as_tuple(), dtype=np.float32)


def quantize_state(state: State) -> State:
    """Round every field to the nearest IEEE-754 single precision value."""
    return State(*(float(v) for v in state_to_array(state)))


def _state_map(state: State) -> dict[str, np.float32]:
    return dict(zip(STATE_FIELDS, state_to_array(state)))


def pack_state(state: State) -> bytes:
    """Pack a State as a msgpack map of float32 values.

    Uses ormsgpack with OPT_SERIALIZE_NUMPY so the numpy float32 scalars go
    out as 4-byte floats instead of being widened to doubles.
    """
    return ormsgpack.packb(
        _state_map(state),
        option=ormsgpack.OPT_SERIALIZE_NUMPY,
    )


def unpack_state(data: bytes) -> State:
    """Decode a msgpack map into a State."""
    return _state_decoder.decode(data)


def state_to_json(state: State) -> bytes:
    """Encode a State as a JSON object with float32-quantised values."""
    return _json_encoder.encode(quantize_state(state))


def state_from_json(data: bytes | str) -> State:
    """Decode a JSON object into a State."""
    return _json_state_decoder.decode(data)


# =============================================================================
# Step results
# =============================================================================


def encode_result(result: StepResult) -> bytes:
    """Encode a Continue/Done result as a tagged msgpack map.

    The nested state is packed like ``pack_state``, as float32 values.
    """
    if not isinstance(result, (Continue, Done)):
        raise TypeError(f"Expected Continue or Done, got {type(result).__name__}")
    tag = type(result).__struct_config__.tag
    return ormsgpack.packb(
        {"type": tag, "state": _state_map(result.state)},
        option=ormsgpack.OPT_SERIALIZE_NUMPY,
    )


def decode_result(data: bytes) -> StepResult:
    """Decode a tagged msgpack map into Continue or Done."""
    return _result_decoder.decode(data)


__all__ = [
    "state_to_array",
    "quantize_state",
    "pack_state",
    "unpack_state",
    "state_to_json",
    "state_from_json",
    "encode_result",
    "decode_result",
]
