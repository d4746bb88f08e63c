"""Sample format conversions and channel layout helpers.

Naming convention:
    S16:      int16 in [-32768, 32767]
    Float:    float in [-1.0, 1.0]
    FloatS16: float in [-32768.0, 32767.0]
    Dbfs:     float in [-90.3, 0]
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

INT16_MAX = 32767
INT16_MIN = -32768

_F32 = np.float32
_MAX_INT16_INVERSE = _F32(1.0) / _F32(INT16_MAX)
_MIN_INT16_INVERSE = _F32(1.0) / _F32(INT16_MIN)
_MAX_ROUND = _F32(INT16_MAX - 0.5)
_MIN_ROUND = _F32(INT16_MIN + 0.5)
_MIN_DBFS = -90.30899869919436
_MAXIMUM_ABS_FLOAT_S16 = float(-INT16_MIN)


def _as_f32(values) -> np.ndarray:
    return np.asarray(values, dtype=np.float32)


def floats_to_s16(values) -> np.ndarray:
    """Convert floats in [-1, 1] to int16, saturating outside that range."""
    v = _as_f32(values)
    with np.errstate(invalid="ignore", over="ignore"):
        pos = np.trunc(v * _F32(INT16_MAX) + _F32(0.5))
        neg = np.trunc(-v * _F32(INT16_MIN) - _F32(0.5))
        result = np.where(
            v > 0,
            np.where(v >= 1, INT16_MAX, pos),
            np.where(v <= -1, INT16_MIN, neg),
        )
        return np.nan_to_num(result).astype(np.int16)


def s16s_to_float(values) -> np.ndarray:
    """Convert int16 samples to floats in [-1, 1]."""
    v = np.asarray(values, dtype=np.int16).astype(np.float32)
    return v * np.where(v > 0, _MAX_INT16_INVERSE, -_MIN_INT16_INVERSE).astype(
        np.float32
    )


def float_s16s_to_s16(values) -> np.ndarray:
    """Round FloatS16 samples to int16, saturating at the int16 limits."""
    v = _as_f32(values)
    with np.errstate(invalid="ignore", over="ignore"):
        pos = np.trunc(v + _F32(0.5))
        neg = np.trunc(v - _F32(0.5))
        result = np.where(
            v > 0,
            np.where(v >= _MAX_ROUND, INT16_MAX, pos),
            np.where(v <= _MIN_ROUND, INT16_MIN, neg),
        )
        return np.nan_to_num(result).astype(np.int16)


def floats_to_float_s16(values) -> np.ndarray:
    """Scale floats in [-1, 1] to the FloatS16 range."""
    v = _as_f32(values)
    scale = np.where(v > 0, _F32(INT16_MAX), _F32(-INT16_MIN)).astype(np.float32)
    return v * scale


def float_s16s_to_float(values) -> np.ndarray:
    """Scale FloatS16 samples to floats in [-1, 1]."""
    v = _as_f32(values)
    scale = np.where(v > 0, _MAX_INT16_INVERSE, -_MIN_INT16_INVERSE).astype(
        np.float32
    )
    return v * scale


def float_to_s16(value: float) -> int:
    """Convert one float in [-1, 1] to an int16 value."""
    return int(floats_to_s16([value])[0])


def s16_to_float(value: int) -> float:
    """Convert one int16 value to a float in [-1, 1]."""
    return float(s16s_to_float([value])[0])


def float_s16_to_s16(value: float) -> int:
    """Round one FloatS16 sample to an int16 value."""
    return int(float_s16s_to_s16([value])[0])


def float_to_float_s16(value: float) -> float:
    """Scale one float in [-1, 1] to the FloatS16 range."""
    return float(floats_to_float_s16([value])[0])


def float_s16_to_float(value: float) -> float:
    """Scale one FloatS16 sample to a float in [-1, 1]."""
    return float(float_s16s_to_float([value])[0])


def db_to_ratio(value: float) -> float:
    """Convert decibels to an amplitude ratio."""
    return 10.0 ** (value / 20.0)


def dbfs_to_float_s16(value: float) -> float:
    """Convert dBFS to a FloatS16 amplitude."""
    return db_to_ratio(value) * _MAXIMUM_ABS_FLOAT_S16


def float_s16_to_dbfs(value: float) -> float:
    """Convert a non-negative FloatS16 amplitude to dBFS, floored at -90.3."""
    if value <= 1.0:
        return _MIN_DBFS
    return 20.0 * math.log10(value) + _MIN_DBFS


def _check_channels(num_channels: int) -> None:
    if num_channels <= 0:
        raise ValueError(f"num_channels must be positive, got {num_channels}")


def deinterleave(interleaved, num_channels: int) -> np.ndarray:
    """Split interleaved samples into an array of shape (channels, frames)."""
    _check_channels(num_channels)
    data = np.asarray(interleaved)
    if data.ndim != 1 or data.size % num_channels:
        raise ValueError(
            f"interleaved length {data.size} is not a multiple of {num_channels}"
        )
    return data.reshape(-1, num_channels).T.copy()


def interleave(channels: Sequence) -> np.ndarray:
    """Interleave equally long channel buffers into one flat array."""
    data = np.asarray(channels)
    if data.ndim != 2 or data.shape[0] == 0:
        raise ValueError("channels must be a non-empty sequence of equal-length buffers")
    return data.T.reshape(-1).copy()


def upmix_mono_to_interleaved(mono, num_channels: int) -> np.ndarray:
    """Copy each mono sample into every channel of an interleaved buffer."""
    _check_channels(num_channels)
    return np.repeat(np.asarray(mono), num_channels)


def downmix_to_mono(channels: Sequence) -> np.ndarray:
    """Average channel buffers into one; integer samples truncate toward zero."""
    data = np.asarray(channels)
    if data.ndim != 2 or data.shape[0] == 0 or data.shape[1] == 0:
        raise ValueError("channels must be a non-empty sequence of non-empty buffers")
    num_channels = data.shape[0]
    if np.issubdtype(data.dtype, np.integer):
        total = data.astype(np.int64).sum(axis=0)
        quotient = np.abs(total) // num_channels * np.sign(total)
        return quotient.astype(data.dtype)
    total = data.sum(axis=0, dtype=data.dtype)
    return (total / num_channels).astype(data.dtype)


def downmix_interleaved_to_mono(interleaved, num_channels: int) -> np.ndarray:
    """Average the channels of an interleaved buffer into one mono buffer."""
    return downmix_to_mono(deinterleave(interleaved, num_channels))