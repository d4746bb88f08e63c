"""Multi-channel push resampler working on 10 ms interleaved blocks."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, DTypeLike

from .audio_util import deinterleave, interleave
from .push_sinc_resampler import PushSincResampler

_SUPPORTED_DTYPES = (np.dtype(np.int16), np.dtype(np.float32))


class PushResampler:
    """Resample interleaved audio of any channel count, 10 ms at a time.

    ``dtype`` is the sample type, either int16 or float32. Float samples
    are resampled as they are; int16 samples are rounded and saturated.
    """

    def __init__(self, dtype: DTypeLike) -> None:
        resolved = np.dtype(dtype)
        if resolved not in _SUPPORTED_DTYPES:
            raise ValueError(f"dtype must be int16 or float32, got {resolved}")
        self._dtype = resolved
        self._src_sample_rate_hz = 0
        self._dst_sample_rate_hz = 0
        self._num_channels = 0
        self._channel_resamplers: list[PushSincResampler] = []

    @property
    def dtype(self) -> np.dtype:
        """The sample type this resampler works on."""
        return self._dtype

    @property
    def num_channels(self) -> int:
        """The configured channel count, 0 before initialisation."""
        return self._num_channels

    def initialize_if_needed(
        self, src_sample_rate_hz: int, dst_sample_rate_hz: int, num_channels: int
    ) -> None:
        """Configure the rates and channel count; a no-op if nothing changed."""
        if (
            src_sample_rate_hz == self._src_sample_rate_hz
            and dst_sample_rate_hz == self._dst_sample_rate_hz
            and num_channels == self._num_channels
        ):
            return
        if src_sample_rate_hz <= 0 or dst_sample_rate_hz <= 0 or num_channels <= 0:
            raise ValueError(
                "sample rates and channel count must be positive, got "
                f"{src_sample_rate_hz}, {dst_sample_rate_hz}, {num_channels}"
            )
        src_size_10ms_mono = src_sample_rate_hz // 100
        dst_size_10ms_mono = dst_sample_rate_hz // 100
        resamplers = [
            PushSincResampler(src_size_10ms_mono, dst_size_10ms_mono)
            for _ in range(num_channels)
        ]
        self._src_sample_rate_hz = src_sample_rate_hz
        self._dst_sample_rate_hz = dst_sample_rate_hz
        self._num_channels = num_channels
        self._channel_resamplers = resamplers

    def resample(self, src: ArrayLike) -> np.ndarray:
        """Resample one interleaved 10 ms block and return the interleaved output."""
        if not self._num_channels:
            raise RuntimeError("initialize_if_needed() must be called first")
        data = np.asarray(src, dtype=self._dtype).reshape(-1)
        if self._src_sample_rate_hz == self._dst_sample_rate_hz:
            return data.copy()

        expected = self._src_sample_rate_hz // 100 * self._num_channels
        if data.size != expected:
            raise ValueError(f"expected {expected} interleaved samples, got {data.size}")

        channels = deinterleave(data, self._num_channels)
        if self._dtype == np.dtype(np.int16):
            outputs = [
                resampler.resample_s16(channel)
                for resampler, channel in zip(self._channel_resamplers, channels)
            ]
        else:
            outputs = [
                resampler.resample(channel)
                for resampler, channel in zip(self._channel_resamplers, channels)
            ]
        return interleave(outputs).astype(self._dtype)