"""A push-based wrapper around the pull-based sinc resampler."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from .audio_util import float_s16s_to_s16
from .kernel import KERNEL_SIZE
from .sinc_resampler import SincResampler


class PushSincResampler:
    """Resample fixed-size blocks that are pushed in by the caller.

    ``source_frames`` and ``destination_frames`` are the block sizes on the
    input and output side. They must describe the same length of time
    (typically 10 ms), since the rate ratio is taken from them. Every call
    to :meth:`resample` takes exactly ``source_frames`` samples and returns
    exactly ``destination_frames`` samples.
    """

    def __init__(self, source_frames: int, destination_frames: int) -> None:
        if source_frames <= 0:
            raise ValueError(f"source_frames must be positive, got {source_frames}")
        if destination_frames <= 0:
            raise ValueError(
                f"destination_frames must be positive, got {destination_frames}"
            )
        self._source_frames = int(source_frames)
        self._destination_frames = int(destination_frames)
        self._source: np.ndarray | None = None
        self._first_pass = True
        self._resampler = SincResampler(
            self._source_frames / self._destination_frames,
            self._source_frames,
            self._run,
        )

    @property
    def source_frames(self) -> int:
        """The number of input samples each call to :meth:`resample` takes."""
        return self._source_frames

    @property
    def destination_frames(self) -> int:
        """The number of output samples each call to :meth:`resample` returns."""
        return self._destination_frames

    @staticmethod
    def algorithmic_delay_seconds(source_rate_hz: int) -> float:
        """The delay, in seconds, before an input sample shows in the output."""
        if source_rate_hz <= 0:
            raise ValueError(f"source_rate_hz must be positive, got {source_rate_hz}")
        delay = np.float32(1.0) / np.float32(source_rate_hz)
        return float(delay * np.float32(KERNEL_SIZE) / np.float32(2))

    def _run(self, frames: int) -> np.ndarray:
        if self._first_pass:
            # Dummy input primes the buffer; its output is thrown away.
            self._first_pass = False
            return np.zeros(frames, dtype=np.float32)
        source = self._source
        if source is None:
            raise RuntimeError("input was requested more than once per block")
        if frames != source.size:
            raise RuntimeError(
                f"{frames} frames were requested but {source.size} are available"
            )
        self._source = None
        return source

    def resample(self, source: ArrayLike) -> np.ndarray:
        """Resample one block of float samples and return the float32 output."""
        data = np.asarray(source, dtype=np.float32).reshape(-1)
        if data.size != self._source_frames:
            raise ValueError(
                f"expected {self._source_frames} source frames, got {data.size}"
            )
        self._source = data
        try:
            # On the first pass the resampler is run twice: once on dummy
            # input to prime it with half a kernel of delay, so that every
            # later block needs exactly one request for input.
            if self._first_pass:
                self._resampler.resample(self._resampler.chunk_size())
            return self._resampler.resample(self._destination_frames)
        finally:
            self._source = None

    def resample_s16(self, source: ArrayLike) -> np.ndarray:
        """Resample one block of int16 samples and return int16 output."""
        data = np.asarray(source, dtype=np.int16).reshape(-1)
        output = self.resample(data.astype(np.float32))
        return float_s16s_to_s16(output)