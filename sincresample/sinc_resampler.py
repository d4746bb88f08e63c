"""A high-quality, single-channel, pull-based sample-rate converter.

The input buffer is split into regions, all given as indices into it:

* ``r1`` and ``r2`` are the two halves of the kernel centred on the start
  of the block being processed;
* ``r0`` is where each new request of ``request_frames`` samples is read to;
* ``r3`` and ``r4`` are the two halves of the kernel right-aligned with the
  end of ``r0``. Once a block has been consumed they are copied back to
  ``r1`` and ``r2``.

On the second load ``r0`` slides right by half a kernel so that the wrapped
samples are not overwritten. From then on the regions stay fixed until
:meth:`SincResampler.flush` is called, so every request to the callback is
for the same number of frames.
"""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np
from numpy.typing import ArrayLike

from .kernel import KERNEL_OFFSET_COUNT, KERNEL_SIZE, KernelBank, convolve

ReadCallback = Callable[[int], ArrayLike]

DEFAULT_REQUEST_SIZE = 512
"""A request size to use when the caller has no constraint of its own."""

_HALF_KERNEL = KERNEL_SIZE // 2


class SincResampler:
    """Convert the sample rate of a stream pulled from a callback.

    ``io_sample_rate_ratio`` is the input rate divided by the output rate.
    ``read_cb`` is called with a frame count and returns at most that many
    samples; a shorter answer is padded with zeros. ``request_frames`` is
    the number of frames asked for on every call and must exceed
    ``KERNEL_SIZE``.
    """

    def __init__(
        self,
        io_sample_rate_ratio: float,
        request_frames: int,
        read_cb: ReadCallback,
    ) -> None:
        if not io_sample_rate_ratio > 0:
            raise ValueError(
                f"io_sample_rate_ratio must be positive, got {io_sample_rate_ratio}"
            )
        if request_frames <= KERNEL_SIZE:
            raise ValueError(
                f"request_frames must be greater than {KERNEL_SIZE}, got {request_frames}"
            )
        self._kernels = KernelBank(io_sample_rate_ratio)
        self._read_cb = read_cb
        self._request_frames = int(request_frames)
        self._input_buffer = np.zeros(
            self._request_frames + KERNEL_SIZE, dtype=np.float32
        )
        self._r1 = 0
        self._r2 = _HALF_KERNEL
        self._r0 = 0
        self._r3 = 0
        self._r4 = 0
        self._block_size = 0
        self._virtual_source_idx = 0.0
        self._buffer_primed = False
        self.flush()

    @property
    def request_frames(self) -> int:
        """The number of frames requested from the callback on each call."""
        return self._request_frames

    @property
    def io_sample_rate_ratio(self) -> float:
        """The current ratio of input to output sample rate."""
        return self._kernels.io_sample_rate_ratio

    @property
    def kernels(self) -> np.ndarray:
        """A read-only view of the kernel bank, one kernel per row."""
        return self._kernels.kernels

    def _update_regions(self, second_load: bool) -> None:
        self._r0 = KERNEL_SIZE if second_load else _HALF_KERNEL
        self._r3 = self._r0 + self._request_frames - KERNEL_SIZE
        self._r4 = self._r0 + self._request_frames - _HALF_KERNEL
        self._block_size = self._r4 - self._r2

    def _read_into_r0(self) -> None:
        data = np.asarray(self._read_cb(self._request_frames), dtype=np.float32)
        data = data.reshape(-1)
        count = data.size
        if count > self._request_frames:
            raise ValueError(
                f"callback returned {count} frames, "
                f"at most {self._request_frames} were requested"
            )
        start = self._r0
        self._input_buffer[start : start + count] = data
        self._input_buffer[start + count : start + self._request_frames] = 0.0

    def resample(self, frames: int) -> np.ndarray:
        """Produce ``frames`` output samples, pulling input as needed."""
        if frames < 0:
            raise ValueError(f"frames must be non-negative, got {frames}")
        output = np.empty(frames, dtype=np.float32)
        remaining = frames
        if not self._buffer_primed and remaining:
            self._read_into_r0()
            self._buffer_primed = True

        io_ratio = self.io_sample_rate_ratio
        kernels = self._kernels.kernels
        buffer = self._input_buffer
        written = 0
        while remaining:
            steps = math.ceil((self._block_size - self._virtual_source_idx) / io_ratio)
            for _ in range(max(steps, 0)):
                source_idx = int(self._virtual_source_idx)
                subsample_remainder = self._virtual_source_idx - source_idx
                virtual_offset_idx = subsample_remainder * KERNEL_OFFSET_COUNT
                offset_idx = int(virtual_offset_idx)
                start = self._r1 + source_idx
                output[written] = convolve(
                    buffer[start : start + KERNEL_SIZE],
                    kernels[offset_idx],
                    kernels[offset_idx + 1],
                    virtual_offset_idx - offset_idx,
                )
                written += 1
                self._virtual_source_idx += io_ratio
                remaining -= 1
                if not remaining:
                    return output

            self._virtual_source_idx -= self._block_size
            buffer[self._r1 : self._r1 + KERNEL_SIZE] = buffer[
                self._r3 : self._r3 + KERNEL_SIZE
            ].copy()
            if self._r0 == self._r2:
                self._update_regions(True)
            self._read_into_r0()
        return output

    def chunk_size(self) -> int:
        """The largest output size that needs at most one callback call."""
        return int(self._block_size / self.io_sample_rate_ratio)

    def flush(self) -> None:
        """Drop all buffered input and reset the read position."""
        self._virtual_source_idx = 0.0
        self._buffer_primed = False
        self._input_buffer[:] = 0.0
        self._update_regions(False)

    def set_ratio(self, io_sample_rate_ratio: float) -> None:
        """Change the rate ratio and rebuild the kernels if it differs."""
        if not io_sample_rate_ratio > 0:
            raise ValueError(
                f"io_sample_rate_ratio must be positive, got {io_sample_rate_ratio}"
            )
        self._kernels.set_ratio(io_sample_rate_ratio)