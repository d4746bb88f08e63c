"""Windowed-sinc kernel bank and the convolution used by the sinc resampler."""

from __future__ import annotations

import math

import numpy as np

KERNEL_SIZE = 32
"""Taps per kernel; a multiple of 32."""

KERNEL_OFFSET_COUNT = 32
"""Number of sub-sample kernel shifts used for interpolation."""

KERNEL_STORAGE_SIZE = KERNEL_SIZE * (KERNEL_OFFSET_COUNT + 1)

# Blackman window parameters.
_ALPHA = 0.16
_A0 = 0.5 * (1.0 - _ALPHA)
_A1 = 0.5
_A2 = 0.5 * _ALPHA

_EPSILON = float(np.finfo(np.float64).eps)


def sinc_scale_factor(io_ratio: float) -> float:
    """Return the normalised low-pass cutoff for an input/output rate ratio.

    The cutoff is lowered slightly below the ideal brick-wall value so that
    the windowed filter does not alias at the very top of the band.
    """
    factor = 1.0 / io_ratio if io_ratio > 1.0 else 1.0
    return factor * 0.9


def convolve(input_block, k1, k2, kernel_interpolation_factor: float) -> float:
    """Convolve ``input_block`` with two kernels and blend the two sums.

    Only the first ``KERNEL_SIZE`` samples of ``input_block`` are used. The
    result is ``(1 - f) * sum(input * k1) + f * sum(input * k2)``.
    """
    data = np.asarray(input_block, dtype=np.float32)
    first = np.asarray(k1, dtype=np.float32)
    second = np.asarray(k2, dtype=np.float32)
    if data.ndim != 1 or data.size < KERNEL_SIZE:
        raise ValueError(
            f"input block needs at least {KERNEL_SIZE} samples, got {data.size}"
        )
    if first.shape != (KERNEL_SIZE,) or second.shape != (KERNEL_SIZE,):
        raise ValueError(f"kernels must hold exactly {KERNEL_SIZE} taps")
    window = data[:KERNEL_SIZE]
    sum1 = float(np.dot(window, first))
    sum2 = float(np.dot(window, second))
    factor = float(kernel_interpolation_factor)
    return float(np.float32((1.0 - factor) * sum1 + factor * sum2))


class KernelBank:
    """A set of windowed sinc kernels at sub-sample offsets from 0.0 to 1.0.

    Row ``n`` holds the kernel shifted by ``n / KERNEL_OFFSET_COUNT`` of a
    sample; there are ``KERNEL_OFFSET_COUNT + 1`` rows of ``KERNEL_SIZE`` taps.
    """

    def __init__(self, io_sample_rate_ratio: float) -> None:
        self._io_sample_rate_ratio = float(io_sample_rate_ratio)
        shape = (KERNEL_OFFSET_COUNT + 1, KERNEL_SIZE)
        self._pre_sinc = np.zeros(shape, dtype=np.float32)
        self._window = np.zeros(shape, dtype=np.float32)
        self._kernels = np.zeros(shape, dtype=np.float32)
        self._build_window_and_pre_sinc()
        self._build_kernels()

    @property
    def io_sample_rate_ratio(self) -> float:
        """The input/output sample rate ratio the kernels were built for."""
        return self._io_sample_rate_ratio

    @property
    def kernels(self) -> np.ndarray:
        """A read-only view of every kernel, one per row."""
        view = self._kernels.view()
        view.flags.writeable = False
        return view

    def _build_window_and_pre_sinc(self) -> None:
        half = np.float32(KERNEL_SIZE // 2)
        size = np.float32(KERNEL_SIZE)
        taps = np.arange(KERNEL_SIZE, dtype=np.float32)
        for offset_idx in range(KERNEL_OFFSET_COUNT + 1):
            subsample_offset = np.float32(offset_idx) / np.float32(KERNEL_OFFSET_COUNT)
            shifted = (taps - half - subsample_offset).astype(np.float32)
            self._pre_sinc[offset_idx] = (math.pi * shifted.astype(np.float64)).astype(
                np.float32
            )
            x = ((taps - subsample_offset) / size).astype(np.float32).astype(np.float64)
            window = _A0 - _A1 * np.cos(2.0 * math.pi * x) + _A2 * np.cos(4.0 * math.pi * x)
            self._window[offset_idx] = window.astype(np.float32)

    def _build_kernels(self) -> None:
        scale = sinc_scale_factor(self._io_sample_rate_ratio)
        pre_sinc = self._pre_sinc.astype(np.float64)
        window = self._window.astype(np.float64)
        zero = pre_sinc == 0
        safe = np.where(zero, 1.0, pre_sinc)
        sinc = np.where(zero, scale, np.sin(scale * pre_sinc) / safe)
        self._kernels[...] = (window * sinc).astype(np.float32)

    def set_ratio(self, io_sample_rate_ratio: float) -> None:
        """Rebuild the kernels for a new ratio; a no-op if it is unchanged."""
        ratio = float(io_sample_rate_ratio)
        if abs(self._io_sample_rate_ratio - ratio) < _EPSILON:
            return
        self._io_sample_rate_ratio = ratio
        self._build_kernels()

    def kernel(self, offset_idx: int) -> np.ndarray:
        """Return the kernel for sub-sample offset ``offset_idx / KERNEL_OFFSET_COUNT``."""
        if not 0 <= offset_idx <= KERNEL_OFFSET_COUNT:
            raise IndexError(
                f"offset index must be in 0..{KERNEL_OFFSET_COUNT}, got {offset_idx}"
            )
        return self.kernels[offset_idx]