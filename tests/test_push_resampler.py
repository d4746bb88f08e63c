import numpy as np
import pytest

from sincresample.audio_util import deinterleave
from sincresample.push_resampler import PushResampler
from sincresample.push_sinc_resampler import PushSincResampler


def test_unsupported_dtype_raises():
    with pytest.raises(ValueError):
        PushResampler(np.float64)


@pytest.mark.parametrize(
    "src,dst,channels", [(0, 16000, 1), (16000, -1, 1), (16000, 48000, 0)]
)
def test_invalid_parameters_raise(src, dst, channels):
    resampler = PushResampler(np.int16)
    with pytest.raises(ValueError):
        resampler.initialize_if_needed(src, dst, channels)


def test_resample_before_initialisation_raises():
    resampler = PushResampler(np.float32)
    with pytest.raises(RuntimeError):
        resampler.resample(np.zeros(160, dtype=np.float32))


def test_equal_rates_copy_input():
    resampler = PushResampler(np.int16)
    resampler.initialize_if_needed(16000, 16000, 2)
    src = np.arange(-160, 160, dtype=np.int16)
    out = resampler.resample(src)
    assert np.array_equal(out, src)
    assert out.dtype == np.int16


@pytest.mark.parametrize("dtype", [np.int16, np.float32])
def test_output_length_and_dtype(dtype):
    resampler = PushResampler(dtype)
    resampler.initialize_if_needed(48000, 16000, 2)
    out = resampler.resample(np.zeros(960, dtype=dtype))
    assert out.size == 320
    assert out.dtype == np.dtype(dtype)


def test_wrong_block_length_raises():
    resampler = PushResampler(np.float32)
    resampler.initialize_if_needed(32000, 16000, 2)
    with pytest.raises(ValueError):
        resampler.resample(np.zeros(638, dtype=np.float32))


def test_channels_are_resampled_independently():
    resampler = PushResampler(np.float32)
    resampler.initialize_if_needed(16000, 48000, 2)
    block = np.zeros(320, dtype=np.float32)
    block[0::2] = 1000.0
    for _ in range(4):
        out = resampler.resample(block)
    left, right = deinterleave(out, 2)
    assert np.all(right == 0.0)
    assert np.allclose(left, 1000.0, rtol=0.05)


def test_mono_int16_matches_push_sinc_resampler():
    rng = np.random.default_rng(3)
    blocks = [rng.integers(-10000, 10000, 480).astype(np.int16) for _ in range(3)]
    resampler = PushResampler(np.int16)
    resampler.initialize_if_needed(48000, 32000, 1)
    reference = PushSincResampler(480, 320)
    for block in blocks:
        assert np.array_equal(resampler.resample(block), reference.resample_s16(block))


def test_reinitialising_with_same_parameters_keeps_state():
    rng = np.random.default_rng(5)
    first = rng.uniform(-1000, 1000, 640).astype(np.float32)
    second = rng.uniform(-1000, 1000, 640).astype(np.float32)

    a = PushResampler(np.float32)
    a.initialize_if_needed(32000, 16000, 2)
    a.resample(first)
    a.initialize_if_needed(32000, 16000, 2)
    out_a = a.resample(second)

    b = PushResampler(np.float32)
    b.initialize_if_needed(32000, 16000, 2)
    b.resample(first)
    out_b = b.resample(second)

    assert np.array_equal(out_a, out_b)


def test_changing_parameters_resets_state():
    rng = np.random.default_rng(9)
    block = rng.uniform(-1000, 1000, 640).astype(np.float32)

    fresh = PushResampler(np.float32)
    fresh.initialize_if_needed(32000, 16000, 2)
    expected = fresh.resample(block)

    reused = PushResampler(np.float32)
    reused.initialize_if_needed(32000, 16000, 2)
    reused.resample(block)
    reused.initialize_if_needed(32000, 48000, 2)
    reused.initialize_if_needed(32000, 16000, 2)
    assert np.array_equal(reused.resample(block), expected)


def test_failed_initialisation_keeps_previous_configuration():
    resampler = PushResampler(np.float32)
    resampler.initialize_if_needed(16000, 48000, 1)
    with pytest.raises(ValueError):
        resampler.initialize_if_needed(16000, 48000, 0)
    assert resampler.num_channels == 1
    assert resampler.resample(np.zeros(160, dtype=np.float32)).size == 480