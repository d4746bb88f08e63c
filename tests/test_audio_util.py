import math

import numpy as np
import pytest

from sincresample.audio_util import (
    db_to_ratio,
    dbfs_to_float_s16,
    deinterleave,
    downmix_interleaved_to_mono,
    downmix_to_mono,
    float_s16_to_dbfs,
    float_s16_to_float,
    float_s16_to_s16,
    float_s16s_to_float,
    float_s16s_to_s16,
    float_to_float_s16,
    float_to_s16,
    floats_to_float_s16,
    floats_to_s16,
    interleave,
    s16_to_float,
    s16s_to_float,
    upmix_mono_to_interleaved,
)


def test_float_to_s16_limits_and_saturation():
    assert float_to_s16(1.0) == 32767
    assert float_to_s16(-1.0) == -32768
    assert float_to_s16(0.0) == 0
    assert float_to_s16(2.5) == 32767
    assert float_to_s16(-7.0) == -32768


def test_s16_to_float_limits():
    assert s16_to_float(32767) == 1.0
    assert s16_to_float(-32768) == -1.0
    assert s16_to_float(0) == 0.0


def test_s16_float_round_trip():
    samples = np.arange(-32768, 32768, 37, dtype=np.int16)
    back = floats_to_s16(s16s_to_float(samples))
    np.testing.assert_array_equal(back, samples)


def test_float_s16_to_s16_saturates_and_rounds():
    assert float_s16_to_s16(40000.0) == 32767
    assert float_s16_to_s16(-40000.0) == -32768
    assert float_s16_to_s16(32766.6) == 32767
    assert float_s16_to_s16(0.0) == 0


def test_float_s16s_to_s16_matches_scalar():
    values = [-50000.0, -12.6, -0.4, 0.0, 0.4, 12.6, 50000.0]
    vector = float_s16s_to_s16(values)
    assert vector.dtype == np.int16
    assert list(vector) == [float_s16_to_s16(v) for v in values]


def test_float_to_float_s16_limits():
    assert float_to_float_s16(1.0) == 32767.0
    assert float_to_float_s16(-1.0) == -32768.0


def test_float_s16_float_round_trip():
    values = np.linspace(-1.0, 1.0, 101, dtype=np.float32)
    back = float_s16s_to_float(floats_to_float_s16(values))
    np.testing.assert_allclose(back, values, atol=1e-6)
    assert float_s16_to_float(-32768.0) == -1.0


def test_vector_s16_to_float_matches_scalar():
    samples = [-32768, -5, 0, 5, 32767]
    assert list(s16s_to_float(samples)) == [s16_to_float(s) for s in samples]


def test_db_conversions():
    assert db_to_ratio(0.0) == 1.0
    assert db_to_ratio(20.0) == pytest.approx(10.0)
    assert dbfs_to_float_s16(0.0) == 32768.0


def test_float_s16_to_dbfs_floor_and_round_trip():
    assert float_s16_to_dbfs(0.5) == -90.30899869919436
    assert float_s16_to_dbfs(32768.0) == pytest.approx(0.0, abs=1e-9)
    for dbfs in (-60.0, -20.0, -3.0):
        assert float_s16_to_dbfs(dbfs_to_float_s16(dbfs)) == pytest.approx(dbfs)
    assert not math.isnan(float_s16_to_dbfs(0.0))


def test_deinterleave_splits_channels():
    result = deinterleave([1, 2, 3, 4, 5, 6], 2)
    assert result.tolist() == [[1, 3, 5], [2, 4, 6]]


def test_interleave_deinterleave_round_trip():
    data = np.arange(24, dtype=np.int16)
    for channels in (1, 2, 3, 4):
        np.testing.assert_array_equal(interleave(deinterleave(data, channels)), data)


def test_deinterleave_errors():
    with pytest.raises(ValueError):
        deinterleave([1, 2, 3], 2)
    with pytest.raises(ValueError):
        deinterleave([1, 2], 0)


def test_upmix_mono():
    assert upmix_mono_to_interleaved([1, 2], 3).tolist() == [1, 1, 1, 2, 2, 2]
    with pytest.raises(ValueError):
        upmix_mono_to_interleaved([1], 0)


def test_upmix_then_downmix_is_identity():
    mono = np.array([-32768, -7, 0, 9, 32767], dtype=np.int16)
    stereo = upmix_mono_to_interleaved(mono, 2)
    np.testing.assert_array_equal(downmix_interleaved_to_mono(stereo, 2), mono)


def test_downmix_int16_averages_without_overflow():
    channels = np.array([[32767, 1], [32767, 3]], dtype=np.int16)
    result = downmix_to_mono(channels)
    assert result.dtype == np.int16
    assert result.tolist() == [32767, 2]


def test_downmix_truncates_toward_zero():
    channels = np.array([[-3, 3], [0, 0]], dtype=np.int16)
    assert downmix_to_mono(channels).tolist() == [-1, 1]


def test_downmix_float():
    channels = np.array([[0.5, -1.0], [0.25, 1.0]], dtype=np.float32)
    result = downmix_to_mono(channels)
    assert result.dtype == np.float32
    assert result.tolist() == [0.375, 0.0]


def test_downmix_interleaved_matches_deinterleaved():
    data = np.arange(-30, 30, dtype=np.int16)
    np.testing.assert_array_equal(
        downmix_interleaved_to_mono(data, 3), downmix_to_mono(deinterleave(data, 3))
    )


def test_downmix_errors():
    with pytest.raises(ValueError):
        downmix_interleaved_to_mono([1, 2, 3], 0)
    with pytest.raises(ValueError):
        downmix_to_mono([])


def test_floats_to_s16_clips_vector():
    result = floats_to_s16([-3.0, 3.0])
    assert result.tolist() == [-32768, 32767]