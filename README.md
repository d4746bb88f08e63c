# sincresample

A sample-rate converter for audio that arrives in fixed 10 ms blocks. It uses a
bank of windowed-sinc kernels and interpolates linearly between sub-sample
offsets, which gives high-quality output. The package also has helpers for
converting between 16-bit integer and floating-point sample formats, and for
interleaving and downmixing channels.

## Installation

```
pip install sincresample
```

NumPy is the only runtime dependency.

## Resampling interleaved multichannel audio

`PushResampler` works on int16 or float32 samples. Each call to `resample`
takes one 10 ms block of interleaved audio and returns the resampled block,
also interleaved.

```python
import numpy as np
from sincresample.push_resampler import PushResampler

resampler = PushResampler(np.int16)
resampler.initialize_if_needed(48000, 16000, 2)

block = np.zeros(480 * 2, dtype=np.int16)   # 10 ms of stereo at 48 kHz
out = resampler.resample(block)              # 160 * 2 samples at 16 kHz
```

- The constructor raises `ValueError` for any dtype other than int16 or float32.
- `initialize_if_needed` can be called before every block. It does nothing
  unless the rates or the channel count have changed. It raises `ValueError`
  when a rate or the channel count is not positive.
- `resample` raises `RuntimeError` if the resampler has not been initialised.
  It raises `ValueError` if the block does not hold exactly
  `src_rate // 100 * channels` samples.
- When the source and destination rates are equal, `resample` returns a copy of
  the input.
- Int16 output is rounded and saturated to the int16 range.
- The properties `dtype` and `num_channels` give the current configuration.
  `num_channels` is 0 until the resampler has been initialised.

## Single-channel push resampling

`PushSincResampler(source_frames, destination_frames)` works on one channel.
The two block sizes must cover the same span of time, because the rate ratio is
worked out from them. Every call takes exactly `source_frames` samples and
returns exactly `destination_frames` samples. A block of any other length
raises `ValueError`.

```python
import numpy as np
from sincresample.push_sinc_resampler import PushSincResampler

mono = PushSincResampler(441, 480)           # 44.1 kHz -> 48 kHz, 10 ms blocks
out = mono.resample(np.zeros(441, dtype=np.float32))    # float32 output
out16 = mono.resample_s16(np.zeros(441, dtype=np.int16))  # int16 output

delay = PushSincResampler.algorithmic_delay_seconds(44100)
```

The first block primes the filter, so the output lags the input by half a
kernel. `algorithmic_delay_seconds` gives that delay in seconds.

## Pull-based resampling

`SincResampler(io_sample_rate_ratio, request_frames, read_cb)` asks a callback
for input whenever it needs more. The arguments are:

- `io_sample_rate_ratio`: the input rate divided by the output rate.
- `request_frames`: the number of frames asked for on each call. It must be
  greater than the kernel size of 32.
- `read_cb`: called with a frame count. It returns at most that many samples.
  A shorter answer is padded with zeros, and a longer one raises `ValueError`.

```python
import numpy as np
from sincresample.sinc_resampler import SincResampler, DEFAULT_REQUEST_SIZE

def read(frames):
    return np.zeros(frames, dtype=np.float32)

resampler = SincResampler(44100 / 48000, DEFAULT_REQUEST_SIZE, read)
output = resampler.resample(resampler.chunk_size())
resampler.set_ratio(0.5)
resampler.flush()
```

- `resample(frames)` returns a float32 array of `frames` samples.
- `chunk_size()` is the largest output size that needs at most one callback call.
- `flush()` drops all buffered input.
- `set_ratio()` rebuilds the kernels if the ratio has changed.
- The properties `request_frames`, `io_sample_rate_ratio` and `kernels` are
  read-only.

## Kernels

`sincresample.kernel` contains the following:

- `KernelBank(io_sample_rate_ratio)` holds `KERNEL_OFFSET_COUNT + 1` windowed-sinc
  kernels of `KERNEL_SIZE` taps each.
  - `kernel(offset_idx)` returns one kernel.
  - `kernels` is a read-only view of all of them.
  - `set_ratio()` rebuilds them for a new ratio.
- `sinc_scale_factor(io_ratio)` returns the normalised low-pass cutoff.
- `convolve(input_block, k1, k2, factor)` blends the two kernel sums linearly.

## Sample-format helpers

`sincresample.audio_util` uses these sample formats:

- **S16**: int16 in `[-32768, 32767]`
- **Float**: float in `[-1.0, 1.0]`
- **FloatS16**: float in `[-32768.0, 32767.0]`

Conversions are available for single values and for arrays. Conversions to
int16 saturate at the limits.

- Single values: `float_to_s16`, `s16_to_float`, `float_s16_to_s16`, `float_to_float_s16`, `float_s16_to_float`
- Arrays: `floats_to_s16`, `s16s_to_float`, `float_s16s_to_s16`, `floats_to_float_s16`, `float_s16s_to_float`
- Decibels: `db_to_ratio`, `dbfs_to_float_s16`, `float_s16_to_dbfs`
  (`float_s16_to_dbfs` is floored at about -90.3 dBFS)

The channel layout helpers are `deinterleave`, `interleave`,
`upmix_mono_to_interleaved`, `downmix_to_mono` and
`downmix_interleaved_to_mono`. When integer samples are downmixed, the average
is truncated toward zero.

`sincresample.alignment` has `valid_alignment` and `get_right_align`, which
round positions up to power-of-two boundaries.

## What it does not do

This is a library only. It has no command-line tool. It does not read or write
audio files, and it does not talk to audio devices. You supply the sample
blocks and you take the results.