"""Windowed-sinc sample-rate conversion and audio sample utilities."""

__version__ = "0.1.0"
__all__ = [
    "alignment",
    "audio_util",
    "kernel",
    "sinc_resampler",
    "push_sinc_resampler",
    "push_resampler",
]