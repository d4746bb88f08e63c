"""Helpers for rounding positions up to power-of-two alignment boundaries."""

from __future__ import annotations


def valid_alignment(alignment: int) -> bool:
    """Return True if ``alignment`` is a positive integer power of two."""
    if alignment <= 0:
        return False
    return alignment & (alignment - 1) == 0


def get_right_align(position: int, alignment: int) -> int:
    """Return the first multiple of ``alignment`` at or after ``position``.

    Raises ValueError if the alignment is not a power of two or the
    position is negative.
    """
    if not valid_alignment(alignment):
        raise ValueError(f"alignment must be a power of two, got {alignment}")
    if position < 0:
        raise ValueError(f"position must be non-negative, got {position}")
    return (position + alignment - 1) & ~(alignment - 1)