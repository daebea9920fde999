"""Coordinate mapping between subtitle seconds and timeline/source frames."""

import math

# Absorbs binary floating-point noise, e.g. 0.29 * 100 == 28.999999999999996.
_FRAME_EPSILON = 1e-9


class InvalidTimebaseError(ValueError):
    """Raised when a timeline's framerate cannot be used for frame arithmetic."""


def check_timebase(fps: float) -> None:
    """Raise InvalidTimebaseError unless fps is a positive, finite number."""
    if not isinstance(fps, (int, float)) or not math.isfinite(fps) or fps <= 0:
        raise InvalidTimebaseError(f"Invalid timebase: {fps!r} frames per second")


def time_to_frame(seconds: float, fps: float) -> int:
    """Floor a time in seconds to the frame that contains it."""
    check_timebase(fps)
    return math.floor(seconds * fps + _FRAME_EPSILON)


def frame_to_time(frame: int, fps: float) -> float:
    """Start time of a frame in seconds. Only used for re-serialization."""
    check_timebase(fps)
    return frame / fps


def format_srt_timestamp(seconds: float) -> str:
    total_ms = math.floor(max(seconds, 0.0) * 1000 + _FRAME_EPSILON)
    h, rem = divmod(total_ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms = divmod(rem, 1000)
    return f"{h:02d}:{m:02d}:{s:02d},{ms:03d}"
