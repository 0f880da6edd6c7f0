"""Conversion between total frame counts and hours, minutes, seconds, frames.

Everything here works on the frame rate rounded to the nearest integer, the
real valued rate only matters to the callers that keep it around.
"""

from __future__ import annotations

import math
from numbers import Real

from .errors import InvalidRate, OutOfRange

MAX_FIELD = 99
FIELD_NAMES = ("hours", "minutes", "seconds", "frames")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def round_fps(fps: float) -> int:
    """Return the given frame rate rounded to the nearest integer.

    Args:
        fps (float): The real valued frame rate, like 29.97 or 25.

    Raises:
        InvalidRate: If the rate is not a positive number or rounds down to 0.

    Returns:
        int: The rounded frame rate used in all frame count arithmetic.
    """
    if isinstance(fps, bool) or not isinstance(fps, Real):
        raise InvalidRate(f"Invalid framerate {fps!r}, expected a number.")
    if not fps > 0 or math.isinf(fps):
        raise InvalidRate(f"Invalid framerate (zero or negative): {fps}")
    int_fps = _round_half_up(fps)
    if int_fps < 1:
        raise InvalidRate(f"Invalid framerate {fps}, it rounds to 0 frames.")
    return int_fps


def drop_frames_per_minute(int_fps: int) -> int:
    """Return the number of frame numbers skipped per dropped minute.

    The classic rule drops 2 frames per minute at 30 fps, the same ratio is
    kept for every other rate: 4 at 60, 2 at 24 and 25, 0 below 8.
    """
    return _round_half_up(int_fps * 2 / 30)


def check_fields(hours: int, minutes: int, seconds: int, frames: int) -> None:
    """Raise OutOfRange if any of the given fields is outside [0, 99]."""
    for name, value in zip(FIELD_NAMES, (hours, minutes, seconds, frames)):
        if not 0 <= value <= MAX_FIELD:
            raise OutOfRange(
                f"Timecode {name} should be between 0 and {MAX_FIELD}, not {value}"
            )


def tc_to_frames(
    hours: int,
    minutes: int,
    seconds: int,
    frames: int,
    fps: float,
    dropframe: bool = False,
) -> int:
    """Convert the given timecode fields to a total frame count.

    Args:
        hours (int): The hours part.
        minutes (int): The minutes part.
        seconds (int): The seconds part.
        frames (int): The frames part.
        fps (float): The frame rate, rounded for the calculation.
        dropframe (bool): Use drop frame counting.

    Raises:
        OutOfRange: If a field is outside [0, 99] or the drop frame correction
            makes the total negative.

    Returns:
        int: The 0-based number of frames since 00:00:00:00.
    """
    ifps = round_fps(fps)
    check_fields(hours, minutes, seconds, frames)

    total = ((hours * 60 + minutes) * 60 + seconds) * ifps + frames
    if dropframe:
        total_minutes = 60 * hours + minutes
        total -= drop_frames_per_minute(ifps) * (total_minutes - total_minutes // 10)

    if total < 0:
        raise OutOfRange(
            f"Timecode {hours}:{minutes}:{seconds};{frames} names a dropped "
            f"frame before 00:00:00;00"
        )
    return total


def frames_to_tc(
    total_frames: int, fps: float, dropframe: bool = False
) -> tuple[int, int, int, int]:
    """Convert a total frame count back to timecode fields.

    There is no rollover after 24 hours, instead the hours field is bound to
    the same [0, 99] range as the other fields.

    Args:
        total_frames (int): The 0-based number of frames.
        fps (float): The frame rate, rounded for the calculation.
        dropframe (bool): Use drop frame counting.

    Raises:
        OutOfRange: If the frame count is negative or a decoded field is
            bigger than 99.

    Returns:
        tuple: A tuple containing the hours, minutes, seconds and frames.
    """
    ifps = round_fps(fps)
    if total_frames < 0:
        raise OutOfRange(
            f"Total frames should be a positive integer or zero, not {total_frames}"
        )

    frame_number = total_frames
    drop_frames = drop_frames_per_minute(ifps) if dropframe else 0
    if drop_frames:
        frames_per_minute = ifps * 60 - drop_frames
        frames_per_10_minutes = ifps * 600 - drop_frames * 9

        d, m = divmod(frame_number, frames_per_10_minutes)
        if m > drop_frames:
            frame_number += (drop_frames * 9 * d) + drop_frames * (
                (m - drop_frames) // frames_per_minute
            )
        else:
            frame_number += drop_frames * 9 * d

    total_seconds, frs = divmod(frame_number, ifps)
    total_minutes, secs = divmod(total_seconds, 60)
    hrs, mins = divmod(total_minutes, 60)

    check_fields(hrs, mins, secs, frs)
    return hrs, mins, secs, frs
