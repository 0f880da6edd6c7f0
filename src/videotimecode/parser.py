"""Parse the supported timecode inputs into a canonical representation."""

from __future__ import annotations

import re
from typing import NamedTuple

from .config import TimecodeConfig, check_delimiter, get_default_config
from .errors import ParseError
from .framemath import frames_to_tc, round_fps, tc_to_frames

DROPFRAME_DELIMITERS = (".", ";")


class ParsedTimecode(NamedTuple):
    """Canonical form of a parsed timecode with its resolved options."""

    hours: int
    minutes: int
    seconds: int
    frames: int
    total_frames: int
    fps: float
    dropframe: bool
    delimiter: str
    frame_delimiter: str
    frame_delimiter_set: bool
    layout: tuple[str, str, str] | None


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_fields(value: tuple | list) -> tuple[int, int, int, int]:
    """Return the (hours, minutes, seconds, frames) of a tuple of 1 to 4 ints.

    Missing fields on the right are filled with zeros, so (1, 2, 3) is
    01:02:03:00.
    """
    if not 1 <= len(value) <= 4:
        raise ParseError(
            f"Timecode tuple should have 1 to 4 fields, not {len(value)}: {value!r}"
        )
    for field in value:
        if not _is_int(field):
            raise ParseError(
                f"Timecode fields should be integers, not "
                f"{field.__class__.__name__}: {value!r}"
            )
    hrs, mins, secs, frs = tuple(value) + (0,) * (4 - len(value))
    return hrs, mins, secs, frs


def _timecode_pattern(delimiter: str, frame_delimiter: str) -> re.Pattern:
    frame_delimiters = dict.fromkeys((frame_delimiter,) + DROPFRAME_DELIMITERS)
    return re.compile(
        r"(\d+)({d})(\d+)({d})(\d+)({fd})(\d+)".format(
            d=re.escape(delimiter),
            fd="|".join(re.escape(fd) for fd in frame_delimiters),
        )
    )


def parse_string(
    timecode: str, delimiter: str, frame_delimiter: str
) -> tuple[tuple[int, int, int, int], tuple[str, str, str]]:
    """Split a delimited timecode string.

    The hours, minutes and seconds have to be separated by ``delimiter``, the
    frames are preceded by either ``frame_delimiter`` or one of the drop frame
    delimiters "." and ";".

    Returns:
        tuple: The (hours, minutes, seconds, frames) fields and the three
            delimiter characters found in the string, in order.
    """
    match = _timecode_pattern(delimiter, frame_delimiter).fullmatch(timecode.strip())
    if match is None:
        raise ParseError(
            f"Invalid timecode {timecode!r}, expected "
            f"HH{delimiter}MM{delimiter}SS{frame_delimiter}FF"
        )
    hrs, d1, mins, d2, secs, fd, frs = match.groups()
    return (int(hrs), int(mins), int(secs), int(frs)), (d1, d2, fd)


def parse(
    value: int | str | tuple | list,
    fps: float | None = None,
    dropframe: bool | None = None,
    delimiter: str | None = None,
    frame_delimiter: str | None = None,
    config: TimecodeConfig | None = None,
) -> ParsedTimecode:
    """Parse the given value into a canonical timecode representation.

    Explicit keyword options win over anything inferred from the value, which
    in turn wins over the config defaults.

    Args:
        value (int | str | tuple): A total frame count, a delimited timecode
            string or a tuple of up to 4 fields.
        fps (float): The frame rate.
        dropframe (bool): Drop frame counting. For strings, a "." or ";" before
            the frames field turns it on unless this is explicitly False.
        delimiter (str): Separator between hours, minutes and seconds.
        frame_delimiter (str): Separator before the frames field.
        config (TimecodeConfig): Defaults for the options not given, the
            process wide default config is used when skipped.

    Raises:
        ParseError: If the value is malformed or of an unsupported type.
        OutOfRange: If a field is outside [0, 99] or the total is negative.
        InvalidRate: If the frame rate is not positive.

    Returns:
        ParsedTimecode: The parsed timecode.
    """
    if config is None:
        config = get_default_config()

    fps = config.fps if fps is None else fps
    round_fps(fps)
    delimiter = check_delimiter(
        "delimiter", config.delimiter if delimiter is None else delimiter
    )
    frame_delimiter_set = frame_delimiter is not None
    frame_delimiter = check_delimiter(
        "frame_delimiter",
        config.frame_delimiter if frame_delimiter is None else frame_delimiter,
    )

    layout = None
    if isinstance(value, str):
        fields, layout = parse_string(value, delimiter, frame_delimiter)
        if dropframe is None and layout[2] in DROPFRAME_DELIMITERS:
            dropframe = True
    elif isinstance(value, (tuple, list)):
        fields = parse_fields(value)
    elif _is_int(value):
        fields = None
    else:
        raise ParseError(
            f"Type {value.__class__.__name__} can not be parsed as a timecode."
        )

    dropframe = bool(config.dropframe if dropframe is None else dropframe)

    if fields is None:
        total_frames = value
    else:
        total_frames = tc_to_frames(*fields, fps=fps, dropframe=dropframe)
    hrs, mins, secs, frs = frames_to_tc(total_frames, fps, dropframe)

    return ParsedTimecode(
        hrs,
        mins,
        secs,
        frs,
        total_frames,
        fps,
        dropframe,
        delimiter,
        frame_delimiter,
        frame_delimiter_set,
        layout,
    )
