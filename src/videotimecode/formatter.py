"""Render timecodes to strings.

Besides the default ``HH:MM:SS:FF`` layout a small strftime like language is
supported::

    %H  hours           %i  total frames
    %M  minutes         %r  frame rate
    %S  seconds         %T  the default layout
    %f  frames          %%  a literal "%"

Each directive takes an optional printf style ``[-0][width][.precision]``
modifier, ``%03f`` renders frame 5 as ``005``. Without a width no padding is
added. Unknown directives are left untouched.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .framemath import round_fps

if TYPE_CHECKING:
    from .timecode import Timecode

DIRECTIVE_RE = re.compile(
    r"%(?P<flags>[-0]*)(?P<width>\d*)(?:\.(?P<precision>\d+))?(?P<directive>[HMSfirT%])"
)


def render_default(
    hours: int,
    minutes: int,
    seconds: int,
    frames: int,
    dropframe: bool = False,
    delimiter: str = ":",
    frame_delimiter: str = ":",
    frame_delimiter_set: bool = False,
    layout: tuple[str, str, str] | None = None,
) -> str:
    """Return the default ``HH<D>MM<D>SS<FD>FF`` rendering of the fields.

    Args:
        hours (int): The hours part.
        minutes (int): The minutes part.
        seconds (int): The seconds part.
        frames (int): The frames part.
        dropframe (bool): Drop frame timecodes use ";" before the frames,
            unless a frame delimiter was explicitly set.
        delimiter (str): Separator between hours, minutes and seconds.
        frame_delimiter (str): Separator before the frames field.
        frame_delimiter_set (bool): True if the frame delimiter was given
            explicitly by the user.
        layout (tuple): The three delimiters of the string the timecode was
            parsed from, reproduced as is when given.

    Returns:
        str: The rendered timecode.
    """
    if layout is None:
        if dropframe and not frame_delimiter_set:
            frame_delimiter = ";"
        layout = (delimiter, delimiter, frame_delimiter)
    d1, d2, fd = layout
    return f"{hours:02d}{d1}{minutes:02d}{d2}{seconds:02d}{fd}{frames:02d}"


def _natural(value: float) -> int | float:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _frames_value(timecode: Timecode, precision: str | None) -> int | float:
    frames = timecode.frames
    fps = timecode.fps
    if precision is None or float(fps).is_integer():
        return frames
    # position of the frame on the real valued rate, 15 @ 29.97 -> 14.985
    return frames * float(fps) / round_fps(fps)


def _pad(text: str, flags: str, width: str) -> str:
    if not width:
        return text
    if "-" in flags:
        return text.ljust(int(width))
    if "0" in flags:
        sign = "-" if text.startswith("-") else ""
        return sign + text[len(sign):].zfill(int(width) - len(sign))
    return text.rjust(int(width))


def _render_directive(timecode: Timecode, match: re.Match) -> str:
    directive = match.group("directive")
    if directive == "%":
        return "%"
    if directive == "T":
        return timecode.to_string()

    precision = match.group("precision")
    if directive == "H":
        value = timecode.hours
    elif directive == "M":
        value = timecode.minutes
    elif directive == "S":
        value = timecode.seconds
    elif directive == "i":
        value = timecode.total_frames
    elif directive == "r":
        value = _natural(timecode.fps)
    else:
        value = _frames_value(timecode, precision)

    if precision is not None and not isinstance(value, int):
        text = f"{float(value):.{int(precision)}f}"
    else:
        text = str(value)
    return _pad(text, match.group("flags"), match.group("width"))


def render(timecode: Timecode, fmt: str) -> str:
    """Render the given Timecode with a format string.

    Args:
        timecode (Timecode): The timecode to render.
        fmt (str): The format string, see the module docs for the directives.

    Returns:
        str: The rendered string.
    """
    return DIRECTIVE_RE.sub(lambda match: _render_directive(timecode, match), fmt)
