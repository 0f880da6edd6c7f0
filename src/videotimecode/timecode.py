"""Timecode class for handling timecode calculations."""

from __future__ import annotations

import logging
import math
import sys
from fractions import Fraction
from typing import Any, Callable

from .config import TimecodeConfig, check_delimiter, get_default_config
from .errors import OutOfRange, TimecodeError
from .formatter import render, render_default
from .framemath import frames_to_tc, round_fps
from .operand import operand_frames, to_operand
from .parser import parse

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

logger = logging.getLogger(__name__)


class Timecode:
    """An immutable video timecode.

    Does all the calculation over frames, so the main data it holds is the
    total number of frames, then when required it converts the frames to
    hours, minutes, seconds and frames by using the frame rate setting.

    Args:
        value: Either nothing (00:00:00:00), a total frame count as a single
            int, a timecode string like "01:00:00:00" or "00:01:00;04", up to 4
            ints or a tuple of them for the hours, minutes, seconds and frames,
            or another Timecode to copy.
        fps (float): The frame rate. The value is kept as given, it is rounded
            to the nearest integer for the frame count arithmetic only.
        dropframe (bool): Use drop frame counting. When skipped, strings with
            a "." or ";" before the frames field are drop frame.
        delimiter (str): Separator between hours, minutes and seconds.
        frame_delimiter (str): Separator before the frames field.
        config (TimecodeConfig): Defaults for the skipped options, the process
            wide default config is used when this is skipped.
            A copy of another Timecode inherits every option of its source that
            is not overridden, the config is not used for it.

    Raises:
        ParseError: If the value can not be parsed.
        OutOfRange: If any field is outside [0, 99] or the frames negative.
        InvalidRate: If the frame rate is not positive.
    """

    __slots__ = (
        "_total_frames",
        "_fps",
        "_dropframe",
        "_delimiter",
        "_frame_delimiter",
        "_frame_delimiter_set",
        "_layout",
    )

    def __init__(
        self,
        *value: Any,
        fps: float | None = None,
        dropframe: bool | None = None,
        delimiter: str | None = None,
        frame_delimiter: str | None = None,
        config: TimecodeConfig | None = None,
    ) -> None:
        if not value:
            value = 0
        elif len(value) == 1:
            value = value[0]

        if isinstance(value, Timecode):
            self._copy_from(value, fps, dropframe, delimiter, frame_delimiter)
            return

        parsed = parse(
            value,
            fps=fps,
            dropframe=dropframe,
            delimiter=delimiter,
            frame_delimiter=frame_delimiter,
            config=config,
        )
        self._total_frames = parsed.total_frames
        self._fps = parsed.fps
        self._dropframe = parsed.dropframe
        self._delimiter = parsed.delimiter
        self._frame_delimiter = parsed.frame_delimiter
        self._frame_delimiter_set = parsed.frame_delimiter_set
        self._layout = parsed.layout

    def _copy_from(
        self,
        other: Timecode,
        fps: float | None,
        dropframe: bool | None,
        delimiter: str | None,
        frame_delimiter: str | None,
    ) -> None:
        overrides = (fps, dropframe, delimiter, frame_delimiter)
        self._total_frames = other._total_frames
        self._fps = other._fps if fps is None else fps
        self._dropframe = other._dropframe if dropframe is None else bool(dropframe)
        self._delimiter = (
            other._delimiter
            if delimiter is None
            else check_delimiter("delimiter", delimiter)
        )
        if frame_delimiter is None:
            self._frame_delimiter = other._frame_delimiter
            self._frame_delimiter_set = other._frame_delimiter_set
        else:
            self._frame_delimiter = check_delimiter("frame_delimiter", frame_delimiter)
            self._frame_delimiter_set = True
        self._layout = other._layout if overrides == (None,) * 4 else None
        # validate the new combination of frames and options
        frames_to_tc(self._total_frames, self._fps, self._dropframe)

    def _replace(self, **changes: Any) -> Self:
        """Return a new instance with some of the stored attributes changed."""
        tc = object.__new__(self.__class__)
        for name in self.__slots__:
            setattr(tc, name, changes.get(name.lstrip("_"), getattr(self, name)))
        if tc._total_frames < 0:
            raise OutOfRange(
                f"{self.__class__.__name__} total frames should be a positive "
                f"integer or zero, not {tc._total_frames}"
            )
        frames_to_tc(tc._total_frames, tc._fps, tc._dropframe)
        return tc

    def derive(self, value: Any) -> Timecode:
        """Create a new Timecode from the value using the options of this one.

        Args:
            value: Any value accepted by the Timecode constructor.

        Returns:
            Timecode: The new instance, with the frame rate, drop frame and
                delimiter options of this Timecode.
        """
        return self.__class__(
            value,
            fps=self._fps,
            dropframe=self._dropframe,
            delimiter=self._delimiter,
            frame_delimiter=self._frame_delimiter if self._frame_delimiter_set else None,
        )

    @classmethod
    def from_seconds(
        cls,
        seconds: float | Fraction,
        fps: float | None = None,
        config: TimecodeConfig | None = None,
        **options: Any,
    ) -> Self:
        """Create a Timecode from a number of seconds.

        Args:
            seconds (float): The seconds, rounded to the nearest frame with
                the integer frame rate.
            fps (float): The frame rate.
            config (TimecodeConfig): Defaults for the skipped options.
            options (dict): Other keyword options of the constructor.

        Returns:
            Timecode: The new instance.
        """
        if config is None:
            config = get_default_config()
        fps = config.fps if fps is None else fps
        frames = math.floor(Fraction(seconds) * round_fps(fps) + Fraction(1, 2))
        return cls(frames, fps=fps, config=config, **options)

    # accessors

    @property
    def total_frames(self) -> int:
        """Return the number of frames since 00:00:00:00."""
        return self._total_frames

    @property
    def fps(self) -> float:
        """Return the frame rate as given, not rounded."""
        return self._fps

    @property
    def is_dropframe(self) -> bool:
        """Return True if this is a drop frame timecode."""
        return self._dropframe

    @property
    def delimiter(self) -> str:
        """Return the separator between hours, minutes and seconds."""
        return self._delimiter

    @property
    def frame_delimiter(self) -> str:
        """Return the separator before the frames field."""
        return self._frame_delimiter

    @property
    def default_format(self) -> tuple[str, str, str] | None:
        """Return the delimiters of the string this Timecode was parsed from.

        Returns:
            tuple: The three delimiter characters of the source string, or
                None if the stored delimiters are used for rendering.
        """
        return self._layout

    @property
    def fields(self) -> tuple[int, int, int, int]:
        """Return the hours, minutes, seconds and frames of this Timecode."""
        return frames_to_tc(self._total_frames, self._fps, self._dropframe)

    @property
    def hours(self) -> int:
        """Return the hours part of the timecode."""
        return self.fields[0]

    @property
    def minutes(self) -> int:
        """Return the minutes part of the timecode."""
        return self.fields[1]

    @property
    def seconds(self) -> int:
        """Return the seconds part of the timecode."""
        return self.fields[2]

    @property
    def frames(self) -> int:
        """Return the frames part of the timecode."""
        return self.fields[3]

    # conversions

    def convert(self, fps: float, **options: Any) -> Timecode:
        """Return the equivalent Timecode at another frame rate.

        The duration is kept, not the frame count: 25 frames at 25 fps become
        30 frames at 30 fps. The result is non drop frame unless
        ``dropframe=True`` is given, the delimiters are inherited.

        Args:
            fps (float): The new frame rate.
            options (dict): Overrides for dropframe, delimiter and
                frame_delimiter.

        Returns:
            Timecode: The converted Timecode.
        """
        unknown = set(options) - {"dropframe", "delimiter", "frame_delimiter"}
        if unknown:
            raise TypeError(
                f"convert() got unexpected keyword arguments: {', '.join(sorted(unknown))}"
            )
        old_fps = round_fps(self._fps)
        new_fps = round_fps(fps)
        total_frames = math.floor(
            Fraction(self._total_frames * new_fps, old_fps) + Fraction(1, 2)
        )
        changes = {
            "total_frames": total_frames,
            "fps": fps,
            "dropframe": bool(options.get("dropframe", False)),
            "layout": None,
        }
        if options.get("delimiter") is not None:
            changes["delimiter"] = check_delimiter("delimiter", options["delimiter"])
        if options.get("frame_delimiter") is not None:
            changes["frame_delimiter"] = check_delimiter(
                "frame_delimiter", options["frame_delimiter"]
            )
            changes["frame_delimiter_set"] = True

        logger.debug(
            "Converting %s frames @ %s fps to %s frames @ %s fps",
            self._total_frames,
            self._fps,
            total_frames,
            fps,
        )
        return self._replace(**changes)

    def to_dropframe(self) -> Self:
        """Return this Timecode with drop frame counting.

        The frame count and rate are unchanged, only the way it is counted in
        hours, minutes, seconds and frames changes.

        Returns:
            Timecode: This instance if already drop frame, a new one otherwise.
        """
        if self._dropframe:
            return self
        logger.debug("Reinterpreting %r as drop frame", self)
        return self._replace(dropframe=True, layout=None)

    def to_non_dropframe(self) -> Self:
        """Return this Timecode with non drop frame counting.

        Returns:
            Timecode: This instance if already non drop frame, a new one
                otherwise.
        """
        if not self._dropframe:
            return self
        logger.debug("Reinterpreting %r as non drop frame", self)
        return self._replace(dropframe=False, layout=None)

    # arithmetic

    def _arithmetic(
        self, other: Any, op: Callable[[int, int], int], reflected: bool = False
    ) -> Self:
        operand = to_operand(other)
        if operand is None:
            raise TimecodeError(
                f"Type {other.__class__.__name__} not supported for arithmetic."
            )
        other_frames = operand_frames(operand, self)
        if reflected:
            total_frames = op(other_frames, self._total_frames)
        else:
            total_frames = op(self._total_frames, other_frames)
        return self._replace(total_frames=total_frames)

    def add(self, other: int | str | Timecode) -> Self:
        """Return a new Timecode with the given timecode or frames added.

        Frame rates are not normalized, the frame counts are simply added and
        the options of this Timecode are used for the result.

        Args:
            other (int | str | Timecode): Either a number of frames, a
                timecode string parsed with the options of this one, or a
                Timecode in which the frames are used for the calculation.

        Raises:
            TimecodeError: If the other is not an int, str or Timecode.
            ParseError: If the other is a str that can not be parsed.

        Returns:
            Timecode: The resultant Timecode instance.
        """
        return self._arithmetic(other, lambda a, b: a + b)

    def subtract(self, other: int | str | Timecode) -> Self:
        """Return a new Timecode with the given timecode or frames subtracted.

        Raises:
            OutOfRange: If the result would be negative.

        Returns:
            Timecode: The resultant Timecode instance.
        """
        return self._arithmetic(other, lambda a, b: a - b)

    def multiply(self, other: int | str | Timecode) -> Self:
        """Return a new Timecode with the frames multiplied by the other."""
        return self._arithmetic(other, lambda a, b: a * b)

    def divide(self, other: int | str | Timecode) -> Self:
        """Return a new Timecode with the frames divided by the other.

        This is an integer division, the remainder is dropped.

        Raises:
            ZeroDivisionError: If the other is zero frames.
        """
        return self._arithmetic(other, lambda a, b: a // b)

    def next(self) -> Self:
        """Return a new Timecode one frame after this one."""
        return self.add(1)

    def back(self) -> Self:
        """Return a new Timecode one frame before this one.

        Raises:
            OutOfRange: If this Timecode is 00:00:00:00.
        """
        return self.subtract(1)

    def __add__(self, other: int | str | Timecode) -> Self:
        return self.add(other)

    def __radd__(self, other: int | str) -> Self:
        return self._arithmetic(other, lambda a, b: a + b, reflected=True)

    def __sub__(self, other: int | str | Timecode) -> Self:
        return self.subtract(other)

    def __rsub__(self, other: int | str) -> Self:
        return self._arithmetic(other, lambda a, b: a - b, reflected=True)

    def __mul__(self, other: int | str | Timecode) -> Self:
        return self.multiply(other)

    def __rmul__(self, other: int | str) -> Self:
        return self._arithmetic(other, lambda a, b: a * b, reflected=True)

    def __truediv__(self, other: int | str | Timecode) -> Self:
        return self.divide(other)

    def __rtruediv__(self, other: int | str) -> Self:
        return self._arithmetic(other, lambda a, b: a // b, reflected=True)

    __floordiv__ = __truediv__
    __rfloordiv__ = __rtruediv__

    # comparison

    def _other_frames(self, other: Any) -> int | None:
        operand = to_operand(other)
        if operand is None:
            return None
        return operand_frames(operand, self)

    def compare(self, other: int | str | Timecode) -> int:
        """Compare the frame counts of this Timecode and the other.

        The frame rates and other options do not take part in the comparison.

        Args:
            other (int | str | Timecode): Either a number of frames, a timecode
                string parsed with the options of this one, or a Timecode.

        Raises:
            TypeError: If the other is not an int, str or Timecode.
            ParseError: If the other is a str that can not be parsed.

        Returns:
            int: -1, 0 or 1 if this Timecode is before, equal to or after the
                other.
        """
        other_frames = self._other_frames(other)
        if other_frames is None:
            raise TypeError(
                f"Can not compare {self.__class__.__name__} with "
                f"{other.__class__.__name__}"
            )
        return (self._total_frames > other_frames) - (self._total_frames < other_frames)

    def __eq__(self, other: object) -> bool:
        other_frames = self._other_frames(other)
        if other_frames is None:
            return NotImplemented
        return self._total_frames == other_frames

    def __ne__(self, other: object) -> bool:
        other_frames = self._other_frames(other)
        if other_frames is None:
            return NotImplemented
        return self._total_frames != other_frames

    def __lt__(self, other: int | str | Timecode) -> bool:
        other_frames = self._other_frames(other)
        if other_frames is None:
            return NotImplemented
        return self._total_frames < other_frames

    def __le__(self, other: int | str | Timecode) -> bool:
        other_frames = self._other_frames(other)
        if other_frames is None:
            return NotImplemented
        return self._total_frames <= other_frames

    def __gt__(self, other: int | str | Timecode) -> bool:
        other_frames = self._other_frames(other)
        if other_frames is None:
            return NotImplemented
        return self._total_frames > other_frames

    def __ge__(self, other: int | str | Timecode) -> bool:
        other_frames = self._other_frames(other)
        if other_frames is None:
            return NotImplemented
        return self._total_frames >= other_frames

    def __hash__(self) -> int:
        """Hash the frame count, consistent with comparing to an int.

        Equality with timecode strings can not have a matching hash, so do not
        mix Timecodes and strings as keys of the same dict or set.
        """
        return hash(self._total_frames)

    # rendering

    def to_string(self, fmt: str | None = None) -> str:
        """Return this Timecode as a string.

        Args:
            fmt (str): A format string with %H, %M, %S, %f, %i, %r, %T and %%
                directives. When skipped the layout of the source string is
                reproduced, or the delimiters of this Timecode are used.

        Returns:
            str: The string of this Timecode.
        """
        if fmt is None:
            return render_default(
                *self.fields,
                dropframe=self._dropframe,
                delimiter=self._delimiter,
                frame_delimiter=self._frame_delimiter,
                frame_delimiter_set=self._frame_delimiter_set,
                layout=self._layout,
            )
        return render(self, fmt)

    def __str__(self) -> str:
        return self.to_string()

    def __format__(self, format_spec: str) -> str:
        return self.to_string(format_spec or None)

    def __repr__(self) -> str:
        # use the frame count as that is agnostic to the delimiters
        return (
            f"{self.__class__.__name__}({self._total_frames}, fps={self._fps!r}, "
            f"dropframe={self._dropframe!r})"
        )

    def __int__(self) -> int:
        return self._total_frames

    def __index__(self) -> int:
        return self._total_frames

    def __float__(self) -> float:
        """Convert this Timecode to seconds of real time."""
        return float(self.total_seconds())

    def total_seconds(self) -> Fraction:
        """Return the exact real time in seconds, the frames over the real rate.

        Returns:
            Fraction: The seconds as an exact fraction.
        """
        return Fraction(self._total_frames) / Fraction(self._fps)
