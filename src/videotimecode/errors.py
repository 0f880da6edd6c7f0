"""Errors raised by timecode construction and calculation."""


class TimecodeError(Exception):
    """Raised when an error occurred in timecode calculation."""


class InvalidRate(TimecodeError, ValueError):
    """Raised when a frame rate is zero, negative or not a number."""


class OutOfRange(TimecodeError, ValueError):
    """Raised when a timecode field leaves [0, 99] or the frame count is negative."""


class ParseError(TimecodeError, ValueError):
    """Raised when a timecode value can not be parsed."""
