"""Video timecodes as immutable frame count values."""

import logging

from .config import (
    TimecodeBuilder,
    TimecodeConfig,
    configure,
    get_default_config,
    set_default_config,
)
from .errors import InvalidRate, OutOfRange, ParseError, TimecodeError
from .timecode import Timecode

__version__ = "1.0.0"

__all__ = [
    "InvalidRate",
    "OutOfRange",
    "ParseError",
    "Timecode",
    "TimecodeBuilder",
    "TimecodeConfig",
    "TimecodeError",
    "configure",
    "get_default_config",
    "set_default_config",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
