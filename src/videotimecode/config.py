"""Construction defaults for Timecode instances."""

from __future__ import annotations

import dataclasses
import logging
import threading
from typing import TYPE_CHECKING, Any

from .errors import TimecodeError
from .framemath import round_fps

if TYPE_CHECKING:
    from .timecode import Timecode

logger = logging.getLogger(__name__)


def check_delimiter(name: str, value: str) -> str:
    """Validate a delimiter option and return it.

    Raises:
        TimecodeError: If the value is not a single non-digit character.
    """
    if not isinstance(value, str) or len(value) != 1 or value.isdigit():
        raise TimecodeError(
            f"{name} should be a single non-digit character, not {value!r}"
        )
    return value


@dataclasses.dataclass(frozen=True)
class TimecodeConfig:
    """Immutable set of defaults read when a Timecode is constructed.

    Args:
        fps (float): The frame rate used when none is given.
        dropframe (bool): Drop frame counting when none is given or inferred.
        delimiter (str): Separator between hours, minutes and seconds.
        frame_delimiter (str): Separator before the frames field.
    """

    fps: float = 29.97
    dropframe: bool = False
    delimiter: str = ":"
    frame_delimiter: str = ":"

    def __post_init__(self) -> None:
        round_fps(self.fps)
        check_delimiter("delimiter", self.delimiter)
        check_delimiter("frame_delimiter", self.frame_delimiter)

    def replace(self, **changes: Any) -> TimecodeConfig:
        """Return a copy of this config with the given fields changed."""
        return dataclasses.replace(self, **changes)


_default_config = TimecodeConfig()
_default_lock = threading.Lock()


def get_default_config() -> TimecodeConfig:
    """Return the process wide default config."""
    with _default_lock:
        return _default_config


def set_default_config(config: TimecodeConfig) -> TimecodeConfig:
    """Replace the process wide default config.

    Existing Timecode instances are not affected, the defaults are only read
    at construction time.

    Returns:
        TimecodeConfig: The previous default, handy for restoring it.
    """
    global _default_config
    if not isinstance(config, TimecodeConfig):
        raise TypeError(
            f"Expected a TimecodeConfig, not a {config.__class__.__name__}"
        )
    with _default_lock:
        previous, _default_config = _default_config, config
    logger.debug("Default timecode config changed to %r", config)
    return previous


def configure(**changes: Any) -> TimecodeConfig:
    """Change some fields of the process wide default config.

    Returns:
        TimecodeConfig: The new default config.
    """
    global _default_config
    with _default_lock:
        _default_config = _default_config.replace(**changes)
        config = _default_config
    logger.debug("Default timecode config changed to %r", config)
    return config


class TimecodeBuilder:
    """Helper class to pre-configure instantiation of Timecodes.

    The keyword options given to the builder are used every time the builder
    is called, the keywords of a single call take precedence.

    Args:
        kwargs (dict): Pre-configured keyword options for the Timecodes
            created by calling this builder, refer to the Timecode docs.
    """

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs

    def __call__(self, *args: Any, **kwargs: Any) -> Timecode:
        """Create a Timecode combining the preconfigured and call options.

        Returns:
            Timecode: timecode instance given the arguments.
        """
        from .timecode import Timecode

        kwargs = self.kwargs | kwargs
        return Timecode(*args, **kwargs)
