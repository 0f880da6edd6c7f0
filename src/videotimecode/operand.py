"""Operands accepted by Timecode arithmetic and comparison.

Every entry point resolves its other operand once with :func:`to_operand`
and then dispatches on the resulting type.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .timecode import Timecode


@dataclasses.dataclass(frozen=True)
class Frames:
    """A bare frame count."""

    count: int


@dataclasses.dataclass(frozen=True)
class Raw:
    """A timecode string, parsed with the options of the Timecode operand."""

    text: str


@dataclasses.dataclass(frozen=True)
class Value:
    """Another Timecode instance."""

    timecode: Timecode


Operand = Union[Frames, Raw, Value]


def to_operand(other: object) -> Operand | None:
    """Return the tagged operand for the given object.

    Returns:
        Operand: The operand, or None if the type is not supported.
    """
    from .timecode import Timecode

    if isinstance(other, Timecode):
        return Value(other)
    if isinstance(other, str):
        return Raw(other)
    if isinstance(other, int) and not isinstance(other, bool):
        return Frames(other)
    return None


def operand_frames(operand: Operand, timecode: Timecode) -> int:
    """Return the total frames of the operand.

    Args:
        operand (Operand): The resolved operand.
        timecode (Timecode): The Timecode on the other side, strings are
            parsed with its options.

    Raises:
        ParseError: If a string operand can not be parsed.

    Returns:
        int: The number of frames the operand stands for.
    """
    if isinstance(operand, Value):
        return operand.timecode.total_frames
    if isinstance(operand, Raw):
        return timecode.derive(operand.text).total_frames
    return operand.count
