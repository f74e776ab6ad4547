"""Immutable LED pattern model.

A pattern is an ordered tuple of frames, each frame an ordered tuple of LED
colors. Every edit returns a new ``PatternState``; frames and LEDs that an
edit does not touch are shared with the previous value, so ``is`` and ``==``
can be used to detect what changed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from .const import DEFAULT_COLOR
from .errors import InvalidRange


@dataclass(frozen=True)
class LedColor:
    """Color assigned to a single LED within a frame."""

    ledn: int
    hex: str

    def as_payload(self) -> dict[str, Any]:
        return {"ledn": self.ledn, "hex": self.hex}


@dataclass(frozen=True)
class Frame:
    """One snapshot of LED colors, in display order."""

    colors: tuple[LedColor, ...] = ()

    def as_payload(self) -> dict[str, Any]:
        return {"colors": [color.as_payload() for color in self.colors]}


@dataclass(frozen=True)
class PatternState:
    """Full multi-frame pattern, frames in playback order."""

    frames: tuple[Frame, ...] = ()

    def as_payload(self) -> dict[str, Any]:
        """Serialize the pattern into the body expected by the device."""

        return {"frames": [frame.as_payload() for frame in self.frames]}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> PatternState:
        """Create a pattern from its serialized form."""

        frames = payload.get("frames") if isinstance(payload, Mapping) else None
        if not isinstance(frames, list):
            msg = "Pattern payload must contain a list of frames"
            raise TypeError(msg)
        return cls(frames=tuple(_frame_from_payload(frame) for frame in frames))


def _frame_from_payload(frame: Any) -> Frame:
    colors = frame.get("colors", []) if isinstance(frame, Mapping) else None
    if not isinstance(colors, list):
        msg = f"Pattern frame must be an object with a list of colors, got {frame!r}"
        raise TypeError(msg)
    leds = []
    for color in colors:
        if not isinstance(color, Mapping) or "ledn" not in color or "hex" not in color:
            msg = f"Pattern color must be an object with ledn and hex, got {color!r}"
            raise TypeError(msg)
        leds.append(LedColor(ledn=int(color["ledn"]), hex=str(color["hex"])))
    return Frame(colors=tuple(leds))


def empty() -> PatternState:
    """Return a pattern without frames."""

    return PatternState()


def _colors_for_range(low: int, high: int) -> tuple[LedColor, ...]:
    return tuple(LedColor(ledn=ledn, hex=DEFAULT_COLOR) for ledn in range(low, high + 1))


def add_frame(state: PatternState, led_range: tuple[int, int]) -> PatternState:
    """Append a frame covering ``led_range`` (inclusive) with the default color.

    Raises ``InvalidRange`` when the lower bound exceeds the upper bound.
    """

    low, high = led_range
    if low > high:
        msg = f"Invalid LED range [{low}, {high}]"
        raise InvalidRange(msg)
    frame = Frame(colors=_colors_for_range(low, high))
    return replace(state, frames=(*state.frames, frame))


def set_color(state: PatternState, frame_index: int, led: LedColor) -> PatternState:
    """Return a copy of ``state`` with ``led`` replacing its match in a frame.

    An out-of-range ``frame_index`` leaves the state unchanged.
    """

    if not 0 <= frame_index < len(state.frames):
        return state
    target = state.frames[frame_index]
    colors = tuple(led if old.ledn == led.ledn else old for old in target.colors)
    frames = tuple(
        replace(frame, colors=colors) if index == frame_index else frame
        for index, frame in enumerate(state.frames)
    )
    return replace(state, frames=frames)


def has_frames(state: PatternState) -> bool:
    """Return True when the pattern holds at least one frame."""

    return len(state.frames) > 0
