"""Command line access to the Milton device service."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from . import pattern as patterns
from .api import MiltonAPIClient
from .config import load_config
from .const import DEFAULT_COLOR, DEFAULT_LED_RANGE
from .errors import ConfigError
from .pattern import LedColor, PatternState


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="milton-client", description="Control a Milton device."
    )
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("whoami", help="show the logged-in user")
    commands.add_parser("status", help="show the device status")

    light = commands.add_parser("light", help="switch the light on or off")
    light.add_argument("mode", choices=("on", "off"))

    pattern = commands.add_parser("pattern", help="send an LED pattern")
    pattern.add_argument("file", nargs="?", type=Path, help="JSON pattern file")
    pattern.add_argument("--frames", type=int, default=1, help="frames to generate")
    pattern.add_argument(
        "--range",
        nargs=2,
        type=int,
        metavar=("LOW", "HIGH"),
        default=list(DEFAULT_LED_RANGE),
        help="LED indexes covered by generated frames",
    )
    pattern.add_argument("--color", default=DEFAULT_COLOR, help="color for every LED")
    return parser


def _generated_pattern(frames: int, led_range: Sequence[int], color: str) -> PatternState:
    low, high = led_range
    state = patterns.empty()
    for index in range(frames):
        state = patterns.add_frame(state, (low, high))
        for ledn in range(low, high + 1):
            state = patterns.set_color(state, index, LedColor(ledn=ledn, hex=color))
    return state


async def _async_run(args: argparse.Namespace) -> int:
    api = MiltonAPIClient(load_config())
    try:
        if args.command == "whoami":
            user = await api.session().async_current()
            return user.case_of(
                just=lambda info: _emit(info.model_dump_json(indent=2)),
                nothing=lambda: _fail("no active session"),
            )
        if args.command == "status":
            status = await api.async_query()
            return status.case_of(
                ok=lambda value: _emit(value.model_dump_json(indent=2)),
                err=lambda error: _fail(str(error)),
            )
        if args.command == "light":
            toggled = await api.async_toggle_light(args.mode == "on")
            return toggled.case_of(
                ok=lambda value: _emit(f"light {'on' if value else 'off'}"),
                err=lambda error: _fail(str(error)),
            )
        if args.file is not None:
            state = PatternState.from_payload(json.loads(args.file.read_text()))
        else:
            state = _generated_pattern(args.frames, args.range, args.color)
        if not patterns.has_frames(state):
            return _fail("pattern has no frames")
        written = await api.async_write_pattern(state)
        return written.case_of(
            ok=lambda _: _emit(f"wrote {len(state.frames)} frame(s)"),
            err=lambda error: _fail(str(error)),
        )
    finally:
        await api.async_close()


def _emit(message: str) -> int:
    print(message)
    return 0


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface and return its exit status."""

    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
    try:
        return asyncio.run(_async_run(args))
    except ConfigError as err:
        return _fail(str(err))
    except (OSError, KeyError, TypeError, ValueError) as err:
        # Unreadable pattern files and invalid LED ranges.
        return _fail(str(err))
