"""Terminal output for the ummah-speaks CLI.

Everything is printed with a two-space gutter. Color is decided per call,
so it switches off whenever stdout is redirected or ``NO_COLOR`` is set.
"""

from __future__ import annotations

import os
import sys
import textwrap
from enum import StrEnum

GUTTER = "  "
QUOTE_WIDTH = 68


class Style(StrEnum):
    BOLD = "1"
    DIM = "2"
    RED = "31"
    GREEN = "32"
    YELLOW = "33"
    GOLD = "33;1"


def _color_enabled() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def paint(text: str, style: Style) -> str:
    if not _color_enabled():
        return text
    return f"\033[{style}m{text}\033[0m"


def bold(text: str) -> str:
    return paint(text, Style.BOLD)


def dim(text: str) -> str:
    return paint(text, Style.DIM)


def gold(text: str) -> str:
    return paint(text, Style.GOLD)


# ── Lines ───────────────────────────────────────────────────────────


def _marked(mark: str, style: Style, msg: str) -> None:
    print(f"{GUTTER}{paint(mark, style)} {msg}")


def success(msg: str) -> None:
    _marked("✓", Style.GREEN, msg)


def warn(msg: str) -> None:
    _marked("!", Style.YELLOW, msg)


def error(msg: str) -> None:
    _marked("✗", Style.RED, msg)


def info(msg: str) -> None:
    print(GUTTER + msg)


def header(title: str) -> None:
    print()
    print(bold(title))


def kv(key: str, value: object) -> None:
    print(f"{GUTTER}{dim(f'{key}:')}  {value}")


def quote(text: str) -> None:
    """Print *text* wrapped behind a vertical bar, like a block quote."""
    bar = dim("│")
    for line in textwrap.wrap(text, width=QUOTE_WIDTH):
        print(f"{GUTTER}{bar} {line}")


def stream(chunk: str) -> None:
    """Write *chunk* in place; used for the letter-by-letter reveal."""
    sys.stdout.write(chunk)
    sys.stdout.flush()


def next_step(command: str, description: str = "") -> None:
    line = f"{GUTTER * 2}{gold(command)}"
    if description:
        line += f"  {dim(description)}"
    print(line)


def banner() -> None:
    print(f"{bold('ummah-speaks')}{dim(' · a message of light for how you feel')}")
